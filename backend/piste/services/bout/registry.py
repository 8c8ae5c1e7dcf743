from typing import Dict, Optional

from piste import socketio
from .controller import BoutController
from .listeners import SocketIOBoutListener
from .persistence import ExpiryRecorder

# Live controllers are runtime-only; the database keeps snapshots.
_bouts: Dict[str, BoutController] = {}
_session_bouts: Dict[str, str] = {}


def open_bout(app, bout_code: str, default_time: float, session_id: Optional[str] = None) -> BoutController:
    """Build and register the controller for a bout.

    A referee session drives one bout at a time: opening a new one halts
    and closes whatever that session had open before.
    """
    run_clock = not app.config.get('TESTING') or app.config.get('ENABLE_CLOCK_IN_TESTS')
    controller = BoutController(
        default_time,
        listeners=[SocketIOBoutListener(bout_code)],
        interval=app.config.get('CLOCK_INTERVAL_SEC', 0.1),
        spawn=socketio.start_background_task if run_clock else None,
        sleep=socketio.sleep,
    )
    controller.add_listener(ExpiryRecorder(app, bout_code, controller))

    # Only a bout that was actually built replaces the session's current one
    if session_id and session_id in _session_bouts:
        previous = _session_bouts[session_id]
        try:
            app.logger.info(f"[bout-replace] session={session_id} closing={previous} opening={bout_code}")
        except Exception:
            pass
        close_bout(previous)

    _bouts[bout_code] = controller
    if session_id:
        _session_bouts[session_id] = bout_code
    return controller


def get_bout(bout_code: str) -> Optional[BoutController]:
    return _bouts.get(bout_code)


def active_bout_for(session_id: str) -> Optional[str]:
    return _session_bouts.get(session_id)


def close_bout(bout_code: str) -> Optional[BoutController]:
    controller = _bouts.pop(bout_code, None)
    if controller is not None:
        controller.halt()
    for sid, code in list(_session_bouts.items()):
        if code == bout_code:
            _session_bouts.pop(sid, None)
    return controller


def clear() -> None:
    for code in list(_bouts):
        close_bout(code)
    _session_bouts.clear()
