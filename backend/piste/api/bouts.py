from flask import Blueprint, jsonify, request, current_app
from piste import db, socketio
from piste.models import Bout
from piste.services.bout import BoutConfigError, Card, Side
from piste.services.bout import registry
from piste.services.bout.persistence import sync_bout
import time


bouts = Blueprint('bouts', __name__)

_last_controller_action: dict[str, float] = {}


def _load(bout_code: str):
    """Return (row, controller) for a live bout, or an error response."""
    bout = Bout.query.filter_by(bout_code=bout_code.upper()).first_or_404()
    controller = registry.get_bout(bout.bout_code)
    if bout.status != 'active' or controller is None:
        return bout, None, (jsonify({'error': 'Bout is not active'}), 400)
    return bout, controller, None


def _state(bout: Bout, controller) -> dict:
    payload = controller.snapshot()
    payload['bout_code'] = bout.bout_code
    payload['status'] = bout.status
    return payload


def _respond(bout: Bout, controller):
    sync_bout(bout, controller)
    return jsonify(_state(bout, controller))


def _debounced(action: str, bout_code: str) -> bool:
    try:
        debounce_ms = int(current_app.config.get('CONTROLLER_DEBOUNCE_MS', 0))
    except Exception:
        debounce_ms = 0
    if debounce_ms <= 0:
        return False
    key = f"{action}:{bout_code}"
    now = time.time() * 1000.0
    last = _last_controller_action.get(key, 0)
    if now - last < debounce_ms:
        return True
    _last_controller_action[key] = now
    return False


def _parse_side(value, allow_double=False):
    raw = (value or '').strip().lower() if isinstance(value, str) else ''
    if allow_double and raw == 'double':
        return 'double'
    try:
        return Side(raw)
    except ValueError:
        return None


def _parse_card(value):
    if not isinstance(value, str):
        return None
    try:
        return Card(value.strip().lower())
    except ValueError:
        return None


@bouts.route('/create', methods=['POST'])
def create_bout():
    data = request.get_json(silent=True) or {}
    default_time = data.get('default_time', current_app.config.get('BOUT_DEFAULT_TIME_SEC', 180))
    session_id = data.get('session_id')

    new_bout = Bout(session_id=session_id)
    try:
        controller = registry.open_bout(
            current_app._get_current_object(), new_bout.bout_code, default_time, session_id=session_id
        )
    except BoutConfigError as exc:
        return jsonify({'error': str(exc)}), 400

    # A replaced bout for the same session is no longer live
    if session_id:
        Bout.query.filter(
            Bout.session_id == session_id, Bout.status == 'active'
        ).update({'status': 'closed'}, synchronize_session=False)
    new_bout.default_time = controller.default_time
    new_bout.status = 'active'
    db.session.add(new_bout)
    db.session.commit()
    sync_bout(new_bout, controller)

    current_app.logger.info(f"[bout-create] bout={new_bout.bout_code} default_time={controller.default_time}")
    return jsonify(_state(new_bout, controller)), 201


@bouts.route('/<string:bout_code>/state', methods=['GET'])
def get_bout_state(bout_code):
    bout = Bout.query.filter_by(bout_code=bout_code.upper()).first_or_404()
    controller = registry.get_bout(bout.bout_code)
    if controller is None:
        # Closed bouts answer from their last stored snapshot
        return jsonify(bout.to_dict())
    return jsonify(_state(bout, controller))


@bouts.route('/<string:bout_code>/events', methods=['GET'])
def get_bout_events(bout_code):
    bout = Bout.query.filter_by(bout_code=bout_code.upper()).first_or_404()
    controller = registry.get_bout(bout.bout_code)
    if controller is None:
        return jsonify([e.to_dict() for e in bout.events])
    return jsonify(controller.events.to_list())


@bouts.route('/<string:bout_code>/start', methods=['POST'])
def start_clock(bout_code):
    bout, controller, error = _load(bout_code)
    if error:
        return error
    controller.start()
    return _respond(bout, controller)


@bouts.route('/<string:bout_code>/halt', methods=['POST'])
def halt_clock(bout_code):
    bout, controller, error = _load(bout_code)
    if error:
        return error
    controller.halt()
    return _respond(bout, controller)


@bouts.route('/<string:bout_code>/toggle', methods=['POST'])
def toggle_clock(bout_code):
    bout, controller, error = _load(bout_code)
    if error:
        return error
    controller.toggle_timer()
    return _respond(bout, controller)


@bouts.route('/<string:bout_code>/touch', methods=['POST'])
def score_touch(bout_code):
    data = request.get_json(silent=True) or {}
    side = _parse_side(data.get('side'), allow_double=True)
    if side is None:
        return jsonify({'error': "side must be 'left', 'right' or 'double'"}), 400

    bout, controller, error = _load(bout_code)
    if error:
        return error
    if _debounced(f"touch:{side if side == 'double' else side.value}", bout.bout_code):
        return jsonify({'message': 'debounced'}), 202

    if side == 'double':
        controller.touch_double()
    else:
        controller.touch(side)
    return _respond(bout, controller)


@bouts.route('/<string:bout_code>/reverse', methods=['POST'])
def reverse_touch(bout_code):
    data = request.get_json(silent=True) or {}
    side = _parse_side(data.get('side'))
    if side is None:
        return jsonify({'error': "side must be 'left' or 'right'"}), 400

    bout, controller, error = _load(bout_code)
    if error:
        return error
    controller.reverse_touch(side)
    return _respond(bout, controller)


@bouts.route('/<string:bout_code>/card', methods=['POST'])
def assign_card(bout_code):
    data = request.get_json(silent=True) or {}
    side = _parse_side(data.get('side'))
    if side is None:
        return jsonify({'error': "side must be 'left' or 'right'"}), 400
    card = _parse_card(data.get('card'))
    if card is None:
        return jsonify({'error': 'card must be one of none, yellow, red, black'}), 400

    bout, controller, error = _load(bout_code)
    if error:
        return error
    controller.card(side, card)
    return _respond(bout, controller)


@bouts.route('/<string:bout_code>/reset', methods=['POST'])
def reset_bout(bout_code):
    bout, controller, error = _load(bout_code)
    if error:
        return error
    controller.reset_to_default()
    return _respond(bout, controller)


@bouts.route('/<string:bout_code>/period', methods=['POST'])
def advance_period(bout_code):
    bout, controller, error = _load(bout_code)
    if error:
        return error
    period = controller.advance_period()
    current_app.logger.info(f"[period] bout={bout.bout_code} period={period}")
    socketio.emit('state_update', _state(bout, controller), to=f"bout:{bout.bout_code}", namespace='/ws')
    return _respond(bout, controller)


@bouts.route('/<string:bout_code>/close', methods=['POST'])
def close_bout(bout_code):
    bout = Bout.query.filter_by(bout_code=bout_code.upper()).first_or_404()
    controller = registry.close_bout(bout.bout_code)
    if controller is not None:
        sync_bout(bout, controller)
    bout.status = 'closed'
    db.session.add(bout)
    db.session.commit()
    socketio.emit('bout_closed', {'bout_code': bout.bout_code}, to=f"bout:{bout.bout_code}", namespace='/ws')
    return jsonify(bout.to_dict())
