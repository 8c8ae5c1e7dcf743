from flask_socketio import join_room, leave_room, emit
from flask import current_app
from piste import socketio
from piste.models import Bout
from piste.services.bout import registry


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_bout(data):
    bout_code = (data or {}).get('bout_code')
    if not bout_code:
        emit('error', {'message': 'bout_code is required'})
        return
    code = bout_code.upper()
    room = f"bout:{code}"
    join_room(room)
    emit('joined', {'room': room})

    # Late joiners get the full picture before incremental renders
    controller = registry.get_bout(code)
    if controller is not None:
        payload = controller.snapshot()
        payload['bout_code'] = code
        emit('state_update', payload)
        return
    bout = Bout.query.filter_by(bout_code=code).first()
    if bout:
        emit('state_update', bout.to_dict())
    else:
        try:
            current_app.logger.info(f"[join-unknown] bout={code}")
        except Exception:
            pass


def handle_leave_bout(data):
    bout_code = (data or {}).get('bout_code')
    if not bout_code:
        emit('error', {'message': 'bout_code is required'})
        return
    room = f"bout:{bout_code.upper()}"
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_bout', handle_join_bout, namespace='/ws')
    socketio.on_event('leave_bout', handle_leave_bout, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
