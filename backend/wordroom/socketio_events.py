from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from typing import Any, Dict, Optional

from wordroom import socketio
from wordroom.services.game.errors import BadRequest, GameError, InvalidLength, RoomNotFound


class SocketIOTransport:
    """Delivers room events over Flask-SocketIO; one Socket.IO room per game room."""

    def __init__(self, sio, namespace: str = '/'):
        self.socketio = sio
        self.namespace = namespace

    def subscribe(self, member_id: str, code: str) -> None:
        join_room(code, sid=member_id, namespace=self.namespace)

    def unsubscribe(self, member_id: str, code: str) -> None:
        leave_room(code, sid=member_id, namespace=self.namespace)

    def broadcast(self, code: str, event: str, payload: Dict[str, Any]) -> None:
        self.socketio.emit(event, payload, to=code, namespace=self.namespace)

    def send(self, member_id: str, event: str, payload: Dict[str, Any]) -> None:
        self.socketio.emit(event, payload, to=member_id, namespace=self.namespace)


def _machine():
    return current_app.extensions['wordroom']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest('Payload must be an object')
    return data


def _text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise BadRequest(f'{key} must be a string')
    return value


def _room_code(data: Dict[str, Any]) -> str:
    code = _text(data, 'code')
    if not code or not code.strip():
        raise RoomNotFound()
    return code


def handle_connect():
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    _machine().on_disconnect(sid)


def handle_create_room(data=None):
    data = _payload(data)
    # Older clients send a `word` here; the secret is only chosen by startGame
    room = _machine().create_room(_get_sid(), name=_text(data, 'name'))
    return {'ok': True, 'code': room.code, 'roomState': room.to_dict()}


def handle_join_room(data=None):
    data = _payload(data)
    room = _machine().join_room(_get_sid(), _room_code(data), name=_text(data, 'name'))
    return {'ok': True, 'roomState': room.to_dict()}


def handle_start_game(data=None):
    data = _payload(data)
    _machine().start_game(_get_sid(), _room_code(data), chosen_word=_text(data, 'chosenWord'))
    return {'ok': True}


def handle_submit_guess(data=None):
    data = _payload(data)
    code = _room_code(data)
    guess = _text(data, 'guess')
    if guess is None:
        raise InvalidLength()
    feedback = _machine().submit_guess(_get_sid(), code, guess)
    return {'ok': True, 'feedback': feedback}


def handle_leave_room(data=None):
    data = _payload(data)
    _machine().leave_room(_get_sid(), _room_code(data))
    return {'ok': True}


def handle_ping(data=None):
    emit('pong', data or {})


def handle_error(exc):
    """Turn any handler failure into an acknowledgement for the requester only."""
    event = getattr(request, 'event', None) or {}
    if isinstance(exc, GameError):
        current_app.logger.info(f"[request-failed] sid={_get_sid()} event={event.get('message')} error={exc.error_code}")
        return exc.to_ack()
    current_app.logger.exception(f"[request-crashed] sid={_get_sid()} event={event.get('message')}")
    return {'ok': False, 'error': 'Internal error', 'errorCode': 'InternalError'}


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('createRoom', handle_create_room, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('startGame', handle_start_game, namespace=namespace)
    socketio.on_event('submitGuess', handle_submit_guess, namespace=namespace)
    socketio.on_event('leaveRoom', handle_leave_room, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
    socketio.on_error_default(handle_error)
