from flask import current_app, request
from flask_login import current_user
from flask_socketio import emit

from cardroom import socketio

NAMESPACE = '/ws'


def _registry():
    return current_app.extensions['connection_registry']


def _repository():
    return current_app.extensions['room_repository']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_auth(data):
    """Bind this socket to a caller identity so room events reach it.

    A session/identity-header login wins over the identity in the message.
    """
    identity = current_user.get_id() if current_user.is_authenticated else None
    if not identity:
        identity = str((data or {}).get('user_id') or '').strip() or None
    if not identity:
        emit('error', {'message': 'user_id is required'})
        return
    _registry().register(identity, _get_sid())
    _repository().set_connected(identity, True)
    current_app.logger.info(f"[ws-auth] user={identity}")
    emit('auth_success', {'user_id': identity})


def handle_disconnect(reason=None):
    registry = _registry()
    identity = registry.unregister(_get_sid())
    if identity and not registry.is_connected(identity):
        _repository().set_connected(identity, False)
        current_app.logger.info(f"[ws-close] user={identity}")


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'.

    The channel is push-only for game events; every game action goes
    through the HTTP routes.
    """
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('auth', handle_auth, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)
