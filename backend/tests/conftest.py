import os
import sys
import pytest
from flask import g

# Ensure the backend root (containing the `cardroom` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from cardroom import create_app, db, socketio


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    NEXT_ROUND_DELAY_SEC = 0
    ALLOWED_IDENTITIES = []


class RecordingHub:
    """Stands in for the notification hub and remembers every broadcast."""

    def __init__(self):
        self.events = []

    def broadcast_to_room(self, room_id, event, payload=None):
        self.events.append((room_id, event, payload or {}))
        return 0

    def names(self):
        return [name for _, name, _ in self.events]

    def last(self, name):
        return next((payload for _, n, payload in reversed(self.events) if n == name), None)


def auth_headers(user_id):
    return {'X-User-Id': user_id}


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)

    @application.teardown_request
    def forget_request_user(exc):
        # Requests reuse the fixture's app context, so g outlives each request
        g.pop('_login_user', None)

    with application.app_context():
        # Ensure models are imported so tables are created
        import cardroom.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def repository(flask_app):
    return flask_app.extensions['room_repository']


@pytest.fixture()
def card_store(flask_app):
    return flask_app.extensions['card_store']


@pytest.fixture()
def hub():
    return RecordingHub()


@pytest.fixture()
def engine(flask_app, hub):
    game_engine = flask_app.extensions['game_engine']
    game_engine.hub = hub
    return game_engine


@pytest.fixture()
def started_room(engine):
    """Room with alice (host/judge), bob and cara, game started, target 3."""
    room_id = engine.create_room('alice', 3).data['room_id']
    code = engine.get_state(room_id).room.code
    assert engine.join_room(code, 'bob').success
    assert engine.join_room(code, 'cara').success
    assert engine.start_game(room_id, 'alice').success
    return room_id
