import os
import sys
import pytest

# Ensure the backend root (containing the `wordroom` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from wordroom import create_app, socketio
from wordroom.services.game import RoomCodeGenerator, RoomRegistry, RoomStateMachine, WordSource


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = '/'
    WORDS_FILE = None
    WORD_LIST = ['crane']
    ROOM_CODE_LENGTH = 5
    DEFAULT_HOST_NAME = 'Host'
    DEFAULT_PLAYER_NAME = 'Player'
    HOST = '127.0.0.1'
    PORT = 3000


class RecordingTransport:
    """Stands in for the socket layer and remembers everything it was asked to do."""

    def __init__(self):
        self.members = {}
        self.broadcasts = []
        self.sent = []

    def subscribe(self, member_id, code):
        self.members.setdefault(code, set()).add(member_id)

    def unsubscribe(self, member_id, code):
        self.members.get(code, set()).discard(member_id)

    def broadcast(self, code, event, payload):
        self.broadcasts.append((code, event, payload))

    def send(self, member_id, event, payload):
        self.sent.append((member_id, event, payload))

    def events(self, name):
        return [payload for _, event, payload in self.broadcasts if event == name]


class FakeClock:
    def __init__(self, start=1_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms=1):
        self.now += ms


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def registry():
    return RoomRegistry(RoomCodeGenerator(length=5))


@pytest.fixture()
def machine(registry, transport, clock):
    return RoomStateMachine(registry, WordSource(['crane']), transport, clock=clock)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()
