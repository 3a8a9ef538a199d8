import os
import sys
import pytest

# Ensure the backend root (containing the `dotsboxes` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from dotsboxes import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    BOARD_ROWS = 6
    BOARD_COLS = 6
    ROOM_CODE_LENGTH = 4
    ROOM_CODE_MAX_ATTEMPTS = 100
    CORS_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = '/'
    LOG_LEVEL = 'DEBUG'


class SmallBoardConfig(TestConfig):
    BOARD_ROWS = 1
    BOARD_COLS = 2


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def small_app():
    application = create_app(SmallBoardConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['room_registry']


def _client_factory(application):
    created = []

    def _make():
        test_client = socketio.test_client(application, namespace='/')
        # Flush the room_list sent on connect
        test_client.get_received('/')
        created.append(test_client)
        return test_client

    return _make, created


def _disconnect_all(created):
    for test_client in created:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass


@pytest.fixture()
def sio_client_factory(flask_app):
    make, created = _client_factory(flask_app)
    yield make
    _disconnect_all(created)


@pytest.fixture()
def small_sio_client_factory(small_app):
    make, created = _client_factory(small_app)
    yield make
    _disconnect_all(created)
