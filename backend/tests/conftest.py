import os
import sys
import pytest

# Ensure the backend root (containing the `piste` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from piste import create_app, db, socketio
from piste.services.bout import registry
from piste.services.bout.listeners import BoutListener


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BOUT_DEFAULT_TIME_SEC = 180.0
    CLOCK_INTERVAL_SEC = 0.1
    CONTROLLER_DEBOUNCE_MS = 0
    ALLOWED_ORIGINS = []


class RecordingListener(BoutListener):
    """Collects every render as (method, args) in call order."""

    def __init__(self):
        self.calls = []

    def names(self):
        return [name for name, _ in self.calls]

    def last(self, name):
        for called, args in reversed(self.calls):
            if called == name:
                return args[0] if args else None
        return None

    def set_left_score(self, score):
        self.calls.append(('set_left_score', (score,)))

    def set_right_score(self, score):
        self.calls.append(('set_right_score', (score,)))

    def set_current_time(self, time):
        self.calls.append(('set_current_time', (time,)))

    def set_left_card(self, card):
        self.calls.append(('set_left_card', (card,)))

    def set_right_card(self, card):
        self.calls.append(('set_right_card', (card,)))

    def stop_timer(self):
        self.calls.append(('stop_timer', ()))


@pytest.fixture()
def display():
    return RecordingListener()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import piste.models  # noqa: F401
        db.create_all()
        yield application
        registry.clear()
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
