import os
import sys
import pytest

# Ensure the backend root (containing the `battleship_relay` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from battleship_relay import create_app, socketio

NAMESPACE = '/'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    INACTIVITY_TIMEOUT_SEC = 600
    RESET_TIMEOUT_ON_ACTIVITY = False
    SOCKETIO_NAMESPACE = NAMESPACE
    CORS_ORIGINS = ['http://localhost:3000']
    STATIC_FOLDER = None
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def app_factory():
    """Build an app with selected config keys overridden."""
    def _make(**overrides):
        config_class = type('OverrideConfig', (TestConfig,), overrides)
        return create_app(config_class)
    return _make


@pytest.fixture()
def flask_app(app_factory):
    application = app_factory()
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect():
    """Open Socket.IO test clients against an app; all are closed on teardown."""
    opened = []

    def _connect(application):
        test_client = socketio.test_client(
            application,
            flask_test_client=application.test_client(),
            namespace=NAMESPACE,
        )
        opened.append(test_client)
        return test_client

    yield _connect
    for test_client in opened:
        if test_client.is_connected(NAMESPACE):
            test_client.disconnect(namespace=NAMESPACE)
