import os
import sys
import random
import pytest

# Ensure the backend root (containing the `trivia` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from trivia import create_app, socketio
from trivia.session import GameSession
from trivia.services.games.coordinator import SessionCoordinator
from trivia.services.games.scheduler import RoundTimer


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ROUND_DURATION_SEC = 60
    MIN_PLAYERS = 3
    MAX_GUESS_ATTEMPTS = 3
    CORRECT_GUESS_POINTS = 10
    SOCKETIO_NAMESPACE = '/'
    CORS_ALLOWED_ORIGINS = ['http://localhost:3000']


class ManualScheduler:
    """Collects round timers; tests fire them explicitly."""

    def __init__(self):
        self.timers = []

    def schedule(self, delay, callback):
        timer = RoundTimer(delay, callback)
        self.timers.append(timer)
        return timer

    def fire_all(self):
        for timer in list(self.timers):
            timer.fire()


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def broadcast(self, event, payload=None):
        self.sent.append(('*', event, payload))

    def send(self, connection_id, event, payload=None):
        self.sent.append((connection_id, event, payload))

    def events(self, name):
        return [(to, payload) for to, event, payload in self.sent if event == name]

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def coordinator(notifier, scheduler):
    return SessionCoordinator(
        GameSession(),
        notifier=notifier,
        scheduler=scheduler,
        rng=random.Random(1234),
    )


@pytest.fixture()
def flask_app(scheduler):
    application = create_app(TestConfig, scheduler=scheduler, rng=random.Random(1234))
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def _client_factory(application):
    created = []

    def _make():
        test_client = socketio.test_client(
            application,
            flask_test_client=application.test_client(),
            namespace='/'
        )
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass


@pytest.fixture()
def sio_factory(flask_app):
    """Build Socket.IO test clients; any still connected are closed on teardown."""
    yield from _client_factory(flask_app)


class QuickRoundConfig(TestConfig):
    ROUND_DURATION_SEC = 0.2


@pytest.fixture()
def timed_app():
    """App wired to the real background-task round timer with a short round."""
    application = create_app(QuickRoundConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def timed_sio_factory(timed_app):
    yield from _client_factory(timed_app)
