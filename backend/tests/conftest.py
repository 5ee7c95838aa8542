import os
import sys
import pytest

# Ensure the backend root (containing the `karuta` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from karuta import create_app, db, socketio
from karuta.services.games.records import PoemRecord
from karuta.services.games.sessions import clear_sessions


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    POEMS_PATH = os.path.join(BACKEND_ROOT, 'data', 'poems.json')
    FEEDBACK_CORRECT_MS = 0
    CARD_REMOVAL_MS = 0
    FEEDBACK_INCORRECT_MS = 0
    AUTO_ADVANCE = True


class SchedulerTestConfig(TestConfig):
    ENABLE_SCHEDULER_IN_TESTS = True


def poem_dict(i):
    return {
        'id': i,
        'author': f'Author {i}',
        'upperVerse': f'upper verse {i}',
        'lowerVerse': f'lower verse {i}',
    }


@pytest.fixture()
def poem_dicts():
    return [poem_dict(i) for i in range(1, 101)]


@pytest.fixture()
def make_records():
    def _make(n=5):
        return [PoemRecord.from_dict(poem_dict(i)) for i in range(1, n + 1)]
    return _make


def _build_app(config_class):
    application = create_app(config_class)
    with application.app_context():
        # Ensure models are imported so tables are created
        import karuta.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()
    clear_sessions()


@pytest.fixture()
def flask_app():
    yield from _build_app(TestConfig)


@pytest.fixture()
def scheduler_app():
    yield from _build_app(SchedulerTestConfig)


@pytest.fixture()
def seed_catalog(poem_dicts):
    from karuta.models import Poem

    def _seed(items=None):
        for item in (poem_dicts if items is None else items):
            db.session.add(Poem.from_dict(item))
        db.session.commit()
    return _seed


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
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')
