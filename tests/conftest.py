import pytest

from auth_skeleton import create_app
from auth_skeleton.models import db
from auth_skeleton.store import get_store


@pytest.fixture
def app():
    """Provide an app backed by an isolated in-memory database for each test."""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        # cheap hash so the suite stays fast
        'PASSWORD_HASH_METHOD': 'pbkdf2:sha256:1000',
    })
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield get_store()


class AuthActions:
    def __init__(self, app, client):
        self._app = app
        self._client = client

    def register(self, username='alice', password='pw1', confirmation=None):
        if confirmation is None:
            confirmation = password
        return self._client.post('/users/new', data={
            'username': username,
            'password': password,
            'confirmation': confirmation,
        })

    def login(self, username='alice', password='pw1'):
        return self._client.post('/users/login', data={'username': username, 'password': password})

    def logout(self):
        return self._client.get('/users/logout')

    def user_id(self, username='alice'):
        with self._app.app_context():
            user = get_store().find_by_username(username)
            return user.id if user else None

    def session_user_id(self):
        with self._client.session_transaction() as sess:
            return sess.get('user_id')


@pytest.fixture
def auth(app, client):
    return AuthActions(app, client)
