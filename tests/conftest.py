import itertools
import os
import sys
import pytest

# Ensure the repository root (containing `config` and `gameapi`) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from config import Config
from gameapi import create_app, db


class TestConfig(Config):
    __test__ = False
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret-key-that-is-long-enough-for-hs256')
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    UNOWNED_ITEMS_POLICY = 'open'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
    # No app context is held open between requests, so each request gets
    # its own session and login state
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_ctx(flask_app):
    with flask_app.app_context():
        yield flask_app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture()
def register_user(client):
    """Register a fresh user and return its auth headers."""
    counter = itertools.count(1)

    def _register(username=None, email=None, password='secret123'):
        n = next(counter)
        username = username or f'user{n}'
        email = email or f'{username}@example.com'
        res = client.post('/api/auth/register', json={'username': username, 'email': email, 'password': password})
        assert res.status_code == 201, res.get_json()
        return bearer(res.get_json()['token'])

    return _register


@pytest.fixture()
def admin_headers(flask_app, client):
    from gameapi.models import ROLE_ADMIN, User

    res = client.post('/api/auth/register', json={'username': 'overseer', 'email': 'overseer@example.com', 'password': 'secret123'})
    assert res.status_code == 201
    with flask_app.app_context():
        user = User.query.filter_by(username='overseer').first()
        user.role = ROLE_ADMIN
        db.session.commit()
    # Role is carried in the token, so log in again after promotion
    res = client.post('/api/auth/login', json={'username': 'overseer', 'password': 'secret123'})
    assert res.status_code == 200
    assert res.get_json()['role'] == ROLE_ADMIN
    return bearer(res.get_json()['token'])


@pytest.fixture()
def create_player(client):
    def _create(headers, name='Hero'):
        res = client.post('/api/players', json={'name': name}, headers=headers)
        assert res.status_code == 201, res.get_json()
        return res.get_json()

    return _create
