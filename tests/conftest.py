"""
Shared test fixtures for the school site backend.

Provides:
- An app built by create_app against in-memory SQLite
- A per-test upload folder
- Test client and admin auth headers
- A requests-compatible session that routes into the test client

Usage:
    def test_example(client, admin_headers):
        response = client.get('/api/v1/schedules')
        assert response.status_code == 200
"""

import io
import logging
import os
import tempfile

# main.py builds a module-level app on import; point it at throwaway storage.
os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('UPLOAD_FOLDER', tempfile.mkdtemp(prefix='schoolsite-uploads-'))

import pytest

from main import create_app
from app.models import db
from app.services.auth import AuthService

logging.getLogger('app').setLevel(logging.WARNING)

BASE_URL = 'http://testserver'


# ========================== App Fixtures ===================================


@pytest.fixture()
def upload_dir(tmp_path):
    folder = tmp_path / 'uploads'
    folder.mkdir()
    return folder


@pytest.fixture()
def app(upload_dir):
    """Fresh app and database for every test."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'UPLOAD_FOLDER': str(upload_dir),
        'PUBLIC_BASE_URL': BASE_URL,
        'SECRET_KEY': 'test-secret',
        'ADMIN_USERNAME': 'admin',
        'ADMIN_PASSWORD': 'secret',
        'CRON_SECRET': 'cron-secret',
        'ORPHAN_GRACE_HOURS': 24,
    })
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_token(app):
    return AuthService.issue_token('admin', role='admin')


@pytest.fixture()
def admin_headers(admin_token):
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture()
def staff_headers(app):
    return {'Authorization': f"Bearer {AuthService.issue_token('teacher', role='staff')}"}


# ========================== HTTP Bridge ====================================


class _BridgeResponse:
    """The slice of requests.Response the console client reads."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.reason = response.status

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError('No JSON body')
        return data


class FlaskSession:
    """requests.Session stand-in that dispatches to a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, json=None, files=None):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        self.calls.append((method, path))

        kwargs = {'method': method, 'headers': headers or {}}
        if json is not None:
            kwargs['json'] = json
        if files is not None:
            kwargs['data'] = {
                field: (io.BytesIO(content), filename, content_type)
                for field, (filename, content, content_type) in files.items()
            }
            kwargs['content_type'] = 'multipart/form-data'

        return _BridgeResponse(self.test_client.open(path, **kwargs))


@pytest.fixture()
def bridge(client):
    return FlaskSession(client)
