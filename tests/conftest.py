"""
AutoStudio - Shared test fixtures
"""
import pytest
from unittest.mock import MagicMock

from autostudio import create_app
from autostudio.services.member_store import MemberStore
from autostudio.services.state import StudioState
from autostudio.services.storage import FileBlobStorage


def gemini_response(text=None, parts=None, **extra):
    """Minimal generateContent response body"""
    if parts is None:
        parts = [{'text': text}] if text is not None else []
    body = {'candidates': [{'content': {'parts': parts}, 'finishReason': 'STOP'}]}
    body.update(extra)
    return body


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    app.extensions['autostudio'].scheduler.shutdown()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def state(app):
    return app.extensions['autostudio']


@pytest.fixture
def file_storage(tmp_path):
    return FileBlobStorage(str(tmp_path / 'data'))


@pytest.fixture
def studio(file_storage):
    """Studio state over file storage with a mocked AI service"""
    members = MemberStore(file_storage, write_delay=0)
    state = StudioState(storage=file_storage, ai=MagicMock(), members=members)
    yield state
    state.scheduler.shutdown()


@pytest.fixture
def admin_token(client):
    response = client.post('/api/auth/access', json={'accessKey': 'admin123'})
    return response.get_json()['token']


@pytest.fixture
def auth_headers(admin_token):
    return {'Authorization': f'Bearer {admin_token}'}
