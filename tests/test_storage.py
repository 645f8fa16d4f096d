"""
AutoStudio - Blob storage tests
"""
import pytest
from sqlalchemy import inspect

from autostudio.database import db
from autostudio.models.member import Member, MemberStatus
from autostudio.models.settings import SystemConfig, WordPressConfig
from autostudio.services.storage import (
    DatabaseBlobStorage, FileBlobStorage, MEMBERS_KEY, SYSTEM_CONFIG_KEY, WP_CONFIG_KEY, create_storage
)


@pytest.fixture(params=['file', 'database'])
def storage(request, file_storage, app):
    if request.param == 'file':
        return file_storage
    return DatabaseBlobStorage(app)


class TestBlobStorage:
    """Behaviour shared by both backends"""

    def test_missing_key(self, storage):
        assert storage.get(WP_CONFIG_KEY) is None
        assert storage.load_json(WP_CONFIG_KEY) is None

    def test_wordpress_config_round_trip(self, storage):
        config = WordPressConfig(url='https://blog.example.com', username='editor', app_password='abcd efgh')

        assert storage.save_json(WP_CONFIG_KEY, config.to_dict()) == True
        assert WordPressConfig.from_dict(storage.load_json(WP_CONFIG_KEY)) == config

    def test_system_config_round_trip(self, storage):
        config = SystemConfig(is_private_mode=False, admin_password_hash='pw', default_niche='Fitness')
        storage.save_json(SYSTEM_CONFIG_KEY, config.to_dict())

        assert SystemConfig.from_dict(storage.load_json(SYSTEM_CONFIG_KEY)) == config

    def test_member_list_round_trip(self, storage):
        members = [Member(id='abc123xyz', name='Jane', email='jane@example.com', access_key='KEY123',
                          status=MemberStatus.SUSPENDED)]
        storage.save_json(MEMBERS_KEY, [m.to_dict() for m in members])

        restored = [Member.from_dict(d) for d in storage.load_json(MEMBERS_KEY)]
        assert restored == members

    def test_overwrite(self, storage):
        storage.set(MEMBERS_KEY, '[]')
        storage.set(MEMBERS_KEY, '[1]')

        assert storage.load_json(MEMBERS_KEY) == [1]

    def test_corrupt_value_reads_as_none(self, storage):
        storage.set(MEMBERS_KEY, '{not json')

        assert storage.load_json(MEMBERS_KEY) is None

    def test_delete_and_clear(self, storage):
        storage.set(MEMBERS_KEY, '[]')
        storage.set(WP_CONFIG_KEY, '{}')

        storage.delete(MEMBERS_KEY)
        assert storage.get(MEMBERS_KEY) is None

        storage.clear()
        assert storage.get(WP_CONFIG_KEY) is None


class TestBackendSelection:

    def test_file_backend(self, app, tmp_path):
        app.config['STORAGE_BACKEND'] = 'file'
        app.config['DATA_DIR'] = str(tmp_path / 'blobs')

        storage = create_storage(app)

        assert isinstance(storage, FileBlobStorage)
        assert (tmp_path / 'blobs').is_dir()

    def test_database_backend(self, app):
        app.config['STORAGE_BACKEND'] = 'database'

        assert isinstance(create_storage(app), DatabaseBlobStorage)

    def test_init_db_creates_blob_table(self, app):
        with app.app_context():
            assert 'stored_blobs' in inspect(db.engine).get_table_names()

    def test_file_layout(self, file_storage):
        file_storage.save_json(WP_CONFIG_KEY, {'url': 'https://x.com'})

        assert (file_storage.data_dir / 'wp_config.json').read_text() == '{"url": "https://x.com"}'

    def test_unwritable_storage_reports_failure(self, tmp_path):
        storage = FileBlobStorage(str(tmp_path / 'data'))
        storage.data_dir = tmp_path / 'missing' / 'dir'

        assert storage.save_json(WP_CONFIG_KEY, {}) == False
