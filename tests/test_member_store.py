"""
AutoStudio - Member store tests
"""
import pytest
from unittest.mock import MagicMock

from autostudio.models.member import MemberRole, MemberStatus, USAGE_RESET_MS
from autostudio.services.errors import ValidationError
from autostudio.services.member_store import ID_ALPHABET, KEY_ALPHABET, MemberStore
from autostudio.services.storage import MEMBERS_KEY


class FakeClock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(file_storage, clock):
    return MemberStore(file_storage, write_delay=0, clock=clock)


class TestSeeding:
    """Default admin seeding"""

    def test_empty_storage_yields_admin(self, store):
        members = store.list()

        assert len(members) == 1
        assert members[0].id == '1'
        assert members[0].access_key == 'admin123'

    def test_custom_admin_key(self, file_storage):
        store = MemberStore(file_storage, write_delay=0, default_admin_key='letmein')

        assert store.find_by_access_key('letmein').id == '1'

    def test_broken_storage_still_serves_admin(self):
        storage = MagicMock()
        storage.load_json.return_value = None
        storage.save_json.return_value = False
        store = MemberStore(storage, write_delay=0)

        member = store.add('Jane', 'jane@example.com', 'Member')

        assert member.email == 'jane@example.com'
        assert store.list()[0].id == '1'

    def test_corrupt_blob_uses_defaults(self, file_storage, store):
        file_storage.set(MEMBERS_KEY, '[{"id": "x", "role": "Overlord"}]')

        assert [m.id for m in store.list()] == ['1']


class TestAddMember:
    """Member creation and validation"""

    def test_add_member(self, store, clock):
        member = store.add('Jane Doe', 'Jane@Example.com', 'Member')

        assert len(member.id) == 9
        assert set(member.id) <= set(ID_ALPHABET)
        assert len(member.access_key) == 12
        assert set(member.access_key) <= set(KEY_ALPHABET)
        assert member.email == 'jane@example.com'
        assert member.role == MemberRole.MEMBER
        assert member.status == MemberStatus.ACTIVE
        assert member.created_at == clock.now
        assert len(store.list()) == 2

    def test_new_member_can_sign_in(self, store):
        member = store.add('Jane Doe', 'jane@example.com', 'Member')

        assert store.find_by_access_key(member.access_key).id == member.id

    def test_duplicate_email_any_case(self, store):
        store.add('Jane Doe', 'jane@example.com', 'Member')

        with pytest.raises(ValidationError, match='already exists'):
            store.add('Other Jane', 'JANE@EXAMPLE.COM', 'Admin')

        assert len(store.list()) == 2

    def test_duplicate_of_admin_email(self, store):
        with pytest.raises(ValidationError):
            store.add('Copy', 'admin@autostudio.ai', 'Member')

    def test_invalid_email(self, store):
        with pytest.raises(ValidationError, match='Invalid email format.'):
            store.add('Jane', 'not-an-email', 'Member')

        assert len(store.list()) == 1

    def test_missing_fields(self, store):
        with pytest.raises(ValidationError, match='Name and Email are required.'):
            store.add('  ', 'jane@example.com', 'Member')

    def test_unknown_role(self, store):
        with pytest.raises(ValidationError):
            store.add('Jane', 'jane@example.com', 'Owner')

    def test_write_delay(self, file_storage):
        sleeps = []
        store = MemberStore(file_storage, write_delay=0.8, sleep=sleeps.append)

        store.add('Jane', 'jane@example.com', 'Member')

        assert sleeps == [0.8]


class TestMemberMutations:
    """Delete, suspend and key management"""

    def test_admin_cannot_be_deleted(self, store):
        assert store.delete('1') == False
        assert store.get('1') is not None

    def test_delete_member(self, store):
        member = store.add('Jane', 'jane@example.com', 'Member')

        assert store.delete(member.id) == True
        assert store.get(member.id) is None

    def test_admin_cannot_be_suspended(self, store):
        assert store.toggle_status('1') is None
        assert store.get('1').is_active == True

    def test_toggle_status_flips(self, store):
        member = store.add('Jane', 'jane@example.com', 'Member')

        assert store.toggle_status(member.id).status == MemberStatus.SUSPENDED
        assert store.find_by_access_key(member.access_key) is None
        assert store.find_by_access_key(member.access_key, active_only=False).id == member.id
        assert store.toggle_status(member.id).status == MemberStatus.ACTIVE

    def test_toggle_unknown(self, store):
        assert store.toggle_status('nobody') is None

    def test_set_api_key(self, store):
        member = store.add('Jane', 'jane@example.com', 'Member')

        assert store.set_api_key(member.id, '  AIza-key ') == True
        assert store.get(member.id).gemini_api_key == 'AIza-key'
        assert store.set_api_key(member.id, '') == True
        assert store.get(member.id).gemini_api_key is None

    def test_touch_has_no_delay(self, file_storage, clock):
        sleeps = []
        store = MemberStore(file_storage, write_delay=0.8, sleep=sleeps.append, clock=clock)

        store.touch('1')

        assert sleeps == []
        assert store.get('1').last_active == clock.now


class TestUsageCounters:
    """Daily usage accounting"""

    def test_first_usage_starts_block(self, store, clock):
        member = store.record_usage('1', 'articles')

        assert member.usage.articles == 1
        assert member.usage.last_reset == clock.now

    def test_counts_accumulate_within_a_day(self, store, clock):
        store.record_usage('1', 'keywords')
        clock.now += USAGE_RESET_MS
        member = store.record_usage('1', 'keywords')

        assert member.usage.keywords == 2

    def test_counts_reset_after_a_day(self, store, clock):
        store.record_usage('1', 'keywords')
        store.record_usage('1', 'images')
        clock.now += USAGE_RESET_MS + 1
        member = store.record_usage('1', 'keywords')

        assert member.usage.keywords == 1
        assert member.usage.images == 0
        assert member.usage.last_reset == clock.now

    def test_unknown_kind(self, store):
        with pytest.raises(ValueError):
            store.record_usage('1', 'videos')

    def test_unknown_member(self, store):
        assert store.record_usage('nobody', 'articles') is None
