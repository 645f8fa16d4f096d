"""
AutoStudio - Member Store
CRUD over studio members persisted as a single blob (as_members).

The super-admin record (id "1") is seeded when storage is empty and can never
be deleted or suspended. Storage failures are logged and the store keeps
working from the seeded default list.
"""
import re
import time
import string
import secrets
import logging
from typing import List, Optional, Callable, Union

from autostudio.models.member import (
    Member, MemberRole, MemberStatus, UsageCounters, SUPER_ADMIN_ID, USAGE_KINDS, default_admin
)
from autostudio.services.errors import ValidationError
from autostudio.services.storage import BlobStorage, MEMBERS_KEY
from autostudio.utils import now_ms

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
ID_ALPHABET = string.ascii_lowercase + string.digits
KEY_ALPHABET = string.ascii_uppercase + string.digits


def _random_token(alphabet: str, length: int) -> str:
    return ''.join(secrets.choice(alphabet) for _ in range(length))


class MemberStore:
    """Members keyed by id, read-modify-write against blob storage on every call"""

    def __init__(
        self,
        storage: BlobStorage,
        write_delay: float = 0.8,
        default_admin_key: str = 'admin123',
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], int] = now_ms
    ):
        self.storage = storage
        self.write_delay = write_delay
        self.default_admin_key = default_admin_key
        self._sleep = sleep
        self._clock = clock

    # ==================== PERSISTENCE ====================

    def _defaults(self) -> List[Member]:
        return [default_admin(self.default_admin_key)]

    def _load(self) -> List[Member]:
        data = self.storage.load_json(MEMBERS_KEY)
        if not isinstance(data, list):
            return self._defaults()
        try:
            return [Member.from_dict(item) for item in data]
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Stored member list is corrupt, using defaults: {e}")
            return self._defaults()

    def _save(self, members: List[Member]) -> None:
        self.storage.save_json(MEMBERS_KEY, [m.to_dict() for m in members])

    def _simulate_latency(self) -> None:
        if self.write_delay > 0:
            self._sleep(self.write_delay)

    @staticmethod
    def _index(members: List[Member], member_id: str) -> int:
        for i, member in enumerate(members):
            if member.id == member_id:
                return i
        return -1

    # ==================== QUERIES ====================

    def list(self) -> List[Member]:
        """All members; the seeded admin when nothing is stored yet"""
        return self._load()

    def get(self, member_id: str) -> Optional[Member]:
        for member in self._load():
            if member.id == member_id:
                return member
        return None

    def find_by_access_key(self, access_key: str, active_only: bool = True) -> Optional[Member]:
        if not access_key:
            return None
        for member in self._load():
            if member.access_key == access_key:
                if active_only and not member.is_active:
                    return None
                return member
        return None

    # ==================== MUTATIONS ====================

    def add(self, name: str, email: str, role: Union[str, MemberRole] = MemberRole.MEMBER) -> Member:
        """
        Create an Active member with a fresh id and access key.

        Raises:
            ValidationError: missing fields, bad email, duplicate email, unknown role
        """
        self._simulate_latency()

        name = (name or '').strip()
        email = (email or '').strip()
        if not name or not email:
            raise ValidationError("Name and Email are required.")
        if not EMAIL_RE.match(email):
            raise ValidationError("Invalid email format.")
        try:
            role = role if isinstance(role, MemberRole) else MemberRole(role)
        except ValueError:
            raise ValidationError("Role must be Admin or Member.")

        members = self._load()
        if any(m.email.lower() == email.lower() for m in members):
            raise ValidationError("A member with this email already exists.")

        existing_ids = {m.id for m in members}
        existing_keys = {m.access_key for m in members}
        member_id = _random_token(ID_ALPHABET, 9)
        while member_id in existing_ids:
            member_id = _random_token(ID_ALPHABET, 9)
        access_key = _random_token(KEY_ALPHABET, 12)
        while access_key in existing_keys:
            access_key = _random_token(KEY_ALPHABET, 12)

        member = Member(
            id=member_id,
            name=name,
            email=email.lower(),
            access_key=access_key,
            role=role,
            status=MemberStatus.ACTIVE,
            created_at=self._clock()
        )
        members.append(member)
        self._save(members)
        logger.info(f"Member added: {member.email} ({role.value})")
        return member

    def delete(self, member_id: str) -> bool:
        """Remove a member; the super-admin is never removed"""
        if member_id == SUPER_ADMIN_ID:
            logger.warning("Refusing to delete the protected admin member")
            return False
        self._simulate_latency()
        members = self._load()
        remaining = [m for m in members if m.id != member_id]
        self._save(remaining)
        return True

    def toggle_status(self, member_id: str) -> Optional[Member]:
        """Flip Active <-> Suspended; None for the super-admin or an unknown id"""
        if member_id == SUPER_ADMIN_ID:
            logger.warning("Refusing to change status of the protected admin member")
            return None
        self._simulate_latency()
        members = self._load()
        idx = self._index(members, member_id)
        if idx == -1:
            return None

        member = members[idx]
        member.status = MemberStatus.SUSPENDED if member.is_active else MemberStatus.ACTIVE
        self._save(members)
        logger.info(f"Member {member.email} is now {member.status.value}")
        return member

    def set_api_key(self, member_id: str, api_key: str) -> bool:
        self._simulate_latency()
        members = self._load()
        idx = self._index(members, member_id)
        if idx == -1:
            return False
        members[idx].gemini_api_key = (api_key or '').strip() or None
        self._save(members)
        return True

    def record_usage(self, member_id: str, kind: str) -> Optional[Member]:
        """Increment a daily counter, resetting the block once a day has passed"""
        if kind not in USAGE_KINDS:
            raise ValueError(f"Unknown usage kind: {kind}")
        self._simulate_latency()
        members = self._load()
        idx = self._index(members, member_id)
        if idx == -1:
            return None

        member = members[idx]
        now = self._clock()
        if member.usage is None or member.usage.is_expired(now):
            member.usage = UsageCounters(last_reset=now)
        member.usage.increment(kind)
        self._save(members)
        return member

    def touch(self, member_id: str) -> None:
        """Stamp last_active; bookkeeping only, no simulated latency"""
        members = self._load()
        idx = self._index(members, member_id)
        if idx == -1:
            return
        members[idx].last_active = self._clock()
        self._save(members)
