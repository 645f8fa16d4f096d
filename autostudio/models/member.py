"""
AutoStudio - Member Model
Studio members, their access keys and daily usage counters
"""
from typing import Optional
from dataclasses import dataclass, field
from enum import Enum

from autostudio.utils import now_ms

SUPER_ADMIN_ID = '1'
USAGE_RESET_MS = 24 * 60 * 60 * 1000
USAGE_KINDS = ('keywords', 'articles', 'images')


class MemberRole(Enum):
    ADMIN = "Admin"
    MEMBER = "Member"


class MemberStatus(Enum):
    ACTIVE = "Active"
    SUSPENDED = "Suspended"


@dataclass
class UsageCounters:
    """Per-member daily counters"""

    keywords: int = 0
    articles: int = 0
    images: int = 0
    last_reset: int = field(default_factory=now_ms)

    def is_expired(self, now: int) -> bool:
        return now - self.last_reset > USAGE_RESET_MS

    def increment(self, kind: str) -> None:
        if kind not in USAGE_KINDS:
            raise ValueError(f"Unknown usage kind: {kind}")
        setattr(self, kind, getattr(self, kind) + 1)

    def to_dict(self) -> dict:
        return {
            "keywords": self.keywords,
            "articles": self.articles,
            "images": self.images,
            "lastReset": self.last_reset
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UsageCounters":
        return cls(
            keywords=int(data.get('keywords', 0)),
            articles=int(data.get('articles', 0)),
            images=int(data.get('images', 0)),
            last_reset=int(data.get('lastReset', 0))
        )


@dataclass
class Member:
    """A studio member; the record with id "1" is the protected super-admin"""

    id: str
    name: str
    email: str
    access_key: str
    role: MemberRole = MemberRole.MEMBER
    status: MemberStatus = MemberStatus.ACTIVE
    created_at: int = field(default_factory=now_ms)
    last_active: Optional[int] = None
    gemini_api_key: Optional[str] = None
    usage: Optional[UsageCounters] = None

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    @property
    def is_protected(self) -> bool:
        return self.id == SUPER_ADMIN_ID

    def to_dict(self, include_sensitive: bool = True) -> dict:
        """Serialize in the persisted blob format; secrets hidden unless include_sensitive"""
        data = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "status": self.status.value,
            "createdAt": self.created_at,
        }
        if self.last_active is not None:
            data["lastActive"] = self.last_active
        if self.usage is not None:
            data["usage"] = self.usage.to_dict()
        if include_sensitive:
            data["accessKey"] = self.access_key
            if self.gemini_api_key:
                data["geminiApiKey"] = self.gemini_api_key
        else:
            data["hasGeminiKey"] = bool(self.gemini_api_key)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Member":
        usage = data.get('usage')
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            email=data.get('email', ''),
            access_key=data.get('accessKey', ''),
            role=MemberRole(data.get('role', MemberRole.MEMBER.value)),
            status=MemberStatus(data.get('status', MemberStatus.ACTIVE.value)),
            created_at=int(data.get('createdAt') or now_ms()),
            last_active=data.get('lastActive'),
            gemini_api_key=data.get('geminiApiKey') or None,
            usage=UsageCounters.from_dict(usage) if isinstance(usage, dict) else None
        )


def default_admin(access_key: str = 'admin123') -> Member:
    """The seeded super-admin record"""
    return Member(
        id=SUPER_ADMIN_ID,
        name='Master Admin',
        email='admin@autostudio.ai',
        access_key=access_key,
        role=MemberRole.ADMIN,
        status=MemberStatus.ACTIVE
    )
