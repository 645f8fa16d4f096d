"""
AutoStudio - Data Models
Dataclass models serialized into the persisted studio blobs
"""
from autostudio.models.member import (
    Member,
    MemberRole,
    MemberStatus,
    UsageCounters,
    SUPER_ADMIN_ID
)
from autostudio.models.content import (
    Trend,
    Keyword,
    TopicSuggestion,
    ArticleDraft,
    AuditResult,
    Article,
    ArticleStatus
)
from autostudio.models.settings import SystemConfig, WordPressConfig

__all__ = [
    'Member',
    'MemberRole',
    'MemberStatus',
    'UsageCounters',
    'SUPER_ADMIN_ID',
    'Trend',
    'Keyword',
    'TopicSuggestion',
    'ArticleDraft',
    'AuditResult',
    'Article',
    'ArticleStatus',
    'SystemConfig',
    'WordPressConfig'
]
