"""
AutoStudio - Content Models
Research results (trends, keywords, suggestions) and generated articles
"""
import re
from typing import Optional, List
from dataclasses import dataclass, field
from enum import Enum
import secrets

from autostudio.utils import now_ms, safe_bool


class ArticleStatus(Enum):
    DRAFT = "draft"
    REVIEW = "review"
    READY = "ready"
    PUBLISHED = "published"


def _require(data, keys, kind: str) -> None:
    """Raise ValueError when a structured-output object is missing required keys"""
    if not isinstance(data, dict):
        raise ValueError(f"{kind} entry is not an object")
    missing = [k for k in keys if k not in data]
    if missing:
        raise ValueError(f"{kind} entry missing fields: {', '.join(missing)}")


def _str_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


@dataclass
class Trend:
    """A trending topic returned by trend discovery"""

    topic: str
    volume: str
    category: str
    rising: bool
    search_intent: str
    trend_type: str  # Daily, Realtime, Breakout, Rising
    time_period: str
    region: str
    competition: str  # Low, Medium, High

    REQUIRED = ("topic", "volume", "category", "rising", "searchIntent",
                "trendType", "timePeriod", "region", "competition")

    def to_dict(self) -> dict:
        return {
            "topic": self.topic,
            "volume": self.volume,
            "category": self.category,
            "rising": self.rising,
            "searchIntent": self.search_intent,
            "trendType": self.trend_type,
            "timePeriod": self.time_period,
            "region": self.region,
            "competition": self.competition
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Trend":
        _require(data, cls.REQUIRED, 'Trend')
        return cls(
            topic=str(data['topic']),
            volume=str(data['volume']),
            category=str(data['category']),
            rising=safe_bool(data['rising']),
            search_intent=str(data['searchIntent']),
            trend_type=str(data['trendType']),
            time_period=str(data['timePeriod']),
            region=str(data['region']),
            competition=str(data['competition'])
        )


@dataclass
class Keyword:
    """An expanded SEO keyword"""

    phrase: str
    volume: str
    competition: str  # Low, Medium, High
    intent: str  # Informational, Commercial, Transactional
    type: str  # Long-tail, Question, Seed

    REQUIRED = ("phrase", "volume", "competition", "intent", "type")

    def to_dict(self) -> dict:
        return {
            "phrase": self.phrase,
            "volume": self.volume,
            "competition": self.competition,
            "intent": self.intent,
            "type": self.type
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Keyword":
        _require(data, cls.REQUIRED, 'Keyword')
        return cls(
            phrase=str(data['phrase']),
            volume=str(data['volume']),
            competition=str(data['competition']),
            intent=str(data['intent']),
            type=str(data['type'])
        )


@dataclass
class TopicSuggestion:
    """A low-competition topic idea with its reasoning"""

    topic: str
    reason: str
    potential: str
    keywords: List[str] = field(default_factory=list)

    REQUIRED = ("topic", "reason", "potential", "keywords")

    def to_dict(self) -> dict:
        return {
            "topic": self.topic,
            "reason": self.reason,
            "potential": self.potential,
            "keywords": self.keywords
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TopicSuggestion":
        _require(data, cls.REQUIRED, 'Suggestion')
        return cls(
            topic=str(data['topic']),
            reason=str(data['reason']),
            potential=str(data['potential']),
            keywords=_str_list(data['keywords'])
        )


@dataclass
class ArticleDraft:
    """Structured output of the article drafting call"""

    title: str = ""
    seo_title: str = ""
    focus_keyword: str = ""
    content: str = ""
    meta_description: str = ""
    slug: str = ""
    keywords: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ArticleDraft":
        _require(data, ("title", "content"), 'Article')
        return cls(
            title=str(data.get('title') or ''),
            seo_title=str(data.get('seoTitle') or ''),
            focus_keyword=str(data.get('focusKeyword') or ''),
            content=str(data.get('content') or '').replace('\\n', '\n'),
            meta_description=str(data.get('metaDescription') or ''),
            slug=str(data.get('slug') or ''),
            keywords=_str_list(data.get('keywords'))
        )


@dataclass
class AuditResult:
    """Humanization and SEO audit of a draft"""

    rewritten: str = ""
    similarity: float = 0.0
    human_score: float = 100.0
    seo_score: float = 85.0
    seo_recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "rewritten": self.rewritten,
            "similarity": self.similarity,
            "humanScore": self.human_score,
            "seoScore": self.seo_score,
            "seoRecommendations": self.seo_recommendations
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditResult":
        _require(data, ("rewritten", "similarity"), 'Audit')
        return cls(
            rewritten=str(data.get('rewritten') or '').replace('\\n', '\n'),
            similarity=float(data.get('similarity', 0)),
            human_score=float(data.get('humanScore', 0) or 0),
            seo_score=float(data.get('seoScore', 0) or 0),
            seo_recommendations=_str_list(data.get('seoRecommendations'))
        )


def slugify(text: str) -> str:
    """Lower-case and replace every character outside [a-z0-9] with '-'"""
    return re.sub(r'[^a-z0-9]', '-', (text or '').lower())


@dataclass
class Article:
    """A generated article, edited and eventually published to WordPress"""

    id: str
    title: str
    content: str = ""
    status: ArticleStatus = ArticleStatus.DRAFT
    slug: str = ""
    meta_description: str = ""
    keywords: List[str] = field(default_factory=list)
    created_at: int = field(default_factory=now_ms)
    seo_title: str = ""
    focus_keyword: str = ""
    published_url: Optional[str] = None
    similarity_score: float = 0.0
    human_score: float = 0.0
    seo_ready: bool = False
    seo_score: float = 0.0
    seo_recommendations: List[str] = field(default_factory=list)
    image_url: Optional[str] = None
    scheduled_at: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            self.id = secrets.token_hex(5)[:9]
        if not self.slug:
            self.slug = slugify(self.title)

    @property
    def word_count(self) -> int:
        text = (self.content or '').strip()
        return len(text.split()) if text else 0

    @property
    def is_scheduled(self) -> bool:
        return bool(self.scheduled_at)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "seoTitle": self.seo_title,
            "focusKeyword": self.focus_keyword,
            "content": self.content,
            "status": self.status.value,
            "slug": self.slug,
            "metaDescription": self.meta_description,
            "keywords": self.keywords,
            "createdAt": self.created_at,
            "publishedUrl": self.published_url,
            "similarityScore": self.similarity_score,
            "humanScore": self.human_score,
            "seoReady": self.seo_ready,
            "seoScore": self.seo_score,
            "seoRecommendations": self.seo_recommendations,
            "imageUrl": self.image_url,
            "scheduledAt": self.scheduled_at,
            "wordCount": self.word_count
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Article":
        return cls(
            id=data.get('id', ''),
            title=data.get('title', ''),
            seo_title=data.get('seoTitle') or '',
            focus_keyword=data.get('focusKeyword') or '',
            content=data.get('content', ''),
            status=ArticleStatus(data.get('status', 'draft')),
            slug=data.get('slug', ''),
            meta_description=data.get('metaDescription', ''),
            keywords=_str_list(data.get('keywords')),
            created_at=int(data.get('createdAt') or now_ms()),
            published_url=data.get('publishedUrl'),
            similarity_score=float(data.get('similarityScore', 0)),
            human_score=float(data.get('humanScore', 0)),
            seo_ready=bool(data.get('seoReady', False)),
            seo_score=float(data.get('seoScore', 0)),
            seo_recommendations=_str_list(data.get('seoRecommendations')),
            image_url=data.get('imageUrl'),
            scheduled_at=data.get('scheduledAt')
        )
