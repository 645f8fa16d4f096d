"""
AutoStudio - Application State
Everything the studio keeps between requests, constructed once per app and
attached as app.extensions['autostudio'].
"""
import logging
import threading
from datetime import datetime
from typing import List, Optional, Dict, Any

from flask import current_app

from autostudio.models.content import Article, Trend
from autostudio.models.member import Member
from autostudio.models.settings import SystemConfig, WordPressConfig
from autostudio.services.activity_log import ActivityLog
from autostudio.services.ai_service import AIService
from autostudio.services.article_service import ArticleService
from autostudio.services.member_store import MemberStore
from autostudio.services.storage import (
    BlobStorage, create_storage, SYSTEM_CONFIG_KEY, WP_CONFIG_KEY, ARTICLES_KEY
)
from autostudio.services.scheduler_service import SchedulerService
from autostudio.services.wordpress_service import WordPressService

logger = logging.getLogger(__name__)


class StudioState:
    """Persisted settings, articles, members and the latest trend snapshot"""

    def __init__(
        self,
        storage: BlobStorage,
        ai: AIService,
        members: MemberStore,
        activity: ActivityLog = None,
        wp_timeout: float = 30,
        auto_refresh_minutes: int = 5
    ):
        self.storage = storage
        self.ai = ai
        self.members = members
        self.activity = activity or ActivityLog()
        self.wp_timeout = wp_timeout
        self._lock = threading.RLock()

        self.system_config = SystemConfig()
        self.wp_config = WordPressConfig()
        self.articles: List[Article] = []
        self.latest_trends: List[Trend] = []
        self.latest_trends_meta: Dict[str, Any] = {}

        self.article_service = ArticleService(self)
        self.scheduler = SchedulerService(self, interval_minutes=auto_refresh_minutes)

        self.load()

    @classmethod
    def from_app(cls, app) -> 'StudioState':
        config = app.config
        storage = create_storage(app)
        members = MemberStore(
            storage,
            write_delay=config.get('MEMBER_WRITE_DELAY', 0.8),
            default_admin_key=config.get('DEFAULT_ADMIN_KEY', 'admin123')
        )
        return cls(
            storage=storage,
            ai=AIService.from_config(config),
            members=members,
            activity=ActivityLog(config.get('ACTIVITY_LOG_SIZE', 200)),
            wp_timeout=config.get('WP_TIMEOUT', 30),
            auto_refresh_minutes=config.get('AUTO_REFRESH_MINUTES', 5)
        )

    # ==================== PERSISTENCE ====================

    def load(self) -> None:
        """Read every blob; anything missing or corrupt falls back to defaults"""
        with self._lock:
            data = self.storage.load_json(SYSTEM_CONFIG_KEY)
            self.system_config = SystemConfig.from_dict(data) if isinstance(data, dict) else SystemConfig()

            data = self.storage.load_json(WP_CONFIG_KEY)
            self.wp_config = WordPressConfig.from_dict(data) if isinstance(data, dict) else WordPressConfig()

            self.articles = []
            data = self.storage.load_json(ARTICLES_KEY)
            if isinstance(data, list):
                for item in data:
                    try:
                        self.articles.append(Article.from_dict(item))
                    except (ValueError, TypeError, AttributeError) as e:
                        logger.warning(f"Skipping unreadable stored article: {e}")

        logger.info(f"State loaded: {len(self.articles)} articles, private_mode={self.system_config.is_private_mode}")

    def save_system_config(self, config: SystemConfig) -> None:
        with self._lock:
            self.system_config = config
            self.storage.save_json(SYSTEM_CONFIG_KEY, config.to_dict())

    def save_wp_config(self, config: WordPressConfig) -> None:
        with self._lock:
            self.wp_config = config
            self.storage.save_json(WP_CONFIG_KEY, config.to_dict())

    def save_articles(self) -> None:
        with self._lock:
            self.storage.save_json(ARTICLES_KEY, [a.to_dict() for a in self.articles])

    def reset(self) -> None:
        """Wipe all stored data and return to defaults"""
        self.scheduler.disable_auto_refresh()
        with self._lock:
            try:
                self.storage.clear()
            except Exception as e:
                logger.error(f"Storage clear failed: {e}")
            self.latest_trends = []
            self.latest_trends_meta = {}
            self.load()
        self.activity.clear()
        logger.warning("Application state reset")

    # ==================== TRENDS ====================

    def set_latest_trends(self, trends: List[Trend], **meta) -> None:
        with self._lock:
            self.latest_trends = list(trends)
            self.latest_trends_meta = dict(meta, fetched_at=datetime.utcnow().isoformat())

    def latest_trends_snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'trends': [t.to_dict() for t in self.latest_trends],
                'meta': dict(self.latest_trends_meta)
            }

    # ==================== HELPERS ====================

    def resolve_api_key(self, header_key: str = None, member: Optional[Member] = None) -> Optional[str]:
        """Request header, else the member's personal key, else None (process default)"""
        if header_key:
            return header_key
        if member and member.gemini_api_key:
            return member.gemini_api_key
        return None

    def wordpress(self) -> WordPressService:
        return WordPressService.from_config(self.wp_config, timeout=self.wp_timeout)


def get_state() -> StudioState:
    """State of the application handling the current request"""
    return current_app.extensions['autostudio']
