"""
AutoStudio - Services
Business logic and external API integrations
"""
from autostudio.services.ai_service import AIService
from autostudio.services.gemini_client import GeminiClient
from autostudio.services.member_store import MemberStore
from autostudio.services.wordpress_service import WordPressService
from autostudio.services.article_service import ArticleService
from autostudio.services.activity_log import ActivityLog
from autostudio.services.state import StudioState, get_state

__all__ = [
    'AIService',
    'GeminiClient',
    'MemberStore',
    'WordPressService',
    'ArticleService',
    'ActivityLog',
    'StudioState',
    'get_state'
]
