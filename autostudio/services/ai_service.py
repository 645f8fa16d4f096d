"""
AutoStudio - AI Service
Gemini-backed content generation: trend discovery, keyword expansion, topic
suggestions, article drafting, humanization audit, featured images.

Research intents try the search-grounded model under a deadline first, then
fall back to the faster non-search model with a bounded retry policy.
"""
import json
import time
import logging
from typing import Dict, List, Any, Optional, Callable

from autostudio.models.content import (
    Trend, Keyword, TopicSuggestion, ArticleDraft, AuditResult
)
from autostudio.services import prompts
from autostudio.services.errors import (
    AIError, AIAuthError, AISafetyError, AIResponseError, AIServiceError, AITimeoutError
)
from autostudio.services.gemini_client import GeminiClient
from autostudio.services.resilience import (
    DeadlineExceeded, RetryPolicy, fixed_backoff, run_with_deadline
)

logger = logging.getLogger(__name__)

SIMILARITY_FLOOR = 10
DEFAULT_AUDIT = {
    'rewritten': '',
    'similarity': 0,
    'humanScore': 100,
    'seoScore': 85,
    'seoRecommendations': []
}


def clean_json(text: str) -> str:
    """Strip markdown code fences the model sometimes wraps JSON in"""
    return (text or '').replace('```json', '').replace('```', '').strip()


def _should_retry(exc: BaseException) -> bool:
    # A bad key or a safety block fails the same way every time
    return not isinstance(exc, (AIAuthError, AISafetyError))


def to_ai_error(exc: BaseException) -> AIError:
    """Terminal failure of an intent, expressed in the typed taxonomy"""
    if isinstance(exc, AIError):
        return exc
    if isinstance(exc, DeadlineExceeded):
        return AITimeoutError(str(exc))
    if isinstance(exc, ValueError):
        return AIResponseError(str(exc))
    return AIServiceError(str(exc))


class AIService:
    """Content generation orchestrator"""

    def __init__(
        self,
        client: GeminiClient = None,
        search_model: str = 'gemini-3-flash-preview',
        fallback_model: str = 'gemini-flash-latest',
        article_model: str = 'gemini-3-flash-preview',
        article_pro_model: str = 'gemini-3-pro-preview',
        audit_model: str = 'gemini-3-flash-preview',
        image_model: str = 'gemini-2.5-flash-image',
        proxy_model: str = 'gemini-1.5-flash',
        primary_timeout: float = 25,
        fallback_backoff: float = 1.5,
        fallback_attempts: int = 3,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.client = client or GeminiClient()
        self.search_model = search_model
        self.fallback_model = fallback_model
        self.article_model = article_model
        self.article_pro_model = article_pro_model
        self.audit_model = audit_model
        self.image_model = image_model
        self.proxy_model = proxy_model
        self.primary_timeout = primary_timeout
        self.fallback_policy = RetryPolicy(
            max_attempts=fallback_attempts,
            backoff=fixed_backoff(fallback_backoff),
            retry_on=_should_retry,
            sleep=sleep
        )

    @classmethod
    def from_config(cls, config) -> 'AIService':
        """Build from a Flask config mapping"""
        client = GeminiClient(
            api_key=config.get('GEMINI_API_KEY', ''),
            api_base=config.get('GEMINI_API_BASE'),
            timeout=config.get('REQUEST_TIMEOUT', 180)
        )
        return cls(
            client=client,
            search_model=config.get('SEARCH_MODEL', 'gemini-3-flash-preview'),
            fallback_model=config.get('FALLBACK_MODEL', 'gemini-flash-latest'),
            article_model=config.get('ARTICLE_MODEL', 'gemini-3-flash-preview'),
            article_pro_model=config.get('ARTICLE_PRO_MODEL', 'gemini-3-pro-preview'),
            audit_model=config.get('AUDIT_MODEL', 'gemini-3-flash-preview'),
            image_model=config.get('IMAGE_MODEL', 'gemini-2.5-flash-image'),
            proxy_model=config.get('PROXY_MODEL', 'gemini-1.5-flash'),
            primary_timeout=config.get('PRIMARY_TIMEOUT', 25),
            fallback_backoff=config.get('FALLBACK_BACKOFF', 1.5),
            fallback_attempts=config.get('FALLBACK_ATTEMPTS', 3)
        )

    # ==========================================
    # RESEARCH INTENTS
    # ==========================================

    def fetch_trending_topics(
        self,
        niche: str,
        country_code: str = 'GLOBAL',
        category: str = 'all',
        api_key: str = None
    ) -> List[Trend]:
        """Breakout topics for a niche in a region"""
        geo = prompts.geo_target(country_code)
        logger.info(f"Fetching trends: niche='{niche}', geo={geo}, category={category}")
        return self._structured_with_fallback(
            label='Trends',
            primary_prompt=prompts.trends_prompt(niche, geo, category),
            fallback_prompt=prompts.trends_fallback_prompt(niche, geo),
            schema=prompts.TREND_SCHEMA,
            model_cls=Trend,
            api_key=api_key
        )

    def find_keywords(
        self,
        seed: str,
        start_date: str = None,
        end_date: str = None,
        api_key: str = None
    ) -> List[Keyword]:
        """Ten SEO keywords around a seed phrase"""
        dates = prompts.date_context(start_date, end_date)
        logger.info(f"Finding keywords for seed '{seed}'")
        return self._structured_with_fallback(
            label='Keywords',
            primary_prompt=prompts.keywords_prompt(seed, dates),
            fallback_prompt=prompts.keywords_fallback_prompt(seed, dates),
            schema=prompts.KEYWORD_SCHEMA,
            model_cls=Keyword,
            api_key=api_key
        )

    def fetch_smart_suggestions(
        self,
        category: str = 'all',
        country: str = 'GLOBAL',
        api_key: str = None
    ) -> List[TopicSuggestion]:
        """Low-competition topic ideas for a category"""
        geo = prompts.geo_target(country)
        geo_context = 'worldwide' if geo == 'worldwide' else f'in {geo}'
        logger.info(f"Fetching suggestions: category={category}, geo={geo}")
        return self._structured_with_fallback(
            label='Suggestions',
            primary_prompt=prompts.suggestions_prompt(category, geo_context),
            fallback_prompt=prompts.suggestions_fallback_prompt(category, geo_context),
            schema=prompts.SUGGESTION_SCHEMA,
            model_cls=TopicSuggestion,
            api_key=api_key
        )

    def _structured_with_fallback(
        self,
        label: str,
        primary_prompt: str,
        fallback_prompt: str,
        schema: Dict[str, Any],
        model_cls,
        api_key: str = None
    ):
        def primary():
            data = self.client.generate_content(
                self.search_model, primary_prompt,
                response_schema=schema, use_search=True, api_key=api_key
            )
            return self._parse_list(self._decode(data), model_cls)

        def fallback():
            data = self.client.generate_content(
                self.fallback_model, fallback_prompt,
                response_schema=schema, api_key=api_key
            )
            # An empty list is a valid answer from the fallback
            return self._parse_list(self._decode(data, empty="[]"), model_cls, allow_empty=True)

        try:
            return run_with_deadline(primary, self.primary_timeout)
        except Exception as e:
            logger.warning(f"{label} search attempt failed or timed out, trying fallback... ({e})")

        try:
            return self.fallback_policy.run(fallback, label=f"{label} fallback")
        except Exception as e:
            logger.error(f"{label} fallback error after retries: {e}")
            raise to_ai_error(e)

    # ==========================================
    # ARTICLE PIPELINE
    # ==========================================

    def generate_article(self, topic: str, intent: str = 'Informational', api_key: str = None) -> ArticleDraft:
        """Draft a Markdown article; one retry against the pro model"""
        prompt = prompts.article_prompt(topic, intent)

        def draft(model):
            data = self.client.generate_content(
                model, prompt, response_schema=prompts.ARTICLE_SCHEMA, api_key=api_key
            )
            return ArticleDraft.from_dict(self._decode(data))

        try:
            return draft(self.article_model)
        except Exception as e:
            logger.warning(f"Article generation with {self.article_model} failed, retrying with "
                           f"{self.article_pro_model}: {e}")

        try:
            return draft(self.article_pro_model)
        except Exception as e:
            logger.error(f"Article generation error: {e}")
            raise to_ai_error(e)

    def audit_and_rewrite(
        self,
        content: str,
        title: str,
        keywords: List[str],
        api_key: str = None
    ) -> AuditResult:
        """Humanize the draft and score it; similarity under 10 is reported as 0"""
        try:
            data = self.client.generate_content(
                self.audit_model,
                prompts.audit_prompt(content, title, keywords),
                response_schema=prompts.AUDIT_SCHEMA,
                api_key=api_key
            )
            text = GeminiClient.extract_text(data)
            payload = json.loads(clean_json(text)) if text.strip() else dict(DEFAULT_AUDIT)
            result = AuditResult.from_dict(payload)
        except Exception as e:
            logger.error(f"Audit error: {e}")
            raise to_ai_error(e)

        if result.similarity < SIMILARITY_FLOOR:
            result.similarity = 0
        return result

    def generate_blog_image(self, topic: str, api_key: str = None) -> Optional[str]:
        """Featured image as a data URI, or None when no image part came back"""
        try:
            data = self.client.generate_content(
                self.image_model,
                prompts.image_prompt(topic),
                generation_config={'imageConfig': {'aspectRatio': '16:9'}},
                api_key=api_key
            )
        except Exception as e:
            logger.error(f"Image generation error: {e}")
            raise to_ai_error(e)

        image = GeminiClient.extract_inline_image(data)
        if not image:
            logger.info(f"No image returned for '{topic}'")
            return None
        return f"data:{image['mimeType']};base64,{image['data']}"

    def generate_text(self, prompt: str, api_key: str = None) -> str:
        """Plain text completion used by the /api/generate proxy"""
        data = self.client.generate_content(self.proxy_model, prompt, api_key=api_key)
        return GeminiClient.extract_text(data) or 'No response'

    # ==========================================
    # PARSING
    # ==========================================

    @staticmethod
    def _decode(data: Dict[str, Any], empty: str = None) -> Any:
        text = GeminiClient.extract_text(data)
        if not text.strip() and empty is not None:
            text = empty
        if not text.strip():
            raise AIResponseError('AI returned an empty response')
        try:
            return json.loads(clean_json(text))
        except ValueError as e:
            raise AIResponseError(f"AI returned malformed JSON: {e}")

    @staticmethod
    def _parse_list(data: Any, model_cls, allow_empty: bool = False) -> list:
        if not isinstance(data, list) or (not data and not allow_empty):
            raise AIResponseError('AI returned no results')
        try:
            return [model_cls.from_dict(item) for item in data]
        except (ValueError, TypeError, KeyError) as e:
            raise AIResponseError(f"AI returned an invalid result: {e}")
