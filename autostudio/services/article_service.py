"""
AutoStudio - Article Service
Generation pipeline (draft -> audit -> image), edits, publishing and export
"""
import logging
from typing import Dict, Any, List, Optional, Tuple

from autostudio.models.content import Article, ArticleStatus, slugify
from autostudio.services.errors import PublishError, ValidationError, format_ai_error

logger = logging.getLogger(__name__)

DEFAULT_HUMAN_SCORE = 95
SEO_READY_THRESHOLD = 80
EXPORT_FORMATS = ('html', 'md', 'txt')

# Request field -> Article attribute
EDITABLE_FIELDS = {
    'title': 'title',
    'seoTitle': 'seo_title',
    'focusKeyword': 'focus_keyword',
    'content': 'content',
    'metaDescription': 'meta_description',
    'slug': 'slug',
    'keywords': 'keywords',
    'status': 'status',
    'scheduledAt': 'scheduled_at'
}


class ArticleService:
    """Articles live on the studio state and are persisted on every change"""

    def __init__(self, state):
        self.state = state

    @property
    def activity(self):
        return self.state.activity

    def list(self) -> List[Article]:
        return list(self.state.articles)

    def get(self, article_id: str) -> Optional[Article]:
        for article in self.state.articles:
            if article.id == article_id:
                return article
        return None

    def write_article(
        self,
        topic: str,
        intent: str = 'Informational',
        api_key: str = None,
        member_id: str = None
    ) -> Article:
        """
        Draft, audit and illustrate an article for a topic.

        Raises:
            AIError: any pipeline step failed; nothing is stored
        """
        topic = (topic or '').strip()
        if not topic:
            raise ValidationError("Topic is required.")

        ai = self.state.ai
        self.activity.info(f'Engine: Starting generation for "{topic}"...')
        try:
            self.activity.info("Step 1/3: Generating human-like draft...")
            draft = ai.generate_article(topic, intent, api_key=api_key)

            self.activity.info("Step 2/3: Running humanization and SEO audit...")
            audit = ai.audit_and_rewrite(draft.content, draft.title, draft.keywords, api_key=api_key)

            self.activity.info("Step 3/3: Generating professional featured image...")
            image_url = ai.generate_blog_image(topic, api_key=api_key)
        except Exception as e:
            self.activity.error(f"Failure: {format_ai_error(e)}")
            raise

        article = Article(
            id='',
            title=draft.title or topic,
            seo_title=draft.seo_title,
            focus_keyword=draft.focus_keyword,
            content=audit.rewritten or draft.content,
            status=ArticleStatus.READY,
            slug=draft.slug or slugify(topic),
            meta_description=draft.meta_description,
            keywords=draft.keywords,
            similarity_score=audit.similarity,
            human_score=audit.human_score or DEFAULT_HUMAN_SCORE,
            seo_ready=audit.seo_score > SEO_READY_THRESHOLD,
            seo_score=audit.seo_score,
            seo_recommendations=audit.seo_recommendations,
            image_url=image_url
        )

        self.state.articles.insert(0, article)
        self.state.save_articles()
        logger.info(f"Article {article.id} created for '{topic}' ({article.word_count} words)")
        self.activity.success("Success: Article generated and audited.")

        if member_id:
            self.state.members.record_usage(member_id, 'articles')
            self.state.members.record_usage(member_id, 'images')

        return article

    def update(self, article_id: str, changes: Dict[str, Any]) -> Optional[Article]:
        """Apply editor changes; unknown fields are ignored"""
        article = self.get(article_id)
        if not article:
            return None

        for key, attr in EDITABLE_FIELDS.items():
            if key not in changes:
                continue
            value = changes[key]
            if attr == 'status':
                try:
                    value = ArticleStatus(value)
                except ValueError:
                    raise ValidationError(f"Invalid status: {value}")
            elif attr == 'keywords':
                if not isinstance(value, list):
                    raise ValidationError("Keywords must be a list.")
                value = [str(v) for v in value]
            elif attr == 'scheduled_at':
                value = value or None
            else:
                value = '' if value is None else str(value)
            setattr(article, attr, value)

        self.state.save_articles()
        return article

    def delete(self, article_id: str) -> bool:
        before = len(self.state.articles)
        self.state.articles[:] = [a for a in self.state.articles if a.id != article_id]
        if len(self.state.articles) == before:
            return False
        self.state.save_articles()
        self.activity.info("Cleanup: Draft deleted.")
        return True

    def publish(self, article_id: str) -> Optional[Article]:
        """
        Publish (or schedule) an article on the configured WordPress site.

        Raises:
            PublishError: WordPress not configured or the post was rejected
        """
        article = self.get(article_id)
        if not article:
            return None

        if not self.state.wp_config.is_configured:
            self.activity.error("WP Error: Configuration missing!")
            raise PublishError(message="WP Error: Configuration missing!")

        action = 'Scheduling' if article.is_scheduled else 'Publishing'
        self.activity.info(f'{action} "{article.title}" to WordPress...')
        try:
            url = self.state.wordpress().publish_article(article)
        except PublishError as e:
            self.activity.error(f"WP Error: {e.message}")
            raise

        article.status = ArticleStatus.READY if article.is_scheduled else ArticleStatus.PUBLISHED
        article.published_url = url
        self.state.save_articles()

        if article.is_scheduled:
            self.activity.success(f"Success: Post scheduled for {article.scheduled_at}")
        else:
            self.activity.success(f"Success: Post live at {url}")
        return article

    def export(self, article_id: str, fmt: str = 'md') -> Optional[Tuple[str, str, str]]:
        """(filename, mimetype, body) for a download"""
        if fmt not in EXPORT_FORMATS:
            raise ValidationError(f"Unsupported export format: {fmt}")
        article = self.get(article_id)
        if not article:
            return None

        body = article.content
        mimetype = 'text/plain'
        if fmt == 'html':
            html_body = article.content.replace('\n', '<br>')
            body = (f"<!DOCTYPE html><html><head><title>{article.title}</title></head>"
                    f"<body><h1>{article.title}</h1>{html_body}</body></html>")
            mimetype = 'text/html'
        return f"{article.slug}.{fmt}", mimetype, body
