"""
AutoStudio - WordPress Publishing Service
Publishes generated articles to a WordPress site via the REST API
"""
import base64
import logging
from typing import Dict, Any

import markdown
import requests

from autostudio.models.content import Article
from autostudio.models.settings import WordPressConfig
from autostudio.services.errors import PublishError

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    401: "WordPress Authentication Failed: Check your Application Password and Username.",
    403: "WordPress Permission Denied: Your user might not have permission to post.",
    404: "WordPress API Not Found: Ensure the URL is correct and REST API is enabled.",
    500: "WordPress Server Error: Something went wrong on your website."
}


def markdown_to_html(text: str) -> str:
    return markdown.markdown(text or '', extensions=['extra'])


def build_payload(article: Article) -> Dict[str, Any]:
    """REST body for POST /posts, Yoast SEO fields included"""
    payload = {
        'title': article.title,
        'content': markdown_to_html(article.content),
        'slug': article.slug,
        'status': 'future' if article.is_scheduled else 'publish',
        'excerpt': article.meta_description,
        'format': 'standard',
        'meta': {
            '_yoast_wpseo_focuskw': article.focus_keyword or '',
            '_yoast_wpseo_metadesc': article.meta_description or '',
            '_yoast_wpseo_title': article.seo_title or article.title
        }
    }
    if article.is_scheduled:
        payload['date'] = article.scheduled_at
    return payload


def error_message(response) -> str:
    """WordPress's own message when it sent one, otherwise a per-status hint"""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get('message'):
        return str(data['message'])
    if response.status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[response.status_code]
    return f"WordPress Error ({response.status_code}): {response.reason}"


class WordPressService:
    """Handles publishing content to a WordPress site"""

    def __init__(self, site_url: str, username: str, app_password: str, timeout: float = 30):
        """
        Initialize WordPress connection

        Args:
            site_url: WordPress site URL (e.g., https://example.com)
            username: WordPress username
            app_password: Application password (not regular password)
                         Generate at: WordPress Admin > Users > Profile > Application Passwords
            timeout: Socket timeout in seconds
        """
        self.site_url = (site_url or '').rstrip('/')
        self.api_url = f"{self.site_url}/wp-json/wp/v2"
        self.username = (username or '').strip()
        # App passwords contain spaces; only trim the ends
        self.app_password = app_password.strip() if app_password else ''
        self.timeout = timeout

        credentials = f"{self.username}:{self.app_password}"
        token = base64.b64encode(credentials.encode('utf-8')).decode('ascii')
        self.headers = {
            'Authorization': f'Basic {token}',
            'Content-Type': 'application/json',
            'User-Agent': 'AutoStudio/1.0',
            'Accept': 'application/json'
        }

    @classmethod
    def from_config(cls, config: WordPressConfig, timeout: float = 30) -> 'WordPressService':
        return cls(config.url, config.username, config.app_password, timeout=timeout)

    def publish_article(self, article: Article) -> str:
        """
        Create the post and return its public link.

        Raises:
            PublishError: network failure or any non-2xx response
        """
        payload = build_payload(article)
        logger.info(f"Publishing '{article.title}' to {self.site_url} (status={payload['status']})")

        try:
            response = requests.post(
                f"{self.api_url}/posts",
                headers=self.headers,
                json=payload,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"WordPress publish error: {e}")
            raise PublishError(detail=str(e), message=f"Could not connect to {self.site_url}: {e}")

        if not 200 <= response.status_code < 300:
            message = error_message(response)
            logger.error(f"WordPress publish failed ({response.status_code}): {message}")
            raise PublishError(detail=response.text[:500], message=message)

        try:
            post = response.json()
        except ValueError:
            raise PublishError(detail=response.text[:500], message="WordPress returned an invalid response.")

        link = post.get('link', '')
        logger.info(f"Published post {post.get('id')} -> {link}")
        return link

    def test_connection(self) -> Dict[str, Any]:
        """Authenticate against /users/me"""
        try:
            response = requests.get(
                f"{self.api_url}/users/me",
                headers=self.headers,
                timeout=15
            )
        except requests.exceptions.Timeout:
            return {
                'success': False,
                'error': 'Connection timeout',
                'message': 'The WordPress site took too long to respond. Check the URL and try again.'
            }
        except requests.exceptions.ConnectionError:
            return {
                'success': False,
                'error': 'Connection failed',
                'message': f'Could not connect to {self.site_url}. Check the URL is correct and the site is accessible.'
            }

        if response.status_code == 200:
            try:
                user_name = response.json().get('name', self.username)
            except ValueError:
                user_name = self.username
            return {
                'success': True,
                'connected_as': user_name,
                'site': self.site_url,
                'message': f"Connected as {user_name}"
            }

        return {
            'success': False,
            'error': f'Unexpected response: {response.status_code}',
            'message': error_message(response)
        }
