"""
AutoStudio - Gemini HTTP Client
Single generateContent call over the Gemini REST API. Failures are raised as
typed errors from autostudio.services.errors, classified from the HTTP status
and the structured error body rather than from message text.
"""
import logging
from typing import Dict, Any, Optional, List

import requests

from autostudio.services.errors import (
    AIAuthError,
    AIConnectionError,
    AIRateLimitError,
    AIResponseError,
    AISafetyError,
    AIServiceError,
    AITimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = 'https://generativelanguage.googleapis.com/v1beta'

AUTH_STATUSES = {'UNAUTHENTICATED', 'PERMISSION_DENIED'}
AUTH_REASONS = {'API_KEY_INVALID', 'API_KEY_EXPIRED'}
SAFETY_FINISH_REASONS = {'SAFETY', 'PROHIBITED_CONTENT', 'BLOCKLIST', 'SPII', 'IMAGE_SAFETY'}


class GeminiClient:
    """Thin wrapper around models/{model}:generateContent"""

    def __init__(self, api_key: str = '', api_base: str = DEFAULT_API_BASE, timeout: float = 180):
        self.api_key = api_key
        self.api_base = (api_base or DEFAULT_API_BASE).rstrip('/')
        self.timeout = timeout

    def generate_content(
        self,
        model: str,
        prompt: str,
        response_schema: Dict[str, Any] = None,
        use_search: bool = False,
        generation_config: Dict[str, Any] = None,
        api_key: str = None,
        timeout: float = None
    ) -> Dict[str, Any]:
        """
        Call generateContent and return the decoded response body.

        Args:
            model: Gemini model id, e.g. gemini-flash-latest
            prompt: User prompt text
            response_schema: JSON schema for structured output (sets responseMimeType)
            use_search: Attach the google_search grounding tool
            generation_config: Extra generationConfig fields (e.g. imageConfig)
            api_key: Caller credential overriding the client default
            timeout: Socket timeout in seconds

        Raises:
            AIError subclasses for every failure path
        """
        key = api_key or self.api_key
        if not key:
            raise AIAuthError('Gemini API key not configured')

        config = dict(generation_config or {})
        if response_schema is not None:
            config['responseMimeType'] = 'application/json'
            config['responseSchema'] = response_schema

        body: Dict[str, Any] = {
            'contents': [{'role': 'user', 'parts': [{'text': prompt}]}]
        }
        if config:
            body['generationConfig'] = config
        if use_search:
            body['tools'] = [{'google_search': {}}]

        url = f"{self.api_base}/models/{model}:generateContent"
        logger.info(f"Gemini API call: model={model}, search={use_search}, structured={response_schema is not None}")

        try:
            response = requests.post(
                url,
                headers={
                    'x-goog-api-key': key,
                    'Content-Type': 'application/json'
                },
                json=body,
                timeout=timeout or self.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Gemini API timeout: {e}")
            raise AITimeoutError(str(e))
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Gemini API connection error: {e}")
            raise AIConnectionError(str(e))
        except requests.RequestException as e:
            logger.error(f"Gemini API request error: {e}")
            raise AIServiceError(f"Gemini API error: {e}")

        logger.info(f"Gemini API response status: {response.status_code}")

        if response.status_code != 200:
            self._raise_for_error(response)

        try:
            data = response.json()
        except ValueError:
            raise AIResponseError('Gemini API returned a non-JSON body')

        self._raise_for_block(data)
        return data

    def _raise_for_error(self, response) -> None:
        """Translate a non-200 response into a typed error"""
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        error = payload.get('error') if isinstance(payload, dict) else None
        if not isinstance(error, dict):
            error = {}

        status_name = error.get('status', '')
        message = error.get('message') or response.text[:300]
        reasons = {
            d.get('reason') for d in error.get('details', [])
            if isinstance(d, dict) and d.get('reason')
        }

        logger.error(f"Gemini API error response ({response.status_code}, {status_name}): {message}")

        if response.status_code == 429 or status_name == 'RESOURCE_EXHAUSTED':
            raise AIRateLimitError(message)
        if response.status_code in (401, 403) or status_name in AUTH_STATUSES or reasons & AUTH_REASONS:
            raise AIAuthError(message)
        raise AIServiceError(f"Gemini API error ({response.status_code}): {message}")

    @staticmethod
    def _raise_for_block(data: Dict[str, Any]) -> None:
        """Raise AISafetyError when the prompt or the only candidate was blocked"""
        feedback = data.get('promptFeedback') or {}
        if feedback.get('blockReason'):
            raise AISafetyError(f"Prompt blocked: {feedback['blockReason']}")

        candidates = data.get('candidates') or []
        if candidates:
            first = candidates[0]
            parts = (first.get('content') or {}).get('parts') or []
            if first.get('finishReason') in SAFETY_FINISH_REASONS and not parts:
                raise AISafetyError(f"Response blocked: {first['finishReason']}")

    @staticmethod
    def _parts(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        candidates = data.get('candidates') or []
        if not candidates:
            return []
        return (candidates[0].get('content') or {}).get('parts') or []

    @classmethod
    def extract_text(cls, data: Dict[str, Any]) -> str:
        """Concatenate the text parts of the first candidate"""
        return ''.join(p.get('text', '') for p in cls._parts(data) if isinstance(p, dict))

    @classmethod
    def extract_inline_image(cls, data: Dict[str, Any]) -> Optional[Dict[str, str]]:
        """First inline image part as {'mimeType', 'data'}, or None"""
        for part in cls._parts(data):
            inline = part.get('inlineData') or part.get('inline_data') if isinstance(part, dict) else None
            if inline and inline.get('data'):
                return {
                    'mimeType': inline.get('mimeType') or inline.get('mime_type') or 'image/png',
                    'data': inline['data']
                }
        return None
