"""
AutoStudio - Error Taxonomy
Typed errors raised by the AI and publishing layers, each carrying a short
user-facing message. Raw provider payloads never reach the API caller.
"""
from autostudio.utils import truncate

ERROR_DETAIL_LIMIT = 100


class StudioError(Exception):
    """Base class for errors surfaced to the API caller"""

    category = 'unknown'
    user_message = 'An unexpected error occurred'

    def __init__(self, detail: str = '', message: str = None):
        self.detail = detail or ''
        self.message = message or self.user_message
        super().__init__(self.message)


class ValidationError(StudioError):
    """Bad input, shown inline next to the form"""

    category = 'validation'

    def __init__(self, message: str):
        super().__init__(detail=message, message=message)


class PublishError(StudioError):
    """WordPress rejected or could not receive the post"""

    category = 'upstream'
    user_message = 'Failed to publish to WordPress'


# ==========================================
# AI ENGINE ERRORS
# ==========================================

class AIError(StudioError):
    """Base class for generative AI failures"""

    category = 'unknown'


class AIConnectionError(AIError):
    category = 'connectivity'
    user_message = ("AI Engine: Connection failed. This is often a temporary network issue. "
                    "Please try again in a few seconds.")


class AITimeoutError(AIConnectionError):
    user_message = "AI Engine: The request timed out. Please try again in a few seconds."


class AIAuthError(AIError):
    category = 'auth'
    user_message = "AI Engine: Invalid API Key. Please check your Gemini API key in Settings."


class AIRateLimitError(AIError):
    category = 'rate_limit'
    user_message = "AI Engine: Rate limit exceeded. Please wait a minute before trying again."


class AISafetyError(AIError):
    category = 'safety'
    user_message = "AI Engine: Content blocked by safety filters. Try rephrasing your topic."


class AIResponseError(AIError):
    """Response arrived but was empty or did not match the declared shape"""

    category = 'malformed'

    def __init__(self, detail: str = ''):
        super().__init__(detail=detail, message=truncate(detail or 'AI returned an invalid response', ERROR_DETAIL_LIMIT))


class AIServiceError(AIError):
    """Unrecognized provider failure; the detail is truncated for display"""

    category = 'unknown'

    def __init__(self, detail: str = ''):
        super().__init__(detail=detail, message=truncate(detail or 'Unknown AI error', ERROR_DETAIL_LIMIT))


def http_status(exc: StudioError) -> int:
    """Status code an API response carries for a typed error"""
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AIAuthError):
        return 401
    if isinstance(exc, AIRateLimitError):
        return 429
    if isinstance(exc, AISafetyError):
        return 422
    if isinstance(exc, AIConnectionError):
        return 503
    return 502


def format_ai_error(exc: BaseException) -> str:
    """User-readable message for any failure reaching the orchestrator boundary"""
    if isinstance(exc, StudioError):
        return exc.message
    return truncate(str(exc), ERROR_DETAIL_LIMIT)

