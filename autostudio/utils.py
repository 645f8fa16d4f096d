"""
AutoStudio - Utilities
Safe parsing helpers and small shared helpers
"""
import time


def now_ms() -> int:
    """Current time as epoch milliseconds (the persisted timestamp format)"""
    return int(time.time() * 1000)


def truncate(text: str, limit: int = 100) -> str:
    """Cut text to limit characters, appending '...' when shortened"""
    text = str(text)
    return text[:limit] + "..." if len(text) > limit else text


def safe_int(value, default=0, min_val=None, max_val=None):
    """
    Safely parse an integer from a request parameter.
    """
    try:
        result = int(value) if value is not None else default
    except (ValueError, TypeError):
        result = default

    if min_val is not None:
        result = max(result, min_val)
    if max_val is not None:
        result = min(result, max_val)

    return result


def safe_bool(value, default=False):
    """
    Safely parse a boolean from a request parameter.
    Accepts: true, false, 1, 0, yes, no (case insensitive)
    """
    if value is None:
        return default

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        return value.lower() in ('true', '1', 'yes', 'on')

    return bool(value)


def clean_str(value, max_len: int = 500) -> str:
    """Strip a request string field and bound its length"""
    if value is None:
        return ''
    return str(value).strip()[:max_len]
