"""
AutoStudio - Resilience Utilities
Deadline-bounded calls and a declarative retry policy shared by every
AI-backed intent.
"""
import time
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from dataclasses import dataclass, field
from typing import Callable, Optional, Any

logger = logging.getLogger(__name__)


class DeadlineExceeded(TimeoutError):
    """The task did not finish before its deadline"""


def run_with_deadline(func: Callable[..., Any], timeout: float, *args, **kwargs) -> Any:
    """
    Run func on a worker thread and wait at most `timeout` seconds for it.

    Whichever finishes first wins: the result (or the task's own exception) if
    the task completes in time, otherwise DeadlineExceeded. The losing task is
    NOT cancelled; an in-flight HTTP request keeps running in the background
    and its eventual result is discarded.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='deadline')
    future = executor.submit(func, *args, **kwargs)
    # Do not block on the worker; it finishes (or times out at the HTTP layer) on its own
    executor.shutdown(wait=False)
    try:
        return future.result(timeout=timeout)
    except FutureTimeout:
        logger.warning(f"Deadline of {timeout}s exceeded for {getattr(func, '__name__', func)}")
        raise DeadlineExceeded(f"Timed out after {timeout} seconds")


def fixed_backoff(seconds: float) -> Callable[[int], float]:
    """Same delay before every attempt"""
    return lambda attempt: seconds


def _always(exc: BaseException) -> bool:
    return True


@dataclass
class RetryPolicy:
    """
    Call a function up to max_attempts times.

    backoff(attempt) gives the delay slept before attempt N (1-based);
    retry_on(exc) decides whether a failure is worth another attempt.
    The last exception is re-raised once attempts are exhausted.
    """

    max_attempts: int = 3
    backoff: Callable[[int], float] = field(default_factory=lambda: fixed_backoff(0))
    retry_on: Callable[[BaseException], bool] = _always
    sleep: Callable[[float], None] = time.sleep

    def run(self, func: Callable[..., Any], *args, label: str = 'call',
            on_failure: Optional[Callable[[int, BaseException], None]] = None, **kwargs) -> Any:
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            delay = self.backoff(attempt)
            if delay > 0:
                self.sleep(delay)
            try:
                return func(*args, **kwargs)
            except Exception as e:
                last_error = e
                remaining = self.max_attempts - attempt
                if on_failure:
                    on_failure(attempt, e)
                if remaining == 0 or not self.retry_on(e):
                    break
                logger.warning(f"{label} failed, retrying... ({remaining} left): {e}")
        raise last_error
