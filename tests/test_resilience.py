"""
AutoStudio - Deadline and retry policy tests
"""
import threading
import pytest

from autostudio.services.resilience import (
    DeadlineExceeded, RetryPolicy, fixed_backoff, run_with_deadline
)


class TestRunWithDeadline:

    def test_returns_result_in_time(self):
        assert run_with_deadline(lambda a, b: a + b, 1.0, 2, 3) == 5

    def test_propagates_task_error(self):
        def boom():
            raise KeyError('nope')

        with pytest.raises(KeyError):
            run_with_deadline(boom, 1.0)

    def test_deadline_exceeded_without_waiting_for_task(self):
        release = threading.Event()
        finished = threading.Event()

        def slow():
            release.wait(5)
            finished.set()

        with pytest.raises(DeadlineExceeded):
            run_with_deadline(slow, 0.05)

        # The losing task is still running, not cancelled
        assert finished.is_set() == False
        release.set()
        assert finished.wait(2) == True

    def test_deadline_is_a_timeout_error(self):
        assert issubclass(DeadlineExceeded, TimeoutError)


class TestRetryPolicy:

    def test_backoff_precedes_first_attempt(self):
        sleeps = []
        policy = RetryPolicy(max_attempts=3, backoff=fixed_backoff(1.5), sleep=sleeps.append)

        assert policy.run(lambda: 'ok') == 'ok'
        assert sleeps == [1.5]

    def test_attempts_bounded_and_last_error_raised(self):
        calls = []
        sleeps = []

        def failing():
            calls.append(1)
            raise ValueError(f'attempt {len(calls)}')

        policy = RetryPolicy(max_attempts=3, backoff=fixed_backoff(1.5), sleep=sleeps.append)
        with pytest.raises(ValueError, match='attempt 3'):
            policy.run(failing)

        assert len(calls) == 3
        assert sleeps == [1.5, 1.5, 1.5]

    def test_recovers_on_later_attempt(self):
        outcomes = iter([RuntimeError('flaky'), 'done'])

        def flaky():
            result = next(outcomes)
            if isinstance(result, Exception):
                raise result
            return result

        policy = RetryPolicy(max_attempts=3, sleep=lambda s: None)
        assert policy.run(flaky) == 'done'

    def test_retry_on_false_stops_immediately(self):
        calls = []

        def failing():
            calls.append(1)
            raise PermissionError('bad key')

        policy = RetryPolicy(max_attempts=3, retry_on=lambda e: not isinstance(e, PermissionError),
                             sleep=lambda s: None)
        with pytest.raises(PermissionError):
            policy.run(failing)

        assert len(calls) == 1

    def test_on_failure_callback(self):
        seen = []
        policy = RetryPolicy(max_attempts=2, sleep=lambda s: None)

        with pytest.raises(ValueError):
            policy.run(lambda: int('x'), on_failure=lambda attempt, exc: seen.append(attempt))

        assert seen == [1, 2]

    def test_zero_backoff_does_not_sleep(self):
        sleeps = []
        policy = RetryPolicy(max_attempts=2, sleep=sleeps.append)

        with pytest.raises(ValueError):
            policy.run(lambda: int('x'))

        assert sleeps == []
