"""GitHub API retry utilities with linear backoff bound to a deadline."""

import logging
from collections.abc import Callable
from typing import TypeVar

from ghautodelete.core.deadline import Deadline
from ghautodelete.core.errors import cancelled_error

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = 0.5

T = TypeVar("T")


class ShouldRetry(Exception):
    """Raised by callback to signal that operation should be retried.

    The callback chains the underlying failure with ``raise ... from``, so
    callers can recover the last error once attempts are exhausted.
    """


def linear_retry_delays(base_delay: float, max_attempts: int) -> list[float]:
    """Delays before attempts 2..max_attempts: base, 2*base, 3*base, ..."""
    return [base_delay * attempt for attempt in range(1, max_attempts)]


# 0.5s before the second attempt, 1.0s before the third
RETRY_DELAYS = linear_retry_delays(RETRY_BASE_DELAY, MAX_ATTEMPTS)


def with_github_retry(
    deadline: Deadline,
    operation_name: str,
    fn: Callable[[], T],
    retry_delays: list[float] | None = None,
) -> T:
    """Execute function with retry on transient failures.

    The callback controls retry behavior by raising ShouldRetry. Any other
    exception bubbles up immediately (permanent failure) and consumes no
    further attempts.

    Args:
        deadline: Bounds the whole operation. Waits are taken on its clock,
            and a wait that would outlive it aborts the operation.
        operation_name: Description for logging
        fn: Function to execute. Should raise ShouldRetry to retry, return
            a value on success, or raise anything else for permanent failure.
        retry_delays: Custom delays. Defaults to linear [0.5, 1.0].

    Returns:
        Result from successful function call

    Raises:
        ShouldRetry: If all retry attempts are exhausted
        AppError: Cancellation if the deadline expires before or while waiting
        Any other exception: Permanent failure from callback
    """
    delays = retry_delays if retry_delays is not None else RETRY_DELAYS

    for attempt in range(len(delays) + 1):
        deadline.check()
        try:
            result = fn()
            if attempt > 0:
                logger.info("Success on retry %d: %s", attempt, operation_name)
            return result
        except ShouldRetry as e:
            is_last_attempt = attempt == len(delays)
            if is_last_attempt:
                logger.error(
                    "Failed after %d attempts: %s: %s", len(delays) + 1, operation_name, e
                )
                raise

            delay = delays[attempt]
            remaining = deadline.remaining()
            if remaining is not None and remaining < delay:
                raise cancelled_error(f"deadline exceeded while retrying {operation_name}") from e

            logger.warning("Retry %d after %ss: %s: %s", attempt + 1, delay, operation_name, e)
            deadline.time.sleep(delay)

    msg = "Retry logic error"
    raise AssertionError(msg)
