"""Bounded exponential backoff around GitHub API calls."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, TypeVar

import requests
from github import GithubException

from .exceptions import RetryExhaustedError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .config import RetryPolicy

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (GithubException, requests.RequestException)


def call_with_retry(
    action: Callable[[], T],
    policy: RetryPolicy,
    *,
    description: str = "GitHub API call",
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run action, retrying retryable failures with exponential backoff.

    The delay after failed attempt n is min(initial_backoff * 2**(n-1), max_backoff).
    No delay follows the final attempt.

    Args:
        action: Zero-argument callable performing the API call
        policy: Attempt limit and backoff schedule
        description: What the action does, for log messages
        sleep: Sleep function (injectable for tests)

    Returns:
        The value returned by the first successful attempt

    Raises:
        RetryExhaustedError: If all policy.max_retries attempts failed
    """
    attempt = 1
    while True:
        try:
            return action()
        except RETRYABLE_EXCEPTIONS as e:
            if attempt >= policy.max_retries:
                logger.debug(f"{description} failed on final attempt {attempt}/{policy.max_retries}: {e}")
                raise RetryExhaustedError(description, attempt, e) from e

            delay = policy.delay(attempt)
            logger.warning(f"{description} failed (attempt {attempt}/{policy.max_retries}). Retrying in {delay:g}s...")
            sleep(delay)
            attempt += 1
