"""
Custom exception classes for the JIRA attachment URL migration tool.
"""

from __future__ import annotations


class MigrationError(Exception):
    """Base exception for migration errors."""


class RetryExhaustedError(MigrationError):
    """Raised when a GitHub API call keeps failing after all retry attempts."""

    attempts: int
    last_error: BaseException

    def __init__(self, description: str, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"{description} failed after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error
