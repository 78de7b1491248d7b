"""Shared test doubles for GitHub objects and backoff sleeps."""

from __future__ import annotations

from unittest.mock import Mock

from github import GithubException


class RecordingSleep:
    """Stand-in for time.sleep that remembers every requested delay."""

    delays: list[float]

    def __init__(self) -> None:
        self.delays = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def github_error(status: int = 502, message: str = "Server Error") -> GithubException:
    return GithubException(status, {"message": message}, None)


def make_issue(number: int, body: str | None) -> Mock:
    issue = Mock()
    issue.number = number
    issue.body = body
    issue.pull_request = None
    return issue
