"""
Pytest configuration and fixtures.

Tests never touch the network: GitHub objects are mocks and backoff sleeps
are recorded instead of waited for.
"""

from __future__ import annotations

import pytest
from helpers import RecordingSleep

from jira_attachment_url_migrator.config import RetryPolicy, RewriteConfig


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def fast_policy() -> RetryPolicy:
    return RetryPolicy(max_retries=3, initial_backoff=1, max_backoff=60)


@pytest.fixture
def rewrite_config() -> RewriteConfig:
    return RewriteConfig.default()
