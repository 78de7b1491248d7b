"""Compiled-in defaults and per-run configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

LEGACY_ATTACHMENT_PREFIXES: Final[tuple[str, ...]] = (
    "https://raw.githubusercontent.com/jenkinsci/attachments-from-jira-issues-misc/refs/heads/main/attachments",
    "https://raw.githubusercontent.com/jenkinsci/attachments-from-jira-issues-last/refs/heads/main/attachments",
    "https://raw.githubusercontent.com/jenkinsci/attachments-from-jira-issues-core-cli/refs/heads/main/attachments",
)
ATTACHMENT_PREFIX: Final[str] = "https://issues.jenkins.io/secure/attachment"
TARGET_LABEL: Final[str] = "imported-jira-issue"

DEFAULT_ORG: Final[str] = "jenkinsci"
DEFAULT_REPO_LIMIT: Final[int] = 3000
DEFAULT_MAX_RETRIES: Final[int] = 5
DEFAULT_INITIAL_BACKOFF: Final[float] = 2.0
DEFAULT_MAX_BACKOFF: Final[float] = 60.0
# Pause between repositories in a fleet run
REPO_PAUSE_SECONDS: Final[float] = 1.0


@dataclass(frozen=True)
class RewriteConfig:
    """Which issues to select and how to rewrite their bodies.

    prefix_map is applied in insertion order; label selects candidate issues.
    """

    prefix_map: dict[str, str] = field(
        default_factory=lambda: dict.fromkeys(LEGACY_ATTACHMENT_PREFIXES, ATTACHMENT_PREFIX)
    )
    label: str = TARGET_LABEL

    def __post_init__(self) -> None:
        if not self.prefix_map:
            msg = "At least one URL prefix mapping is required"
            raise ValueError(msg)
        if any(not old for old in self.prefix_map):
            msg = "URL prefixes to replace must be non-empty"
            raise ValueError(msg)
        if not self.label:
            msg = "Target label must be non-empty"
            raise ValueError(msg)

    @classmethod
    def default(cls, label: str = TARGET_LABEL) -> RewriteConfig:
        return cls(label=label)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff schedule for GitHub API calls."""

    max_retries: int = DEFAULT_MAX_RETRIES
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF
    max_backoff: float = DEFAULT_MAX_BACKOFF

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            msg = f"max_retries must be at least 1, got {self.max_retries}"
            raise ValueError(msg)
        if self.initial_backoff < 0 or self.max_backoff < 0:
            msg = "Backoff delays must not be negative"
            raise ValueError(msg)

    def delay(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt."""
        return min(self.initial_backoff * 2 ** (attempt - 1), self.max_backoff)
