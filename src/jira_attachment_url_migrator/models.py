"""Data models for repository and fleet runs.

These are plain accumulators returned by the updater and the fleet driver,
so callers inspect results instead of parsing log output or exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RunReport:
    """Counters for one repository run."""

    repo: str
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    listing_failed: bool = False  # The labeled issues could not be enumerated
    aborted: bool = False  # The run stopped on an unexpected exception

    @property
    def success(self) -> bool:
        return self.errors == 0 and not self.listing_failed and not self.aborted

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    def summary(self) -> str:
        return f"Updated: {self.updated} | Skipped: {self.skipped} | Errors: {self.errors}"


@dataclass(frozen=True)
class RepositoryDescriptor:
    """A repository as listed for an organization, used only for selection."""

    full_name: str  # owner/name
    has_issues: bool
    archived: bool

    @property
    def is_candidate(self) -> bool:
        return self.has_issues and not self.archived


@dataclass
class FleetReport:
    """Per-repository results of a fleet run, in processing order."""

    results: list[RunReport] = field(default_factory=list)

    @property
    def failed_repos(self) -> list[str]:
        return [report.repo for report in self.results if not report.success]

    @property
    def success(self) -> bool:
        return not self.failed_repos

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
