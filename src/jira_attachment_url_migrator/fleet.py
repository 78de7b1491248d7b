"""
Run the repository updater across every selected repository of an owner.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from . import github_utils as ghu
from .config import REPO_PAUSE_SECONDS
from .models import FleetReport, RunReport
from .retry import call_with_retry
from .updater import update_repository

if TYPE_CHECKING:
    from collections.abc import Callable

    from github import Github

    from .config import RetryPolicy, RewriteConfig

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)


def select_repositories(
    client: Github,
    *,
    owner: str,
    limit: int,
    policy: RetryPolicy,
    match: str | None = None,
    repo: str | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> list[str]:
    """Repository names to process, in listing order.

    An explicit repo bypasses the owner listing entirely. Otherwise archived
    repositories and those without issue tracking are dropped, then names not
    containing match (when given) are dropped.

    Raises:
        RetryExhaustedError: If the owner's repositories cannot be listed
    """
    if repo:
        return [repo]

    descriptors = call_with_retry(
        lambda: ghu.list_owner_repositories(client, owner, limit),
        policy,
        description=f"Listing repositories of {owner}",
        sleep=sleep,
    )
    names = [d.full_name for d in descriptors if d.is_candidate]
    if match:
        names = [name for name in names if match in name]
    return names


def run_fleet(
    client: Github,
    repos: list[str],
    config: RewriteConfig,
    policy: RetryPolicy,
    *,
    dry_run: bool = False,
    pause: float = REPO_PAUSE_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> FleetReport:
    """Update each repository in turn, continuing past failed repositories."""
    fleet_report = FleetReport()
    if not repos:
        logger.info("No repositories to process")
        return fleet_report

    logger.info(f"Processing {len(repos)} repositories")

    for index, repo_path in enumerate(repos):
        if index:
            # Keep the driver's own loop from hammering the API
            sleep(pause)
        try:
            report = update_repository(client, repo_path, config, policy, dry_run=dry_run, sleep=sleep)
        except Exception:
            logger.exception(f"Repository run aborted for {repo_path}")
            report = RunReport(repo=repo_path, aborted=True)
        if not report.success:
            logger.warning(f"Repository run reported failures for {repo_path}")
        fleet_report.results.append(report)

    logger.info(f"Completed run for {len(repos)} repositories")

    if fleet_report.failed_repos:
        logger.error("Repositories with failures:")
        for failed_repo in fleet_report.failed_repos:
            logger.error(f"  - {failed_repo}")
    else:
        logger.info("All repositories completed without failures")

    return fleet_report
