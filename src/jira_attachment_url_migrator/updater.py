"""
Rewrite legacy attachment URLs in the labeled issues of one repository.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from . import github_utils as ghu
from .exceptions import RetryExhaustedError
from .models import RunReport
from .retry import call_with_retry
from .rewriter import rewrite_body

if TYPE_CHECKING:
    from collections.abc import Callable

    from github import Github

    from .config import RetryPolicy, RewriteConfig

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)


def update_repository(
    client: Github,
    repo_path: str,
    config: RewriteConfig,
    policy: RetryPolicy,
    *,
    dry_run: bool = False,
    sleep: Callable[[float], None] = time.sleep,
) -> RunReport:
    """Rewrite attachment URLs in every issue of repo_path carrying config.label.

    Each issue is handled independently: a failed fetch or write-back is
    counted as an error and processing moves on to the next issue. Only a
    failure to list the labeled issues ends the run early.

    Args:
        client: GitHub client
        repo_path: Repository in owner/name form
        config: Label and URL prefix mapping
        policy: Retry schedule for every API call
        dry_run: Report planned updates without editing issues
        sleep: Sleep function used for backoff (injectable for tests)

    Returns:
        RunReport with updated/skipped/error counts
    """
    report = RunReport(repo=repo_path)
    logger.info(f"Processing repository {repo_path}")

    try:
        issue_numbers = call_with_retry(
            lambda: ghu.list_labeled_issue_numbers(client, repo_path, config.label),
            policy,
            description=f"Listing '{config.label}' issues of {repo_path}",
            sleep=sleep,
        )
    except RetryExhaustedError as e:
        logger.error(f"Failed to list issues for {repo_path}: {e.last_error}")
        report.listing_failed = True
        return report

    if not issue_numbers:
        logger.info(f"No matching issues found in {repo_path}")
        return report

    logger.info(f"Found {len(issue_numbers)} labeled issues in {repo_path}")

    for number in issue_numbers:
        try:
            _update_issue(client, repo_path, number, config, policy, report, dry_run=dry_run, sleep=sleep)
        except Exception:
            logger.exception(f"Unexpected error while processing issue #{number}")
            report.errors += 1

    logger.info(f"Completed repository {repo_path}")
    logger.info(report.summary())
    return report


def _update_issue(
    client: Github,
    repo_path: str,
    number: int,
    config: RewriteConfig,
    policy: RetryPolicy,
    report: RunReport,
    *,
    dry_run: bool,
    sleep: Callable[[float], None],
) -> None:
    url = ghu.issue_url(repo_path, number)
    logger.debug(f"Inspecting issue #{number}")

    try:
        issue = call_with_retry(
            lambda: ghu.get_issue(client, repo_path, number),
            policy,
            description=f"Fetching issue #{number}",
            sleep=sleep,
        )
    except RetryExhaustedError as e:
        logger.error(f"Failed to fetch issue #{number}: {e.last_error}")
        report.errors += 1
        return

    body: str = issue.body or ""
    if not body:
        logger.debug(f"Issue #{number} has empty body, skipping")
        report.skipped += 1
        return

    updated_body = rewrite_body(body, config.prefix_map)
    if updated_body == body:
        logger.debug(f"Issue #{number} does not contain target URL, skipping")
        report.skipped += 1
        return

    if dry_run:
        logger.info(f"[dry-run] Would update {url}")
        report.updated += 1
        return

    try:
        call_with_retry(
            lambda: ghu.replace_issue_body(issue, updated_body),
            policy,
            description=f"Updating issue #{number}",
            sleep=sleep,
        )
    except RetryExhaustedError as e:
        logger.error(f"Failed to update {url}: {e.last_error}")
        report.errors += 1
        return

    logger.info(f"Updated {url}")
    report.updated += 1
