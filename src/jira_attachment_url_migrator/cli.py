"""
Command-line interfaces for rewriting JIRA attachment URLs in GitHub issues.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from . import github_utils as ghu
from .config import (
    DEFAULT_INITIAL_BACKOFF,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MAX_RETRIES,
    DEFAULT_ORG,
    DEFAULT_REPO_LIMIT,
    TARGET_LABEL,
    RetryPolicy,
    RewriteConfig,
)
from .exceptions import MigrationError
from .fleet import run_fleet, select_repositories
from .updater import update_repository
from .utils import PassError, setup_logging

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: logging.Logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    _ = parser.add_argument("--dry-run", action="store_true", help="Show planned updates without editing issues")
    _ = parser.add_argument(
        "--max-retries",
        type=int,
        default=DEFAULT_MAX_RETRIES,
        help=f"Number of attempts for GitHub API calls (default: {DEFAULT_MAX_RETRIES})",
    )
    _ = parser.add_argument(
        "--initial-backoff",
        type=float,
        default=DEFAULT_INITIAL_BACKOFF,
        metavar="SECONDS",
        help=f"Initial backoff delay in seconds (default: {DEFAULT_INITIAL_BACKOFF:g})",
    )
    _ = parser.add_argument(
        "--max-backoff",
        type=float,
        default=DEFAULT_MAX_BACKOFF,
        metavar="SECONDS",
        help=f"Maximum backoff delay in seconds (default: {DEFAULT_MAX_BACKOFF:g})",
    )
    _ = parser.add_argument(
        "--label", default=TARGET_LABEL, help=f"Label selecting the issues to update (default: {TARGET_LABEL})"
    )
    _ = parser.add_argument(
        "--url-prefix",
        nargs=2,
        action="append",
        metavar=("OLD", "NEW"),
        help="Replace URL prefix OLD with NEW. Can be specified multiple times; replaces the built-in JIRA prefixes.",
    )
    _ = parser.add_argument(
        "--github-pass-token", help="Path for GitHub token in pass utility (default: GITHUB_TOKEN or gh CLI login)"
    )
    _ = parser.add_argument("--log-file", help="Also append log output to this file")
    _ = parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")


def _check_url_prefixes(parser: argparse.ArgumentParser, args: argparse.Namespace) -> argparse.Namespace:
    """Reject a --url-prefix OLD given more than once."""
    seen: set[str] = set()
    for old, _new in args.url_prefix or []:
        if old in seen:
            parser.error(f"--url-prefix given more than once for {old}")
        seen.add(old)
    return args


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments of the single repository tool."""
    parser = argparse.ArgumentParser(
        description="Update issue descriptions that contain legacy attachment URLs for the given repository"
    )
    _ = parser.add_argument("--repo", required=True, help="Repository in owner/name form")
    _add_common_arguments(parser)
    return _check_url_prefixes(parser, parser.parse_args(argv))


def parse_fleet_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments of the organization-wide tool."""
    parser = argparse.ArgumentParser(
        description="Iterate over repositories in an organization and update legacy attachment URLs in each one"
    )
    _ = parser.add_argument("--org", default=DEFAULT_ORG, help=f"Organization name (default: {DEFAULT_ORG})")
    _ = parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_REPO_LIMIT,
        help=f"Maximum repositories to fetch (default: {DEFAULT_REPO_LIMIT})",
    )
    _ = parser.add_argument("--match", help="Substring filter applied to the repository owner/name")
    _ = parser.add_argument("--repo", help="Process a single repository (owner/name)")
    _add_common_arguments(parser)
    return _check_url_prefixes(parser, parser.parse_args(argv))


def _build_config(args: argparse.Namespace) -> tuple[RewriteConfig, RetryPolicy]:
    url_prefixes: list[list[str]] | None = args.url_prefix
    if url_prefixes:
        config = RewriteConfig(prefix_map=dict(url_prefixes), label=args.label)
    else:
        config = RewriteConfig.default(label=args.label)
    policy = RetryPolicy(
        max_retries=args.max_retries, initial_backoff=args.initial_backoff, max_backoff=args.max_backoff
    )
    return config, policy


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for a single repository."""
    args = parse_arguments(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        config, policy = _build_config(args)
        client = ghu.get_client(ghu.get_token(args.github_pass_token))
        report = update_repository(client, args.repo, config, policy, dry_run=args.dry_run)
    except (MigrationError, PassError, ValueError):
        logger.exception("Run failed")
        sys.exit(1)

    sys.exit(report.exit_code)


def main_all(argv: Sequence[str] | None = None) -> None:
    """Entry point for every repository of an organization."""
    args = parse_fleet_arguments(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        config, policy = _build_config(args)
        client = ghu.get_client(ghu.get_token(args.github_pass_token))
        repos = select_repositories(
            client, owner=args.org, limit=args.limit, policy=policy, match=args.match, repo=args.repo
        )
        fleet_report = run_fleet(client, repos, config, policy, dry_run=args.dry_run)
    except MigrationError:
        logger.exception(f"Failed to list repositories for {args.org}")
        sys.exit(1)
    except (PassError, ValueError):
        logger.exception("Run failed")
        sys.exit(1)

    sys.exit(fleet_report.exit_code)
