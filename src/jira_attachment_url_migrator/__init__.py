"""
JIRA Attachment URL Migration Tool

Rewrites legacy JIRA attachment URLs in the bodies of GitHub issues imported
from JIRA, for a single repository or every repository of an organization.
"""

from __future__ import annotations

from .cli import main, main_all
from .config import RetryPolicy, RewriteConfig
from .exceptions import MigrationError, RetryExhaustedError
from .fleet import run_fleet, select_repositories
from .models import FleetReport, RepositoryDescriptor, RunReport
from .updater import update_repository
from .utils import setup_logging

# Package version
__version__ = "0.1.0"

__all__ = [
    "FleetReport",
    "MigrationError",
    "RepositoryDescriptor",
    "RetryExhaustedError",
    "RetryPolicy",
    "RewriteConfig",
    "RunReport",
    "main",
    "main_all",
    "run_fleet",
    "select_repositories",
    "setup_logging",
    "update_repository",
]
