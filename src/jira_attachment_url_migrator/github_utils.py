from __future__ import annotations

import itertools
import logging
import os
import subprocess
from typing import TYPE_CHECKING, Final

from github import Auth, Github, UnknownObjectException

from . import utils
from .models import RepositoryDescriptor

if TYPE_CHECKING:
    from github.Issue import Issue
    from github.Repository import Repository

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

_TOKEN_ENV_VAR: Final[str] = "GITHUB_TOKEN"  # noqa: S105


def _get_gh_cli_token() -> str | None:
    """Get the token the gh CLI is logged in with, if any."""
    try:
        result = subprocess.run(  # noqa: S603
            ["gh", "auth", "token"], capture_output=True, text=True, check=True  # noqa: S607
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
    return result.stdout.strip() or None


def get_token(pass_path: str | None = None) -> str | None:
    """Get GitHub token from pass path, env var GITHUB_TOKEN, or the gh CLI login."""
    if pass_path:
        return utils.get_pass_value(pass_path)

    token: str | None = os.environ.get(_TOKEN_ENV_VAR)
    if token:
        return token

    token = _get_gh_cli_token()
    if token:
        logger.debug("Using GitHub token from gh CLI")
        return token

    logger.warning("No GitHub token specified nor found, using anonymous access")
    return None


def get_client(token: str | None = None) -> Github:
    """Get a GitHub client using the token."""
    if token:
        return Github(auth=Auth.Token(token))
    return Github()


def issue_url(repo_path: str, number: int) -> str:
    return f"https://github.com/{repo_path}/issues/{number}"


def list_labeled_issue_numbers(client: Github, repo_path: str, label: str) -> list[int]:
    """Numbers of all issues (open and closed) carrying the label.

    The REST issues endpoint also returns pull requests; those are dropped.
    """
    repo: Repository = client.get_repo(repo_path)
    return [issue.number for issue in repo.get_issues(state="all", labels=[label]) if issue.pull_request is None]


def get_issue(client: Github, repo_path: str, number: int) -> Issue:
    return client.get_repo(repo_path, lazy=True).get_issue(number)


def replace_issue_body(issue: Issue, body: str) -> None:
    """Replace the whole issue body; title, labels and state are left as they are."""
    issue.edit(body=body)


def list_owner_repositories(client: Github, owner: str, limit: int) -> list[RepositoryDescriptor]:
    """
    List up to limit repositories of a GitHub owner (organization or user).

    Raises:
        UnknownObjectException: If the owner is neither an organization nor a user
    """
    # Try to get as organization first, fall back to user
    try:
        listed = list(itertools.islice(client.get_organization(owner).get_repos(), limit))
    except UnknownObjectException as e:
        if e.status != 404:
            raise
        logger.debug(f"'{owner}' is not an organization, listing user repositories")
        listed = list(itertools.islice(client.get_user(owner).get_repos(), limit))

    return [
        RepositoryDescriptor(full_name=repo.full_name, has_issues=bool(repo.has_issues), archived=bool(repo.archived))
        for repo in listed
    ]
