"""Literal prefix substitution for issue bodies."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


def rewrite_body(body: str | None, prefix_map: Mapping[str, str]) -> str:
    """Replace every occurrence of each old prefix with its new prefix.

    Args:
        body: Issue body; None is treated as an empty body
        prefix_map: Old prefix -> new prefix, applied in order over the whole body

    Returns:
        The rewritten body (equal to the input when no prefix occurs)
    """
    updated = body or ""
    for old_prefix, new_prefix in prefix_map.items():
        updated = updated.replace(old_prefix, new_prefix)
    return updated

