"""Collapse nested candidate paths to their topmost ancestors.

Recursive scans for build artifacts find directories inside directories
of the same kind (``node_modules`` below ``node_modules``). Deleting the
outermost one removes the rest, so only the topmost path of each branch
is kept.
"""

import os
import sys
from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

_CASE_INSENSITIVE_PLATFORMS = ("win32", "cygwin", "darwin")


def _default_case_sensitive() -> bool:
    return sys.platform not in _CASE_INSENSITIVE_PLATFORMS


def _normalize(path: str, case_sensitive: bool) -> str:
    normalized = path.replace("\\", "/") if os.sep == "\\" else path
    normalized = normalized.rstrip("/") or "/"
    return normalized if case_sensitive else normalized.casefold()


def _is_below(path: str, ancestor: str) -> bool:
    if ancestor == "/":
        return path != "/"
    return path.startswith(ancestor + "/")


def collapse_nested(
    items: Iterable[T],
    *,
    path_of: Callable[[T], str] = str,
    case_sensitive: bool | None = None,
) -> list[T]:
    """Keep only items whose path has no kept ancestor among the items.

    Items are processed shortest path first, so a parent is always
    considered before any of its descendants regardless of input order.
    A path only counts as nested when the ancestor is followed by a
    separator (``/a/b`` does not contain ``/a/bc``). Exact duplicates
    collapse to the first one seen.

    Args:
        items: Candidates (or plain path strings) of one kind.
        path_of: Extracts the path from an item.
        case_sensitive: Compare paths case-sensitively. Defaults to the
            platform convention (insensitive on Windows and macOS).

    Returns:
        Surviving items, ordered by path length then input order.
    """
    if case_sensitive is None:
        case_sensitive = _default_case_sensitive()

    # sorted() is stable, so equal-length paths keep input order
    ordered = sorted(items, key=lambda item: len(path_of(item)))

    kept: list[T] = []
    kept_paths: list[str] = []
    for item in ordered:
        path = _normalize(path_of(item), case_sensitive)
        if any(path == k or _is_below(path, k) for k in kept_paths):
            continue
        kept.append(item)
        kept_paths.append(path)

    return kept


def collapse_nested_by_kind(
    items: Iterable[T],
    *,
    kind_of: Callable[[T], str],
    path_of: Callable[[T], str] = str,
    case_sensitive: bool | None = None,
) -> list[T]:
    """Group items by kind and collapse each group independently.

    A ``.venv`` inside a ``node_modules`` survives because the two are of
    different kinds; nesting only collapses within one kind.

    Returns:
        Survivors of every group, groups in first-seen order.
    """
    groups: dict[str, list[T]] = {}
    for item in items:
        groups.setdefault(kind_of(item), []).append(item)

    result: list[T] = []
    for group in groups.values():
        result.extend(collapse_nested(group, path_of=path_of, case_sensitive=case_sensitive))
    return result
