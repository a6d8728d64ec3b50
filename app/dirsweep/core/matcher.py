"""Fuzzy matching of directory names against installed application names.

A directory is considered owned by an application when either name
contains the other (case-insensitive), or when any pair of significant
words from the two names does. Words are split on spaces, hyphens,
underscores and dots, and only words longer than three characters count.

The heuristic is intentionally permissive: a false match keeps a
directory out of the orphan list, which is the cheaper mistake. A
"Steam" directory is therefore owned by "Steamworks SDK", and
"firefox" by "org.mozilla.firefox". There is no confidence score.
"""

import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

_WORD_SPLIT = re.compile(r"[ \-_.]+")

# Words of this length or shorter are ignored by the word-level fallback
_MIN_WORD_LENGTH = 3


def significant_words(name: str) -> list[str]:
    """Split a name into lowercase words longer than three characters.

    Args:
        name: Directory or application name.

    Returns:
        Case-folded words, in order of appearance.
    """
    return [w for w in _WORD_SPLIT.split(name.casefold()) if len(w) > _MIN_WORD_LENGTH]


def _contains_either_way(a: str, b: str) -> bool:
    return a in b or b in a


def matches(candidate_name: str, owner_name: str) -> bool:
    """Check if a directory name is attributable to an application name.

    Args:
        candidate_name: Directory basename.
        owner_name: Installed application name or identifier.

    Returns:
        True if the names match by substring or by significant word.
        Blank names never match.
    """
    candidate = candidate_name.strip().casefold()
    owner = owner_name.strip().casefold()
    if not candidate or not owner:
        return False

    if _contains_either_way(candidate, owner):
        return True

    owner_words = significant_words(owner)
    if not owner_words:
        return False

    for word in significant_words(candidate):
        for other in owner_words:
            if _contains_either_way(word, other):
                return True

    return False


def find_owner(candidate_name: str, installed_names: Iterable[str]) -> str | None:
    """Find the first installed application that owns a directory name.

    Installed names are tried in input order; the first match wins.
    Blank entries are skipped.

    Args:
        candidate_name: Directory basename.
        installed_names: Known application names, in priority order.

    Returns:
        The matching installed name, or None if nothing matches.
    """
    for owner in installed_names:
        if not owner or not owner.strip():
            continue
        if matches(candidate_name, owner):
            logger.debug("%r matched installed name %r", candidate_name, owner)
            return owner
    return None
