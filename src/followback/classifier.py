"""Order extracted files by role: followers first, then following, then the rest."""

import locale
from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence

from .config import config

FOLLOWERS = "followers"
FOLLOWING = "following"

def classify(name: str, keywords: Optional[Sequence[str]] = None) -> Optional[str]:
    """Return the role keyword a file name matches, or None.

    Keywords are tried in priority order and the first match wins, so a name
    containing both "followers" and "following" counts as followers.
    """
    lowered = name.lower()
    for keyword in keywords or config.role_keywords:
        if keyword in lowered:
            return keyword
    return None

def order(names: Iterable[str], keywords: Optional[Sequence[str]] = None) -> List[str]:
    """Sort names for display.

    Role matches come first, grouped by keyword priority and otherwise left in
    the order given. Everything else follows in locale collation order.
    """
    keywords = tuple(keywords or config.role_keywords)
    groups = {keyword: [] for keyword in keywords}
    rest = []
    for name in names:
        role = classify(name, keywords)
        if role is None:
            rest.append(name)
        else:
            groups[role].append(name)

    prioritized = [name for keyword in keywords for name in groups[keyword]]
    return prioritized + sorted(rest, key=cmp_to_key(locale.strcoll))

def find_role(names: Iterable[str], role: str,
              keywords: Optional[Sequence[str]] = None) -> Optional[str]:
    """First name classified as ``role``."""
    for name in names:
        if classify(name, keywords) == role:
            return name
    return None
