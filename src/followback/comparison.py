"""Relationship breakdown between two collections.

``compare(following, followers)`` gives:

- ghosts: accounts you follow that don't follow you back (only in A)
- fans: followers you don't follow back (only in B)
- mutuals: accounts in both, taken from A
"""

import logging
from typing import Mapping, Optional, Sequence

from .archive import unique_label
from .classifier import FOLLOWERS, FOLLOWING, find_role
from .models import ComparisonResult, NamedCollection, RelationshipReport

logger = logging.getLogger(__name__)

GHOSTS = "ghosts"
FANS = "fans"
MUTUALS = "mutuals"

INSUFFICIENT_DATA_GUIDANCE = (
    "Insufficient data for analysis: could not find both a \"followers\" and a "
    "\"following\" list in the uploaded data. Make sure the archive contains the "
    "standard followers and following export files."
)

def compare(a: NamedCollection, b: NamedCollection,
            names: Optional[Sequence[str]] = None) -> ComparisonResult:
    """Split two collections into only-in-A, only-in-B and both.

    Each record of A lands in exactly one of ``only_in_a`` / ``both`` and
    each record of B not in A lands in ``only_in_b``; order follows the
    source collection.
    """
    only_a_name, only_b_name, both_name = names or (f"{a.name}_only", f"{b.name}_only", "both")
    a_names = a.usernames
    b_names = b.usernames

    only_in_a = [record for record in a.records if record.username not in b_names]
    both = [record for record in a.records if record.username in b_names]
    only_in_b = [record for record in b.records if record.username not in a_names]

    return ComparisonResult(
        only_in_a=NamedCollection(only_a_name, only_in_a),
        only_in_b=NamedCollection(only_b_name, only_in_b),
        both=NamedCollection(both_name, both)
    )

def analyze_relationships(collections: Mapping[str, NamedCollection],
                          keywords: Optional[Sequence[str]] = None) -> RelationshipReport:
    """Find ghosts, fans and mutuals among extracted collections.

    Returns a report without a result when either role is missing instead
    of raising, since partial exports are common.
    """
    labels = list(collections)
    following_label = find_role(labels, FOLLOWING, keywords)
    followers_label = find_role(labels, FOLLOWERS, keywords)

    if following_label is None or followers_label is None:
        logger.info(
            f"Relationship analysis skipped (following={following_label}, "
            f"followers={followers_label})"
        )
        return RelationshipReport(
            following_label=following_label,
            followers_label=followers_label,
            guidance=INSUFFICIENT_DATA_GUIDANCE
        )

    # Partitions never shadow a list extracted from the archive
    taken = set(labels)
    names = []
    for name in (GHOSTS, FANS, MUTUALS):
        names.append(unique_label(name, taken))
        taken.add(names[-1])

    result = compare(
        collections[following_label],
        collections[followers_label],
        names=names
    )
    logger.info(
        f"Compared {following_label} with {followers_label}: "
        + ", ".join(f"{count} {name}" for name, count in result.counts().items())
    )
    return RelationshipReport(
        result=result,
        following_label=following_label,
        followers_label=followers_label
    )
