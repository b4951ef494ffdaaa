from typing import Dict, Iterable, List

from .models import UserRecord

def dedupe(records: Iterable[UserRecord]) -> List[UserRecord]:
    """Keep one record per username.

    Later records replace earlier ones with the same username, while the
    username keeps the position where it was first seen.
    """
    by_username: Dict[str, UserRecord] = {}
    for record in records:
        by_username[record.username] = record
    return list(by_username.values())
