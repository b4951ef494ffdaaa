"""Find user records in export files of unknown shape.

Exports nest their lists differently from one file to the next (a bare list,
a list under ``relationships_following``, a dict of dicts, ...), so nothing
here looks for particular keys apart from the per-user fields themselves.
The walk recognises two shapes:

- a dict holding a ``string_list_data`` list, where every entry describes
  one user (``value``, ``href``, ``timestamp``), with the username sometimes
  stored in the dict's ``title`` or only in the link;
- a dict whose ``value`` looks like a username.

Anything else is searched recursively.
"""

import logging
import math
import re
from typing import Any, Dict, Iterator, List, Optional, Sequence
from urllib.parse import urlsplit

from .config import Config, config
from .dedupe import dedupe
from .models import UserRecord

logger = logging.getLogger(__name__)

# Letters, digits, periods and underscores only
USERNAME_PATTERN = re.compile(r'[A-Za-z0-9._]+')

def is_username(value: Any) -> bool:
    """Check whether a scalar looks like an account name rather than free text or a link."""
    if not isinstance(value, str) or not value:
        return False
    return USERNAME_PATTERN.fullmatch(value) is not None and 'http' not in value

def username_from_href(href: Any, placeholders: Sequence[str] = ("_u",)) -> Optional[str]:
    """Take the username from a profile link, e.g. https://www.instagram.com/_u/alice -> alice."""
    if not isinstance(href, str) or not href:
        return None
    try:
        parts = urlsplit(href)
    except ValueError:
        logger.debug(f"Ignoring malformed link: {href!r}")
        return None
    if not parts.scheme:
        return None
    segments = [s for s in parts.path.split('/') if s and s not in placeholders]
    return segments[-1] if segments else None

def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None

def _timestamp(value: Any) -> int:
    """Normalise an export timestamp to whole seconds, 0 if missing or unusable."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            return int(value.strip())
        except ValueError:
            # Longer than the int-from-string digit limit
            return 0
    return 0

def _make_record(username: str, fields: Dict[str, Any], settings: Config) -> UserRecord:
    return UserRecord(
        username=username,
        profile_url=_text(fields.get(settings.link_field)) or settings.profile_url(username),
        event_timestamp=_timestamp(fields.get(settings.timestamp_field))
    )

def _records_from_entries(node: Dict[str, Any], entries: List[Any],
                          settings: Config) -> Iterator[UserRecord]:
    title = _text(node.get(settings.title_field))
    for entry in entries:
        fields = entry if isinstance(entry, dict) else {}
        username = (
            _text(fields.get(settings.identity_field))
            or title
            or username_from_href(fields.get(settings.link_field), settings.placeholder_segments)
        )
        if username:
            yield _make_record(username, fields, settings)

def extract(data: Any, settings: Optional[Config] = None) -> List[UserRecord]:
    """Collect every user record in a decoded JSON value, in document order.

    Duplicates are kept; see ``extract_users`` for the deduplicated list.
    Never raises for decoded JSON, however deep or oddly shaped: an explicit
    stack replaces recursion so depth is not bounded by the interpreter.
    """
    settings = settings or config
    records: List[UserRecord] = []
    stack = [data]

    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            entries = node.get(settings.list_entry_field)
            if isinstance(entries, list):
                # The entry list is authoritative for this node
                records.extend(_records_from_entries(node, entries, settings))
                continue

            value = node.get(settings.identity_field)
            if is_username(value):
                records.append(_make_record(value, node, settings))
                continue

            stack.extend(reversed(list(node.values())))
        elif isinstance(node, list):
            stack.extend(reversed(node))

    return records

def extract_users(data: Any, settings: Optional[Config] = None) -> List[UserRecord]:
    """Records in ``data``, one per username."""
    return dedupe(extract(data, settings))
