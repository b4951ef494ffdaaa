# models.py
"""Data models for follower archive extraction and comparison."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class UserRecord:
    """One account found in an export file."""
    username: str
    profile_url: str
    event_timestamp: int = 0  # Seconds since epoch, 0 when unknown

    @property
    def event_time(self) -> Optional[datetime]:
        """When the relationship event happened, if the export recorded it."""
        if self.event_timestamp <= 0:
            return None
        try:
            return datetime.fromtimestamp(self.event_timestamp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    def to_dict(self) -> Dict:
        return {
            'username': self.username,
            'profile_url': self.profile_url,
            'event_timestamp': self.event_timestamp
        }

@dataclass(frozen=True)
class NamedCollection:
    """Deduplicated records taken from a single export file."""
    name: str
    records: Tuple[UserRecord, ...] = ()
    source: Optional[str] = None  # Archive entry the records came from

    def __post_init__(self):
        # Accept any sequence, store a tuple
        object.__setattr__(self, 'records', tuple(self.records))

    @property
    def usernames(self) -> FrozenSet[str]:
        return frozenset(record.username for record in self.records)

    @property
    def display_name(self) -> str:
        """Human readable label, e.g. 'close friends'."""
        return self.name.replace('_', ' ')

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[UserRecord]:
        return iter(self.records)

@dataclass(frozen=True)
class ComparisonResult:
    """The three partitions produced by comparing collection A with B."""
    only_in_a: NamedCollection
    only_in_b: NamedCollection
    both: NamedCollection

    @property
    def partitions(self) -> Tuple[NamedCollection, NamedCollection, NamedCollection]:
        return (self.only_in_a, self.only_in_b, self.both)

    def counts(self) -> Dict[str, int]:
        return {collection.name: len(collection) for collection in self.partitions}

@dataclass(frozen=True)
class LogEntry:
    """A line of the human readable extraction log."""
    timestamp: datetime
    level: int
    message: str

    def format(self) -> str:
        return f"{self.timestamp.strftime('%H:%M:%S')}: {self.message}"

@dataclass
class ExtractionLog:
    """Diagnostics collected while processing one archive.

    Every entry is also forwarded to the standard logger passed in, so the
    log doubles as the record shown to the user and as regular logging output.
    """
    entries: Sequence[LogEntry] = field(default_factory=list)

    @property
    def frozen(self) -> bool:
        return isinstance(self.entries, tuple)

    def freeze(self) -> 'ExtractionLog':
        """Read-only copy of the entries logged so far."""
        return ExtractionLog(entries=tuple(self.entries))

    def add(self, message: str, level: int = logging.INFO,
            source: Optional[logging.Logger] = None) -> LogEntry:
        if self.frozen:
            raise TypeError("Cannot add to a frozen extraction log")
        entry = LogEntry(timestamp=datetime.now(), level=level, message=message)
        self.entries.append(entry)
        (source or logger).log(level, message)
        return entry

    def info(self, message: str, source: Optional[logging.Logger] = None) -> LogEntry:
        return self.add(message, logging.INFO, source)

    def error(self, message: str, source: Optional[logging.Logger] = None) -> LogEntry:
        return self.add(message, logging.ERROR, source)

    @property
    def errors(self) -> List[LogEntry]:
        return [entry for entry in self.entries if entry.level >= logging.ERROR]

    def lines(self) -> List[str]:
        return [entry.format() for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

@dataclass(frozen=True)
class FileExtraction:
    """Result of extracting one archive entry.

    Produced by worker processes, so it carries its own diagnostics as
    (level, message) pairs instead of writing to a shared log.
    """
    entry_name: str
    label: str
    records: Tuple[UserRecord, ...] = ()
    messages: Tuple[Tuple[int, str], ...] = ()
    failed: bool = False

@dataclass(frozen=True)
class ArchiveResult:
    """Everything extracted from one archive, ordered by file role.

    Collections are exposed read-only and the log is a frozen copy, so later
    logging by the processor never changes a returned result.
    """
    collections: Mapping[str, NamedCollection]
    log: ExtractionLog
    json_files_found: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'collections', MappingProxyType(dict(self.collections)))
        object.__setattr__(self, 'log', self.log.freeze())

    @property
    def labels(self) -> List[str]:
        return list(self.collections)

    def counts(self) -> Dict[str, int]:
        return {name: len(collection) for name, collection in self.collections.items()}

@dataclass(frozen=True)
class RelationshipReport:
    """Ghosts, fans and mutuals, or the reason they could not be computed."""
    result: Optional[ComparisonResult] = None
    following_label: Optional[str] = None
    followers_label: Optional[str] = None
    guidance: str = ""

    @property
    def has_data(self) -> bool:
        return self.result is not None

    @property
    def ghosts(self) -> Optional[NamedCollection]:
        return self.result.only_in_a if self.result else None

    @property
    def fans(self) -> Optional[NamedCollection]:
        return self.result.only_in_b if self.result else None

    @property
    def mutuals(self) -> Optional[NamedCollection]:
        return self.result.both if self.result else None
