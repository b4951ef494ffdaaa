from pathlib import Path, PurePosixPath
import logging
import zipfile
from dataclasses import dataclass
from typing import Container, Iterator, List, Optional, Sequence

from .config import Config, config
from .exceptions import ArchiveError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ArchiveEntry:
    """A file or directory inside an export archive."""
    name: str  # POSIX style path relative to the archive root
    is_dir: bool = False

def is_hidden(name: str, markers: Sequence[str] = ("__macosx", "/.")) -> bool:
    """macOS resource forks and dot files that zip tools leave behind."""
    lowered = "/" + name.lower()
    return any(marker in lowered for marker in markers)

def label_for(name: str, suffix: str = ".json") -> str:
    """Readable collection name for an entry, e.g. 'connections/Followers_1.json' -> 'followers_1'."""
    base = PurePosixPath(name).name.lower()
    if suffix and base.endswith(suffix):
        base = base[:-len(suffix)]
    return base

class ExportArchive:
    """Read access to a data export, either the downloaded ZIP or an unpacked folder."""

    def __init__(self, path: Path, settings: Optional[Config] = None):
        self.path = Path(path)
        self.settings = settings or config
        self._zip: Optional[zipfile.ZipFile] = None

        if not self.path.exists():
            raise ArchiveError(f"Archive does not exist: {self.path}")
        if self.path.is_file():
            try:
                self._zip = zipfile.ZipFile(self.path)
            except zipfile.BadZipFile as e:
                raise ArchiveError(f"Not a valid ZIP archive: {self.path} ({e})") from e

    def __enter__(self) -> 'ExportArchive':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    @property
    def is_zip(self) -> bool:
        return self._zip is not None

    def entries(self) -> Iterator[ArchiveEntry]:
        """All entries in archive order (sorted path order for folders)."""
        if self._zip is not None:
            for info in self._zip.infolist():
                yield ArchiveEntry(name=info.filename, is_dir=info.is_dir())
        else:
            for path in sorted(self.path.rglob('*')):
                yield ArchiveEntry(
                    name=path.relative_to(self.path).as_posix(),
                    is_dir=path.is_dir()
                )

    def json_entries(self) -> List[ArchiveEntry]:
        """Visible JSON files, skipping directories and hidden artifacts."""
        suffix = self.settings.json_suffix
        found = []
        for entry in self.entries():
            if entry.is_dir or is_hidden(entry.name, self.settings.ignored_path_markers):
                continue
            if entry.name.lower().endswith(suffix):
                found.append(entry)
        logger.debug(f"Found {len(found)} JSON entries in {self.path}")
        return found

    def read_bytes(self, entry: ArchiveEntry) -> bytes:
        if self._zip is not None:
            return self._zip.read(entry.name)
        return (self.path / entry.name).read_bytes()

    def read_text(self, entry: ArchiveEntry) -> str:
        """Full contents of an entry as text."""
        return self.read_bytes(entry).decode('utf-8-sig', errors='replace')

def unique_label(label: str, taken: Container[str]) -> str:
    """``label``, or ``label (2)``, ``label (3)``... if it is already taken."""
    candidate, n = label, 2
    while candidate in taken:
        candidate = f"{label} ({n})"
        n += 1
    return candidate
