from pathlib import Path, PurePosixPath
import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Dict, List, Optional, Tuple

import orjson
from tqdm import tqdm

from .archive import ExportArchive, label_for, unique_label
from .classifier import order
from .comparison import analyze_relationships
from .config import Config, config
from .exceptions import ArchiveError, NoDataExtractedError, NoJsonFilesError
from .extraction import extract_users
from .models import (
    ArchiveResult, ExtractionLog, FileExtraction, NamedCollection, RelationshipReport
)

logger = logging.getLogger(__name__)

def extract_file(entry_name: str, text: str, settings: Config) -> FileExtraction:
    """Decode one archive entry and pull its user records.

    Runs in worker processes. Decode failures are returned as a failed
    extraction so one bad file never stops the batch.
    """
    label = label_for(entry_name, settings.json_suffix)
    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        return FileExtraction(
            entry_name=entry_name,
            label=label,
            messages=((logging.ERROR, f"Error parsing {entry_name}: {e}"),),
            failed=True
        )

    records = tuple(extract_users(data, settings))
    if records:
        messages = ((logging.INFO, f"Parsed {len(records)} entries from {label}"),)
    else:
        snippet = orjson.dumps(data).decode('utf-8')[:settings.snippet_length]
        messages = (
            (logging.INFO, f"Skipping {PurePosixPath(entry_name).name} (No user data found)"),
            (logging.DEBUG, f"Snippet: {snippet}..."),
        )
    return FileExtraction(entry_name=entry_name, label=label, records=records, messages=messages)

class ArchiveProcessor:
    """Extracts user lists from one export archive and compares them."""

    def __init__(self, archive_path: Path, settings: Optional[Config] = None):
        self.archive_path = Path(archive_path)
        self.settings = settings or config
        self.log = ExtractionLog()
        self.result: Optional[ArchiveResult] = None

    def process(self) -> ArchiveResult:
        """Run the whole pass: read, extract, merge, order.

        Raises NoJsonFilesError / NoDataExtractedError when the archive as a
        whole yields nothing; per-file problems only end up in ``self.log``.
        """
        self.log = ExtractionLog()
        self.result = None
        try:
            self.result = self._process()
        except ArchiveError as e:
            self.log.error(f"Fatal Error: {e}", logger)
            raise
        return self.result

    def _process(self) -> ArchiveResult:
        self.log.info(f"Loading archive: {self.archive_path.name}", logger)

        with ExportArchive(self.archive_path, self.settings) as archive:
            entries = archive.json_entries()
            if not entries:
                raise NoJsonFilesError()

            pending: List[Tuple[str, str]] = []
            for entry in entries:
                try:
                    pending.append((entry.name, archive.read_text(entry)))
                except Exception as e:
                    self.log.error(f"Error reading {entry.name}: {e}", logger)

        extractions = self._extract_all(pending)

        collections: Dict[str, NamedCollection] = {}
        for extraction in extractions:
            for level, message in extraction.messages:
                self.log.add(message, level, logger)
            if not extraction.records:
                continue
            label = unique_label(extraction.label, collections)
            collections[label] = NamedCollection(
                name=label,
                records=extraction.records,
                source=extraction.entry_name
            )

        self.log.info(f"Processing complete. Found relevant data in {len(collections)} files.", logger)
        if not collections:
            raise NoDataExtractedError()

        ordered = {label: collections[label] for label in order(collections, self.settings.role_keywords)}
        return ArchiveResult(collections=ordered, log=self.log, json_files_found=len(entries))

    def _failed(self, name: str, error: Exception) -> FileExtraction:
        return FileExtraction(
            entry_name=name,
            label=label_for(name, self.settings.json_suffix),
            messages=((logging.ERROR, f"Error extracting {name}: {error}"),),
            failed=True
        )

    def _extract_all(self, pending: List[Tuple[str, str]]) -> List[FileExtraction]:
        """Extract every entry, returning results in archive order.

        A file that fails for any reason becomes a failed extraction, on the
        inline path as well as in the worker pool.
        """
        results: List[Optional[FileExtraction]] = [None] * len(pending)
        disable = not self.settings.show_progress

        if self.settings.max_workers <= 1 or len(pending) <= 1:
            for index, (name, text) in enumerate(tqdm(pending, desc="Extracting files", disable=disable)):
                try:
                    results[index] = extract_file(name, text, self.settings)
                except Exception as e:
                    results[index] = self._failed(name, e)
            return results

        workers = min(self.settings.max_workers, len(pending))
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(extract_file, name, text, self.settings): index
                for index, (name, text) in enumerate(pending)
            }
            for future in tqdm(as_completed(futures), total=len(futures),
                               desc="Extracting files", disable=disable):
                index = futures[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    results[index] = self._failed(pending[index][0], e)
        return results

    def analyze(self) -> RelationshipReport:
        """Ghosts, fans and mutuals for the processed archive."""
        if self.result is None:
            self.process()
        return analyze_relationships(self.result.collections, self.settings.role_keywords)
