"""Export and display extracted collections."""
from pathlib import Path
import logging
from typing import Callable, Dict, List, Mapping, Optional

import orjson
import pandas as pd

from .models import ArchiveResult, NamedCollection, RelationshipReport

logger = logging.getLogger(__name__)

COLUMNS = ['collection', 'username', 'profile_url', 'event_timestamp', 'event_time']

# Ghosts, fans, mutuals
CAPTIONS = (
    "Following who don't follow back",
    "Followers you don't follow back",
    "You follow each other",
)

def collections_to_dataframe(collections: Mapping[str, NamedCollection]) -> pd.DataFrame:
    """One row per record, tagged with the collection it belongs to."""
    rows = [
        {
            'collection': name,
            'username': record.username,
            'profile_url': record.profile_url,
            'event_timestamp': record.event_timestamp,
            'event_time': record.event_time
        }
        for name, collection in collections.items()
        for record in collection
    ]
    return pd.DataFrame(rows, columns=COLUMNS)

def report_collections(report: RelationshipReport) -> Dict[str, NamedCollection]:
    if not report.has_data:
        return {}
    return {collection.name: collection for collection in report.result.partitions}

def export_csv(result: ArchiveResult, output_dir: Path,
               report: Optional[RelationshipReport] = None) -> List[Path]:
    """Write one CSV per collection (and per relationship group) into output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    collections = dict(result.collections)
    if report is not None:
        collections.update(report_collections(report))

    written = []
    for name, collection in collections.items():
        output_path = output_dir / f"{name}.csv"
        frame = collections_to_dataframe({name: collection}).drop(columns=['collection'])
        frame.to_csv(output_path, index=False)
        written.append(output_path)
    logger.info(f"Exported {len(written)} CSV files to {output_dir}")
    return written

def export_json(result: ArchiveResult, output_dir: Path,
                report: Optional[RelationshipReport] = None) -> List[Path]:
    """Write all collections, the relationship breakdown and the log to one JSON file."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "followback.json"
    output = {
        'collections': {
            name: [record.to_dict() for record in collection]
            for name, collection in result.collections.items()
        },
        'relationships': None,
        'log': result.log.lines()
    }
    if report is not None:
        output['relationships'] = {
            'following': report.following_label,
            'followers': report.followers_label,
            'has_data': report.has_data,
            'guidance': report.guidance or None,
            **{
                name: [record.to_dict() for record in collection]
                for name, collection in report_collections(report).items()
            }
        }
    with open(output_path, 'wb') as f:
        f.write(orjson.dumps(output, option=orjson.OPT_INDENT_2))
    logger.info(f"Exported collections to {output_path}")
    return [output_path]

EXPORTERS: Dict[str, Callable[..., List[Path]]] = {
    'csv': export_csv,
    'json': export_json,
}

def render_collection(collection: NamedCollection, limit: Optional[int] = None) -> str:
    """List a collection the way the result cards show it: @name, date, link."""
    lines = [f"{collection.display_name.title()} ({len(collection)})"]
    records = collection.records if limit is None else collection.records[:limit]
    for record in records:
        when = record.event_time.strftime('%Y-%m-%d') if record.event_time else ''
        lines.append(f"  @{record.username:<30} {when:<10} {record.profile_url}")
    if limit is not None and len(collection) > limit:
        lines.append(f"  ... {len(collection) - limit} more")
    return "\n".join(lines)

def render_summary(result: ArchiveResult, report: Optional[RelationshipReport] = None) -> str:
    """Plain text overview of the lists found and the relationship breakdown."""
    lines = [f"Lists found in {result.json_files_found} JSON files:"]
    for name, collection in result.collections.items():
        lines.append(f"  {collection.display_name} ({len(collection)})")

    if report is not None:
        lines.append("")
        if report.has_data:
            lines.append(f"Relationship analysis ({report.following_label} vs {report.followers_label}):")
            for collection, caption in zip(report.result.partitions, CAPTIONS):
                lines.append(f"  {collection.name.title():<8} {len(collection):>6}  {caption}")
        else:
            lines.append(report.guidance)
    return "\n".join(lines)
