from pathlib import Path
import argparse
import locale
import logging
import sys

from .config import Config
from .exceptions import ArchiveError
from .export import EXPORTERS, render_collection, render_summary
from .processor import ArchiveProcessor

logger = logging.getLogger(__name__)

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Inspect a data export and find who does not follow back')
    parser.add_argument('archive', type=Path, help='Export ZIP file or unpacked export directory')
    parser.add_argument('--list', dest='lists', nargs='+', metavar='NAME', default=[],
                        help='Print the accounts in these lists (e.g. ghosts, fans, followers_1)')
    parser.add_argument('--limit', type=int, help='Maximum accounts printed per list')
    parser.add_argument('--export-dir', type=Path, help='Write results to this directory')
    parser.add_argument('--format', nargs='+', choices=sorted(EXPORTERS), default=['csv'],
                        help='Export format(s)')
    parser.add_argument('--workers', type=int, help='Parallel extraction processes')
    parser.add_argument('--config', type=Path, help='JSON file with configuration overrides')
    parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
    parser.add_argument('--show-log', action='store_true', help='Print the extraction log')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    settings = Config.load(args.config) if args.config else Config()
    if args.workers is not None:
        settings.max_workers = args.workers
    if args.no_progress:
        settings.show_progress = False

    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # List names sort in the user's collation order
    try:
        locale.setlocale(locale.LC_COLLATE, '')
    except locale.Error as e:
        logger.debug(f"Keeping default collation: {e}")

    processor = ArchiveProcessor(args.archive, settings)
    try:
        result = processor.process()
    except ArchiveError as e:
        if args.show_log:
            print("\n".join(processor.log.lines()))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = processor.analyze()
    print(render_summary(result, report))

    available = dict(result.collections)
    if report.has_data:
        available.update({c.name: c for c in report.result.partitions})
    for name in args.lists:
        if name not in available:
            logger.warning(f"No list named {name!r}; available: {', '.join(available)}")
            continue
        print()
        print(render_collection(available[name], args.limit))

    if args.export_dir:
        for format_type in args.format:
            EXPORTERS[format_type](result, args.export_dir, report)

    if args.show_log:
        print()
        print("Log:")
        print("\n".join(result.log.lines()))
    return 0

if __name__ == '__main__':
    sys.exit(main())
