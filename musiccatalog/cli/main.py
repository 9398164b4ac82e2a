"""
Command Line Interface for Music Catalog Sync

Scans the configured music folder and adds the discovered albums to the
configured spreadsheet.
"""

import argparse
import sys
import time
from typing import List, Optional

from ..core.exceptions import CatalogError
from ..core.models import Catalog
from ..music_catalog_sync import MusicCatalogSync
from ..utils.logging_config import setup_logging
from .config import CLIConfig, DEFAULT_CONFIG_FILE


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser"""

    parser = argparse.ArgumentParser(
        prog="music-catalog-sync",
        description="Music Catalog Sync - add new albums of a music folder to a spreadsheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                              # Use ./config.json
  %(prog)s --config ~/albums.json       # Use another configuration file
  %(prog)s --dry-run                    # Show the catalog without touching the spreadsheet
        """
    )

    parser.add_argument('--config', default=DEFAULT_CONFIG_FILE, metavar='PATH',
                        help=f'Configuration file (default: {DEFAULT_CONFIG_FILE})')
    parser.add_argument('--dry-run', action='store_true',
                        help='Scan and print the catalog without opening the spreadsheet')
    parser.add_argument('--no-progress', action='store_true',
                        help='Do not show a progress bar while scanning')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose console logging')
    parser.add_argument('--log-dir', metavar='DIR',
                        help='Write a rotating log file to this directory')

    return parser


def print_catalog(catalog: Catalog):
    """Print the catalog grouped by band"""
    for band in sorted(catalog.bands()):
        print(f"🎸 {band}")
        for album in catalog.albums(band):
            print(f"   {album.year} - {album.name}  [{album.bitrate or '-'}] [{album.genre or '-'}]")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    start_time = time.time()

    try:
        settings = CLIConfig(args.config).load_settings()

        setup_logging(
            log_dir=args.log_dir or settings.log_dir,
            console_level='DEBUG' if args.verbose else settings.console_level,
            file_level=settings.file_level
        )

        app = MusicCatalogSync(settings, show_progress=not args.no_progress)
        catalog, result = app.run(dry_run=args.dry_run)

        if result.nothing_to_do:
            print(result.summary(settings.spreadsheet_file))
            return 0

        if args.dry_run:
            print_catalog(catalog)
            print(f"\n🔍 Dry run: {catalog.total_albums} albums found, spreadsheet not modified")
            return 0

        print(f"✅ {result.summary(settings.spreadsheet_file)}")
        if app.backup_path:
            print(f"   Backup: {app.backup_path}")

        if args.verbose:
            print(f"\n📈 Session completed in {time.time() - start_time:.1f}s")

        return 0

    except CatalogError as e:
        print(f"❌ ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(f"\n\n⚠️ Interrupted by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
