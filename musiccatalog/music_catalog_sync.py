"""
Music Catalog Sync - Application

Main application class that runs the two phases of a catalog run:

1. Scan the library into an in-memory catalog
2. Open the spreadsheet, insert the new albums and save it once

The spreadsheet is only opened when the scan discovered at least one album,
and it is written a single time after every band has been placed.
"""

import time
from typing import Optional, Tuple

from .core.models import Catalog, CatalogSettings, SyncResult
from .services.audio_probe import AudioProbe
from .services.library_scanner import LibraryScanner
from .services.spreadsheet import WorkbookDocument
from .services.synchronizer import SpreadsheetSynchronizer
from .utils.filesystem import backup_file
from .utils.logging_config import get_app_logger


class MusicCatalogSync:
    """Scans a music library and synchronizes it into a spreadsheet"""

    def __init__(self, settings: CatalogSettings, probe: Optional[AudioProbe] = None,
                 show_progress: bool = False):
        """
        Initialize the application

        Args:
            settings: Validated configuration
            probe: Audio probe, mutagen-backed when omitted
            show_progress: Show a progress bar while scanning
        """
        self.settings = settings
        self.app_logger = get_app_logger()
        self.logger = self.app_logger.get_logger('main')
        self.scanner = LibraryScanner(settings.extensions, probe, show_progress)
        self.backup_path: Optional[str] = None

    def scan(self) -> Catalog:
        """Build the catalog of the configured data folder"""
        start_time = time.time()
        self.logger.info(f"Scanning {self.settings.data_folder}")
        self.logger.debug(f"Extensions: {', '.join(self.settings.extensions)}")

        catalog = self.scanner.scan(self.settings.data_folder)

        self.app_logger.log_scan_complete(self.settings.data_folder, len(catalog),
                                          catalog.total_albums)
        self.logger.debug(f"Scan took {time.time() - start_time:.2f}s, "
                          f"aggregation stats: {self.scanner.aggregator.get_stats()}")
        return catalog

    def synchronize(self, catalog: Catalog) -> SyncResult:
        """
        Insert the catalog into the configured spreadsheet and save it

        Raises:
            SpreadsheetError: The workbook cannot be opened or saved
            FileOperationError: The backup copy cannot be written
        """
        if catalog.is_empty:
            return SyncResult()

        settings = self.settings
        document = WorkbookDocument.open(settings.spreadsheet_file, settings.sheet)

        synchronizer = SpreadsheetSynchronizer(
            document,
            settings.first_column,
            settings.first_row,
            settings.highlight_color
        )
        result = synchronizer.sync(catalog)

        for placement in result.placements:
            self.logger.debug(f"{placement.band}: {placement.rows_inserted} rows "
                              f"after row {placement.anchor_row}")

        if settings.backup:
            self.backup_path = backup_file(settings.spreadsheet_file)
            self.logger.info(f"Backup created: {self.backup_path}")

        document.save()
        self.app_logger.log_sync_complete(settings.spreadsheet_file, result.written,
                                          result.discovered)
        return result

    def run(self, dry_run: bool = False) -> Tuple[Catalog, SyncResult]:
        """Scan, then synchronize unless ``dry_run`` is set"""
        catalog = self.scan()
        if dry_run:
            return catalog, SyncResult(discovered=catalog.total_albums)
        return catalog, self.synchronize(catalog)


__all__ = ['MusicCatalogSync']
