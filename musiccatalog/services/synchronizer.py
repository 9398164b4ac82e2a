"""
Spreadsheet Synchronizer

Inserts the albums of a catalog into a sheet whose band column is sorted
ascending. Each band's rows go directly below the last row whose band name
sorts at or before it, and every written cell gets the template row's style
with a highlight background so new rows stand out.
"""

import logging
from typing import Optional, Tuple

from ..core.models import Catalog, CellStyle, HIGHLIGHT_COLOR, Placement, SyncResult
from .spreadsheet import SpreadsheetDocument

# Band, year, name, bitrate, genre, note
TEMPLATE_COLUMNS = 6


class SpreadsheetSynchronizer:
    """Writes a catalog into a sorted sheet"""

    def __init__(self, document: SpreadsheetDocument, first_column: int, first_row: int,
                 highlight_color: str = HIGHLIGHT_COLOR):
        if first_column < 1 or first_row < 1:
            raise ValueError("Spreadsheet rows and columns start at 1")
        self.document = document
        self.first_column = first_column
        self.first_row = first_row
        self.highlight_color = highlight_color
        self.logger = logging.getLogger(__name__)

    def capture_styles(self) -> Tuple[CellStyle, ...]:
        """Styles of the template row, one per catalog column"""
        return tuple(
            self.document.get_style(self.first_column + offset, self.first_row)
            for offset in range(TEMPLATE_COLUMNS)
        )

    def find_anchor_row(self, band: str) -> Optional[int]:
        """
        Last row whose band name sorts at or before ``band``

        Scans upward from the current highest row, so rows inserted earlier in
        the same run are taken into account. Returns None when every row sorts
        after the band.
        """
        for row in range(self.document.highest_row(), self.first_row - 1, -1):
            if self.document.get_value(self.first_column, row) <= band:
                return row
        return None

    def sync(self, catalog: Catalog) -> SyncResult:
        """
        Insert and populate the rows of every band in the catalog

        Bands are processed in ascending name order. The document is not
        saved here.

        Returns:
            SyncResult with the number of albums written
        """
        result = SyncResult(discovered=catalog.total_albums)
        if catalog.is_empty:
            return result

        styles = tuple(style.with_background(self.highlight_color)
                       for style in self.capture_styles())

        for band in sorted(catalog.bands()):
            albums = catalog.albums(band)
            if not albums:
                continue

            anchor = self.find_anchor_row(band)
            if anchor is None:
                anchor = self.document.highest_row()

            self.document.insert_rows(anchor, len(albums))
            self.logger.debug(f"Inserted {len(albums)} rows for '{band}' after row {anchor}")

            for row, album in enumerate(albums, start=anchor + 1):
                self._write(row, 0, band, styles)
                for offset, value in enumerate(album.details(), start=1):
                    self._write(row, offset, value, styles)
                result.written += 1

            result.placements.append(Placement(band, anchor, len(albums)))

        return result

    def _write(self, row: int, offset: int, value: str, styles: Tuple[CellStyle, ...]):
        column = self.first_column + offset
        self.document.set_value(column, row, value)
        self.document.set_style(column, row, styles[offset])


def sync(document: SpreadsheetDocument, catalog: Catalog, first_column: int, first_row: int,
         highlight_color: str = HIGHLIGHT_COLOR) -> SyncResult:
    """Convenience wrapper around :meth:`SpreadsheetSynchronizer.sync`"""
    return SpreadsheetSynchronizer(document, first_column, first_row, highlight_color).sync(catalog)


__all__ = ['SpreadsheetSynchronizer', 'TEMPLATE_COLUMNS', 'sync']
