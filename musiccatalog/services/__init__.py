"""
Music Catalog Sync Services

This package contains the audio probe, the album aggregation, the library
scanner and the spreadsheet synchronization services.
"""

from .audio_probe import AudioProbe, MutagenAudioProbe
from .aggregator import AlbumAggregator
from .library_scanner import LibraryScanner
from .spreadsheet import SpreadsheetDocument, WorkbookDocument
from .synchronizer import SpreadsheetSynchronizer

__all__ = [
    'AudioProbe',
    'MutagenAudioProbe',
    'AlbumAggregator',
    'LibraryScanner',
    'SpreadsheetDocument',
    'WorkbookDocument',
    'SpreadsheetSynchronizer',
]
