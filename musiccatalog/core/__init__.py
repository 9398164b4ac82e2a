"""
Music Catalog Sync Core Package

This package contains the data models, consensus rules and exceptions shared
by the scanning and spreadsheet services.
"""

from .models import AlbumRecord, Catalog, CatalogSettings, CellStyle, SyncResult
from .exceptions import CatalogError, ConfigurationError, SpreadsheetError
from .consensus import BitrateConsensus, GenreConsensus, VBR, UNKNOWN

__all__ = [
    'AlbumRecord',
    'Catalog',
    'CatalogSettings',
    'CellStyle',
    'SyncResult',
    'CatalogError',
    'ConfigurationError',
    'SpreadsheetError',
    'BitrateConsensus',
    'GenreConsensus',
    'VBR',
    'UNKNOWN',
]
