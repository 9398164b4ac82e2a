"""Music Catalog Sync package for reconciling a music folder tree with an album spreadsheet.

This package scans a ``<root>/<band>/<year> - <album>`` collection, derives one
bitrate and one genre per album, and inserts the new albums into a sorted
spreadsheet while keeping its formatting.
"""

__all__ = ["core", "services"]
__version__ = "1.0.0"
__author__ = "RamC Venkatasamy"
