"""
Library Scanner

Walks ``<root>/<band>/<year> - <album>`` and builds the catalog, one
AlbumRecord per album folder grouped by band.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from tqdm import tqdm

from ..core.models import AlbumRecord, Catalog
from ..utils.filesystem import list_subdirectories
from .aggregator import AlbumAggregator
from .audio_probe import AudioProbe

PathLike = Union[str, Path]

ALBUM_SEPARATOR = '-'


def parse_album_folder_name(folder_name: str) -> Optional[Tuple[str, str]]:
    """
    Split an album folder name into (year, name)

    The name is split on the first ``-`` and both halves are trimmed.
    Returns None when the name has no separator.
    """
    if ALBUM_SEPARATOR not in folder_name:
        return None
    year, name = folder_name.split(ALBUM_SEPARATOR, 1)
    return year.strip(), name.strip()


class LibraryScanner:
    """Builds a Catalog from a band/album folder tree"""

    def __init__(self, extensions: Iterable[str], probe: Optional[AudioProbe] = None,
                 show_progress: bool = False):
        self.aggregator = AlbumAggregator(extensions, probe)
        self.show_progress = show_progress
        self.logger = logging.getLogger(__name__)
        self.skipped_folders: List[Path] = []

    def find_album_folders(self, root: PathLike) -> List[Tuple[str, Path, str, str]]:
        """
        List the album folders below ``root``

        Returns:
            (band, album folder, year, name) tuples in name order
        """
        albums = []
        for band_dir in list_subdirectories(Path(root), follow_symlinks=False):
            for album_dir in list_subdirectories(band_dir, follow_symlinks=False):
                parsed = parse_album_folder_name(album_dir.name)
                if parsed is None:
                    self.skipped_folders.append(album_dir)
                    self.logger.debug(f"Skipping folder without year separator: {album_dir}")
                    continue
                year, name = parsed
                albums.append((band_dir.name, album_dir, year, name))
        return albums

    def scan(self, root: PathLike) -> Catalog:
        """
        Scan the library and aggregate every album

        Args:
            root: Library root holding one folder per band

        Returns:
            Catalog of the discovered albums
        """
        catalog = Catalog()
        album_folders = self.find_album_folders(root)
        self.logger.debug(f"Found {len(album_folders)} album folders under {root}")

        progress = tqdm(album_folders, desc="Scanning albums", unit="album",
                        disable=not self.show_progress)
        for band, album_dir, year, name in progress:
            bitrate, genre = self.aggregator.aggregate_album(album_dir)
            catalog.add(AlbumRecord(band=band, year=year, name=name,
                                    bitrate=bitrate, genre=genre))
            self.logger.debug(f"{band} / {year} - {name}: bitrate={bitrate!r} genre={genre!r}")

        return catalog


def scan(root: PathLike, extensions: Iterable[str], probe: Optional[AudioProbe] = None,
         show_progress: bool = False) -> Catalog:
    """Convenience wrapper around :meth:`LibraryScanner.scan`"""
    return LibraryScanner(extensions, probe, show_progress).scan(root)


__all__ = ['LibraryScanner', 'parse_album_folder_name', 'scan']
