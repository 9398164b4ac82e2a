"""
Data models for Music Catalog Sync

This module defines all data structures used throughout the application
for configuration, catalog records, cell styling and synchronization results.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from openpyxl.styles import Alignment, Border, Font, PatternFill, Protection


HIGHLIGHT_COLOR = "9A0F00"


@dataclass(frozen=True)
class AlbumRecord:
    """One album folder as it will appear in the spreadsheet"""

    band: str
    year: str
    name: str
    bitrate: str = ""
    genre: str = ""
    note: str = ""       # Reserved, always empty

    def details(self) -> Tuple[str, str, str, str]:
        """Values written next to the band name, in column order"""
        return (self.year, self.name, self.bitrate, self.genre)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            field.name: getattr(self, field.name)
            for field in self.__dataclass_fields__.values()
        }


@dataclass
class Catalog:
    """Albums grouped by band, each band keeping its discovery order"""

    entries: Dict[str, List[AlbumRecord]] = field(default_factory=dict)

    def add(self, record: AlbumRecord):
        self.entries.setdefault(record.band, []).append(record)

    def bands(self) -> List[str]:
        return list(self.entries)

    def albums(self, band: str) -> List[AlbumRecord]:
        return list(self.entries.get(band, []))

    @property
    def total_albums(self) -> int:
        return sum(len(albums) for albums in self.entries.values())

    @property
    def is_empty(self) -> bool:
        return self.total_albums == 0

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, band: str) -> bool:
        return band in self.entries

    def to_dict(self) -> Dict[str, List[Tuple[str, str, str, str, str]]]:
        """Band -> list of (year, name, bitrate, genre, note) tuples"""
        return {
            band: [album.details() + (album.note,) for album in albums]
            for band, albums in self.entries.items()
        }


@dataclass(frozen=True)
class CellStyle:
    """Immutable snapshot of the formatting of one spreadsheet cell"""

    font: Optional[Font] = None
    fill: Optional[PatternFill] = None
    border: Optional[Border] = None
    alignment: Optional[Alignment] = None
    number_format: str = "General"
    protection: Optional[Protection] = None

    def with_background(self, color: str) -> 'CellStyle':
        """Copy of this style with a solid background of the given RGB color"""
        fill = PatternFill(fill_type="solid", start_color=color, end_color=color)
        return replace(self, fill=fill)

    @property
    def background(self) -> Optional[str]:
        """RGB hex of the solid background, without the alpha channel"""
        if self.fill is None or self.fill.fill_type != "solid":
            return None
        rgb = self.fill.fgColor.rgb
        if not isinstance(rgb, str):
            return None
        return rgb[-6:]


@dataclass
class CatalogSettings:
    """Validated configuration for one catalog run"""

    # Library
    data_folder: str = ""
    extensions: Tuple[str, ...] = ("MP3",)

    # Spreadsheet
    spreadsheet_file: str = ""
    sheet: str = ""
    first_column: int = 1
    first_row: int = 1
    highlight_color: str = HIGHLIGHT_COLOR
    backup: bool = False

    # Logging
    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_dir: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            field.name: getattr(self, field.name)
            for field in self.__dataclass_fields__.values()
        }


@dataclass
class Placement:
    """Where the rows of one band went"""
    band: str
    anchor_row: int
    rows_inserted: int


@dataclass
class SyncResult:
    """Outcome of a synchronization run"""

    discovered: int = 0
    written: int = 0
    placements: List[Placement] = field(default_factory=list)

    @property
    def nothing_to_do(self) -> bool:
        return self.discovered == 0

    def summary(self, spreadsheet_file: str) -> str:
        if self.nothing_to_do:
            return "No albums have been found!"
        return (f"Successfully added {self.written}/{self.discovered} albums "
                f"to the spreadsheet '{spreadsheet_file}'")
