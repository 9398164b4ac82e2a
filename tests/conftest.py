"""
Shared fixtures: an in-memory spreadsheet, a scripted audio probe and
helpers to lay out music folders on disk.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import pytest

from musiccatalog.core.exceptions import TagReadError
from musiccatalog.core.models import CellStyle
from musiccatalog.services.audio_probe import AudioProbe
from musiccatalog.services.spreadsheet import SpreadsheetDocument


class InMemoryDocument(SpreadsheetDocument):
    """Dictionary-backed sheet following openpyxl's row insertion semantics"""

    def __init__(self):
        self.values: Dict[tuple, object] = {}
        self.styles: Dict[tuple, CellStyle] = {}
        self._highest = 1
        self.inserts = []

    @classmethod
    def with_column(cls, column: int, first_row: int, values: Iterable[str]) -> 'InMemoryDocument':
        document = cls()
        for row, value in enumerate(values, start=first_row):
            document.set_value(column, row, value)
        return document

    def get_value(self, column: int, row: int) -> str:
        value = self.values.get((column, row))
        return "" if value is None else str(value)

    def set_value(self, column: int, row: int, value):
        self.values[(column, row)] = value
        self._highest = max(self._highest, row)

    def get_style(self, column: int, row: int) -> CellStyle:
        return self.styles.get((column, row), CellStyle())

    def set_style(self, column: int, row: int, style: CellStyle):
        self.styles[(column, row)] = style
        self._highest = max(self._highest, row)

    def insert_rows(self, after_row: int, count: int):
        self.inserts.append((after_row, count))
        self.values = {self._shift(key, after_row, count): v for key, v in self.values.items()}
        self.styles = {self._shift(key, after_row, count): v for key, v in self.styles.items()}
        if after_row < self._highest:
            self._highest += count

    def highest_row(self) -> int:
        return self._highest

    def column(self, column: int, first_row: int = 1):
        return [self.get_value(column, row) for row in range(first_row, self._highest + 1)]

    def row(self, row: int, first_column: int = 1, width: int = 5):
        return [self.get_value(column, row) for column in range(first_column, first_column + width)]

    def snapshot(self):
        return dict(self.values), dict(self.styles), self._highest

    @staticmethod
    def _shift(key, after_row, count):
        column, row = key
        return (column, row + count) if row > after_row else key


class ScriptedProbe(AudioProbe):
    """
    Probe answering from dictionaries keyed by file name

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(self, bitrates: Optional[Dict[str, object]] = None,
                 genres: Optional[Dict[str, object]] = None,
                 default_bitrate: str = "128", default_genre: Optional[str] = "Rock"):
        self.bitrates = bitrates or {}
        self.genres = genres or {}
        self.default_bitrate = default_bitrate
        self.default_genre = default_genre
        self.bitrate_calls = []
        self.genre_calls = []

    def probe_bitrate(self, filepath):
        name = Path(filepath).name
        self.bitrate_calls.append(name)
        return self._answer(self.bitrates.get(name, self.default_bitrate))

    def probe_genre(self, filepath):
        name = Path(filepath).name
        self.genre_calls.append(name)
        return self._answer(self.genres.get(name, self.default_genre))

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value


def make_files(root: Path, *relative_paths: Union[str, Path]) -> Path:
    """Create empty files (and their folders) below ``root``"""
    for relative in relative_paths:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    return root


@pytest.fixture
def probe():
    return ScriptedProbe()


@pytest.fixture
def library(tmp_path):
    """Root folder of an empty music library"""
    root = tmp_path / "Music"
    root.mkdir()
    return root


@pytest.fixture
def tag_error():
    return TagReadError("Cannot read tag")
