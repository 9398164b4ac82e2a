"""
Spreadsheet Documents

The synchronizer only needs a handful of operations on a sheet: read and
write cell values and styles, insert rows and ask for the highest used row.
``SpreadsheetDocument`` is that interface; ``WorkbookDocument`` implements it
on top of an openpyxl worksheet.
"""

import logging
import re
import zipfile
from abc import ABC, abstractmethod
from copy import copy
from pathlib import Path
from typing import Any, Optional, Union

import openpyxl
from openpyxl.formula.tokenizer import Token, Tokenizer
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..core.exceptions import SpreadsheetError
from ..core.models import CellStyle

PathLike = Union[str, Path]

CELL_REFERENCE = re.compile(r"(?<![A-Za-z0-9_.])(\$?[A-Za-z]{1,3}\$?)(\d+)(?![A-Za-z0-9_(])")


def shift_formula(formula: str, sheet_title: str, first_row: int, count: int) -> str:
    """
    Move the row references of a formula that point at or below ``first_row``

    References to other sheets are left alone.
    """
    def shift(match):
        row = int(match.group(2))
        if row >= first_row:
            row += count
        return f"{match.group(1)}{row}"

    tokenizer = Tokenizer(formula)
    for token in tokenizer.items:
        if token.type != Token.OPERAND or token.subtype != Token.RANGE:
            continue
        sheet, _, reference = token.value.rpartition('!')
        if sheet and sheet.strip("'") != sheet_title:
            continue
        prefix = f"{sheet}!" if sheet else ""
        token.value = prefix + CELL_REFERENCE.sub(shift, reference)
    return tokenizer.render()


class SpreadsheetDocument(ABC):
    """Minimal capability interface over one sheet (1-based rows and columns)"""

    @abstractmethod
    def get_value(self, column: int, row: int) -> str:
        """Cell value as text, '' for an empty cell"""

    @abstractmethod
    def set_value(self, column: int, row: int, value: Any):
        """Write a cell value"""

    @abstractmethod
    def get_style(self, column: int, row: int) -> CellStyle:
        """Snapshot of the cell formatting"""

    @abstractmethod
    def set_style(self, column: int, row: int, style: CellStyle):
        """Apply a formatting snapshot to a cell"""

    @abstractmethod
    def insert_rows(self, after_row: int, count: int):
        """Insert ``count`` blank rows directly below ``after_row``"""

    @abstractmethod
    def highest_row(self) -> int:
        """Index of the last used row"""


class WorkbookDocument(SpreadsheetDocument):
    """SpreadsheetDocument backed by an openpyxl worksheet"""

    def __init__(self, workbook: Workbook, worksheet: Worksheet, path: Optional[PathLike] = None):
        self.workbook = workbook
        self.worksheet = worksheet
        self.path = str(path) if path is not None else None
        self.logger = logging.getLogger(__name__)

    @classmethod
    def open(cls, path: PathLike, sheet_name: str) -> 'WorkbookDocument':
        """
        Load a workbook and select one of its sheets

        Raises:
            SpreadsheetError: The file is missing or unreadable, or has no such sheet
        """
        path = Path(path)
        if not path.is_file():
            raise SpreadsheetError("Spreadsheet file not found", filepath=str(path))

        try:
            workbook = openpyxl.load_workbook(str(path))
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise SpreadsheetError(
                "Problem opening the file",
                details=f"{type(e).__name__}: {e}",
                filepath=str(path)
            )

        if sheet_name not in workbook.sheetnames:
            raise SpreadsheetError(
                f"Problem opening the worksheet '{sheet_name}'",
                details=f"Available sheets: {', '.join(workbook.sheetnames)}",
                filepath=str(path)
            )

        return cls(workbook, workbook[sheet_name], path)

    def save(self, path: Optional[PathLike] = None) -> str:
        """
        Write the workbook to ``path`` (defaults to the file it was opened from)

        Raises:
            SpreadsheetError: The workbook cannot be written
        """
        target = str(path) if path is not None else self.path
        if not target:
            raise SpreadsheetError("No file name to save the spreadsheet to")

        try:
            self.workbook.save(target)
        except OSError as e:
            raise SpreadsheetError("Problem saving changes", details=str(e), filepath=target)

        self.logger.debug(f"Saved workbook to {target}")
        return target

    def get_value(self, column: int, row: int) -> str:
        if not self._in_use(column, row):
            return ""
        value = self.worksheet.cell(row=row, column=column).value
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    def set_value(self, column: int, row: int, value: Any):
        self.worksheet.cell(row=row, column=column).value = value

    def get_style(self, column: int, row: int) -> CellStyle:
        if not self._in_use(column, row):
            return CellStyle()
        cell = self.worksheet.cell(row=row, column=column)
        return CellStyle(
            font=copy(cell.font),
            fill=copy(cell.fill),
            border=copy(cell.border),
            alignment=copy(cell.alignment),
            number_format=cell.number_format,
            protection=copy(cell.protection),
        )

    def set_style(self, column: int, row: int, style: CellStyle):
        cell = self.worksheet.cell(row=row, column=column)
        if style.font is not None:
            cell.font = copy(style.font)
        if style.fill is not None:
            cell.fill = copy(style.fill)
        if style.border is not None:
            cell.border = copy(style.border)
        if style.alignment is not None:
            cell.alignment = copy(style.alignment)
        if style.protection is not None:
            cell.protection = copy(style.protection)
        cell.number_format = style.number_format

    def insert_rows(self, after_row: int, count: int):
        if count <= 0:
            return
        worksheet = self.worksheet
        first_row = after_row + 1
        worksheet.insert_rows(first_row, amount=count)

        # openpyxl only moves cells; merges, row heights and formulas follow here
        merged_ranges = list(worksheet.merged_cells.ranges)
        for merged in merged_ranges:
            if merged.min_row >= first_row:
                merged.shift(row_shift=count)
            elif merged.max_row >= first_row:
                merged.expand(down=count)
        # Ranges hash by their bounds, so the set is rebuilt after moving them
        worksheet.merged_cells.ranges = set(merged_ranges)

        moved = [(index, worksheet.row_dimensions.pop(index))
                 for index in sorted(worksheet.row_dimensions) if index >= first_row]
        for index, dimension in moved:
            dimension.index = index + count
            worksheet.row_dimensions[index + count] = dimension

        for row in worksheet.iter_rows():
            for cell in row:
                if cell.data_type == 'f' and isinstance(cell.value, str):
                    cell.value = shift_formula(cell.value, worksheet.title, first_row, count)

    def highest_row(self) -> int:
        return self.worksheet.max_row

    def _in_use(self, column: int, row: int) -> bool:
        # Reading through ws.cell() would create the cell and grow the sheet
        return row <= self.worksheet.max_row and column <= self.worksheet.max_column


__all__ = ['SpreadsheetDocument', 'WorkbookDocument', 'shift_formula']
