"""
Tests for the openpyxl-backed spreadsheet document.

These tests build real workbooks in a temporary directory, run the
synchronizer against them and read the saved file back.
"""

import openpyxl
import pytest
from openpyxl.styles import Font, PatternFill

from musiccatalog.core.exceptions import SpreadsheetError
from musiccatalog.core.models import AlbumRecord, Catalog, CellStyle
from musiccatalog.services.spreadsheet import WorkbookDocument, shift_formula
from musiccatalog.services.synchronizer import sync


@pytest.fixture
def workbook_path(tmp_path):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Albums"
    workbook.create_sheet("Other")

    sheet.append(["Band", "Year", "Album", "Bitrate", "Genre", "Note"])
    sheet.append(["Alpha", 1990, "First", "128", "Rock", ""])
    sheet.append(["Charlie", "1995", "Second", "VBR", "Pop", ""])
    sheet.append(["Echo", "2001", "Third", "FLAC", "?", ""])
    for column in range(1, 7):
        cell = sheet.cell(row=2, column=column)
        cell.font = Font(name="Arial", bold=True)
        cell.fill = PatternFill(fill_type="solid", start_color="DDDDDD", end_color="DDDDDD")

    path = tmp_path / "albums.xlsx"
    workbook.save(path)
    return path


def test_open_and_read(workbook_path):
    document = WorkbookDocument.open(workbook_path, "Albums")

    assert document.highest_row() == 4
    assert document.get_value(1, 3) == "Charlie"
    assert document.get_value(2, 2) == "1990"
    assert document.get_value(6, 4) == ""
    assert document.get_value(1, 50) == ""


def test_integral_floats_read_as_integers(workbook_path):
    workbook = openpyxl.load_workbook(workbook_path)
    workbook["Albums"]["B3"] = 1995.0
    workbook["Albums"]["B4"] = 2001.5
    workbook.save(workbook_path)

    document = WorkbookDocument.open(workbook_path, "Albums")

    assert document.get_value(2, 3) == "1995"
    assert document.get_value(2, 4) == "2001.5"


def test_style_snapshot(workbook_path):
    document = WorkbookDocument.open(workbook_path, "Albums")

    style = document.get_style(1, 2)

    assert style.font.bold is True
    assert style.font.name == "Arial"
    assert style.background == "DDDDDD"
    assert style.with_background("9A0F00").background == "9A0F00"
    assert style.background == "DDDDDD"


def test_set_style_and_value(workbook_path):
    document = WorkbookDocument.open(workbook_path, "Albums")

    document.set_value(2, 3, "1996")
    document.set_style(2, 3, document.get_style(1, 2).with_background("00FF00"))

    cell = document.worksheet.cell(row=3, column=2)
    assert cell.value == "1996"
    assert cell.font.bold is True
    assert cell.fill.fgColor.rgb.endswith("00FF00")


def test_insert_rows_after_row(workbook_path):
    document = WorkbookDocument.open(workbook_path, "Albums")

    document.insert_rows(2, 2)

    assert document.get_value(1, 2) == "Alpha"
    assert document.get_value(1, 3) == ""
    assert document.get_value(1, 5) == "Charlie"
    assert document.highest_row() == 6


def test_sync_round_trip(workbook_path):
    catalog = Catalog()
    catalog.add(AlbumRecord("Bravo", "1993", "Between", "192", "Rock"))
    catalog.add(AlbumRecord("Foxtrot", "2010", "Last", "VBR", "?"))

    document = WorkbookDocument.open(workbook_path, "Albums")
    result = sync(document, catalog, 1, 2)
    document.save()

    assert result.written == 2

    sheet = openpyxl.load_workbook(workbook_path)["Albums"]
    bands = [sheet.cell(row=row, column=1).value for row in range(1, sheet.max_row + 1)]
    assert bands == ["Band", "Alpha", "Bravo", "Charlie", "Echo", "Foxtrot"]
    assert [sheet.cell(row=3, column=col).value for col in range(1, 6)] == \
        ["Bravo", "1993", "Between", "192", "Rock"]

    new_cell = sheet.cell(row=3, column=4)
    assert new_cell.font.bold is True
    assert new_cell.fill.fgColor.rgb.endswith("9A0F00")

    # Rows below the insertion keep their own content
    assert sheet.cell(row=4, column=4).value == "VBR"
    assert sheet.cell(row=2, column=1).fill.fgColor.rgb.endswith("DDDDDD")


def test_save_to_other_path(workbook_path, tmp_path):
    document = WorkbookDocument.open(workbook_path, "Albums")
    target = tmp_path / "copy.xlsx"

    assert document.save(target) == str(target)
    assert openpyxl.load_workbook(target).sheetnames == ["Albums", "Other"]


def test_missing_file(tmp_path):
    with pytest.raises(SpreadsheetError, match="not found"):
        WorkbookDocument.open(tmp_path / "missing.xlsx", "Albums")


def test_missing_sheet(workbook_path):
    with pytest.raises(SpreadsheetError) as excinfo:
        WorkbookDocument.open(workbook_path, "Nope")
    assert "Albums" in str(excinfo.value)


def test_unreadable_file(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"this is not a workbook")
    with pytest.raises(SpreadsheetError):
        WorkbookDocument.open(path, "Albums")


def test_save_failure(workbook_path, tmp_path):
    document = WorkbookDocument.open(workbook_path, "Albums")
    with pytest.raises(SpreadsheetError):
        document.save(tmp_path)


def test_default_cell_style():
    style = CellStyle()
    assert style.background is None
    assert style.with_background("123456").background == "123456"


def test_insert_moves_merges_heights_and_formulas(workbook_path):
    workbook = openpyxl.load_workbook(workbook_path)
    sheet = workbook["Albums"]
    sheet.merge_cells("E4:F4")
    sheet.row_dimensions[4].height = 40
    sheet["H4"] = "=B4"
    sheet["H1"] = "=SUM(B2:B4)+'Other'!A4"
    workbook.save(workbook_path)

    catalog = Catalog()
    catalog.add(AlbumRecord("Delta", "1999", "Between", "192", "Rock"))

    document = WorkbookDocument.open(workbook_path, "Albums")
    sync(document, catalog, 1, 2)
    document.save()

    sheet = openpyxl.load_workbook(workbook_path)["Albums"]
    assert sheet.cell(row=5, column=1).value == "Echo"
    assert [str(merged) for merged in sheet.merged_cells.ranges] == ["E5:F5"]
    assert sheet.row_dimensions[5].height == 40
    assert sheet.row_dimensions[4].height is None
    assert sheet["H5"].value == "=B5"
    assert sheet["H1"].value == "=SUM(B2:B5)+'Other'!A4"


def test_shift_formula_leaves_rows_above_alone():
    assert shift_formula("=A1+$B$3+C2", "Albums", 3, 2) == "=A1+$B$5+C2"
    assert shift_formula("=Albums!D7*2", "Albums", 3, 1) == "=Albums!D8*2"
    assert shift_formula("=Other!D7", "Albums", 3, 1) == "=Other!D7"
