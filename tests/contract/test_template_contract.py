from __future__ import annotations

import pytest

from wedding_planner.excel.reader import read_guest_sheet
from wedding_planner.excel.template import (
    COLUMN_WIDTHS,
    TEMPLATE_FILENAME,
    TEMPLATE_HEADERS,
    TEMPLATE_SHEET_NAME,
    build_template_bytes,
)
from wedding_planner.services.normalizer import HEADER_ALIASES, validate_rows

"""Template contract: filename, sheet, headers and widths are fixed, and a
template read back through the import pipeline resolves every field."""


def test_fixed_names_and_widths():
    assert TEMPLATE_FILENAME == "plantilla_invitados.xlsx"
    assert TEMPLATE_SHEET_NAME == "Invitados"
    assert COLUMN_WIDTHS == [20, 25, 18, 18, 20, 25, 10]


def test_spanish_headers_are_first_aliases():
    assert TEMPLATE_HEADERS["es"] == [aliases[0] for aliases in HEADER_ALIASES.values()]


@pytest.mark.parametrize("language", ["es", "en"])
def test_template_rows_resolve_every_field(language: str):
    sheet = read_guest_sheet(build_template_bytes(language))
    assert sheet.sheet_name == TEMPLATE_SHEET_NAME
    assert sheet.columns == TEMPLATE_HEADERS[language]

    first, second = validate_rows(sheet.rows)
    assert first.is_valid and second.is_valid
    assert first.email and first.phone
    assert first.plus_one is True
    assert first.plus_one_name
    assert first.dietary_preferences
    assert first.table_assignment
    assert second.plus_one is False
    assert second.plus_one_name is None
