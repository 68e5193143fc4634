from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any

import pandas as pd

from ..models.parsed_guest import RawRow

"""Spreadsheet decoder for guest lists.

Only the first sheet of the workbook is read. Its first row supplies the
header keys for every following row; fully blank rows are skipped. Cell values
keep their spreadsheet type (str / int / float / datetime), blank cells become
None. Strings such as "NA" or "null" are kept verbatim.
"""

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "UnsupportedFormatError",
    "ParseError",
    "SheetData",
    "ensure_supported_format",
    "is_missing",
    "read_guest_sheet",
    "read_guest_rows",
]

SUPPORTED_EXTENSIONS = (".xlsx", ".xls")


class UnsupportedFormatError(Exception):
    """Raised when a file name does not carry a spreadsheet extension."""


class ParseError(Exception):
    """Raised when the bytes cannot be interpreted as a workbook."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[RawRow]


def ensure_supported_format(filename: str) -> None:
    """Reject anything that is not .xlsx / .xls before decoding."""
    suffix = PurePath(filename).suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(
            f"unsupported file format '{suffix or filename}': expected one of {', '.join(SUPPORTED_EXTENSIONS)}"
        )


def is_missing(value: Any) -> bool:
    """True for blank cells: None, NaN/NaT and the empty string.

    Whitespace-only strings are *not* missing; they are resolved like any
    other value and trimmed later.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def read_guest_sheet(data: bytes) -> SheetData:
    """Decode the first sheet of a workbook into header-keyed rows.

    Parameters
    ----------
    data: full binary content of an .xlsx / .xls file

    Raises
    ------
    ParseError: when pandas cannot open the workbook. No partial result.
    """
    try:
        with pd.ExcelFile(io.BytesIO(data)) as xls:
            if not xls.sheet_names:
                raise ParseError("workbook has no sheets")
            sheet_name = str(xls.sheet_names[0])
            # Raw read; first row becomes the header below. keep_default_na=False
            # stops pandas from turning strings like "NA" into NaN.
            df = xls.parse(
                xls.sheet_names[0],
                header=None,
                dtype=object,
                keep_default_na=False,
                na_values=[],
            )
    except ParseError:
        raise
    except Exception as e:
        raise ParseError(f"could not read spreadsheet: {e}") from e

    # The header is the first non-blank row; blank rows above it are not data
    start = 0
    while start < df.shape[0] and all(is_missing(v) for v in df.iloc[start].tolist()):
        start += 1
    if start == df.shape[0]:
        return SheetData(sheet_name=sheet_name, columns=[], rows=[])

    columns = ["" if is_missing(c) else str(c).strip() for c in df.iloc[start].tolist()]
    rows: list[RawRow] = []
    for _, raw in df.iloc[start + 1:].iterrows():
        values = raw.tolist()
        if all(is_missing(v) for v in values):
            continue
        row: RawRow = {}
        for col, val in zip(columns, values, strict=False):
            # Unlabeled columns cannot be resolved; duplicated labels keep the first cell
            if col == "" or col in row:
                continue
            row[col] = None if is_missing(val) else val
        rows.append(row)
    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)


def read_guest_rows(data: bytes) -> list[RawRow]:
    """Ordered RawRow records of the first sheet (possibly empty)."""
    return read_guest_sheet(data).rows
