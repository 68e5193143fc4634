from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..models.import_result import ImportResult
from ..models.parsed_guest import ParsedGuest
from .preview import summarize

"""SUMMARY line rendering for guest imports.

Format:
SUMMARY rows={total} valid={valid} invalid={invalid} inserted={inserted} elapsed_sec={elapsed}
"""


def build_import_result(
    guests: Sequence[ParsedGuest],
    inserted_rows: int,
    start_time: datetime,
    end_time: datetime,
) -> ImportResult:
    counts = summarize(guests)
    return ImportResult(
        total_rows=counts.total,
        valid_rows=counts.valid_count,
        invalid_rows=counts.invalid_count,
        inserted_rows=inserted_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
    )


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_body(result: ImportResult) -> str:
    """Key=value part of the SUMMARY line; the SUMMARY label comes from the log formatter."""
    return (
        f"rows={result.total_rows} "
        f"valid={result.valid_rows} "
        f"invalid={result.invalid_rows} "
        f"inserted={result.inserted_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_summary_line(result: ImportResult) -> str:
    """Render the SUMMARY line for ``result``.

    >>> from datetime import datetime, timezone
    >>> start = datetime(2025, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    >>> end = datetime(2025, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
    >>> r = ImportResult(5, 3, 2, 3, start, end, 2.0)
    >>> render_summary_line(r)
    'SUMMARY rows=5 valid=3 invalid=2 inserted=3 elapsed_sec=2'
    """
    return f"SUMMARY {render_summary_body(result)}"
