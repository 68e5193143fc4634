from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Result model for one guest import run.

Aggregates the counts shown in the preview together with the commit outcome
and timing, and feeds the SUMMARY output line.
"""


@dataclass(frozen=True)
class ImportResult:
    """Counts and timing for one import session."""
    total_rows: int  # rows decoded from the sheet
    valid_rows: int
    invalid_rows: int
    inserted_rows: int  # 0 unless the batch insert succeeded
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float

    @property
    def committed(self) -> bool:
        return self.inserted_rows > 0
