from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""ParsedGuest model: one spreadsheet row after normalization and validation.

A ParsedGuest only lives for one import session (upload through commit or
reset). It is never persisted; the Batch Committer turns the valid ones into
GuestInsertPayload records.
"""

__all__ = [
    "RawRow",
    "ParsedGuest",
]

# Header as authored in the sheet -> cell value (str, number or None)
RawRow = dict[str, Any]


@dataclass(frozen=True)
class ParsedGuest:
    """Row-level guest record produced by the validator.

    ``is_valid`` is always equal to ``not errors``; a guest whose name trims to
    the empty string is never valid.
    """
    full_name: str  # trimmed, may be "" for invalid rows
    email: str | None = None
    phone: str | None = None
    plus_one: bool = False
    plus_one_name: str | None = None
    dietary_preferences: str | None = None
    table_assignment: str | None = None
    is_valid: bool = True
    errors: tuple[str, ...] = ()

    @property
    def status_text(self) -> str:
        """Errors joined for display, empty for valid guests."""
        return ", ".join(self.errors)
