from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from ..i18n.messages import DEFAULT_LANG, Translator, translator_for
from ..models.parsed_guest import ParsedGuest

"""Preview aggregation for parsed guests.

Both valid and invalid guests are kept and shown in their original order,
numbered from 1. Valid rows show the "ready" marker, invalid rows the
concatenation of their error messages.
"""

__all__ = [
    "PreviewSummary",
    "PreviewRow",
    "summarize",
    "preview_rows",
    "preview_frame",
]


@dataclass(frozen=True)
class PreviewSummary:
    valid_count: int
    invalid_count: int

    @property
    def total(self) -> int:
        return self.valid_count + self.invalid_count


@dataclass(frozen=True)
class PreviewRow:
    position: int  # 1-based, original row order
    full_name: str
    email: str
    phone: str
    plus_one: str
    status: str
    is_valid: bool


EMPTY_SUMMARY = PreviewSummary(valid_count=0, invalid_count=0)


def summarize(guests: Sequence[ParsedGuest]) -> PreviewSummary:
    valid = sum(1 for g in guests if g.is_valid)
    return PreviewSummary(valid_count=valid, invalid_count=len(guests) - valid)


def preview_rows(guests: Sequence[ParsedGuest], translate: Translator | None = None) -> list[PreviewRow]:
    """One display row per guest; nothing is filtered out."""
    _ = translate or translator_for(DEFAULT_LANG)
    rows: list[PreviewRow] = []
    for index, guest in enumerate(guests, start=1):
        rows.append(
            PreviewRow(
                position=index,
                full_name=guest.full_name or "-",
                email=guest.email or "-",
                phone=guest.phone or "-",
                plus_one=_("common.yes") if guest.plus_one else _("common.no"),
                status=_("guests.import.ready") if guest.is_valid else guest.status_text,
                is_valid=guest.is_valid,
            )
        )
    return rows


def preview_frame(guests: Sequence[ParsedGuest], translate: Translator | None = None) -> pd.DataFrame:
    """Preview table as a DataFrame with translated column labels."""
    _ = translate or translator_for(DEFAULT_LANG)
    rows = preview_rows(guests, _)
    labels = {
        "position": _("preview.position"),
        "full_name": _("preview.fullName"),
        "email": _("preview.email"),
        "phone": _("preview.phone"),
        "plus_one": _("preview.plusOne"),
        "status": _("preview.status"),
    }
    data = [{labels[k]: getattr(r, k) for k in labels} for r in rows]
    return pd.DataFrame(data, columns=list(labels.values()))
