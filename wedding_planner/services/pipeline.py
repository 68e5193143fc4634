from __future__ import annotations

import logging

from ..excel.reader import read_guest_sheet
from ..i18n.messages import Translator
from ..models.parsed_guest import ParsedGuest
from .normalizer import validate_row
from .progress import ProgressTracker

"""Decode + validate in one pass.

Turns the bytes of an uploaded workbook into the ordered ParsedGuest sequence
shown in the preview. A ParseError from the decoder propagates unchanged.
"""

logger = logging.getLogger(__name__)


def parse_guest_file(data: bytes, translate: Translator | None = None) -> list[ParsedGuest]:
    """Decode the first sheet of ``data`` and validate every row in order."""
    sheet = read_guest_sheet(data)
    logger.debug("sheet=%s columns=%s rows=%d", sheet.sheet_name, sheet.columns, len(sheet.rows))

    guests: list[ParsedGuest] = []
    valid = 0
    with ProgressTracker(len(sheet.rows)) as progress:
        for row in sheet.rows:
            guest = validate_row(row, translate)
            guests.append(guest)
            if guest.is_valid:
                valid += 1
            progress.advance()
            progress.set_postfix(valid=valid, invalid=len(guests) - valid)
    return guests
