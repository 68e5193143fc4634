from __future__ import annotations

import logging
from collections.abc import Sequence

from ..db.store import RecordStore, StoreError
from ..models.guest_record import GUESTS_COLLECTION, GuestInsertPayload, RsvpStatus
from ..models.parsed_guest import ParsedGuest

"""Batch committer: persist the valid guests of an import in one call.

All-or-nothing from the caller's point of view: either the single batch
insert succeeds or StoreError is raised and nothing is assumed written.
"""

__all__ = [
    "NoValidRecordsError",
    "to_payload",
    "build_payloads",
    "commit_guests",
]

logger = logging.getLogger(__name__)


class NoValidRecordsError(Exception):
    """Raised when a commit is attempted with zero valid guests."""


def to_payload(guest: ParsedGuest, wedding_id: str) -> GuestInsertPayload:
    return GuestInsertPayload(
        wedding_id=wedding_id,
        full_name=guest.full_name,
        email=guest.email or None,
        phone=guest.phone or None,
        plus_one=guest.plus_one,
        plus_one_name=guest.plus_one_name or None,
        dietary_preferences=guest.dietary_preferences or None,
        table_assignment=guest.table_assignment or None,
        rsvp_status=RsvpStatus.PENDING,
    )


def build_payloads(guests: Sequence[ParsedGuest], wedding_id: str) -> list[GuestInsertPayload]:
    """Payloads for the valid guests only, in preview order."""
    return [to_payload(g, wedding_id) for g in guests if g.is_valid]


def commit_guests(guests: Sequence[ParsedGuest], wedding_id: str, store: RecordStore) -> int:
    """Insert every valid guest of ``guests`` for ``wedding_id``.

    Returns:
        Number of inserted guests

    Raises:
        NoValidRecordsError: no valid guest; the store is not called
        StoreError: the batch insert failed
    """
    payloads = build_payloads(guests, wedding_id)
    if not payloads:
        raise NoValidRecordsError("no valid guests to import")

    logger.debug("wedding=%s committing %d of %d guests", wedding_id, len(payloads), len(guests))
    try:
        inserted = store.insert_records(GUESTS_COLLECTION, [p.to_record() for p in payloads])
    except StoreError:
        raise
    except Exception as e:
        raise StoreError(str(e)) from e
    return inserted
