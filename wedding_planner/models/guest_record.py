from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

"""Persisted guest record shapes.

The data store owns guest rows; this package only creates them through the
Batch Committer. ``GuestInsertPayload`` mirrors the insert shape of the
``guests`` collection.
"""

__all__ = [
    "RsvpStatus",
    "GuestInsertPayload",
    "GUESTS_COLLECTION",
]

GUESTS_COLLECTION = "guests"


class RsvpStatus(Enum):
    """Attendance response state of a guest.

    New guests always start as PENDING; the other states are set by RSVP
    updates outside the import flow.
    """
    PENDING = "pending"
    ATTENDING = "attending"
    NOT_ATTENDING = "not_attending"
    MAYBE = "maybe"


@dataclass(frozen=True)
class GuestInsertPayload:
    """Tenant-scoped insert payload for one guest."""
    wedding_id: str
    full_name: str
    email: str | None
    phone: str | None
    plus_one: bool
    plus_one_name: str | None
    dietary_preferences: str | None
    table_assignment: str | None
    rsvp_status: RsvpStatus = RsvpStatus.PENDING

    def to_record(self) -> dict[str, Any]:
        """Column -> value mapping as sent to the store."""
        record = asdict(self)
        record["rsvp_status"] = self.rsvp_status.value
        return record
