"""Domain models for the guest import pipeline.

Row-level guests, insert payloads, session states and run results.
"""

from .guest_record import GUESTS_COLLECTION, GuestInsertPayload, RsvpStatus
from .import_result import ImportResult
from .parsed_guest import ParsedGuest, RawRow
from .session_state import Closed, Importing, Preview, Processing, SessionState, Upload

__all__ = [
    # Import rows
    "RawRow",
    "ParsedGuest",
    # Persisted shape
    "GUESTS_COLLECTION",
    "GuestInsertPayload",
    "RsvpStatus",
    # Session
    "SessionState",
    "Upload",
    "Processing",
    "Preview",
    "Importing",
    "Closed",
    # Results
    "ImportResult",
]
