from __future__ import annotations

from dataclasses import dataclass

from .parsed_guest import ParsedGuest

"""Import session states.

The dialog-scoped session is a small state machine:

    Upload -> Processing -> Preview -> Importing -> Closed
                  |            |           |
                  +-> Upload   +-> Upload  +-> Preview (store failure)

Each state is its own frozen dataclass and carries only the data that is
meaningful in that state, so e.g. an Importing state without guests cannot be
built. ``Closed`` is terminal.
"""

__all__ = [
    "Upload",
    "Processing",
    "Preview",
    "Importing",
    "Closed",
    "SessionState",
]


@dataclass(frozen=True)
class Upload:
    """Waiting for a file."""


@dataclass(frozen=True)
class Processing:
    """Decoding and validating ``filename``."""
    filename: str


@dataclass(frozen=True)
class Preview:
    """Parsed rows awaiting confirmation."""
    filename: str
    guests: tuple[ParsedGuest, ...]


@dataclass(frozen=True)
class Importing:
    """Batch insert in flight for the rows of a preview."""
    filename: str
    guests: tuple[ParsedGuest, ...]


@dataclass(frozen=True)
class Closed:
    """Session ended (committed or dismissed)."""


SessionState = Upload | Processing | Preview | Importing | Closed
