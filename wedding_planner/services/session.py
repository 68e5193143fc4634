from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import cast

from ..db.store import RecordStore, StoreError
from ..excel.reader import ParseError, UnsupportedFormatError, ensure_supported_format
from ..excel.template import write_template
from ..i18n.messages import DEFAULT_LANG, translator_for
from ..models.parsed_guest import ParsedGuest
from ..models.session_state import Closed, Importing, Preview, Processing, SessionState, Upload
from .committer import NoValidRecordsError, commit_guests
from .notifications import Notifier
from .pipeline import parse_guest_file
from .preview import EMPTY_SUMMARY, PreviewSummary, summarize

"""Guest import session.

One session covers one dialog lifetime: a file is selected, decoded and
validated, reviewed, then either committed or reset. Steps never overlap;
every failure is reported through the notifier and leaves the session in a
state from which the user can continue.
"""

__all__ = [
    "SessionStateError",
    "ImportSession",
]

logger = logging.getLogger(__name__)


class SessionStateError(Exception):
    """Raised when an action is not allowed in the current session state."""


class ImportSession:
    """State machine driving one guest import for ``wedding_id``.

    ``on_import_complete`` is called after a successful commit so the host can
    refresh its guest collection.
    """

    def __init__(
        self,
        wedding_id: str,
        store: RecordStore,
        notifier: Notifier,
        on_import_complete: Callable[[], None] | None = None,
        lang: str = DEFAULT_LANG,
    ) -> None:
        self.wedding_id = wedding_id
        self.store = store
        self.notifier = notifier
        self.on_import_complete = on_import_complete
        self._t = translator_for(lang)
        self._state: SessionState = Upload()
        self._lock = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def guests(self) -> tuple[ParsedGuest, ...]:
        if isinstance(self._state, (Preview, Importing)):
            return self._state.guests
        return ()

    @property
    def summary(self) -> PreviewSummary:
        if isinstance(self._state, (Preview, Importing)):
            return summarize(self._state.guests)
        return EMPTY_SUMMARY

    @property
    def valid_count(self) -> int:
        return self.summary.valid_count

    @property
    def invalid_count(self) -> int:
        return self.summary.invalid_count

    @property
    def can_commit(self) -> bool:
        return isinstance(self._state, Preview) and self.valid_count > 0

    def _require(self, *allowed: type) -> None:
        if not isinstance(self._state, allowed):
            names = ", ".join(a.__name__ for a in allowed)
            raise SessionStateError(f"action requires state {names}, session is {type(self._state).__name__}")

    def select_file(self, filename: str, data: bytes) -> SessionState:
        """Decode and validate an uploaded file.

        Unsupported extensions are rejected before decoding; an unreadable
        workbook returns the session to Upload. Both cases notify the user.
        """
        self._require(Upload)
        try:
            ensure_supported_format(filename)
        except UnsupportedFormatError as e:
            logger.debug("rejected file=%s: %s", filename, e)
            self.notifier.error(self._t("guests.import.errors.invalidFormat"))
            return self._state

        processing = Processing(filename)
        with self._lock:
            self._require(Upload)
            self._state = processing
        try:
            guests = parse_guest_file(data, self._t)
        except ParseError as e:
            logger.debug("parse failed file=%s: %s", filename, e)
            if self._swap(processing, Upload()):
                self.notifier.error(self._t("guests.import.errors.parseError"))
            return self._state

        if not self._swap(processing, Preview(filename, tuple(guests))):
            # Closed while decoding: the result is dropped
            logger.debug("session left Processing during decode; discarding file=%s", filename)
        return self._state

    def select_path(self, path: Path) -> SessionState:
        """Convenience for hosts that receive a path instead of bytes."""
        self._require(Upload)
        try:
            ensure_supported_format(path.name)
        except UnsupportedFormatError:
            self.notifier.error(self._t("guests.import.errors.invalidFormat"))
            return self._state
        return self.select_file(path.name, path.read_bytes())

    def reset(self) -> SessionState:
        """Discard the current file and rows; back to Upload."""
        with self._lock:
            self._require(Upload, Preview)
            self._state = Upload()
            return self._state

    def commit(self) -> int:
        """Insert the valid guests of the preview in one batch.

        Returns:
            Number of inserted guests; 0 when nothing was committed
        """
        with self._lock:
            self._require(Preview)
            preview = cast(Preview, self._state)
            importing = Importing(preview.filename, preview.guests)
            self._state = importing

        try:
            inserted = commit_guests(preview.guests, self.wedding_id, self.store)
        except NoValidRecordsError:
            if self._swap(importing, preview):
                self.notifier.error(self._t("guests.import.errors.noValidGuests"))
            return 0
        except StoreError as e:
            logger.debug("commit failed wedding=%s: %s", self.wedding_id, e)
            if self._swap(importing, preview):
                self.notifier.error(self._t("guests.import.errors.importError"))
            return 0

        if not self._swap(importing, Closed()):
            # Closed while the insert was in flight
            logger.debug("session closed during commit; %d guests inserted, result discarded", inserted)
            return inserted

        self.notifier.success(self._t("guests.import.success", count=inserted))
        if self.on_import_complete is not None:
            self.on_import_complete()
        return inserted

    def _swap(self, expected: SessionState, new: SessionState) -> bool:
        """Replace ``expected`` by ``new`` unless the session moved on meanwhile."""
        with self._lock:
            if self._state is not expected:
                return False
            self._state = new
            return True

    def close(self) -> None:
        """End the session; any in-flight result is ignored afterwards."""
        with self._lock:
            self._state = Closed()

    def download_template(self, destination: Path, language: str = "es") -> Path:
        return write_template(destination, language)
