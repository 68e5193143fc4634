from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..db.store import RecordStore

"""Application state for one wedding.

Views that show tenant data receive a WeddingState by reference. Mutating
operations (such as a guest import) call ``refresh()`` afterwards, which
re-fetches every tenant-scoped collection.
"""

__all__ = [
    "WeddingState",
    "COLLECTION_ORDER",
]

logger = logging.getLogger(__name__)

# collection -> ordering column (None = store order)
COLLECTION_ORDER: dict[str, str | None] = {
    "categories": "sort_order",
    "tasks": "due_date",
    "guests": "full_name",
    "budget_items": None,
    "vendors": None,
    "timeline_events": None,
}


@dataclass
class WeddingState:
    store: RecordStore
    wedding_id: str
    wedding: dict[str, Any] | None = None
    categories: list[dict[str, Any]] = field(default_factory=list)
    tasks: list[dict[str, Any]] = field(default_factory=list)
    guests: list[dict[str, Any]] = field(default_factory=list)
    budget_items: list[dict[str, Any]] = field(default_factory=list)
    vendors: list[dict[str, Any]] = field(default_factory=list)
    timeline_events: list[dict[str, Any]] = field(default_factory=list)
    loading: bool = False

    def refresh(self) -> None:
        """Re-fetch the wedding and all of its collections.

        When the wedding record does not exist the collections are cleared.
        Store errors propagate; ``loading`` is reset either way.
        """
        self.loading = True
        try:
            found = self.store.select_records("weddings", {"id": self.wedding_id})
            self.wedding = found[0] if found else None
            for name, order_by in COLLECTION_ORDER.items():
                if self.wedding is None:
                    setattr(self, name, [])
                    continue
                setattr(
                    self,
                    name,
                    self.store.select_records(name, {"wedding_id": self.wedding_id}, order_by=order_by),
                )
        finally:
            self.loading = False
        if self.wedding is None:
            logger.warning("wedding not found: %s", self.wedding_id)
        else:
            logger.debug("wedding=%s refreshed guests=%d tasks=%d", self.wedding_id, len(self.guests), len(self.tasks))
