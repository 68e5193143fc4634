from __future__ import annotations

import copy
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from .batch_insert import BatchInsertError, BatchMetrics, batch_insert

"""Tenant-scoped record store.

The hosted data store is Postgres. Collections are tables carrying a
``wedding_id`` column (``weddings`` itself is keyed by ``id``). The store
exposes only what the application needs: one atomic batch insert and a
filtered, ordered select.

``InMemoryRecordStore`` backs mock mode (DISABLE_DB_CONNECT=1) and tests.
"""

__all__ = [
    "COLLECTIONS",
    "StoreError",
    "RecordStore",
    "PostgresRecordStore",
    "InMemoryRecordStore",
]

logger = logging.getLogger(__name__)

COLLECTIONS = frozenset(
    {
        "weddings",
        "guests",
        "tasks",
        "categories",
        "budget_items",
        "vendors",
        "timeline_events",
    }
)

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


class StoreError(Exception):
    """A store call failed; no partial mutation is assumed."""


class RecordStore(Protocol):
    def insert_records(self, collection: str, payloads: Sequence[Mapping[str, Any]]) -> int: ...

    def select_records(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]: ...


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise StoreError(f"unknown collection: {collection}")


def _log_batch_metrics(metrics: BatchMetrics) -> None:
    logger.debug("batch_size=%d elapsed_sec=%.4f", metrics.batch_size, metrics.elapsed_seconds)


def _check_identifier(name: str) -> None:
    if not _IDENTIFIER.match(name):
        raise StoreError(f"invalid column name: {name!r}")


class PostgresRecordStore:
    """RecordStore over a psycopg2 cursor.

    Each insert runs in its own transaction: BEGIN, one execute_values batch,
    COMMIT. Any failure rolls back and surfaces as StoreError.
    """

    def __init__(self, cursor: Any, page_size: int = 1000) -> None:
        self.cursor = cursor
        self.page_size = page_size

    def insert_records(self, collection: str, payloads: Sequence[Mapping[str, Any]]) -> int:
        _check_collection(collection)
        if not payloads:
            return 0
        columns = list(payloads[0].keys())
        for c in columns:
            _check_identifier(c)
        rows = [[p.get(c) for c in columns] for p in payloads]

        try:
            self.cursor.execute("BEGIN")
            result = batch_insert(
                self.cursor,
                table=collection,
                columns=columns,
                rows=rows,
                page_size=self.page_size,
                metrics_callback=_log_batch_metrics,
            )
            self.cursor.execute("COMMIT")
        except Exception as e:
            try:
                self.cursor.execute("ROLLBACK")
            except Exception:
                logger.debug("rollback failed after insert error", exc_info=True)
            if isinstance(e, BatchInsertError):
                raise StoreError(str(e)) from e
            raise StoreError(f"insert into {collection} failed: {e}") from e

        logger.debug("collection=%s inserted_rows=%d", collection, result.inserted_rows)
        return result.inserted_rows

    def select_records(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        _check_collection(collection)
        filters = dict(filters or {})
        sql = f"SELECT * FROM {collection}"
        if filters:
            for c in filters:
                _check_identifier(c)
            sql += " WHERE " + " AND ".join(f'"{c}" = %s' for c in filters)
        if order_by:
            _check_identifier(order_by)
            sql += f' ORDER BY "{order_by}"'
        try:
            self.cursor.execute(sql, tuple(filters.values()))
            fetched = self.cursor.fetchall()
        except Exception as e:
            raise StoreError(f"select from {collection} failed: {e}") from e
        names = [d[0] for d in self.cursor.description]
        return [dict(zip(names, r, strict=False)) for r in fetched]


class InMemoryRecordStore:
    """List-backed RecordStore (mock mode / tests).

    ``fail_inserts`` makes every insert raise StoreError without storing
    anything, which is how a store outage is simulated.
    """

    def __init__(self, seed: Mapping[str, Sequence[Mapping[str, Any]]] | None = None) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {c: [] for c in COLLECTIONS}
        for name, records in (seed or {}).items():
            _check_collection(name)
            self.collections[name].extend(dict(r) for r in records)
        self.insert_calls: list[tuple[str, list[dict[str, Any]]]] = []
        self.fail_inserts = False

    def insert_records(self, collection: str, payloads: Sequence[Mapping[str, Any]]) -> int:
        _check_collection(collection)
        batch = [dict(p) for p in payloads]
        self.insert_calls.append((collection, copy.deepcopy(batch)))
        if self.fail_inserts:
            raise StoreError(f"insert into {collection} failed: store unavailable")
        self.collections[collection].extend(batch)
        return len(batch)

    def select_records(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        _check_collection(collection)
        filters = filters or {}
        found = [
            dict(r)
            for r in self.collections[collection]
            if all(r.get(k) == v for k, v in filters.items())
        ]
        if order_by:
            # NULLs last, as Postgres does for ascending order
            found.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by) if r.get(order_by) is not None else 0))
        return found
