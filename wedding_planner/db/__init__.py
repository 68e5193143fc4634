"""Data-store access: tenant-scoped record collections over Postgres."""

from .store import COLLECTIONS, InMemoryRecordStore, PostgresRecordStore, RecordStore, StoreError

__all__ = [
    "COLLECTIONS",
    "InMemoryRecordStore",
    "PostgresRecordStore",
    "RecordStore",
    "StoreError",
]
