from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from wedding_planner.db.store import InMemoryRecordStore, StoreError
from wedding_planner.models.guest_record import RsvpStatus
from wedding_planner.services.committer import (
    NoValidRecordsError,
    build_payloads,
    commit_guests,
    to_payload,
)
from wedding_planner.services.normalizer import validate_row, validate_rows


def _five_with_two_invalid():
    return validate_rows([
        {"Name": "A"},
        {"Name": ""},
        {"Name": "C", "Email": "c@example.com"},
        {"Name": "D", "Email": "nope"},
        {"Name": "E", "Plus One": "x", "Plus One Name": "F"},
    ])


def test_payload_defaults_pending_and_nulls():
    guest = validate_row({"Name": "Ana"})
    payload = to_payload(guest, "w1")
    assert payload.rsvp_status is RsvpStatus.PENDING
    record = payload.to_record()
    assert record == {
        "wedding_id": "w1",
        "full_name": "Ana",
        "email": None,
        "phone": None,
        "plus_one": False,
        "plus_one_name": None,
        "dietary_preferences": None,
        "table_assignment": None,
        "rsvp_status": "pending",
    }


def test_build_payloads_filters_invalid():
    payloads = build_payloads(_five_with_two_invalid(), "w1")
    assert [p.full_name for p in payloads] == ["A", "C", "E"]
    assert all(p.wedding_id == "w1" for p in payloads)


def test_commit_sends_exactly_valid_rows_in_one_call():
    store = InMemoryRecordStore()
    inserted = commit_guests(_five_with_two_invalid(), "w1", store)
    assert inserted == 3
    assert len(store.insert_calls) == 1
    collection, batch = store.insert_calls[0]
    assert collection == "guests"
    assert len(batch) == 3
    assert batch[2]["plus_one"] is True
    assert batch[2]["plus_one_name"] == "F"


def test_commit_all_invalid_makes_no_call():
    store = MagicMock()
    guests = validate_rows([{"Name": ""}, {"Email": "bad"}, {}, {"Name": " "}, {"Name": "X", "Email": "y"}])
    with pytest.raises(NoValidRecordsError):
        commit_guests(guests, "w1", store)
    store.insert_records.assert_not_called()


def test_commit_empty_sequence_makes_no_call():
    store = MagicMock()
    with pytest.raises(NoValidRecordsError):
        commit_guests([], "w1", store)
    store.insert_records.assert_not_called()


def test_commit_store_failure_raises_store_error():
    store = InMemoryRecordStore()
    store.fail_inserts = True
    with pytest.raises(StoreError):
        commit_guests(_five_with_two_invalid(), "w1", store)
    assert store.collections["guests"] == []


def test_commit_wraps_unexpected_store_exception():
    store = MagicMock()
    store.insert_records.side_effect = RuntimeError("connection reset")
    with pytest.raises(StoreError, match="connection reset"):
        commit_guests(_five_with_two_invalid(), "w1", store)
