"""
test_receipt_store.py - In-memory score store tests.

Usage: pytest test_receipt_store.py   (or: python test_receipt_store.py)
"""

from __future__ import annotations

import os
import sys
import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import receipt_store
from models import RuleResult
from receipt_store import ScoreStore, generate_receipt_id


def test_put_then_get_round_trip() -> None:
    store = ScoreStore()
    record_id = store.put(23)
    assert store.get_points(record_id) == 23
    record = store.get(record_id)
    assert record is not None
    assert record.id == record_id
    assert record.points == 23
    assert record.created_at


def test_put_keeps_rule_breakdown() -> None:
    store = ScoreStore()
    rules = [
        RuleResult(rule="retailer_name", points=6, evidence="6 characters"),
        RuleResult(rule="odd_purchase_day", points=6, evidence="odd"),
    ]
    record = store.get(store.put(12, rules))
    assert record is not None
    assert record.rules == tuple(rules)


def test_zero_points_are_stored() -> None:
    store = ScoreStore()
    assert store.get_points(store.put(0)) == 0


def test_unknown_id_is_none() -> None:
    store = ScoreStore()
    store.put(5)
    assert store.get("does-not-exist") is None
    assert store.get_points(str(uuid.uuid4())) is None
    assert "does-not-exist" not in store


def test_negative_points_rejected() -> None:
    with pytest.raises(ValueError):
        ScoreStore().put(-1)


def test_records_are_immutable() -> None:
    store = ScoreStore()
    record = store.get(store.put(10))
    with pytest.raises(ValidationError):
        record.points = 99  # type: ignore[misc]
    assert store.get_points(record.id) == 10


def test_generated_ids_are_uuid4() -> None:
    record_id = generate_receipt_id()
    assert uuid.UUID(record_id).version == 4


def test_each_put_gets_a_new_id() -> None:
    store = ScoreStore()
    ids = {store.put(7) for _ in range(50)}
    assert len(ids) == 50
    assert len(store) == 50


def test_id_collision_is_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    store = ScoreStore()
    issued = iter(["same-id", "same-id", "other-id"])
    monkeypatch.setattr(receipt_store, "generate_receipt_id", lambda: next(issued))

    assert store.put(1) == "same-id"
    assert store.put(2) == "other-id"
    assert store.get_points("same-id") == 1
    assert store.get_points("other-id") == 2


def test_concurrent_puts_do_not_collide() -> None:
    store = ScoreStore()
    with ThreadPoolExecutor(max_workers=16) as pool:
        ids = list(pool.map(store.put, range(500)))

    assert len(set(ids)) == 500
    assert len(store) == 500
    assert [store.get_points(record_id) for record_id in ids] == list(range(500))


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
