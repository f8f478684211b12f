"""
Unit tests for the in-memory Storage.

Covers:
    - insert (new record shape, code collision)
    - insert_if_url_absent (create, dedupe, collision)
    - lookup / find_by_url (found & not found)
    - increment_access (valid & missing, immutability of earlier snapshots)
    - list_all snapshots
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from url_shortener.errors import CodeCollisionError
from url_shortener.storage.models import URLMapping


def test_insert_and_lookup(storage):
    before = datetime.now(timezone.utc)
    mapping = storage.insert("abc123", "http://example.com")

    assert mapping.short_code == "abc123"
    assert mapping.original_url == "http://example.com"
    assert mapping.access_count == 0
    assert mapping.created_at.tzinfo is not None
    assert before <= mapping.created_at <= datetime.now(timezone.utc)
    assert storage.lookup("abc123") == mapping


def test_insert_rejects_taken_code(storage):
    storage.insert("abc123", "http://one.com")
    with pytest.raises(CodeCollisionError):
        storage.insert("abc123", "http://two.com")
    assert storage.lookup("abc123").original_url == "http://one.com"
    assert storage.find_by_url("http://two.com") is None
    assert len(storage) == 1


def test_lookup_not_found(storage):
    assert storage.lookup("missing") is None


def test_find_by_url(storage):
    storage.insert("abc123", "http://example.com")
    assert storage.find_by_url("http://example.com").short_code == "abc123"
    assert storage.find_by_url("http://notfound.com") is None


def test_insert_if_url_absent_creates_then_dedupes(storage):
    first, created = storage.insert_if_url_absent("aaaaaa", "http://example.com")
    assert created is True

    second, created = storage.insert_if_url_absent("bbbbbb", "http://example.com")
    assert created is False
    assert second == first
    assert storage.lookup("bbbbbb") is None
    assert len(storage) == 1


def test_insert_if_url_absent_collision_on_other_url(storage):
    storage.insert("aaaaaa", "http://one.com")
    with pytest.raises(CodeCollisionError) as exc:
        storage.insert_if_url_absent("aaaaaa", "http://two.com")
    assert exc.value.short_code == "aaaaaa"
    assert len(storage) == 1


def test_increment_access(storage):
    original = storage.insert("abc123", "http://example.com")
    updated = storage.increment_access("abc123")

    assert updated.access_count == 1
    assert storage.lookup("abc123").access_count == 1
    # earlier snapshot is untouched
    assert original.access_count == 0
    assert updated.created_at == original.created_at


def test_increment_access_missing(storage):
    assert storage.increment_access("nope") is None
    assert len(storage) == 0


def test_records_are_immutable(storage):
    mapping = storage.insert("abc123", "http://example.com")
    with pytest.raises(FrozenInstanceError):
        mapping.access_count = 99  # type: ignore[misc]


def test_list_all_is_a_snapshot(storage):
    storage.insert("a1a1a1", "http://a.com")
    storage.insert("b2b2b2", "http://b.com")

    snapshot = storage.list_all()
    storage.insert("c3c3c3", "http://c.com")

    assert {m.short_code for m in snapshot} == {"a1a1a1", "b2b2b2"}
    assert len(storage.list_all()) == 3


def test_to_dict_shape():
    created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    mapping = URLMapping("abc123", "http://example.com", created, 7)
    assert mapping.to_dict() == {
        "short_code": "abc123",
        "original_url": "http://example.com",
        "created_at": "2024-01-02T03:04:05+00:00",
        "access_count": 7,
    }
