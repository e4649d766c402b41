"""Tests for the in-memory memo store."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from memos.core.errors import NotFoundError, ValidationError
from memos.core.store import MemoStore
from memos.models import format_timestamp
from memos.validation import ValidationFailure


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoStore:
    return MemoStore(clock=clock)


class TestCreate:
    def test_first_memo_gets_id_one(self, store: MemoStore):
        memo = store.create("T", "C")
        assert memo.id == 1
        assert memo.created_at == "2024-01-01T12:00:00.123Z"
        assert memo.updated_at is None

    def test_ids_strictly_increase(self, store: MemoStore):
        ids = [store.create(f"t{i}", "c").id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_stores_trimmed_values(self, store: MemoStore):
        store.create(" Hello ", " World ")
        [memo] = store.list()
        assert memo.title == "Hello"
        assert memo.content == "World"

    def test_invalid_title_raises(self, store: MemoStore):
        with pytest.raises(ValidationError) as excinfo:
            store.create("A" * 101, "valid")
        assert excinfo.value.failure is ValidationFailure.TITLE_TOO_LONG
        assert str(excinfo.value) == "title too long"

    def test_invalid_content_raises(self, store: MemoStore):
        with pytest.raises(ValidationError, match="content too long"):
            store.create("ok", "B" * 2001)

    def test_failed_create_consumes_no_id(self, store: MemoStore):
        with pytest.raises(ValidationError):
            store.create("", "content")
        assert len(store) == 0
        assert store.create("T", "C").id == 1


class TestList:
    def test_empty(self, store: MemoStore):
        assert store.list() == []

    def test_preserves_creation_order(self, store: MemoStore):
        store.create("first", "c")
        store.create("second", "c")
        store.create("third", "c")
        assert [m.title for m in store.list()] == ["first", "second", "third"]

    def test_returns_a_snapshot(self, store: MemoStore):
        snapshot = store.list()
        store.create("T", "C")
        assert snapshot == []


class TestUpdate:
    def test_overwrites_fields_and_sets_updated_at(self, store: MemoStore, clock: FakeClock):
        created = store.create("T", "C")
        clock.advance(60)
        updated = store.update(created.id, "  New title ", " New content ")
        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.title == "New title"
        assert updated.content == "New content"
        assert updated.updated_at == format_timestamp(clock.now)
        assert store.get(created.id) == updated

    def test_missing_id_raises_not_found(self, store: MemoStore):
        store.create("a", "b")
        store.create("c", "d")
        with pytest.raises(NotFoundError) as excinfo:
            store.update(999, "valid", "valid")
        assert excinfo.value.memo_id == 999

    def test_missing_id_wins_over_invalid_body(self, store: MemoStore):
        with pytest.raises(NotFoundError):
            store.update(1, "", "")

    def test_invalid_fields_leave_memo_untouched(self, store: MemoStore):
        created = store.create("T", "C")
        with pytest.raises(ValidationError, match="title required"):
            store.update(created.id, "   ", "C2")
        assert store.get(created.id) == created

    def test_does_not_reorder(self, store: MemoStore):
        first = store.create("first", "c")
        store.create("second", "c")
        store.update(first.id, "first again", "c")
        assert [m.id for m in store.list()] == [1, 2]


class TestDelete:
    def test_removes_memo(self, store: MemoStore):
        memo = store.create("T", "C")
        store.delete(memo.id)
        assert store.list() == []
        with pytest.raises(NotFoundError):
            store.get(memo.id)

    def test_second_delete_raises(self, store: MemoStore):
        store.create("T", "C")
        store.delete(1)
        with pytest.raises(NotFoundError):
            store.delete(1)

    def test_update_after_delete_raises(self, store: MemoStore):
        store.create("T", "C")
        store.delete(1)
        with pytest.raises(NotFoundError):
            store.update(1, "T", "C")

    def test_ids_not_reused(self, store: MemoStore):
        store.create("a", "b")
        store.create("c", "d")
        store.delete(2)
        assert store.create("e", "f").id == 3


def test_concurrent_creates_assign_unique_ids():
    store = MemoStore()

    def worker():
        for _ in range(50):
            store.create("t", "c")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [m.id for m in store.list()]
    assert ids == list(range(1, 401))


def test_format_timestamp_converts_to_utc():
    moment = datetime(2024, 1, 1, 21, 0, 0, 5000, tzinfo=timezone(timedelta(hours=9)))
    assert format_timestamp(moment) == "2024-01-01T12:00:00.005Z"
