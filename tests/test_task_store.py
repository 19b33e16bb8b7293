"""Unit tests for taskcore.db.task_store — identity, lifecycle fields, locking."""

import threading
from datetime import date

from taskcore.db.task_store import TaskStore
from taskcore.records.task import Priority, TaskDraft, TaskStatus

from conftest import NOW


def _draft(title="Write report", **kw):
    return TaskDraft(title=title, priority=kw.pop("priority", Priority.MEDIUM), **kw)


class TestTaskStore:
    def test_first_id_is_one(self, store):
        task = store.create(_draft(), owner_id=1)
        assert task.id == 1
        assert store.next_identifier == 2

    def test_system_fields(self, store):
        task = store.create(_draft(due_date=date(2026, 4, 1)), owner_id=7)
        assert task.owner_id == 7
        assert task.status is TaskStatus.PENDING
        assert task.created_at == NOW
        assert task.completed_at is None
        assert task.due_date == date(2026, 4, 1)

    def test_ids_strictly_increasing(self, store):
        ids = [store.create(_draft(f"Task {i}"), owner_id=1).id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_list_all_insertion_order(self, store):
        store.create(_draft("First"), owner_id=1)
        store.create(_draft("Second"), owner_id=1)
        assert [t.title for t in store.list_all()] == ["First", "Second"]

    def test_list_all_returns_copy(self, store):
        store.create(_draft(), owner_id=1)
        snapshot = store.list_all()
        snapshot.clear()
        assert len(store) == 1

    def test_empty_store(self):
        store = TaskStore()
        assert len(store) == 0
        assert store.list_all() == []
        assert store.next_identifier == 1

    def test_stores_are_independent(self, clock):
        a, b = TaskStore(clock=clock), TaskStore(clock=clock)
        a.create(_draft(), owner_id=1)
        assert b.create(_draft(), owner_id=1).id == 1

    def test_concurrent_creates_unique_ids(self, store):
        def worker():
            for _ in range(50):
                store.create(_draft(), owner_id=1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [t.id for t in store.list_all()]
        assert ids == list(range(1, 401))
