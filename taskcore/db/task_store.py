"""
In-process task store — the authoritative collection and its id counter.

Nothing here survives a restart. Identifier assignment and the append are
done under one lock, so concurrent creates see strictly increasing ids and
no caller can observe an id that is not yet in the collection.
"""

from __future__ import annotations

import logging
import threading
from typing import List

from taskcore.engine.clock import Clock, utc_now
from taskcore.records.task import Task, TaskDraft, TaskStatus

logger = logging.getLogger("taskcore.db.task_store")


class TaskStore:
    """Owns the created tasks and mints their identifiers."""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._lock = threading.Lock()
        self._tasks: List[Task] = []
        self._next_id = 1

    def create(self, draft: TaskDraft, owner_id: int) -> Task:
        """
        Persist an already-validated draft.

        Has no failure mode of its own: every rejectable condition is caught
        by the rule set before this is called.
        """
        with self._lock:
            task = Task(
                id=self._next_id,
                owner_id=owner_id,
                title=draft.title,
                description=draft.description,
                due_date=draft.due_date,
                priority=draft.priority,
                status=TaskStatus.PENDING,
                created_at=self._clock(),
                completed_at=None,
            )
            self._tasks.append(task)
            self._next_id += 1

        logger.debug("Stored task %d for owner %d", task.id, owner_id)
        return task

    def list_all(self) -> List[Task]:
        """Diagnostic: every task in insertion order (a copy)."""
        with self._lock:
            return list(self._tasks)

    @property
    def next_identifier(self) -> int:
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
