"""In-process storage."""

from taskcore.db.task_store import TaskStore  # noqa: F401
