"""taskcore records."""

from taskcore.records.task import Priority, Task, TaskDraft, TaskStatus  # noqa: F401

__all__ = ["Priority", "Task", "TaskDraft", "TaskStatus"]
