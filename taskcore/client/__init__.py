"""Client-side validation and transport."""

from taskcore.client.task_client import TaskClient, TaskFormValidator  # noqa: F401

__all__ = ["TaskClient", "TaskFormValidator"]
