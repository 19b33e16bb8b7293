"""Task processes."""

from taskcore.processes.create_task import TaskCreationService  # noqa: F401
