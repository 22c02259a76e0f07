"""Task records and their persistent store.

Example:
    >>> store = TaskStore(Path("tasks.json")).load()
    >>> task_id = store.add("write report")
    >>> store.set_status(task_id, TaskStatus.IN_PROGRESS)
    >>> store.list(status="in-progress")
"""

from task_cli.tasks.errors import (
    InvalidCommandError,
    StorageError,
    TaskCLIError,
    TaskNotFoundError,
)
from task_cli.tasks.models import Task, TaskStatus
from task_cli.tasks.store import TaskStore

__all__ = [
    "InvalidCommandError",
    "StorageError",
    "Task",
    "TaskCLIError",
    "TaskNotFoundError",
    "TaskStatus",
    "TaskStore",
]
