"""task-cli - a command-line task tracker.

Tasks are kept in a single JSON file and managed through a small set of
verbs (add, list, update, delete, mark-in-progress, mark-done).

The core is TaskStore, which owns every task record, loads the file once
per invocation and rewrites it after each change. TaskCLIApp is a thin
dispatcher that maps command-line verbs onto store operations.
"""

from task_cli.cli.app import TaskCLIApp
from task_cli.config import (
    SettingsContext,
    TaskSettings,
    get_settings,
    reload_settings,
    set_settings,
)
from task_cli.tasks import (
    InvalidCommandError,
    StorageError,
    Task,
    TaskCLIError,
    TaskNotFoundError,
    TaskStatus,
    TaskStore,
)

__all__ = [
    # CLI
    "TaskCLIApp",
    # Store
    "Task",
    "TaskStatus",
    "TaskStore",
    # Errors
    "TaskCLIError",
    "StorageError",
    "TaskNotFoundError",
    "InvalidCommandError",
    # Settings
    "TaskSettings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "reload_settings",
]

__version__ = "0.1.0"
