"""Errors raised by the task store and the command dispatcher."""

from pathlib import Path


class TaskCLIError(Exception):
    """Base class for task-cli errors."""


class StorageError(TaskCLIError):
    """Raised when the tasks file cannot be read, written or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class TaskNotFoundError(TaskCLIError):
    """Raised when an operation references a task id that does not exist."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found.")


class InvalidCommandError(TaskCLIError):
    """Raised for an unknown verb or malformed command arguments."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message or "Invalid command")
