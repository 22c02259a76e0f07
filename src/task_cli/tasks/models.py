"""Task record and status definitions.

Tasks are persisted as JSON objects with camelCase timestamp keys::

    {
      "id": 1,
      "description": "buy milk",
      "status": "to-do",
      "createdAt": "2024-01-01T10:00:00+00:00",
      "updatedAt": "2024-01-01T10:00:00+00:00"
    }
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """Valid task statuses."""

    TODO = "to-do"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


def format_timestamp(value: datetime) -> str:
    """Render a datetime as a sortable ISO-8601 string in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``.

    Naive values are taken to be UTC.
    """
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Task:
    """A single task entry."""

    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from its persisted form.

        Raises:
            KeyError: If a field is missing.
            ValueError: If a field has an invalid value.
        """
        task_id = data["id"]
        # bool is an int subclass; reject it explicitly
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
            raise ValueError(f"invalid task id: {task_id!r}")

        description = data["description"]
        if not isinstance(description, str):
            raise ValueError(f"invalid description for task {task_id}")

        return cls(
            id=task_id,
            description=description,
            status=TaskStatus(data["status"]),
            created_at=parse_timestamp(data["createdAt"]),
            updated_at=parse_timestamp(data["updatedAt"]),
        )
