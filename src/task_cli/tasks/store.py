"""File-based task store.

All tasks live in a single JSON file holding an array of task records.
The whole file is read once at startup and rewritten atomically after
every mutation; there is no append log and no write batching.
"""

import json
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterator

from task_cli.logging import Loggers
from task_cli.tasks.errors import StorageError, TaskNotFoundError
from task_cli.tasks.models import Task, TaskStatus

if TYPE_CHECKING:
    from task_cli.config import TaskSettings

logger = Loggers.store()

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def atomic_write_json(path: Path, data: Any, indent: int = 2) -> None:
    """Write JSON data to a file atomically.

    Writes to a temporary file next to the target, then renames it over
    the target so a crash mid-write never leaves a truncated file. The
    temporary file is removed again if either step fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_text(
            json.dumps(data, indent=indent, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


class TaskStore:
    """Ordered, persistent collection of tasks.

    Example:
        >>> store = TaskStore(Path("tasks.json")).load()
        >>> task_id = store.add("buy milk")
        >>> store.set_status(task_id, TaskStatus.DONE)
        >>> store.list(status="done")
    """

    def __init__(self, path: Path | str, clock: Clock | None = None) -> None:
        self._path = Path(path)
        self._clock = clock or utc_now
        self._tasks: list[Task] = []

    @classmethod
    def from_settings(cls, settings: "TaskSettings", clock: Clock | None = None) -> "TaskStore":
        return cls(settings.tasks_path, clock=clock)

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- persistence ----

    def load(self) -> "TaskStore":
        """Read the tasks file into memory.

        A missing or empty file yields an empty store.

        Raises:
            StorageError: If the file cannot be read or its content is malformed.
                The in-memory tasks are left untouched.
        """
        if not self._path.exists():
            logger.warning(
                "tasks_file_missing",
                path=str(self._path),
                detail="starting with an empty task list",
            )
            self._tasks = []
            return self

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(self._path, f"cannot read tasks file: {e}") from e

        if not raw.strip():
            self._tasks = []
            return self

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(self._path, f"invalid JSON: {e}") from e

        self._tasks = self._parse_records(data)
        logger.debug("tasks_loaded", path=str(self._path), total=len(self._tasks))
        return self

    def _parse_records(self, data: Any) -> list[Task]:
        if not isinstance(data, list):
            raise StorageError(self._path, "expected a JSON array of tasks")

        tasks: list[Task] = []
        seen: set[int] = set()
        for index, record in enumerate(data):
            if not isinstance(record, dict):
                raise StorageError(self._path, f"record {index} is not an object")
            try:
                task = Task.from_dict(record)
            except KeyError as e:
                raise StorageError(
                    self._path, f"record {index} is missing field {e.args[0]!r}"
                ) from e
            except ValueError as e:
                raise StorageError(self._path, f"record {index}: {e}") from e
            if task.id in seen:
                raise StorageError(self._path, f"duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def save(self) -> None:
        """Rewrite the whole tasks file.

        Raises:
            StorageError: If the file cannot be written.
        """
        try:
            atomic_write_json(self._path, [task.to_dict() for task in self._tasks])
        except OSError as e:
            raise StorageError(self._path, f"cannot write tasks file: {e}") from e
        logger.debug("tasks_saved", path=str(self._path), total=len(self._tasks))

    # ---- queries ----

    def list(self, status: TaskStatus | str | None = None) -> list[Task]:
        """List tasks in insertion order, optionally filtered by status.

        Raises:
            ValueError: If status is not a known status value.
        """
        tasks = self._tasks
        if status is not None:
            wanted = TaskStatus(status)
            tasks = [t for t in tasks if t.status == wanted]
        return [replace(t) for t in tasks]

    def get(self, task_id: int) -> Task:
        """Get a copy of a task by id."""
        return replace(self._find(task_id))

    def next_id(self) -> int:
        """Id the next added task will receive."""
        if not self._tasks:
            return 1
        return max(t.id for t in self._tasks) + 1

    def _find(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def _touch(self, task: Task) -> None:
        task.updated_at = max(self._clock(), task.updated_at)

    @contextmanager
    def _persisting(self) -> Iterator[None]:
        """Save after the wrapped mutation; undo it in memory if saving fails."""
        snapshot = [replace(t) for t in self._tasks]
        yield
        try:
            self.save()
        except StorageError:
            self._tasks = snapshot
            raise

    # ---- mutations ----

    def add(self, description: str) -> int:
        """Create a task with status to-do and persist it.

        Returns:
            The id of the new task.
        """
        now = self._clock()
        task = Task(
            id=self.next_id(),
            description=description,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        with self._persisting():
            self._tasks.append(task)
        logger.info("task_added", task_id=task.id)
        return task.id

    def update(self, task_id: int, description: str) -> None:
        """Replace a task's description and persist."""
        task = self._find(task_id)
        with self._persisting():
            task.description = description
            self._touch(task)
        logger.info("task_updated", task_id=task_id)

    def set_status(self, task_id: int, status: TaskStatus | str) -> None:
        """Change a task's status and persist."""
        new_status = TaskStatus(status)
        task = self._find(task_id)
        with self._persisting():
            task.status = new_status
            self._touch(task)
        logger.info("task_status_changed", task_id=task_id, status=new_status.value)

    def delete(self, task_id: int) -> None:
        """Remove a task and persist."""
        task = self._find(task_id)
        with self._persisting():
            self._tasks = [t for t in self._tasks if t.id != task.id]
        logger.info("task_deleted", task_id=task_id)
