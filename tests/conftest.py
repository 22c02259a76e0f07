"""Shared test fixtures for task-cli tests.

Provides:
- Isolated settings pointing at a temporary workspace
- A controllable clock for deterministic timestamps
- A recording console and a ready-to-run CLI app
"""

import io
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest
import structlog
from rich.console import Console

from task_cli import config
from task_cli.cli.app import TaskCLIApp
from task_cli.config import TaskSettings, set_context_settings
from task_cli.tasks.store import TaskStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class RecordingConsole:
    """Rich console writing into a buffer that tests can inspect."""

    def __init__(self) -> None:
        self.buffer = io.StringIO()
        self.console = Console(file=self.buffer, width=200, color_system=None)

    @property
    def text(self) -> str:
        return self.buffer.getvalue()

    def reset(self) -> None:
        self.buffer.seek(0)
        self.buffer.truncate()


@pytest.fixture(autouse=True)
def isolated_env(
    tmp_path: Path,
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Keep tests away from real config files and TASK_CLI_* variables."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for var in [
        "TASK_CLI_WORKSPACE_DIR",
        "TASK_CLI_TASKS_FILE",
        "TASK_CLI_LOG_LEVEL",
        "TASK_CLI_LOG_FORMAT",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config, "_settings_instance", None)
    yield
    set_context_settings(None)
    # configure_logging binds the stderr stream of the current test
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def settings(temp_workspace: Path) -> TaskSettings:
    return TaskSettings(workspace_dir=temp_workspace)


@pytest.fixture
def tasks_path(settings: TaskSettings) -> Path:
    return settings.tasks_path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(tasks_path: Path, clock: FakeClock) -> TaskStore:
    """An empty, loaded store backed by a file that does not exist yet."""
    return TaskStore(tasks_path, clock=clock).load()


@pytest.fixture
def output() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def app(settings: TaskSettings, output: RecordingConsole, clock: FakeClock) -> TaskCLIApp:
    return TaskCLIApp(
        settings=settings,
        console=output.console,
        store=TaskStore.from_settings(settings, clock=clock),
    )
