"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from task_cli.config import (
    TaskSettings,
    SettingsContext,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
)


class TestTaskSettings:
    """Tests for TaskSettings class."""

    def test_default_values(self):
        """Test default settings values."""
        settings = TaskSettings()

        assert settings.app_name == "task_cli"
        assert settings.workspace_dir == Path.home() / ".task_cli"
        assert settings.tasks_file == Path("tasks.json")
        assert settings.log_level == "warning"
        assert settings.log_format == "console"

    def test_tasks_path_relative_to_workspace(self, temp_workspace: Path):
        settings = TaskSettings(workspace_dir=temp_workspace)
        assert settings.tasks_path == temp_workspace / "tasks.json"

    def test_absolute_tasks_file_wins(self, temp_workspace: Path, tmp_path: Path):
        target = tmp_path / "elsewhere" / "todo.json"
        settings = TaskSettings(workspace_dir=temp_workspace, tasks_file=str(target))
        assert settings.tasks_path == target

    def test_workspace_path_expansion(self):
        """Test that ~ is expanded in workspace_dir."""
        settings = TaskSettings(workspace_dir="~/tasks")

        assert not str(settings.workspace_dir).startswith("~")
        assert settings.workspace_dir == Path.home() / "tasks"

    def test_env_prefix(self, temp_workspace: Path):
        """Test TASK_CLI_ environment variables are read."""
        with patch.dict(
            os.environ,
            {
                "TASK_CLI_WORKSPACE_DIR": str(temp_workspace),
                "TASK_CLI_TASKS_FILE": "mine.json",
                "TASK_CLI_LOG_LEVEL": "debug",
            },
        ):
            settings = TaskSettings()

        assert settings.tasks_path == temp_workspace / "mine.json"
        assert settings.log_level == "debug"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            TaskSettings(log_level="chatty")

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError):
            TaskSettings(log_format="xml")


class TestJsonConfigSources:
    """Tests for layered settings.json files."""

    def _write(self, path: Path, data: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data))

    def test_project_config(self, tmp_path: Path):
        """./.task_cli/settings.json is read (cwd is tmp_path in tests)."""
        self._write(tmp_path / ".task_cli" / "settings.json", {"log_format": "json"})
        assert TaskSettings().log_format == "json"

    def test_user_config(self):
        self._write(Path.home() / ".task_cli" / "settings.json", {"log_level": "info"})
        assert TaskSettings().log_level == "info"

    def test_project_overrides_user(self, tmp_path: Path):
        self._write(Path.home() / ".task_cli" / "settings.json", {"log_level": "info"})
        self._write(tmp_path / ".task_cli" / "settings.json", {"log_level": "error"})
        assert TaskSettings().log_level == "error"

    def test_env_overrides_json(self, tmp_path: Path):
        self._write(tmp_path / ".task_cli" / "settings.json", {"log_level": "error"})
        with patch.dict(os.environ, {"TASK_CLI_LOG_LEVEL": "debug"}):
            assert TaskSettings().log_level == "debug"

    def test_init_overrides_everything(self, tmp_path: Path):
        self._write(tmp_path / ".task_cli" / "settings.json", {"log_level": "error"})
        assert TaskSettings(log_level="info").log_level == "info"


class TestGlobalSettings:
    """Tests for global settings management."""

    def test_get_settings_creates_default(self):
        reload_settings()
        assert isinstance(get_settings(), TaskSettings)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_set_settings(self, temp_workspace: Path):
        custom = TaskSettings(workspace_dir=temp_workspace, app_name="custom_app")
        set_settings(custom)

        assert get_settings() is custom

    def test_reload_settings(self, temp_workspace: Path):
        set_settings(TaskSettings(workspace_dir=temp_workspace, app_name="custom"))

        reloaded = reload_settings()

        assert reloaded.app_name == "task_cli"


class TestSettingsContext:
    """Tests for context-scoped settings."""

    def test_context_takes_precedence(self, temp_workspace: Path):
        global_settings = TaskSettings(app_name="global")
        scoped = TaskSettings(workspace_dir=temp_workspace, app_name="scoped")
        set_settings(global_settings)

        with SettingsContext(scoped) as s:
            assert s is scoped
            assert get_settings() is scoped

        assert get_settings() is global_settings

    def test_context_reset_on_error(self):
        scoped = TaskSettings(app_name="scoped")
        with pytest.raises(RuntimeError):
            with SettingsContext(scoped):
                raise RuntimeError("boom")
        assert get_settings() is not scoped

    def test_set_context_settings(self):
        scoped = TaskSettings(app_name="scoped")
        set_context_settings(scoped)
        try:
            assert get_settings() is scoped
        finally:
            set_context_settings(None)
