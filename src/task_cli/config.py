"""Configuration for task-cli.

Settings Management:
    1. Global singleton (simple cases):
        set_settings(my_settings)
        settings = get_settings()

    2. Context-based (isolated contexts, tests):
        with SettingsContext(my_settings):
            settings = get_settings()  # Returns my_settings

Settings Loading Priority (highest to lowest):
    1. Constructor arguments
    2. Environment variables (TASK_CLI_* prefix)
    3. Project config (./.task_cli/settings.json)
    4. User config (~/.task_cli/settings.json)
    5. .env file
    6. Default values
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Generator, Literal, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from task_cli.logging import Loggers

__all__ = [
    "APP_NAME",
    "TaskSettings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "reload_settings",
]

APP_NAME = "task_cli"

logger = Loggers.config()


def _get_json_config_source(
    settings_cls: Type[BaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists."""
    if not json_file.exists():
        return None
    logger.debug("settings_file_found", path=str(json_file))
    return JsonConfigSettingsSource(settings_cls, json_file=json_file)


class TaskSettings(BaseSettings):
    """Settings for the task tracker.

    Settings are loaded from (in order of precedence):
    1. Environment variables (TASK_CLI_ prefix)
    2. Project config (./.task_cli/settings.json)
    3. User config (~/.task_cli/settings.json)
    4. .env file
    5. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="TASK_CLI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default=APP_NAME,
        description="Application name",
    )
    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / f".{APP_NAME}",
        description="Directory holding the tasks file",
    )
    tasks_file: Path = Field(
        default=Path("tasks.json"),
        description="Tasks file, relative to workspace_dir unless absolute",
    )

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log output format (console for dev, json for production)",
    )

    @field_validator("workspace_dir", "tasks_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @property
    def tasks_path(self) -> Path:
        """Full path of the tasks file."""
        # Joining with an absolute path yields that path unchanged
        return self.workspace_dir / self.tasks_file

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Layer JSON config files between the environment and .env.

        JSON sources are only included if the files exist.
        """
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
        ]

        project_json = _get_json_config_source(
            settings_cls,
            Path.cwd() / f".{APP_NAME}" / "settings.json",
        )
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(
            settings_cls,
            Path.home() / f".{APP_NAME}" / "settings.json",
        )
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)

        return tuple(sources)


# Context variable for settings (takes precedence over global singleton)
_settings_context: ContextVar[TaskSettings | None] = ContextVar(
    "settings_context", default=None
)

_settings_instance: TaskSettings | None = None


def get_settings() -> TaskSettings:
    """Get the current settings instance.

    Resolution order:
    1. Context variable (set via SettingsContext or set_context_settings)
    2. Global singleton (set via set_settings)
    3. Fresh TaskSettings instance (created on first access)
    """
    context_settings = _settings_context.get()
    if context_settings is not None:
        return context_settings

    global _settings_instance
    if _settings_instance is None:
        _settings_instance = TaskSettings()
    return _settings_instance


def set_settings(settings: TaskSettings) -> None:
    """Set the global settings instance."""
    global _settings_instance
    _settings_instance = settings


def set_context_settings(settings: TaskSettings | None) -> Token:
    """Set settings for the current context.

    Returns:
        Token that can be used to reset the context variable.
    """
    return _settings_context.set(settings)


@contextmanager
def SettingsContext(settings: TaskSettings) -> Generator[TaskSettings, None, None]:
    """Context manager for isolated settings.

    Example:
        with SettingsContext(test_settings) as s:
            app = TaskCLIApp()  # picks up test_settings
    """
    token = _settings_context.set(settings)
    try:
        yield settings
    finally:
        _settings_context.reset(token)


def reload_settings() -> TaskSettings:
    """Drop cached settings and build them again from their sources."""
    global _settings_instance
    _settings_instance = None
    _settings_context.set(None)
    return get_settings()
