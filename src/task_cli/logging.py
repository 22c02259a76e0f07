"""Structured logging for task-cli.

Every record goes to stderr, so log lines never interleave with the task
listings and messages a command prints on stdout. Records carry the
application name and the tasks file they act on, plus the verb being run
while a command executes.
"""

import logging
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from task_cli.config import TaskSettings

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _renderer(log_format: str) -> list[Processor]:
    if log_format == "json":
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(settings: "TaskSettings | None" = None) -> None:
    """Configure structlog from task settings.

    Without settings, only warnings and errors are rendered, in console
    format, and no application context is attached.
    """
    level = LOG_LEVELS["warning"]
    log_format = "console"
    structlog.contextvars.clear_contextvars()

    if settings is not None:
        level = LOG_LEVELS[settings.log_level]
        log_format = settings.log_format
        structlog.contextvars.bind_contextvars(
            app=settings.app_name,
            tasks_file=str(settings.tasks_path),
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@contextmanager
def command_context(name: str) -> Iterator[None]:
    """Tag records logged inside the block with the running command."""
    with structlog.contextvars.bound_contextvars(command=name):
        yield


class Loggers:
    """Named loggers for task-cli components."""

    @staticmethod
    def cli() -> structlog.stdlib.BoundLogger:
        return structlog.get_logger("task_cli.cli")

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        return structlog.get_logger("task_cli.store")

    @staticmethod
    def config() -> structlog.stdlib.BoundLogger:
        return structlog.get_logger("task_cli.config")
