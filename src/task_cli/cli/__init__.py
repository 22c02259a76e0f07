"""Command-line interface for task-cli."""

from task_cli.cli.app import TaskCLIApp, main
from task_cli.cli.commands import Command, CommandRegistry

__all__ = [
    "Command",
    "CommandRegistry",
    "TaskCLIApp",
    "main",
]
