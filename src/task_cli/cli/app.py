"""Command dispatcher for task-cli.

This module provides the CLI application that:
1. Loads settings and configures logging
2. Owns the TaskStore for the lifetime of one invocation
3. Maps the verb on the command line to a registered Command
"""

import sys
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from task_cli.cli.commands import Command, CommandRegistry
from task_cli.cli.task_commands import builtin_commands
from task_cli.config import TaskSettings, get_settings
from task_cli.logging import Loggers, command_context, configure_logging
from task_cli.tasks.errors import InvalidCommandError, StorageError, TaskNotFoundError
from task_cli.tasks.store import TaskStore

logger = Loggers.cli()

EXIT_OK = 0
EXIT_STORAGE_ERROR = 1
EXIT_CONFIG_ERROR = 2


class TaskCLIApp:
    """Task tracker command-line application.

    The store is loaded on first use, so verbs that never touch it
    (help, usage) work even when the tasks file is broken.
    """

    def __init__(
        self,
        settings: TaskSettings | None = None,
        console: Console | None = None,
        store: TaskStore | None = None,
    ) -> None:
        """Initialize the CLI application.

        Args:
            settings: Optional settings override
            console: Console for command output (defaults to stdout)
            store: Optional store override (defaults to settings.tasks_path)
        """
        self._settings = settings or get_settings()
        configure_logging(self._settings)

        self.console = console or Console()

        # TaskStore defines __len__; an empty one is falsy
        self._store = store if store is not None else TaskStore.from_settings(self._settings)
        self._store_loaded = False

        self.command_registry = CommandRegistry()
        for command in builtin_commands():
            self.command_registry.register(command)
        self.register_commands()

        logger.debug("app_initialized", tasks_path=str(self._store.path))

    def register_commands(self) -> None:
        """Register additional commands.

        Override in a subclass to add verbs.
        """

    @property
    def settings(self) -> TaskSettings:
        return self._settings

    @property
    def store(self) -> TaskStore:
        """The task store, loaded from disk on first access."""
        if not self._store_loaded:
            self._store.load()
            self._store_loaded = True
        return self._store

    def echo(self, message: str, style: str | None = None) -> None:
        """Print a plain message (no markup interpretation)."""
        self.console.print(message, style=style, markup=False, highlight=False)

    def print_usage(self) -> None:
        """Print the usage text listing every registered command."""
        self.echo("Usage: task-cli <command> [arguments]")
        self.echo("Commands:")

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        table.add_column("Usage", style="bold cyan", no_wrap=True)
        table.add_column("Description")
        for cmd in self.command_registry.all_commands():
            table.add_row(Text(cmd.usage), Text(cmd.description))
        self.console.print(table)

    def run(self, argv: Sequence[str]) -> int:
        """Dispatch one command line.

        Args:
            argv: Arguments after the program name

        Returns:
            Process exit code
        """
        if not argv or argv[0] in ("-h", "--help"):
            self.print_usage()
            return EXIT_OK

        name, args = argv[0], list(argv[1:])
        command = self.command_registry.get(name)
        if command is None:
            logger.debug("unknown_command", command=name)
            self.echo("Invalid command")
            self.print_usage()
            return EXIT_OK

        return self._execute(command, args)

    def _execute(self, command: Command, args: list[str]) -> int:
        with command_context(command.name):
            try:
                logger.debug("executing_command", args=args)
                command.execute(args, self)
                logger.debug("command_completed")
            except InvalidCommandError as e:
                self.echo(f"Invalid command: {e.message}" if e.message else "Invalid command")
                self.print_usage()
            except TaskNotFoundError as e:
                logger.info("task_not_found", task_id=e.task_id)
                self.echo(str(e))
            except StorageError as e:
                logger.error("storage_error", path=str(e.path), reason=e.reason)
                self.echo(f"Error: {e}", style="bold red")
                return EXIT_STORAGE_ERROR
        return EXIT_OK


def main(argv: Sequence[str] | None = None) -> None:
    """Console script entry point."""
    try:
        app = TaskCLIApp()
    # pydantic's ValidationError and json's JSONDecodeError are both ValueErrors;
    # an unreadable settings file surfaces as OSError
    except (ValueError, OSError) as e:
        Console(stderr=True).print(f"Invalid configuration:\n{e}", markup=False, highlight=False)
        sys.exit(EXIT_CONFIG_ERROR)
    sys.exit(app.run(sys.argv[1:] if argv is None else argv))
