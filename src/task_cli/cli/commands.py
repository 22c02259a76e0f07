"""Command registry and base command class.

Example of creating a custom command:

    from task_cli.cli.commands import Command

    class ClearDoneCommand(Command):
        '''Delete every finished task.'''

        def __init__(self):
            super().__init__(
                name="clear-done",
                description="Delete all tasks marked done",
                usage="clear-done",
            )

        def execute(self, args: list[str], app: Any) -> None:
            self.expect_args(args, 0, 0)
            for task in app.store.list(status="done"):
                app.store.delete(task.id)
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from task_cli.tasks.errors import InvalidCommandError

if TYPE_CHECKING:
    from task_cli.cli.app import TaskCLIApp


class Command(ABC):
    """Base class for CLI verbs.

    Subclass this and override execute() to implement command behavior.
    """

    def __init__(
        self,
        name: str,
        description: str,
        aliases: list[str] | None = None,
        usage: str | None = None,
        examples: list[str] | None = None,
    ) -> None:
        """Initialize the command.

        Args:
            name: Verb typed on the command line
            description: Short description of what the command does
            aliases: Alternative names for the command
            usage: Usage string showing syntax (e.g., "delete <id>")
            examples: List of example usages
        """
        self.name = name
        self.description = description
        self.aliases = aliases or []
        self.usage = usage or name
        self.examples = examples or []

    @abstractmethod
    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        """Execute the command with given arguments.

        Args:
            args: Command-line arguments following the verb
            app: The CLI application instance
        """

    def expect_args(self, args: list[str], minimum: int, maximum: int | None = None) -> None:
        """Validate the argument count.

        Raises:
            InvalidCommandError: If fewer than minimum or more than maximum
                arguments were given (maximum None means unbounded).
        """
        if len(args) < minimum or (maximum is not None and len(args) > maximum):
            raise InvalidCommandError(f"usage: {self.usage}")

    @staticmethod
    def parse_id(raw: str) -> int:
        """Parse a task id argument.

        Raises:
            InvalidCommandError: If raw is not a positive integer.
        """
        try:
            task_id = int(raw)
        except ValueError:
            raise InvalidCommandError(f"task id must be an integer, got {raw!r}") from None
        if task_id < 1:
            raise InvalidCommandError(f"task id must be positive, got {task_id}")
        return task_id

    def get_help(self) -> str:
        """Get detailed help text for this command."""
        lines = [
            self.name,
            f"  {self.description}",
            "",
            f"Usage: task-cli {self.usage}",
        ]

        if self.aliases:
            lines.append(f"Aliases: {', '.join(self.aliases)}")

        if self.examples:
            lines.append("")
            lines.append("Examples:")
            for example in self.examples:
                lines.append(f"  {example}")

        return "\n".join(lines)


class CommandRegistry:
    """Registry mapping verbs and aliases to commands."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """Register a command and its aliases."""
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

    def unregister(self, name: str) -> None:
        """Unregister a command by name."""
        cmd = self._commands.get(name)
        if cmd:
            del self._commands[cmd.name]
            for alias in cmd.aliases:
                self._commands.pop(alias, None)

    def get(self, name: str) -> Command | None:
        """Get a command by name or alias."""
        return self._commands.get(name)

    def all_commands(self) -> list[Command]:
        """Get all unique commands (excluding aliases), in registration order."""
        seen: set[str] = set()
        commands: list[Command] = []
        for cmd in self._commands.values():
            if cmd.name not in seen:
                seen.add(cmd.name)
                commands.append(cmd)
        return commands
