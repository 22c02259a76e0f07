"""Task verbs exposed on the command line."""

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from task_cli.cli.commands import Command
from task_cli.tasks.errors import InvalidCommandError
from task_cli.tasks.models import Task, TaskStatus

if TYPE_CHECKING:
    from task_cli.cli.app import TaskCLIApp

STATUS_STYLES = {
    TaskStatus.TODO: "yellow",
    TaskStatus.IN_PROGRESS: "cyan",
    TaskStatus.DONE: "green",
}

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def render_tasks(tasks: list[Task]) -> Table:
    """Build a table of tasks for display."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2, 0, 0))
    table.add_column("ID", justify="right", no_wrap=True)
    table.add_column("Description")
    table.add_column("Status", no_wrap=True)
    table.add_column("Created", style="dim", no_wrap=True)
    table.add_column("Updated", style="dim", no_wrap=True)

    for task in tasks:
        table.add_row(
            str(task.id),
            Text(task.description),
            Text(task.status.value, style=STATUS_STYLES[task.status]),
            task.created_at.astimezone().strftime(TIMESTAMP_FORMAT),
            task.updated_at.astimezone().strftime(TIMESTAMP_FORMAT),
        )
    return table


class AddCommand(Command):
    """Create a new task."""

    def __init__(self) -> None:
        super().__init__(
            name="add",
            description="Add a new task",
            usage="add <description>",
            examples=['task-cli add "Buy groceries"'],
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.expect_args(args, 1)
        description = " ".join(args)
        task_id = app.store.add(description)
        app.echo(f"New Task added: {description} (ID: {task_id})")


class ListCommand(Command):
    """List tasks, optionally filtered by status."""

    def __init__(self) -> None:
        super().__init__(
            name="list",
            description=f"List tasks (status: {', '.join(TaskStatus.values())})",
            aliases=["ls"],
            usage="list [status]",
            examples=["task-cli list", "task-cli list done"],
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.expect_args(args, 0, 1)
        status = None
        if args:
            try:
                status = TaskStatus(args[0])
            except ValueError:
                raise InvalidCommandError(
                    f"unknown status {args[0]!r} "
                    f"(expected one of: {', '.join(TaskStatus.values())})"
                ) from None

        tasks = app.store.list(status=status)
        if not tasks:
            app.echo("No Tasks!")
            return
        app.console.print(render_tasks(tasks))


class UpdateCommand(Command):
    """Replace the description of a task."""

    def __init__(self) -> None:
        super().__init__(
            name="update",
            description="Update a task's description by ID",
            usage="update <id> <description>",
            examples=['task-cli update 1 "Buy groceries and cook dinner"'],
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.expect_args(args, 2)
        task_id = self.parse_id(args[0])
        description = " ".join(args[1:])
        app.store.update(task_id, description)
        app.echo(f"Task updated: {description}")


class DeleteCommand(Command):
    """Delete a task."""

    def __init__(self) -> None:
        super().__init__(
            name="delete",
            description="Delete a task by ID",
            aliases=["rm"],
            usage="delete <id>",
            examples=["task-cli delete 1"],
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.expect_args(args, 1, 1)
        task_id = self.parse_id(args[0])
        app.store.delete(task_id)
        app.echo(f"Task deleted: {task_id}")


class MarkStatusCommand(Command):
    """Move a task to a fixed status."""

    def __init__(self, status: TaskStatus) -> None:
        super().__init__(
            name=f"mark-{status.value}",
            description=f"Mark a task as {status.value} by ID",
            usage=f"mark-{status.value} <id>",
            examples=[f"task-cli mark-{status.value} 1"],
        )
        self.status = status

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.expect_args(args, 1, 1)
        task_id = self.parse_id(args[0])
        app.store.set_status(task_id, self.status)
        app.echo(f"Task id({task_id}) marked {self.status.value}.")


class HelpCommand(Command):
    """Show usage, or detailed help for one command."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            description="Show available commands, or help for one command",
            usage="help [command]",
            examples=["task-cli help", "task-cli help update"],
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.expect_args(args, 0, 1)
        if not args:
            app.print_usage()
            return
        command = app.command_registry.get(args[0])
        if command is None:
            raise InvalidCommandError(f"unknown command {args[0]!r}")
        app.echo(command.get_help())


def builtin_commands() -> list[Command]:
    """All task verbs, in the order they appear in the usage text."""
    return [
        AddCommand(),
        ListCommand(),
        UpdateCommand(),
        DeleteCommand(),
        MarkStatusCommand(TaskStatus.IN_PROGRESS),
        MarkStatusCommand(TaskStatus.DONE),
        MarkStatusCommand(TaskStatus.TODO),
        HelpCommand(),
    ]
