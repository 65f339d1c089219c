# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class for argsmith command runners.

A Command is a named node in a command tree. It owns a `Grammar` for its own
options, may hold nested subcommands, and wraps an action (sync or async)
that the `CommandRunner` invokes once the command has been selected:

- Aliases and hidden commands
- Automatic `-h, --help` flag on every command grammar
- Usage text built from the command path, grammar and subcommands
- Results views that are only valid while the action runs
- Execution timing and summary logging
"""
from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from argsmith.console import console
from argsmith.context import ExecutionContext, ResultsView
from argsmith.exceptions import ArgsmithError, ResultsStateError, UsageError
from argsmith.logger import logger
from argsmith.parser.grammar import Grammar
from argsmith.parser.results import Results
from argsmith.parser.utils import pad_right, wrap_text, wrap_text_as_lines
from argsmith.utils import ensure_async

if TYPE_CHECKING:
    from argsmith.runner import CommandRunner


def command_usage(
    commands: Mapping[str, Command],
    is_subcommand: bool = False,
    line_length: int | None = None,
) -> str:
    """
    Render the "Available commands:" block for `commands`.

    Hidden commands are left out unless every command is hidden. Names are
    sorted and summaries are wrapped under a hanging column.
    """
    names = list(commands)
    visible = [name for name in names if not commands[name].hidden]
    if visible:
        names = visible
    names.sort()

    length = max((len(name) for name in names), default=0)
    column_start = length + 5
    lines = [f"Available {'sub' if is_subcommand else ''}commands:"]
    for name in names:
        summary = wrap_text_as_lines(
            commands[name].summary, start=column_start, length=line_length
        )
        lines.append(f"  {pad_right(name, length)}   {summary[0]}")
        lines.extend(" " * column_start + line for line in summary[1:])
    return "\n".join(lines)


class Command(BaseModel):
    """
    Represents one command, or subcommand, of a `CommandRunner`.

    Attributes:
        name (str): Name used to select the command on the command line.
        description (str): Full description, shown at the top of its usage.
        action (Callable | None): Called as `action(results, global_results)`
            when the command is run. Sync callables are wrapped as async.
        aliases (list[str]): Alternate names that select this command.
        hidden (bool): Leave the command out of command listings.
        takes_arguments (bool): Whether positional arguments are accepted.
        summary_text (str | None): One line summary for listings. Defaults to
            the first line of `description`.
        usage_footer (str | None): Text appended to the command's usage.
        grammar (Grammar): Options accepted by this command.

    Methods:
        add_subcommand(): Nest another command under this one.
        run(): Invoke the action with views over parsed results.
        usage_exception(): Raise a `UsageError` carrying this command's usage.
    """

    name: str
    description: str = ""
    action: Callable[..., Any] | Callable[..., Awaitable[Any]] | None = None
    aliases: list[str] = Field(default_factory=list)
    hidden: bool = False
    takes_arguments: bool = True
    summary_text: str | None = None
    usage_footer: str | None = None
    grammar: Grammar = Field(default_factory=Grammar)

    _subcommands: dict[str, Command] = PrivateAttr(default_factory=dict)
    _parent: weakref.ReferenceType | None = PrivateAttr(default=None)
    _runner: weakref.ReferenceType | None = PrivateAttr(default=None)
    _results: ResultsView | None = PrivateAttr(default=None)
    _global_results: ResultsView | None = PrivateAttr(default=None)
    _context: ExecutionContext | None = PrivateAttr(default=None)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("action", mode="before")
    @classmethod
    def wrap_callable_as_async(cls, action: Any) -> Any:
        if action is None:
            return None
        if callable(action):
            return ensure_async(action)
        raise TypeError("Action must be a callable.")

    def model_post_init(self, _: Any) -> None:
        if not self.grammar.allows_anything and "help" not in self.grammar.options:
            self.grammar.add_flag(
                "help",
                abbr="h",
                negatable=False,
                help="Print this usage information.",
            )

    @property
    def parent(self) -> Command | None:
        return self._parent() if self._parent else None

    @property
    def runner(self) -> CommandRunner | None:
        if self.parent is not None:
            return self.parent.runner
        return self._runner() if self._runner else None

    @property
    def subcommands(self) -> Mapping[str, Command]:
        return dict(self._subcommands)

    @property
    def path(self) -> list[str]:
        """Command names from the root of the tree down to this command."""
        names = [self.name]
        command = self.parent
        while command is not None:
            names.append(command.name)
            command = command.parent
        return names[::-1]

    def add_subcommand(self, command: Command) -> Command:
        self.grammar.add_command(command.name, command.grammar, aliases=command.aliases)
        self._subcommands[command.name] = command
        command._parent = weakref.ref(self)
        logger.debug("[Command:%s] Added subcommand '%s'.", self.name, command.name)
        return command

    def get_subcommand(self, name: str) -> Command | None:
        canonical = self.grammar.resolve_command(name)
        return self._subcommands.get(canonical) if canonical else None

    @property
    def summary(self) -> str:
        if self.summary_text is not None:
            return self.summary_text
        return self.description.split("\n")[0]

    @property
    def executable_name(self) -> str:
        runner = self.runner
        if runner is None:
            raise ArgsmithError(
                f'Command "{self.name}" is not registered with a CommandRunner.'
            )
        return runner.executable_name

    @property
    def invocation(self) -> str:
        invocation = " ".join([self.executable_name, *self.path])
        if self._subcommands:
            return f"{invocation} <subcommand> [arguments]"
        return f"{invocation} [arguments]"

    def _wrap(self, text: str, hanging_indent: int = 0) -> str:
        runner = self.runner
        line_length = runner.grammar.usage_line_length if runner else None
        return wrap_text(text, length=line_length, hanging_indent=hanging_indent)

    @property
    def usage(self) -> str:
        return self._wrap(f"{self.description}\n\n") + self.usage_without_description

    @property
    def usage_without_description(self) -> str:
        runner = self.runner
        line_length = runner.grammar.usage_line_length if runner else None
        usage_prefix = "Usage: "
        parts = [
            usage_prefix
            + self._wrap(self.invocation, hanging_indent=len(usage_prefix))
            + "\n",
            self.grammar.usage + "\n",
        ]
        if self._subcommands:
            parts.append("\n")
            parts.append(
                command_usage(self._subcommands, is_subcommand=True, line_length=line_length)
                + "\n"
            )
        parts.append("\n")
        parts.append(
            self._wrap(f'Run "{self.executable_name} help" to see global options.')
        )
        if self.usage_footer is not None:
            parts.append("\n")
            parts.append(self._wrap(self.usage_footer))
        return "".join(parts)

    def print_usage(self) -> None:
        console.print(self.usage, markup=False, highlight=False, emoji=False)

    def usage_error(self, message: str, argument_name: str | None = None) -> UsageError:
        return UsageError(message, self.usage_without_description, self.path, argument_name)

    def usage_exception(self, message: str, argument_name: str | None = None):
        """Raise a `UsageError` carrying this command's usage and path."""
        raise self.usage_error(message, argument_name)

    @property
    def results(self) -> ResultsView:
        """This command's parsed results. Only valid inside `run()`."""
        if self._results is None:
            raise ResultsStateError(
                "Command.results can only be accessed while Command.run is executing."
            )
        return self._results

    @property
    def global_results(self) -> ResultsView:
        """The top level parsed results. Only valid inside `run()`."""
        if self._global_results is None:
            raise ResultsStateError(
                "Command.global_results can only be accessed while Command.run "
                "is executing."
            )
        return self._global_results

    @property
    def result(self) -> Any:
        return self._context.result if self._context else None

    async def run(self, results: Results, global_results: Results) -> Any:
        """
        Invoke the action with views over `results` and `global_results`.

        Both views are detached once the action finishes, whether it returned
        or raised.
        """
        local_view = ResultsView(results, "Command.results")
        global_view = ResultsView(global_results, "Command.global_results")
        self._results = local_view
        self._global_results = global_view
        context = ExecutionContext(name=" ".join(self.path))
        self._context = context
        context.start_timer()
        try:
            if self.action is None:
                raise NotImplementedError(
                    f'Leaf command "{self.name}" must define an action.'
                )
            context.result = await self.action(local_view, global_view)
            return context.result
        except Exception as error:
            context.exception = error
            logger.debug("[Command:%s] Action failed: %s", self.name, error)
            raise error
        finally:
            context.stop_timer()
            local_view.detach()
            global_view.detach()
            self._results = None
            self._global_results = None
            logger.debug("%s", context.to_log_line())

    def __str__(self) -> str:
        return f"Command(name='{self.name}', description='{self.description}')"
