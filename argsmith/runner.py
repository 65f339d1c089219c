# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""runner.py

Defines `CommandRunner`, the root of an argsmith command tree.

A CommandRunner owns the top level `Grammar` (the "global options"), a set of
`Command` objects registered under it, and a built-in `help` command. Running
it parses the argument list, walks the resulting `Results` chain down to the
deepest selected command and awaits that command's action.

Key Features:
- Global `-h, --help` flag and `help [command]` command
- Command aliases and hidden commands
- Usage text with global options and a listing of visible commands
- Parse failures converted to `UsageError` carrying the relevant usage text

Example:
    runner = CommandRunner("tool", "A tool that does things.")
    runner.add_command(Command(name="build", description="Build it.", action=build))
    await runner.run(["build", "--help"])
"""
from __future__ import annotations

import weakref
from typing import Any, Iterable, Mapping

from argsmith.command import Command, command_usage
from argsmith.console import console
from argsmith.exceptions import ParseError, UsageError
from argsmith.help_command import get_help_command
from argsmith.logger import logger
from argsmith.parser.grammar import Grammar
from argsmith.parser.results import Results
from argsmith.parser.utils import wrap_text


class CommandRunner:
    """
    Dispatches an argument list to the command it selects.

    Attributes:
        executable_name (str): Name of the program, used in usage text.
        description (str): Shown at the top of the root usage.
        usage_footer (str | None): Text appended to the root usage.
        grammar (Grammar): Global options, shared by every command.
        help_command (Command): The built-in `help` command.
    """

    def __init__(
        self,
        executable_name: str,
        description: str,
        usage_line_length: int | None = None,
        usage_footer: str | None = None,
    ) -> None:
        self.executable_name = executable_name
        self.description = description
        self.usage_footer = usage_footer
        self.grammar = Grammar(usage_line_length=usage_line_length)
        self.grammar.add_flag(
            "help", abbr="h", negatable=False, help="Print this usage information."
        )
        self._commands: dict[str, Command] = {}
        self.help_command = get_help_command(self)
        self.add_command(self.help_command)

    @property
    def commands(self) -> Mapping[str, Command]:
        return dict(self._commands)

    @property
    def invocation(self) -> str:
        return f"{self.executable_name} <command> [arguments]"

    def add_command(self, command: Command) -> Command:
        """Register a top level command and its aliases."""
        self.grammar.add_command(command.name, command.grammar, aliases=command.aliases)
        self._commands[command.name] = command
        command._runner = weakref.ref(self)
        logger.debug("[CommandRunner:%s] Added command '%s'.", self.executable_name, command.name)
        return command

    def add_commands(self, commands: Iterable[Command]) -> None:
        for command in commands:
            self.add_command(command)

    def get_command(self, name: str) -> Command | None:
        """Return the top level command registered under `name` or an alias."""
        canonical = self.grammar.resolve_command(name)
        return self._commands.get(canonical) if canonical else None

    def _wrap(self, text: str, hanging_indent: int = 0) -> str:
        return wrap_text(
            text, length=self.grammar.usage_line_length, hanging_indent=hanging_indent
        )

    @property
    def usage(self) -> str:
        return self._wrap(f"{self.description}\n\n") + self.usage_without_description

    @property
    def usage_without_description(self) -> str:
        usage_prefix = "Usage:"
        parts = [
            f"{usage_prefix} "
            f"{self._wrap(self.invocation, hanging_indent=len(usage_prefix))}\n\n",
            self._wrap("Global options:") + "\n",
            f"{self.grammar.usage}\n\n",
            command_usage(self._commands, line_length=self.grammar.usage_line_length)
            + "\n\n",
            self._wrap(
                f'Run "{self.executable_name} help <command>" for more information '
                "about a command."
            ),
        ]
        if self.usage_footer is not None:
            parts.append(f"\n{self._wrap(self.usage_footer)}")
        return "".join(parts)

    def print_usage(self) -> None:
        console.print(self.usage, markup=False, highlight=False, emoji=False)

    def usage_error(self, message: str, argument_name: str | None = None) -> UsageError:
        return UsageError(message, self.usage_without_description, [], argument_name)

    def usage_exception(self, message: str, argument_name: str | None = None):
        """Raise a `UsageError` carrying the root usage."""
        raise self.usage_error(message, argument_name)

    def parse(self, args: Iterable[str]) -> Results:
        """
        Parse `args` against the command tree.

        Raises:
            UsageError: With the usage of the deepest command named in the
                parse failure, or the root usage.
        """
        try:
            return self.grammar.parse(args)
        except ParseError as error:
            if not error.commands:
                raise self.usage_error(error.message, error.argument_name) from error
            command = self._commands[error.commands[0]]
            for name in error.commands[1:]:
                command = command.subcommands[name]
            raise command.usage_error(error.message, error.argument_name) from error

    async def run(self, args: Iterable[str]) -> Any:
        """Parse `args` and run the command they select."""
        return await self.run_command(self.parse(args))

    async def run_command(self, top_level_results: Results) -> Any:
        """
        Run the command selected by `top_level_results`.

        Prints usage instead when no command was given or `--help` was passed
        anywhere along the selected command path.
        """
        results = top_level_results
        commands: Mapping[str, Command] = self._commands
        command: Command | None = None
        command_string = self.executable_name

        while commands:
            if results.command is None:
                if not results.rest:
                    if command is None:
                        self.print_usage()
                        return None
                    command.usage_exception(f'Missing subcommand for "{command_string}".')
                if command is None:
                    self.usage_exception(
                        f'Could not find a command named "{results.rest[0]}".',
                        results.rest[0],
                    )
                command.usage_exception(
                    f'Could not find a subcommand named "{results.rest[0]}" for '
                    f'"{command_string}".',
                    results.rest[0],
                )

            results = results.command
            command = commands[results.name]
            commands = command.subcommands
            command_string += f" {results.name}"

            if "help" in results and results["help"]:
                command.print_usage()
                return None

        if top_level_results["help"]:
            command.print_usage()
            return None

        if not command.takes_arguments and results.rest:
            command.usage_exception(f'Command "{results.name}" does not take any arguments.')

        logger.info("[CommandRunner:%s] Running '%s'.", self.executable_name, command_string)
        return await command.run(results, top_level_results)
