# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""help_command.py

The built-in `help` command registered on every `CommandRunner`.

`tool help` prints the root usage, `tool help build run` prints the usage of a
nested command, and `tool help --all` dumps the usage of every command in the
tree, either to the console, to a single file (`--output`) or to one file per
command (`--split`).
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

from argsmith.command import Command
from argsmith.console import console
from argsmith.context import ResultsView
from argsmith.logger import logger
from argsmith.parser.utils import wrap_text

if TYPE_CHECKING:
    from argsmith.runner import CommandRunner


def subcommand_chain(command: Command) -> str:
    """Join the command path with underscores, e.g. `remote_add`."""
    return "_".join(command.path)


def help_messages(runner: CommandRunner) -> Iterator[tuple[str, str]]:
    """
    Yield `(name, usage)` pairs for the root and every command, depth first.

    The root entry is named after the executable. Commands are named by their
    subcommand chain.
    """
    yield runner.executable_name, f"{runner.usage}\n"
    stack = list(runner.commands.values())
    while stack:
        command = stack.pop(0)
        stack[0:0] = command.subcommands.values()
        yield subcommand_chain(command), wrap_text(
            f"Command: {command.name}\n{command.usage}\n",
            length=runner.grammar.usage_line_length,
        )


class HelpCommand(Command):
    """Prints usage for the runner or for a named command."""

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        self.grammar.add_flag(
            "all",
            abbr="a",
            negatable=False,
            help="Output help for every command and subcommand.",
        )
        self.grammar.add_option(
            "output",
            abbr="o",
            help="When --split is given, the output directory. "
            "When --split is not given, the output file.",
            value_help="OUTPUT",
        )
        self.grammar.add_flag(
            "split",
            abbr="s",
            negatable=False,
            help="Split help output by subcommand into files written to --output.",
        )
        if self.action is None:
            self.action = self.show_help

    @property
    def invocation(self) -> str:
        return f"{self.executable_name} help [command]"

    async def show_help(self, results: ResultsView, _global_results: ResultsView) -> None:
        runner = self.runner
        if results["all"]:
            self.output_all_help(results["split"], results["output"])
            return None

        if not results.rest:
            runner.print_usage()
            return None

        commands = runner.commands
        command: Command | None = None
        command_string = runner.executable_name
        for name in results.rest:
            if not commands:
                command.usage_exception(
                    f'Command "{command_string}" does not expect a subcommand.', name
                )
            selected = (
                runner.get_command(name) if command is None else command.get_subcommand(name)
            )
            if selected is None:
                if command is None:
                    runner.usage_exception(f'Could not find a command named "{name}".', name)
                command.usage_exception(
                    f'Could not find a subcommand named "{name}" for "{command_string}".',
                    name,
                )
            command = selected
            commands = command.subcommands
            command_string += f" {name}"

        command.print_usage()
        return None

    def output_all_help(self, split: bool, output: str | None) -> None:
        """Write every command's usage to the console, a file or a directory."""
        messages = help_messages(self.runner)
        if split:
            directory = Path(output or ".")
            directory.mkdir(parents=True, exist_ok=True)
            for name, text in messages:
                (directory / f"{name}.txt").write_text(text, encoding="UTF-8")
            logger.info("[Command:help] Wrote split help to '%s'.", directory)
        elif output is not None:
            Path(output).write_text(
                "".join(text for _, text in messages), encoding="UTF-8"
            )
            logger.info("[Command:help] Wrote help to '%s'.", output)
        else:
            console.print(
                "".join(text for _, text in messages),
                markup=False,
                highlight=False,
                emoji=False,
            )


def get_help_command(runner: CommandRunner) -> HelpCommand:
    return HelpCommand(
        name="help",
        description=f"Display help information for {runner.executable_name}.",
        hidden=True,
    )
