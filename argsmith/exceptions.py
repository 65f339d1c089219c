# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by argsmith.

Exception Hierarchy:
- ArgsmithError
    ├── DefinitionError
    ├── ParseError
    │     └── UsageError
    ├── ResultsStateError
    └── ConfigError

`DefinitionError` is raised while a grammar is being declared, `ParseError`
while input is matched against it. `UsageError` is raised by the command
runner and carries the usage text a presentation layer should print next to
the message.
"""
from __future__ import annotations

from typing import Sequence


class ArgsmithError(Exception):
    """Base exception for argsmith."""


class DefinitionError(ArgsmithError):
    """Exception raised when a grammar registration or lookup is invalid."""


class ParseError(ArgsmithError):
    """
    Exception raised when input does not match a grammar.

    Attributes:
        message (str): Human readable description of the failure.
        commands (list[str]): Command names traversed, root first, before the
            failure occurred.
        argument_name (str | None): The offending option or argument, if known.
    """

    def __init__(
        self,
        message: str,
        commands: Sequence[str] | None = None,
        argument_name: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.commands: list[str] = list(commands or [])
        self.argument_name = argument_name

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"commands={self.commands!r}, argument_name={self.argument_name!r})"
        )


class UsageError(ParseError):
    """Exception raised by the command runner for invalid command-line usage."""

    def __init__(
        self,
        message: str,
        usage: str,
        commands: Sequence[str] | None = None,
        argument_name: str | None = None,
    ):
        super().__init__(message, commands, argument_name)
        self.usage = usage

    def __str__(self) -> str:
        return f"{self.message}\n\n{self.usage}"


class ResultsStateError(ArgsmithError, RuntimeError):
    """Exception raised when results are accessed outside their command invocation."""


class ConfigError(ArgsmithError):
    """Exception raised when a configuration file cannot be turned into commands."""
