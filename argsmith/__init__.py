"""
argsmith

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import Command
from .context import ResultsView
from .exceptions import (
    ArgsmithError,
    ConfigError,
    DefinitionError,
    ParseError,
    ResultsStateError,
    UsageError,
)
from .logger import logger
from .parser import Grammar, Option, OptionType, PassThroughGrammar, Results
from .runner import CommandRunner

__all__ = [
    "ArgsmithError",
    "Command",
    "CommandRunner",
    "ConfigError",
    "DefinitionError",
    "Grammar",
    "Option",
    "OptionType",
    "ParseError",
    "PassThroughGrammar",
    "Results",
    "ResultsStateError",
    "ResultsView",
    "UsageError",
    "logger",
]
