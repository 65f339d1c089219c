# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for argsmith command trees.

A whole `CommandRunner` (global options, commands, nested subcommands and
their options) can be declared in YAML or TOML:

    executable_name: tool
    description: A tool that does things.
    options:
      - name: verbose
        abbr: v
        type: flag
        help: Print more output.
    commands:
      - name: build
        description: Build the project.
        action: tool.commands.build
        options:
          - name: mode
            allowed: [debug, release]
            default: debug
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from argsmith.command import Command
from argsmith.exceptions import ConfigError
from argsmith.logger import logger
from argsmith.parser.grammar import Grammar, PassThroughGrammar
from argsmith.parser.option_type import OptionType
from argsmith.runner import CommandRunner


def import_action(dotted_path: str) -> Callable[..., Any]:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid action path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        action = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigError(f"Module '{module_path}' has no attribute '{attr}'.") from error
    if not callable(action):
        raise ConfigError(f"Resolved attribute '{dotted_path}' is not callable.")
    return action


class RawOption(BaseModel):
    """An option or separator entry in a configuration file."""

    name: str | None = None
    separator: str | None = None
    type: OptionType = OptionType.SINGLE
    abbr: str | None = None
    help: str | None = None
    value_help: str | None = None
    allowed: list[str] | None = None
    allowed_help: dict[str, str] | None = None
    default: Any = None
    negatable: bool = True
    split_commas: bool | None = None
    hide: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, value: Any) -> OptionType:
        return OptionType(value)

    @model_validator(mode="after")
    def validate_name_or_separator(self) -> RawOption:
        if (self.name is None) == (self.separator is None):
            raise ValueError("Each option entry needs exactly one of 'name' or 'separator'.")
        return self


def build_grammar(raw_options: list[RawOption], grammar: Grammar) -> Grammar:
    """Register `raw_options` on `grammar`, in order."""
    for raw in raw_options:
        if raw.separator is not None:
            grammar.add_separator(raw.separator)
        elif raw.type == OptionType.FLAG:
            grammar.add_flag(
                raw.name,
                abbr=raw.abbr,
                help=raw.help,
                default=bool(raw.default),
                negatable=raw.negatable,
                hide=raw.hide,
            )
        elif raw.type == OptionType.MULTIPLE:
            grammar.add_multi_option(
                raw.name,
                abbr=raw.abbr,
                help=raw.help,
                value_help=raw.value_help,
                allowed=raw.allowed,
                allowed_help=raw.allowed_help,
                default=raw.default,
                split_commas=True if raw.split_commas is None else raw.split_commas,
                hide=raw.hide,
            )
        else:
            grammar.add_option(
                raw.name,
                abbr=raw.abbr,
                help=raw.help,
                value_help=raw.value_help,
                allowed=raw.allowed,
                allowed_help=raw.allowed_help,
                default=None if raw.default is None else str(raw.default),
                hide=raw.hide,
            )
    return grammar


class RawCommand(BaseModel):
    """Raw command model for argsmith configuration."""

    name: str
    description: str = ""
    action: str | None = None
    aliases: list[str] = Field(default_factory=list)
    hidden: bool = False
    takes_arguments: bool = True
    summary: str | None = None
    usage_footer: str | None = None
    pass_through: bool = False
    allow_trailing_options: bool = True
    options: list[RawOption] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    def to_command(self) -> Command:
        if self.pass_through:
            if self.options:
                raise ConfigError(f"Pass-through command '{self.name}' cannot declare options.")
            grammar: Grammar = PassThroughGrammar()
        else:
            grammar = Grammar(allow_trailing_options=self.allow_trailing_options)
        command = Command(
            name=self.name,
            description=self.description,
            action=import_action(self.action) if self.action else None,
            aliases=self.aliases,
            hidden=self.hidden,
            takes_arguments=self.takes_arguments,
            summary_text=self.summary,
            usage_footer=self.usage_footer,
            grammar=grammar,
        )
        build_grammar(self.options, command.grammar)
        for raw_subcommand in self.commands:
            command.add_subcommand(raw_subcommand.to_command())
        return command


class RunnerConfig(BaseModel):
    """argsmith runner configuration model."""

    executable_name: str
    description: str = ""
    usage_line_length: int | None = None
    usage_footer: str | None = None
    options: list[RawOption] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    def to_runner(self) -> CommandRunner:
        runner = CommandRunner(
            self.executable_name,
            self.description,
            usage_line_length=self.usage_line_length,
            usage_footer=self.usage_footer,
        )
        build_grammar(self.options, runner.grammar)
        runner.add_commands(raw.to_command() for raw in self.commands)
        return runner


def loader(file_path: Path | str) -> CommandRunner:
    """
    Load a `CommandRunner` from a YAML or TOML file.

    Args:
        file_path (str | Path): Path to the config file (YAML or TOML).

    Returns:
        CommandRunner: A runner with every configured option and command.

    Raises:
        ConfigError: If the file format is unsupported or its content is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ConfigError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a mapping with an executable_name.\n"
            "Example:\n"
            "executable_name: tool\n"
            "commands:\n"
            "  - name: build\n"
            "    description: Build the project.\n"
            "    action: my_module.build"
        )

    try:
        config = RunnerConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid configuration in {path}:\n{error}") from error
    logger.debug("Loaded configuration for '%s' from %s.", config.executable_name, path)
    return config.to_runner()
