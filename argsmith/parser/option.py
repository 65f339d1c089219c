# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Option` dataclass used by `Grammar` to describe one flag, single
value option or multi value option.

Each `Option` carries everything needed to recognize it on the command line
and to render it in usage text: its long name and abbreviation, its kind,
default, allowed values and their help, and an optional callback invoked with
the final value once parsing completes.

Options should be created through `Grammar.add_flag()`, `Grammar.add_option()`
or `Grammar.add_multi_option()` rather than instantiated directly.

Key Attributes:
- `name`: Long name used as `--name` and as the key in parse results
- `abbr`: Optional single character used as `-x`
- `type`: `OptionType` describing how the option consumes input
- `default`: Value reported when the option does not appear in the input
- `allowed`: Optional set of accepted values
- `allowed_help`: Optional help text per allowed value
- `negatable`: Whether a flag accepts the `--no-name` form
- `split_commas`: Whether multi values are split on `,`
- `hide`: Exclude the option from usage text
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from argsmith.exceptions import DefinitionError
from argsmith.parser.option_type import OptionType

_VALID_NAME = re.compile(r"^[A-Za-z0-9_-]+$")
_VALID_ABBREVIATION = re.compile(r"^[A-Za-z0-9]$")


@dataclass
class Option:
    """
    Represents one named, parseable unit of a grammar.

    Attributes:
        name (str): Long name, unique within its grammar.
        abbr (str | None): Single character short form, unique within its grammar.
        help (str | None): Help text shown in usage.
        value_help (str | None): Placeholder shown as `--name=<value_help>`.
        allowed (tuple[str, ...] | None): Values the option accepts.
        allowed_help (Mapping[str, str] | None): Help text for each allowed value.
        default (Any): Value used when the option is absent from the input.
        callback (Callable | None): Called with the final value after parsing.
        type (OptionType): Flag, single or multiple.
        negatable (bool): Whether `--no-name` is accepted. Flags only.
        split_commas (bool): Whether values are split on commas. Multi options only.
        hide (bool): Whether the option is left out of usage text.
    """

    name: str
    abbr: str | None = None
    help: str | None = None
    value_help: str | None = None
    allowed: Iterable[str] | None = None
    allowed_help: Mapping[str, str] | None = None
    default: Any = None
    callback: Callable[[Any], Any] | None = None
    type: OptionType = OptionType.SINGLE
    negatable: bool = False
    split_commas: bool = False
    hide: bool = False

    def __post_init__(self):
        self.type = OptionType(self.type)
        self._validate_name()
        self._validate_abbreviation()
        if self.allowed is not None:
            self.allowed = tuple(self.allowed)
        if self.allowed_help is not None:
            self.allowed_help = MappingProxyType(dict(self.allowed_help))
        if self.negatable and not self.is_flag:
            raise DefinitionError(f'Only flags can be negatable, "{self.name}" is not.')
        if self.split_commas and not self.is_multiple:
            raise DefinitionError(
                f'Only multi options can split commas, "{self.name}" is not.'
            )
        if self.is_flag:
            self.default = bool(self.default)
        elif self.is_multiple:
            self.default = self._coerce_multi_default(self.default)
        elif self.default is not None and not isinstance(self.default, str):
            raise DefinitionError(
                f'Default for option "{self.name}" must be a string, '
                f"got {type(self.default).__name__}."
            )

    def _validate_name(self) -> None:
        if not self.name:
            raise DefinitionError("Name cannot be empty.")
        if self.name.startswith("-"):
            raise DefinitionError(f'Name "{self.name}" cannot start with "-".')
        if not _VALID_NAME.match(self.name):
            raise DefinitionError(f'Name "{self.name}" contains invalid characters.')

    def _validate_abbreviation(self) -> None:
        if self.abbr is None:
            return
        if len(self.abbr) != 1:
            raise DefinitionError("Abbreviation must be None or have length 1.")
        if self.abbr == "-":
            raise DefinitionError('Abbreviation cannot be "-".')
        if not _VALID_ABBREVIATION.match(self.abbr):
            raise DefinitionError(
                f'Abbreviation "{self.abbr}" is an invalid character.'
            )

    def _coerce_multi_default(self, default: Any) -> list[str]:
        if default is None:
            return []
        if isinstance(default, str) or not isinstance(default, (list, tuple)):
            raise DefinitionError(
                f'Default for multi option "{self.name}" must be a list, '
                f"got {type(default).__name__}."
            )
        return list(default)

    @property
    def is_flag(self) -> bool:
        return self.type == OptionType.FLAG

    @property
    def is_single(self) -> bool:
        return self.type == OptionType.SINGLE

    @property
    def is_multiple(self) -> bool:
        return self.type == OptionType.MULTIPLE

    def value_or_default(self, value: Any) -> Any:
        """Return `value`, or this option's default when `value` is None."""
        if value is not None:
            return list(value) if self.is_multiple else value
        if self.is_multiple:
            return list(self.default)
        return self.default

    def is_default(self, value: str) -> bool:
        if self.is_multiple:
            return value in self.default
        return value == self.default

    @property
    def abbreviation_form(self) -> str:
        return "" if self.abbr is None else f"-{self.abbr}, "

    @property
    def long_form(self) -> str:
        result = f"--[no-]{self.name}" if self.negatable else f"--{self.name}"
        if self.value_help is not None:
            result += f"=<{self.value_help}>"
        return result

    def __str__(self) -> str:
        return f"Option({self.long_form}, type={self.type})"
