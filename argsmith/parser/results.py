# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Results`, the immutable snapshot produced by parsing a token sequence
against a `Grammar`.

A `Results` holds the values given explicitly in the input, the positional
tokens that were not consumed, the tokens this level started from and, when a
command was selected, the command name plus its own nested `Results`. Values
for options that never appeared are synthesized from their defaults on access.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Sequence

from argsmith.exceptions import DefinitionError
from argsmith.parser.option import Option

if TYPE_CHECKING:
    from argsmith.parser.grammar import Grammar


class Results:
    """
    Parsed values for one grammar level, chained one level per selected command.

    Attributes:
        grammar (Grammar): The grammar the input was parsed against.
        name (str | None): The command name this level was parsed for, or None
            at the top level.
        command (Results | None): Results of the selected command, if any.
    """

    __slots__ = ("_grammar", "_values", "_name", "_command", "_rest", "_arguments")

    def __init__(
        self,
        grammar: Grammar,
        values: Mapping[str, Any],
        name: str | None = None,
        command: Results | None = None,
        rest: Sequence[str] = (),
        arguments: Sequence[str] = (),
    ):
        frozen = {
            key: tuple(value) if isinstance(value, list) else value
            for key, value in values.items()
        }
        object.__setattr__(self, "_grammar", grammar)
        object.__setattr__(self, "_values", MappingProxyType(frozen))
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_command", command)
        object.__setattr__(self, "_rest", tuple(rest))
        object.__setattr__(self, "_arguments", tuple(arguments))

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable.")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable.")

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def command(self) -> Results | None:
        return self._command

    @property
    def rest(self) -> list[str]:
        """Positional tokens left over after parsing this level."""
        return list(self._rest)

    @property
    def arguments(self) -> list[str]:
        """The tokens this level was parsed from, unmodified."""
        return list(self._arguments)

    def _option(self, name: str) -> Option:
        option = self._grammar.find_by_name(name)
        if option is None:
            raise DefinitionError(f'Could not find an option named "{name}".')
        return option

    def __getitem__(self, name: str) -> Any:
        return self._option(name).value_or_default(self._values.get(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._grammar.find_by_name(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.options)

    def flag(self, name: str) -> bool:
        option = self._option(name)
        if not option.is_flag:
            raise DefinitionError(f'"{name}" is not a flag.')
        return option.value_or_default(self._values.get(name))

    def option(self, name: str) -> str | None:
        option = self._option(name)
        if not option.is_single:
            raise DefinitionError(f'"{name}" is not a single value option.')
        return option.value_or_default(self._values.get(name))

    def multi_option(self, name: str) -> list[str]:
        option = self._option(name)
        if not option.is_multiple:
            raise DefinitionError(f'"{name}" is not a multi option.')
        return option.value_or_default(self._values.get(name))

    def was_parsed(self, name: str) -> bool:
        """Whether `name` was given in the input rather than defaulted."""
        self._option(name)
        return name in self._values

    @property
    def options(self) -> list[str]:
        """Names of options that were parsed or have a default."""
        names = list(self._values)
        for name, option in self._grammar.options.items():
            if name not in self._values and option.default is not None:
                names.append(name)
        return names

    def as_dict(self) -> dict[str, Any]:
        return {name: self[name] for name in self.options}

    def __repr__(self) -> str:
        return (
            f"Results(name={self._name!r}, values={dict(self._values)!r}, "
            f"rest={list(self._rest)!r}, command={self._command!r})"
        )
