# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Grammar`, the registry of options, separators and nested command
grammars for one level of a command line, and `PassThroughGrammar`, a
restricted variant that treats every token as positional.

A `Grammar` validates registrations as they happen, so a conflicting name or
abbreviation raises `DefinitionError` at setup time rather than during parsing.
Parsing is delegated to a fresh `Parser` on each call, and usage text to
`Usage`.

Key Features:
- Flags, single value options and multi value options with abbreviations
- Negatable flags (`--no-name`), allowed values with per-value help
- Nested command grammars with aliases
- Separators that group options in usage text
- Optional callbacks invoked with each option's final value

Example:
    grammar = Grammar()
    grammar.add_flag("verbose", abbr="v", help="Print more output.")
    build = grammar.add_command("build")
    build.add_option("mode", abbr="m", allowed=["debug", "release"])
    results = grammar.parse(["-v", "build", "--mode=release"])
    results.command["mode"]  # "release"
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Sequence

from argsmith.exceptions import DefinitionError
from argsmith.logger import logger
from argsmith.parser.option import Option
from argsmith.parser.option_type import OptionType
from argsmith.parser.parser import Parser, TokenCursor
from argsmith.parser.results import Results
from argsmith.parser.usage import Usage


class Grammar:
    """
    An ordered registry of options, separators and command grammars.

    Attributes:
        allow_trailing_options (bool): Whether option tokens after the first
            positional token are still parsed as options.
        usage_line_length (int | None): Width that usage help text is wrapped to.
    """

    def __init__(
        self,
        allow_trailing_options: bool = True,
        usage_line_length: int | None = None,
    ):
        self.allow_trailing_options = allow_trailing_options
        self.usage_line_length = usage_line_length
        self._options: dict[str, Option] = {}
        self._commands: dict[str, Grammar] = {}
        self._command_aliases: dict[str, str] = {}
        self._options_and_separators: list[Option | str] = []

    @property
    def options(self) -> Mapping[str, Option]:
        return MappingProxyType(self._options)

    @property
    def commands(self) -> Mapping[str, Grammar]:
        return MappingProxyType(self._commands)

    @property
    def options_and_separators(self) -> tuple[Option | str, ...]:
        return tuple(self._options_and_separators)

    @property
    def allows_anything(self) -> bool:
        return False

    def add_command(
        self,
        name: str,
        grammar: Grammar | None = None,
        aliases: Iterable[str] = (),
    ) -> Grammar:
        """
        Register a command and return its grammar.

        A fresh grammar is created when `grammar` is omitted so options can be
        registered on the returned value. Alias tokens select the same grammar
        and are reported under the canonical `name`.
        """
        grammar = grammar if grammar is not None else Grammar()
        for key in (name, *aliases):
            if key in self._commands or key in self._command_aliases:
                raise DefinitionError(f'Duplicate command "{key}".')
        self._commands[name] = grammar
        for alias in aliases:
            self._command_aliases[alias] = name
        logger.debug("Registered command '%s' with aliases %s.", name, list(aliases))
        return grammar

    def add_flag(
        self,
        name: str,
        abbr: str | None = None,
        help: str | None = None,
        default: bool = False,
        negatable: bool = True,
        callback: Callable[[bool], Any] | None = None,
        hide: bool = False,
    ) -> Option:
        return self._add_option(
            Option(
                name=name,
                abbr=abbr,
                help=help,
                default=default,
                callback=callback,
                type=OptionType.FLAG,
                negatable=negatable,
                hide=hide,
            )
        )

    def add_option(
        self,
        name: str,
        abbr: str | None = None,
        help: str | None = None,
        value_help: str | None = None,
        allowed: Iterable[str] | None = None,
        allowed_help: Mapping[str, str] | None = None,
        default: Any = None,
        callback: Callable[[Any], Any] | None = None,
        allow_multiple: bool = False,
        split_commas: bool | None = None,
        hide: bool = False,
    ) -> Option:
        """
        Register an option that takes a value.

        With `allow_multiple` the option collects every occurrence into a
        list, as `add_multi_option()` does. `split_commas` is only meaningful
        in that mode.
        """
        if not allow_multiple and split_commas is not None:
            raise DefinitionError(
                'split_commas may not be set if allow_multiple is False for option "'
                f'{name}".'
            )
        if allow_multiple:
            if default is None:
                default = []
            elif isinstance(default, str):
                default = [default]
            return self.add_multi_option(
                name,
                abbr=abbr,
                help=help,
                value_help=value_help,
                allowed=allowed,
                allowed_help=allowed_help,
                default=default,
                callback=callback,
                split_commas=True if split_commas is None else split_commas,
                hide=hide,
            )
        return self._add_option(
            Option(
                name=name,
                abbr=abbr,
                help=help,
                value_help=value_help,
                allowed=allowed,
                allowed_help=allowed_help,
                default=default,
                callback=callback,
                type=OptionType.SINGLE,
                hide=hide,
            )
        )

    def add_multi_option(
        self,
        name: str,
        abbr: str | None = None,
        help: str | None = None,
        value_help: str | None = None,
        allowed: Iterable[str] | None = None,
        allowed_help: Mapping[str, str] | None = None,
        default: Sequence[str] | None = None,
        callback: Callable[[list[str]], Any] | None = None,
        split_commas: bool = True,
        hide: bool = False,
    ) -> Option:
        return self._add_option(
            Option(
                name=name,
                abbr=abbr,
                help=help,
                value_help=value_help,
                allowed=allowed,
                allowed_help=allowed_help,
                default=default,
                callback=callback,
                type=OptionType.MULTIPLE,
                split_commas=split_commas,
                hide=hide,
            )
        )

    def _add_option(self, option: Option) -> Option:
        if option.name in self._options:
            raise DefinitionError(f'Duplicate option "{option.name}".')
        if option.abbr is not None:
            existing = self.find_by_abbreviation(option.abbr)
            if existing is not None:
                raise DefinitionError(
                    f'Abbreviation "{option.abbr}" is already used by "{existing.name}".'
                )
        self._options[option.name] = option
        self._options_and_separators.append(option)
        return option

    def add_separator(self, text: str) -> None:
        """Insert a label between options in usage text."""
        self._options_and_separators.append(text)

    def find_by_name(self, name: str) -> Option | None:
        return self._options.get(name)

    def find_by_abbreviation(self, abbr: str) -> Option | None:
        for option in self._options.values():
            if option.abbr == abbr:
                return option
        return None

    def resolve_command(self, token: str) -> str | None:
        """Return the canonical command name for a command name or alias."""
        if token in self._commands:
            return token
        return self._command_aliases.get(token)

    def get_default(self, name: str) -> Any:
        option = self._options.get(name)
        if option is None:
            raise DefinitionError(f'No option named "{name}".')
        return option.value_or_default(None)

    def parse(self, args: Iterable[str]) -> Results:
        """
        Parse `args` against this grammar.

        Raises:
            ParseError: If the tokens do not match the grammar.
        """
        return Parser(self, TokenCursor(list(args))).parse()

    @property
    def usage(self) -> str:
        """Usage text for the visible options and separators of this grammar."""
        return Usage(self._options_and_separators, self.usage_line_length).generate()


class PassThroughGrammar(Grammar):
    """
    A grammar that accepts any input and parses every token as positional.

    Useful for commands that forward their arguments to another program. All
    registration methods raise `DefinitionError`.
    """

    def __init__(self):
        super().__init__(allow_trailing_options=False)

    @property
    def allows_anything(self) -> bool:
        return True

    def _unsupported(self, method: str) -> DefinitionError:
        return DefinitionError(f"PassThroughGrammar.{method}() is unsupported.")

    def add_command(self, name, grammar=None, aliases=()) -> Grammar:
        raise self._unsupported("add_command")

    def add_flag(self, name, *args, **kwargs) -> Option:
        raise self._unsupported("add_flag")

    def add_option(self, name, *args, **kwargs) -> Option:
        raise self._unsupported("add_option")

    def add_multi_option(self, name, *args, **kwargs) -> Option:
        raise self._unsupported("add_multi_option")

    def add_separator(self, text: str) -> None:
        raise self._unsupported("add_separator")

    @property
    def usage(self) -> str:
        return ""
