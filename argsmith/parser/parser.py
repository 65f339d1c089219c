# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements the recursive descent `Parser` that matches a token sequence
against a `Grammar` and produces a `Results` chain.

One `Parser` is created per grammar level entered during a single call to
`Grammar.parse()`. Parsers for nested commands share a `TokenCursor` with their
parent, so tokens consumed by a command are consumed for every level above it.
A child parser keeps a reference to its parent only to resolve options the
child grammar does not define.

Recognized token shapes, tried in order:
- `--`: ends option parsing at this level
- a command name or alias registered at this level
- `-x`: a solo abbreviation, taking the next token as its value when needed
- `-xyz` / `-xvalue`: a cluster of flags, or an abbreviation with an attached value
- `--name`, `--name=value`, `--no-name`: long options and negated flags
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from argsmith.exceptions import ParseError
from argsmith.parser.option import Option
from argsmith.parser.results import Results
from argsmith.parser.utils import is_letter_or_digit

if TYPE_CHECKING:
    from argsmith.parser.grammar import Grammar


def _is_long_name_char(char: str) -> bool:
    return is_letter_or_digit(char) or char in "-_"


class TokenCursor:
    """An immutable token sequence with a position shared by nested parsers."""

    def __init__(self, tokens: Sequence[str]):
        self.tokens: tuple[str, ...] = tuple(tokens)
        self.index = 0

    def __bool__(self) -> bool:
        return self.index < len(self.tokens)

    @property
    def current(self) -> str:
        return self.tokens[self.index]

    @property
    def remaining(self) -> tuple[str, ...]:
        return self.tokens[self.index :]

    def advance(self) -> str:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def drain(self) -> tuple[str, ...]:
        remaining = self.remaining
        self.index = len(self.tokens)
        return remaining


class Parser:
    """
    Parses tokens for one grammar level.

    Attributes:
        grammar (Grammar): The grammar matched at this level.
        cursor (TokenCursor): Token position shared with parent and child parsers.
        command_name (str | None): Command this level was entered for.
        parent (Parser | None): Parser for the enclosing level, used for fallback.
    """

    def __init__(
        self,
        grammar: Grammar,
        cursor: TokenCursor,
        command_name: str | None = None,
        parent: Parser | None = None,
    ):
        self.grammar = grammar
        self.cursor = cursor
        self.command_name = command_name
        self.parent = parent
        self.rest: list[str] = []
        self.values: dict[str, Any] = {}

    @property
    def current(self) -> str:
        return self.cursor.current

    def parse(self) -> Results:
        arguments = self.cursor.remaining
        if self.grammar.allows_anything:
            tokens = self.cursor.drain()
            return Results(self.grammar, {}, self.command_name, None, tokens, tokens)

        command_results: Results | None = None

        while self.cursor:
            if self.current == "--":
                self.cursor.advance()
                break

            command_name = self.grammar.resolve_command(self.current)
            if command_name is not None:
                self._validate(
                    not self.rest, "Cannot specify arguments before a command."
                )
                self.cursor.advance()
                child = Parser(
                    self.grammar.commands[command_name],
                    self.cursor,
                    command_name,
                    parent=self,
                )
                try:
                    command_results = child.parse()
                except ParseError as error:
                    raise ParseError(
                        error.message,
                        [command_name, *error.commands],
                        error.argument_name,
                    ) from error
                self.rest.clear()
                break

            if self.parse_solo_option():
                continue
            if self.parse_abbreviation(self):
                continue
            if self.parse_long_option():
                continue

            if not self.grammar.allow_trailing_options:
                break
            self.rest.append(self.cursor.advance())

        for name, option in self.grammar.options.items():
            if option.callback is not None:
                option.callback(option.value_or_default(self.values.get(name)))

        self.rest.extend(self.cursor.drain())
        return Results(
            self.grammar,
            self.values,
            self.command_name,
            command_results,
            self.rest,
            arguments,
        )

    def read_next_as_value(self, option: Option) -> None:
        self._validate(
            bool(self.cursor),
            f'Missing argument for "{option.name}".',
            option.name,
        )
        self.set_option(option, self.cursor.advance())

    def parse_solo_option(self) -> bool:
        """Parse `-x`, where `x` is a single letter or digit."""
        token = self.current
        if len(token) != 2 or not token.startswith("-"):
            return False
        abbr = token[1]
        if not is_letter_or_digit(abbr):
            return False

        option = self.grammar.find_by_abbreviation(abbr)
        if option is None:
            self._validate(
                self.parent is not None,
                f'Could not find an option or flag "-{abbr}".',
                f"-{abbr}",
            )
            return self.parent.parse_solo_option()

        self.cursor.advance()
        if option.is_flag:
            self.set_flag(option, True)
        else:
            self.read_next_as_value(option)
        return True

    def parse_abbreviation(self, innermost: Parser) -> bool:
        """
        Parse `-abc` as a cluster of flags, or `-avalue` as an abbreviation with
        an attached value.

        Only the first character falls back to ancestor grammars. When it names
        a flag, every other character must be a flag of `innermost`.
        """
        token = self.current
        if len(token) < 2 or not token.startswith("-"):
            return False

        index = 1
        while index < len(token) and is_letter_or_digit(token[index]):
            index += 1
        if index == 1:
            return False

        letters = token[1:index]
        suffix = token[index:]
        if "\n" in suffix or "\r" in suffix:
            return False

        first = self.grammar.find_by_abbreviation(letters[0])
        if first is None:
            self._validate(
                self.parent is not None,
                f'Could not find an option with short name "-{letters[0]}".',
                f"-{letters[0]}",
            )
            return self.parent.parse_abbreviation(innermost)

        if not first.is_flag:
            self.set_option(first, letters[1:] + suffix)
        else:
            self._validate(
                suffix == "",
                f'Option "-{letters[0]}" is a flag and cannot handle value '
                f'"{letters[1:]}{suffix}".',
                first.name,
            )
            self.set_flag(first, True)
            for abbr in letters[1:]:
                innermost.parse_short_flag(abbr)

        self.cursor.advance()
        return True

    def parse_short_flag(self, abbr: str) -> None:
        option = self.grammar.find_by_abbreviation(abbr)
        self._validate(
            option is not None,
            f'Could not find an option with short name "-{abbr}".',
            f"-{abbr}",
        )
        self._validate(
            option.is_flag,
            f'Option "-{abbr}" must be a flag to be in a collapsed "-".',
            option.name,
        )
        self.set_flag(option, True)

    def parse_long_option(self) -> bool:
        """Parse `--name`, `--name=value` or `--no-name`."""
        token = self.current
        if not token.startswith("--"):
            return False

        name, equals, value = token[2:].partition("=")
        if not all(_is_long_name_char(char) for char in name):
            return False
        if not equals:
            value = None
        elif "\n" in value or "\r" in value:
            return False

        option = self.grammar.find_by_name(name)
        if option is not None:
            self.cursor.advance()
            if option.is_flag:
                self._validate(
                    value is None,
                    f'Flag option "{name}" should not be given a value.',
                    name,
                )
                self.set_flag(option, True)
            elif value is not None:
                self.set_option(option, value)
            else:
                self.read_next_as_value(option)
        elif name.startswith("no-"):
            name = name[len("no-") :]
            option = self.grammar.find_by_name(name)
            if option is None:
                self._validate(
                    self.parent is not None,
                    f'Could not find an option named "{name}".',
                    name,
                )
                return self.parent.parse_long_option()

            self.cursor.advance()
            self._validate(
                option.is_flag, f'Cannot negate non-flag option "{name}".', name
            )
            self._validate(option.negatable, f'Cannot negate option "{name}".', name)
            self._validate(
                value is None,
                f'Flag option "{name}" should not be given a value.',
                name,
            )
            self.set_flag(option, False)
        else:
            self._validate(
                self.parent is not None,
                f'Could not find an option named "{name}".',
                name,
            )
            return self.parent.parse_long_option()

        return True

    def set_option(self, option: Option, value: str) -> None:
        if not option.is_multiple:
            self._validate_allowed(option, value)
            self.values[option.name] = value
            return

        values = self.values.setdefault(option.name, [])
        pieces = value.split(",") if option.split_commas else [value]
        for piece in pieces:
            self._validate_allowed(option, piece)
            values.append(piece)

    def set_flag(self, option: Option, value: bool) -> None:
        self.values[option.name] = value

    def _validate_allowed(self, option: Option, value: str) -> None:
        if option.allowed is None:
            return
        self._validate(
            value in option.allowed,
            f'"{value}" is not an allowed value for option "{option.name}".',
            option.name,
        )

    @staticmethod
    def _validate(condition: bool, message: str, argument_name: str | None = None):
        if not condition:
            raise ParseError(message, argument_name=argument_name)
