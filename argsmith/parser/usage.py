# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders the option table shown in usage text.

Output is laid out as three columns:

    -a, --[no-]all          Help text, wrapped to the configured width.
        --output=<path>     (defaults to ".")

The first column holds the abbreviation, the second the long form and the
third the help text followed by generated annotations (allowed values and
defaults). Separator strings registered between options are written as their
own paragraphs. Hidden options are skipped and take no part in sizing the
columns.
"""
from __future__ import annotations

from typing import Sequence

from argsmith.parser.option import Option
from argsmith.parser.utils import wrap_line

_COLUMN_COUNT = 3


class Usage:
    """
    Builds usage text for an ordered sequence of options and separators.

    Create one instance per rendering and call `generate()`.
    """

    def __init__(
        self,
        options_and_separators: Sequence[Option | str],
        line_length: int | None = None,
    ):
        self.options_and_separators = options_and_separators
        self.line_length = line_length
        self.buffer: list[str] = []
        self.current_column = 0
        self.column_widths: list[int] = []
        self.num_help_lines = 0
        self.newlines_needed = 0

    def generate(self) -> str:
        self.buffer = []
        self.calculate_column_widths()

        for entry in self.options_and_separators:
            if isinstance(entry, str):
                if self.buffer:
                    self.buffer.append("\n\n")
                self.buffer.append(entry)
                self.newlines_needed = 1
                continue

            if entry.hide:
                continue

            self.write(0, entry.abbreviation_form)
            self.write(1, entry.long_form)

            if entry.help is not None:
                self.write(2, entry.help)

            if entry.allowed_help is not None:
                self.newline()
                for name in sorted(entry.allowed_help):
                    self.write(1, self.allowed_title(entry, name))
                    self.write(2, entry.allowed_help[name])
                self.newline()
            elif entry.allowed is not None:
                self.write(2, self.allowed_list(entry))
            elif entry.is_flag:
                if entry.default is True:
                    self.write(2, "(defaults to on)")
            elif entry.is_multiple:
                if entry.default:
                    defaults = ", ".join(f'"{value}"' for value in entry.default)
                    self.write(2, f"(defaults to {defaults})")
            elif entry.default is not None:
                self.write(2, f'(defaults to "{entry.default}")')

            # Multi-line help gets a blank line after it.
            if self.num_help_lines > 1:
                self.newline()

        return "".join(self.buffer)

    @staticmethod
    def allowed_title(option: Option, allowed: str) -> str:
        suffix = " (default)" if option.is_default(allowed) else ""
        return f"      [{allowed}]{suffix}"

    @staticmethod
    def allowed_list(option: Option) -> str:
        entries = []
        for allowed in option.allowed or ():
            entries.append(f"{allowed} (default)" if option.is_default(allowed) else allowed)
        return f"[{', '.join(entries)}]"

    def calculate_column_widths(self) -> None:
        abbr = 0
        title = 0
        for entry in self.options_and_separators:
            if isinstance(entry, str) or entry.hide:
                continue
            abbr = max(abbr, len(entry.abbreviation_form))
            title = max(title, len(entry.long_form))
            for allowed in entry.allowed_help or ():
                title = max(title, len(self.allowed_title(entry, allowed)))

        # Gutter between the long form and the help text.
        title += 4
        self.column_widths = [abbr, title]

    def newline(self) -> None:
        self.newlines_needed += 1
        self.current_column = 0
        self.num_help_lines = 0

    def _wrap(self, text: str, start: int) -> list[str]:
        text = text.strip()
        length = max(self.line_length - start, 10)
        if len(text) <= length:
            return [text]
        return wrap_line(text, length)

    def write(self, column: int, text: str) -> None:
        lines = text.split("\n")
        if column == len(self.column_widths) and self.line_length is not None:
            start = sum(self.column_widths[:column])
            lines = [wrapped for line in lines for wrapped in self._wrap(line, start)]

        while lines and lines[0].strip() == "":
            lines.pop(0)
        while lines and lines[-1].strip() == "":
            lines.pop()

        for line in lines:
            self.write_line(column, line)

    def write_line(self, column: int, text: str) -> None:
        while self.newlines_needed > 0:
            self.buffer.append("\n")
            self.newlines_needed -= 1

        while self.current_column != column:
            if self.current_column < _COLUMN_COUNT - 1:
                self.buffer.append(" " * self.column_widths[self.current_column])
            else:
                self.buffer.append("\n")
            self.current_column = (self.current_column + 1) % _COLUMN_COUNT

        if column < len(self.column_widths):
            self.buffer.append(text.ljust(self.column_widths[column]))
        else:
            self.buffer.append(text)

        self.current_column = (self.current_column + 1) % _COLUMN_COUNT

        if column == _COLUMN_COUNT - 1:
            self.newlines_needed += 1
            self.num_help_lines += 1
        else:
            self.num_help_lines = 0
