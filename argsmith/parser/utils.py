# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Text helpers shared by the grammar, usage renderer and command runner.

Provides character classification used when recognizing option tokens and
greedy whitespace wrapping used when laying out usage text.
"""
from __future__ import annotations

_WHITESPACE_RANGES = (
    (0x0009, 0x000D),
    (0x0020, 0x0020),
    (0x0085, 0x0085),
    (0x1680, 0x1680),
    (0x180E, 0x180E),
    (0x2000, 0x200A),
    (0x2028, 0x2029),
    (0x202F, 0x202F),
    (0x205F, 0x205F),
    (0x3000, 0x3000),
    (0xFEFF, 0xFEFF),
)


def is_letter_or_digit(char: str) -> bool:
    """ASCII letters and digits only."""
    return char.isascii() and char.isalnum()


def is_whitespace(char: str) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in _WHITESPACE_RANGES)


def pad_right(source: str, length: int) -> str:
    return source + " " * (length - len(source))


def wrap_line(text: str, length: int) -> list[str]:
    """
    Greedily wrap a single line of text at the whitespace nearest `length`.

    Splits in the middle of a word when no whitespace is available before the
    limit. Runs of whitespace at a break are dropped.
    """
    result: list[str] = []
    current_line_start = 0
    last_whitespace: int | None = None
    index = 0
    while index < len(text):
        if is_whitespace(text[index]):
            last_whitespace = index

        if index - current_line_start >= length:
            if last_whitespace is not None:
                index = last_whitespace

            result.append(text[current_line_start:index])

            while index < len(text) and is_whitespace(text[index]):
                index += 1

            current_line_start = index
            last_whitespace = None
        index += 1

    result.append(text[current_line_start:])
    return result


def wrap_text_as_lines(text: str, start: int = 0, length: int | None = None) -> list[str]:
    """
    Wrap `text` into lines no longer than `length`, starting at column `start`.

    Embedded newlines are preserved and each line is stripped. When `length`
    is None the text is only split on newlines, without stripping.
    """
    if start < 0:
        raise ValueError("start must not be negative")
    if length is None:
        return text.split("\n")

    effective_length = max(length - start, 10)
    result: list[str] = []
    for line in text.split("\n"):
        line = line.strip()
        if len(line) <= effective_length:
            result.append(line)
            continue
        result.extend(piece.strip() for piece in wrap_line(line, effective_length))
    return result


def wrap_text(text: str, length: int | None = None, hanging_indent: int = 0) -> str:
    """
    Wrap a block of text into lines no longer than `length`.

    Leading indentation of each input line is kept on its wrapped lines. With
    `hanging_indent`, every line but the first gets that many extra spaces,
    which suits text that follows a prefix such as "Usage: ".

    When `length` is None the text is returned unchanged.
    """
    if length is None:
        return text

    result: list[str] = []
    for line in text.split("\n"):
        trimmed = line.lstrip()
        leading_whitespace = line[: len(line) - len(trimmed)]
        if hanging_indent:
            first_line_wrap = wrap_text_as_lines(
                trimmed, length=length - len(leading_whitespace)
            )
            not_indented = [first_line_wrap.pop(0)]
            trimmed = trimmed[len(not_indented[0]) :].lstrip()
            if first_line_wrap:
                not_indented.extend(
                    wrap_text_as_lines(
                        trimmed,
                        length=length - len(leading_whitespace) - hanging_indent,
                    )
                )
        else:
            not_indented = wrap_text_as_lines(
                trimmed, length=length - len(leading_whitespace)
            )

        hanging_indent_text = ""
        for wrapped in not_indented:
            if not wrapped:
                result.append("")
                continue
            result.append(f"{hanging_indent_text}{leading_whitespace}{wrapped}")
            hanging_indent_text = " " * hanging_indent
    return "\n".join(result)
