import pytest

from argsmith.parser import wrap_text, wrap_text_as_lines
from argsmith.parser.utils import is_letter_or_digit, is_whitespace, pad_right


def test_wrap_text_without_length_is_unchanged():
    text = "  some text\nthat is   long"
    assert wrap_text(text) == text


def test_wrap_text_at_whitespace():
    assert wrap_text("one two three four", length=10) == "one two\nthree four"


def test_wrap_text_keeps_leading_whitespace():
    assert wrap_text("  aaa bbb ccc", length=9) == "  aaa bbb\n  ccc"


def test_wrap_text_hanging_indent():
    assert wrap_text("aaa bbb ccc ddd", length=10, hanging_indent=2) == "aaa bbb\n  ccc ddd"


def test_wrap_text_keeps_blank_lines():
    assert wrap_text("a\n\nb", length=20) == "a\n\nb"


def test_wrap_text_as_lines_without_length():
    assert wrap_text_as_lines("a\n b") == ["a", " b"]


def test_wrap_text_as_lines_strips_lines():
    assert wrap_text_as_lines("  x  \ny", length=20) == ["x", "y"]


def test_wrap_text_as_lines_splits_long_words():
    assert wrap_text_as_lines("abcdefghijklmnop", length=10) == ["abcdefghij", "klmnop"]


def test_wrap_text_as_lines_from_column():
    assert wrap_text_as_lines("aaa bbb ccc", start=5, length=15) == ["aaa bbb", "ccc"]


def test_wrap_text_as_lines_has_minimum_width():
    assert wrap_text_as_lines("aaa bbb ccc", start=30, length=20) == ["aaa bbb", "ccc"]


def test_wrap_text_as_lines_rejects_negative_start():
    with pytest.raises(ValueError):
        wrap_text_as_lines("text", start=-1, length=10)


def test_character_classes():
    assert is_whitespace("　")
    assert is_whitespace("\t")
    assert not is_whitespace("a")
    assert is_letter_or_digit("Z")
    assert is_letter_or_digit("7")
    assert not is_letter_or_digit("é")
    assert not is_letter_or_digit("-")


def test_pad_right():
    assert pad_right("ab", 4) == "ab  "
    assert pad_right("abcd", 2) == "abcd"
