# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionType`, the enum describing how an option consumes input.

Supports alias coercion for config-friendly values, so a YAML or TOML file can
say `type: bool` or `type: list` and still map onto a member.

Example:
    OptionType("flag")  → OptionType.FLAG
    OptionType("bool")  → OptionType.FLAG (via alias)
    OptionType("multi") → OptionType.MULTIPLE (via alias)
"""
from __future__ import annotations

from enum import Enum


class OptionType(Enum):
    """
    The kind of an option.

    Members:
        FLAG: A boolean switch, set by presence and optionally negatable.
        SINGLE: Takes one value. The last occurrence wins.
        MULTIPLE: Takes one value per occurrence and accumulates them in a list.
    """

    FLAG = "flag"
    SINGLE = "single"
    MULTIPLE = "multiple"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "bool": "flag",
            "boolean": "flag",
            "option": "single",
            "value": "single",
            "multi": "multiple",
            "list": "multiple",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> OptionType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value
