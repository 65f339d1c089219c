"""
argsmith

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .grammar import Grammar, PassThroughGrammar
from .option import Option
from .option_type import OptionType
from .parser import Parser, TokenCursor
from .results import Results
from .usage import Usage
from .utils import wrap_text, wrap_text_as_lines

__all__ = [
    "Grammar",
    "PassThroughGrammar",
    "Option",
    "OptionType",
    "Parser",
    "TokenCursor",
    "Results",
    "Usage",
    "wrap_text",
    "wrap_text_as_lines",
]
