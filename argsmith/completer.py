# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `GrammarCompleter`, a Prompt Toolkit completer driven by a `Grammar`.

This completer supports:
- Command and subcommand name completion, following the command path typed so far
- Long option completion, including `--no-` forms of negatable flags
- Options owned by enclosing command grammars, matching how the parser falls back
- Allowed value completion after an option that takes a value

Useful for interactive shells built on top of an argsmith command tree, e.g.
`PromptSession(completer=GrammarCompleter(runner.grammar))`.
"""
from __future__ import annotations

import os
import shlex
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from argsmith.parser.grammar import Grammar
from argsmith.parser.option import Option


class GrammarCompleter(Completer):
    """
    Prompt Toolkit completer for input matching a `Grammar` tree.

    Args:
        grammar (Grammar): The root grammar, usually `CommandRunner.grammar`.
    """

    def __init__(self, grammar: Grammar):
        self.grammar = grammar

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = not tokens or text.endswith((" ", "\t"))

        typed = tokens if cursor_at_end_of_token else tokens[:-1]
        stub = "" if cursor_at_end_of_token else tokens[-1]
        suggestions = self.suggest_next(typed, stub)
        yield from self._yield_lcp_completions(suggestions, stub)

    def _walk(self, tokens: list[str]) -> tuple[list[Grammar], Option | None]:
        """
        Follow `tokens` down the grammar tree.

        Returns the grammars entered, innermost last, and the option still
        waiting for a value, if any.
        """
        grammars = [self.grammar]
        pending: Option | None = None
        for token in tokens:
            if pending is not None:
                pending = None
                continue
            if token == "--":
                break
            command = grammars[-1].resolve_command(token)
            if command is not None:
                grammars.append(grammars[-1].commands[command])
                continue
            option = self._find_option(grammars, token)
            if option is not None and not option.is_flag:
                pending = option
        return grammars, pending

    @staticmethod
    def _find_option(grammars: list[Grammar], token: str) -> Option | None:
        for grammar in reversed(grammars):
            if token.startswith("--") and "=" not in token:
                option = grammar.find_by_name(token[2:])
            elif len(token) == 2 and token.startswith("-"):
                option = grammar.find_by_abbreviation(token[1])
            else:
                return None
            if option is not None:
                return option
        return None

    def suggest_next(self, tokens: list[str], stub: str = "") -> list[str]:
        """Return the candidate words that may follow `tokens`."""
        grammars, pending = self._walk(tokens)
        if pending is not None:
            return list(pending.allowed or ())

        if stub.startswith("--") and "=" in stub:
            name, _, _ = stub[2:].partition("=")
            option = self._find_option(grammars, f"--{name}")
            if option is None or not option.allowed:
                return []
            return [f"--{name}={value}" for value in option.allowed]

        suggestions: list[str] = []
        if not stub.startswith("-"):
            suggestions.extend(grammars[-1].commands)
        for grammar in reversed(grammars):
            for option in grammar.options.values():
                if option.hide:
                    continue
                long_option = f"--{option.name}"
                if long_option not in suggestions:
                    suggestions.append(long_option)
                if option.negatable and f"--no-{option.name}" not in suggestions:
                    suggestions.append(f"--no-{option.name}")
        return suggestions

    def _ensure_quote(self, text: str) -> str:
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions, stub):
        """
        Yield completions for the current stub using longest-common-prefix logic.

        A single match is yielded whole. Several matches sharing a prefix longer
        than the stub yield that prefix first, then each match.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
        elif len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
