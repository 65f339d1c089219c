import pytest
from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document

from argsmith.completer import GrammarCompleter
from argsmith.parser import Grammar


@pytest.fixture
def grammar():
    grammar = Grammar()
    grammar.add_flag("verbose", abbr="v")
    grammar.add_flag("quiet", negatable=False)
    grammar.add_option("secret", hide=True)
    build = grammar.add_command("build", aliases=["b"])
    build.add_option("mode", abbr="m", allowed=["debug", "release"])
    build.add_option("target")
    grammar.add_command("bundle")
    return grammar


@pytest.fixture
def completer(grammar):
    return GrammarCompleter(grammar)


def texts(completer, text):
    return [c.text for c in completer.get_completions(Document(text), None)]


def test_suggest_root(completer):
    assert completer.suggest_next([]) == [
        "build",
        "bundle",
        "--verbose",
        "--no-verbose",
        "--quiet",
    ]


def test_suggest_options_for_dash_stub(completer):
    assert completer.suggest_next([], "--") == ["--verbose", "--no-verbose", "--quiet"]


def test_suggest_inside_command_includes_parent_options(completer):
    suggestions = completer.suggest_next(["b"])
    assert suggestions[:2] == ["--mode", "--target"]
    assert "--verbose" in suggestions
    assert "--help" not in suggestions


def test_suggest_allowed_values(completer):
    assert completer.suggest_next(["build", "--mode"]) == ["debug", "release"]
    assert completer.suggest_next(["build", "-m"]) == ["debug", "release"]
    assert completer.suggest_next(["build", "--target"]) == []


def test_suggest_assigned_values(completer):
    assert completer.suggest_next(["build"], "--mode=") == [
        "--mode=debug",
        "--mode=release",
    ]
    assert completer.suggest_next(["build"], "--target=") == []


def test_value_is_consumed(completer):
    assert completer.suggest_next(["build", "--mode", "debug"])[:2] == ["--mode", "--target"]


def test_get_completions_no_input(completer):
    results = list(completer.get_completions(Document(""), None))
    assert all(isinstance(c, Completion) for c in results)
    assert "build" in [c.text for c in results]


def test_get_completions_common_prefix(completer):
    assert texts(completer, "bu") == ["build", "bundle"]


def test_get_completions_single_match(completer):
    results = list(completer.get_completions(Document("bui"), None))
    assert [c.text for c in results] == ["build"]
    assert results[0].start_position == -3


def test_get_completions_partial_flag(completer):
    assert texts(completer, "--no") == ["--no-verbose"]


def test_get_completions_after_command(completer):
    assert texts(completer, "build --mode r") == ["release"]


def test_get_completions_no_match(completer):
    assert texts(completer, "zzz") == []


def test_get_completions_bad_input(completer):
    assert texts(completer, 'build "unclosed quote') == []


def test_lcp_completions(completer):
    completions = list(
        completer._yield_lcp_completions(["AETHERWARP", "AETHERZOOM"], "A")
    )
    assert [c.text for c in completions] == ["AETHER", "AETHERWARP", "AETHERZOOM"]


def test_lcp_completions_quote_spaces(completer):
    suggestions = ["London", "New York", "San Francisco"]
    completions = list(completer._yield_lcp_completions(suggestions, "N"))
    assert [c.text for c in completions] == ['"New York"']
