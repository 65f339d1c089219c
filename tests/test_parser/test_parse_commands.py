import pytest

from argsmith.exceptions import ParseError
from argsmith.parser import Grammar


@pytest.fixture
def grammar():
    grammar = Grammar()
    grammar.add_flag("verbose", abbr="v")
    grammar.add_option("config", abbr="c")
    build = grammar.add_command("build", aliases=["b"])
    build.add_flag("release", abbr="r")
    build.add_flag("fast", abbr="f")
    build.add_option("mode", abbr="m")
    run = build.add_command("run")
    run.add_flag("watch", abbr="w")
    return grammar


def test_selects_command(grammar):
    results = grammar.parse(["build", "--release"])
    assert results.name is None
    assert results.command.name == "build"
    assert results.command["release"] is True
    assert results["verbose"] is False


def test_alias_resolves_to_canonical_name(grammar):
    results = grammar.parse(["b", "-r"])
    assert results.command.name == "build"
    assert results.command["release"] is True


def test_command_rest(grammar):
    results = grammar.parse(["-v", "build", "a", "--fast", "b"])
    assert results["verbose"] is True
    assert results.rest == []
    assert results.command.rest == ["a", "b"]
    assert results.command.arguments == ["a", "--fast", "b"]
    assert results.arguments == ["-v", "build", "a", "--fast", "b"]


def test_nested_commands(grammar):
    results = grammar.parse(["build", "-m", "x", "run", "--watch"])
    assert results.command["mode"] == "x"
    assert results.command.command.name == "run"
    assert results.command.command["watch"] is True


def test_arguments_before_command_fail(grammar):
    with pytest.raises(ParseError, match="Cannot specify arguments before a command."):
        grammar.parse(["x", "build"])


def test_command_name_as_option_value(grammar):
    results = grammar.parse(["--config", "build"])
    assert results["config"] == "build"
    assert results.command is None


def test_parent_long_option_in_command(grammar):
    results = grammar.parse(["build", "run", "--verbose", "--config=x"])
    assert results["verbose"] is True
    assert results["config"] == "x"
    assert not results.command.command.was_parsed("watch")


def test_parent_negated_flag_in_command(grammar):
    results = grammar.parse(["build", "--no-verbose"])
    assert results["verbose"] is False
    assert results.was_parsed("verbose")


def test_parent_solo_abbreviation_in_command(grammar):
    results = grammar.parse(["build", "run", "-v", "-c", "x"])
    assert results["verbose"] is True
    assert results["config"] == "x"


def test_parent_attached_value_in_command(grammar):
    assert grammar.parse(["build", "-cfile"])["config"] == "file"


def test_cluster_first_character_from_parent(grammar):
    results = grammar.parse(["build", "-vrf"])
    assert results["verbose"] is True
    assert results.command["release"] is True
    assert results.command["fast"] is True


def test_cluster_later_characters_stay_local(grammar):
    with pytest.raises(
        ParseError, match='Could not find an option with short name "-v".'
    ) as error:
        grammar.parse(["build", "-rv"])
    assert error.value.commands == ["build"]


def test_parent_options_not_visible_to_parent_level(grammar):
    with pytest.raises(ParseError, match='Could not find an option named "release".'):
        grammar.parse(["--release", "build"])


def test_error_carries_command_path(grammar):
    with pytest.raises(ParseError) as error:
        grammar.parse(["build", "run", "--nope"])
    assert error.value.message == 'Could not find an option named "nope".'
    assert error.value.commands == ["build", "run"]
    assert error.value.argument_name == "nope"


def test_command_callbacks_and_parent_callbacks():
    calls = []
    grammar = Grammar()
    grammar.add_flag("verbose", callback=lambda value: calls.append(("verbose", value)))
    child = grammar.add_command("build")
    child.add_flag("release", callback=lambda value: calls.append(("release", value)))
    grammar.parse(["build", "--release", "--verbose"])
    assert calls == [("release", True), ("verbose", True)]


def test_command_without_trailing_options():
    grammar = Grammar()
    child = grammar.add_command("exec", Grammar(allow_trailing_options=False))
    child.add_flag("quiet")
    results = grammar.parse(["exec", "--quiet", "ls", "--quiet"])
    assert results.command["quiet"] is True
    assert results.command.rest == ["ls", "--quiet"]
