import pytest

from argsmith.exceptions import DefinitionError
from argsmith.parser import Grammar


def test_add_flag_and_lookup():
    grammar = Grammar()
    option = grammar.add_flag("verbose", abbr="v")
    assert grammar.find_by_name("verbose") is option
    assert grammar.find_by_abbreviation("v") is option
    assert grammar.find_by_abbreviation("V") is None
    assert list(grammar.options) == ["verbose"]


def test_duplicate_option_name():
    grammar = Grammar()
    grammar.add_flag("verbose")
    with pytest.raises(DefinitionError, match='Duplicate option "verbose".'):
        grammar.add_option("verbose")


def test_duplicate_abbreviation():
    grammar = Grammar()
    grammar.add_flag("verbose", abbr="v")
    with pytest.raises(
        DefinitionError, match='Abbreviation "v" is already used by "verbose".'
    ):
        grammar.add_option("version", abbr="v")


def test_duplicate_command():
    grammar = Grammar()
    grammar.add_command("build")
    with pytest.raises(DefinitionError, match='Duplicate command "build".'):
        grammar.add_command("build")


def test_alias_collides_with_command():
    grammar = Grammar()
    grammar.add_command("build")
    with pytest.raises(DefinitionError, match='Duplicate command "build".'):
        grammar.add_command("make", aliases=["build"])


def test_add_command_returns_fresh_grammar():
    grammar = Grammar()
    child = grammar.add_command("build")
    assert isinstance(child, Grammar)
    assert grammar.commands["build"] is child
    child.add_flag("release")
    assert "release" not in grammar.options


def test_add_command_keeps_given_grammar():
    grammar = Grammar()
    child = Grammar()
    assert grammar.add_command("build", child) is child


def test_resolve_command():
    grammar = Grammar()
    grammar.add_command("build", aliases=["b", "make"])
    assert grammar.resolve_command("build") == "build"
    assert grammar.resolve_command("make") == "build"
    assert grammar.resolve_command("test") is None


def test_split_commas_requires_allow_multiple():
    grammar = Grammar()
    with pytest.raises(DefinitionError, match="split_commas"):
        grammar.add_option("define", split_commas=True)


def test_allow_multiple_wraps_default():
    grammar = Grammar()
    grammar.add_option("define", allow_multiple=True, default="a")
    grammar.add_option("other", allow_multiple=True)
    assert grammar.get_default("define") == ["a"]
    assert grammar.get_default("other") == []
    assert grammar.find_by_name("define").is_multiple
    assert grammar.find_by_name("define").split_commas


def test_allow_multiple_split_commas_false():
    grammar = Grammar()
    grammar.add_option("define", allow_multiple=True, split_commas=False)
    assert not grammar.find_by_name("define").split_commas


def test_multi_option_defaults():
    grammar = Grammar()
    option = grammar.add_multi_option("define")
    assert option.split_commas
    assert grammar.get_default("define") == []


def test_get_default():
    grammar = Grammar()
    grammar.add_flag("verbose", default=True)
    grammar.add_option("mode", default="debug")
    grammar.add_option("output")
    grammar.add_multi_option("define", default=["a", "b"])
    assert grammar.get_default("verbose") is True
    assert grammar.get_default("mode") == "debug"
    assert grammar.get_default("output") is None
    assert grammar.get_default("define") == ["a", "b"]


def test_get_default_unknown():
    grammar = Grammar()
    with pytest.raises(DefinitionError):
        grammar.get_default("missing")


def test_separators_keep_order():
    grammar = Grammar()
    grammar.add_flag("a")
    grammar.add_separator("Group:")
    grammar.add_flag("b")
    entries = grammar.options_and_separators
    assert entries[1] == "Group:"
    assert [entry.name for entry in (entries[0], entries[2])] == ["a", "b"]


def test_options_mapping_is_read_only():
    grammar = Grammar()
    grammar.add_flag("a")
    with pytest.raises(TypeError):
        grammar.options["b"] = grammar.options["a"]


def test_allows_anything_is_false():
    assert Grammar().allows_anything is False


def test_underscore_abbreviation_rejected():
    grammar = Grammar()
    with pytest.raises(DefinitionError, match="invalid character"):
        grammar.add_flag("under", abbr="_")
    assert grammar.find_by_name("under") is None


def test_non_string_option_default_rejected():
    grammar = Grammar()
    with pytest.raises(DefinitionError, match='Default for option "count" must be a string'):
        grammar.add_option("count", default=5)
