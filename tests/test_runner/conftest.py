import pytest

from argsmith import Command, CommandRunner

_DEFAULT_USAGE = """Usage: test <command> [arguments]

Global options:
-h, --help    Print this usage information.

Available commands:
  help   Display help information for test.

Run "test help <command>" for more information about a command."""

_FOO_USAGE = """Usage: test foo [arguments]
-h, --help    Print this usage information.

Run "test help" to see global options."""


@pytest.fixture
def default_usage():
    return _DEFAULT_USAGE


@pytest.fixture
def foo_usage():
    return _FOO_USAGE


@pytest.fixture
def runner():
    return CommandRunner("test", "A test command runner.")


@pytest.fixture
def calls():
    return []


@pytest.fixture
def foo(calls):
    def set_value(results, global_results):
        calls.append("foo")

    return Command(
        name="foo",
        description="Set a value.",
        action=set_value,
        takes_arguments=False,
    )
