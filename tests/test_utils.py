import logging

import pytest
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from argsmith.utils import ensure_async, is_coroutine, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("argsmith")
    before = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in logger.handlers[:]:
        if handler not in before:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


def added_handlers(logger, before):
    return [handler for handler in logger.handlers if handler not in before]


@pytest.mark.asyncio
async def test_ensure_async_wraps_sync_function():
    def add(a, b):
        return a + b

    wrapped = ensure_async(add)
    assert is_coroutine(wrapped)
    assert wrapped.__name__ == "add"
    assert await wrapped(1, 2) == 3


def test_ensure_async_keeps_coroutine_function():
    async def noop():
        return None

    assert ensure_async(noop) is noop


def test_ensure_async_rejects_non_callable():
    with pytest.raises(TypeError):
        ensure_async("not callable")


def test_setup_logging_cli_mode(package_logger):
    before = list(package_logger.handlers)
    assert setup_logging(mode="cli") is package_logger
    (handler,) = added_handlers(package_logger, before)
    assert isinstance(handler, RichHandler)
    assert handler.level == logging.WARNING
    assert package_logger.level == logging.WARNING
    assert package_logger.propagate is False


def test_setup_logging_leaves_root_logger_alone(package_logger):
    root = logging.getLogger()
    application_handler = logging.NullHandler()
    root.addHandler(application_handler)
    root_level = root.level
    try:
        setup_logging(mode="json")
        assert application_handler in root.handlers
        assert root.level == root_level
    finally:
        root.removeHandler(application_handler)


def test_setup_logging_keeps_application_handlers_on_package_logger(package_logger):
    application_handler = logging.NullHandler()
    package_logger.addHandler(application_handler)
    before = list(package_logger.handlers)
    setup_logging(mode="cli")
    setup_logging(mode="json")
    assert application_handler in package_logger.handlers
    (handler,) = added_handlers(package_logger, before)
    assert isinstance(handler.formatter, JsonFormatter)


def test_setup_logging_json_mode(package_logger):
    before = list(package_logger.handlers)
    setup_logging(mode="json", console_log_level=logging.INFO)
    (handler,) = added_handlers(package_logger, before)
    assert isinstance(handler.formatter, JsonFormatter)
    assert handler.level == logging.INFO


def test_setup_logging_mode_from_environment(package_logger, monkeypatch):
    monkeypatch.setenv("ARGSMITH_LOG_MODE", "json")
    before = list(package_logger.handlers)
    setup_logging()
    (handler,) = added_handlers(package_logger, before)
    assert isinstance(handler.formatter, JsonFormatter)


def test_setup_logging_with_file(package_logger, tmp_path):
    log_file = tmp_path / "argsmith.log"
    before = list(package_logger.handlers)
    setup_logging(mode="cli", log_filename=str(log_file), json_log_to_file=True)
    console_handler, file_handler = added_handlers(package_logger, before)
    assert isinstance(console_handler, RichHandler)
    assert isinstance(file_handler, logging.FileHandler)
    assert isinstance(file_handler.formatter, JsonFormatter)
    assert package_logger.level == logging.DEBUG
    package_logger.debug("written to file")
    file_handler.flush()
    assert "written to file" in log_file.read_text(encoding="UTF-8")


def test_setup_logging_invalid_mode(package_logger):
    before = list(package_logger.handlers)
    with pytest.raises(ValueError, match="Invalid log mode"):
        setup_logging(mode="xml")
    assert package_logger.handlers == before
