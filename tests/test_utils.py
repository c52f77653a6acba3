import logging

import pytest
import pythonjsonlogger.json
from rich.logging import RichHandler

from cliflag.utils import setup_logging, split_assignment


@pytest.fixture(autouse=True)
def restore_logging():
    cliflag_logger = logging.getLogger("cliflag")
    handlers = list(cliflag_logger.handlers)
    level = cliflag_logger.level
    yield
    for handler in cliflag_logger.handlers:
        if handler not in handlers:
            handler.close()
    cliflag_logger.handlers[:] = handlers
    cliflag_logger.setLevel(level)
    cliflag_logger.propagate = True


@pytest.mark.parametrize(
    "text, expected",
    [
        ("ports=80", ("ports", "80")),
        ("query=a=b", ("query", "a=b")),
        ("empty=", ("empty", "")),
    ],
)
def test_split_assignment(text, expected):
    assert split_assignment(text) == expected


@pytest.mark.parametrize("text", ["ports", "=80", ""])
def test_split_assignment_rejects_malformed(text):
    with pytest.raises(ValueError):
        split_assignment(text)


def test_setup_logging_cli_mode():
    setup_logging(mode="cli")
    cliflag_logger = logging.getLogger("cliflag")
    assert len(cliflag_logger.handlers) == 1
    assert isinstance(cliflag_logger.handlers[0], RichHandler)
    assert cliflag_logger.handlers[0].level == logging.WARNING
    assert cliflag_logger.propagate is False


def test_setup_logging_json_mode(capsys):
    setup_logging(mode="json", level=logging.DEBUG)
    handler = logging.getLogger("cliflag").handlers[0]
    assert isinstance(handler.formatter, pythonjsonlogger.json.JsonFormatter)

    logging.getLogger("cliflag.test").debug("hello")
    handler.flush()
    assert '"message": "hello"' in capsys.readouterr().err


def test_setup_logging_replaces_previous_handler():
    setup_logging(mode="cli")
    setup_logging(mode="json")
    handlers = logging.getLogger("cliflag").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, pythonjsonlogger.json.JsonFormatter)


def test_setup_logging_mode_from_environment(monkeypatch):
    monkeypatch.setenv("CLIFLAG_LOG_MODE", "json")
    setup_logging()
    handler = logging.getLogger("cliflag").handlers[0]
    assert isinstance(handler.formatter, pythonjsonlogger.json.JsonFormatter)


def test_setup_logging_defaults_to_cli(monkeypatch):
    monkeypatch.delenv("CLIFLAG_LOG_MODE", raising=False)
    setup_logging()
    assert isinstance(logging.getLogger("cliflag").handlers[0], RichHandler)


def test_setup_logging_invalid_mode():
    with pytest.raises(ValueError, match="Invalid log mode: xml"):
        setup_logging(mode="xml")
