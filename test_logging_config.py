"""
test_logging_config.py - Logging setup checks.

Usage: pytest test_logging_config.py
"""

from __future__ import annotations

import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_installs_single_handler() -> None:
    setup_logging(level=logging.DEBUG, json_format=False)
    setup_logging(level=logging.DEBUG, json_format=False)
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG


def test_json_format_from_argument() -> None:
    setup_logging(level=logging.INFO, json_format=True)
    formatter = logging.getLogger().handlers[0].formatter
    assert formatter is not None
    assert formatter._fmt.startswith('{"timestamp"')


def test_level_and_format_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_JSON", "yes")
    setup_logging()
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert root.handlers[0].formatter._fmt.startswith('{"timestamp"')


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_JSON", raising=False)
    setup_logging()
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert "%(levelname)-7s" in root.handlers[0].formatter._fmt


def test_get_logger_returns_named_logger() -> None:
    assert get_logger("score").name == "score"
