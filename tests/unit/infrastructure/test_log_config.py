"""Tests for src/infrastructure/log_config.py."""

import logging

import pytest

from src.infrastructure.database import Settings
from src.infrastructure.log_config import _parse_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_levels():
    names = ["", "sqlalchemy.engine", "sqlalchemy.pool", "asyncpg"]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


# --- _parse_level ---

@pytest.mark.parametrize(
    "raw, expected",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("Error", logging.ERROR)],
)
def test_parse_level_known_names(raw, expected):
    assert _parse_level(raw) == expected


def test_parse_level_unknown_defaults_to_info():
    assert _parse_level("chatty") == logging.INFO


def test_parse_level_rejects_non_level_attributes():
    # logging.BASIC_FORMAT exists but is a string.
    assert _parse_level("basic_format") == logging.INFO


# --- setup_logging ---

def test_setup_logging_sets_root_level():
    setup_logging(Settings(log_level="DEBUG"))
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_sets_sql_category_levels():
    setup_logging(Settings(log_level_sql="ERROR"))
    for name in ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg"):
        assert logging.getLogger(name).level == logging.ERROR


def test_setup_logging_installs_a_handler():
    setup_logging(Settings())
    assert logging.getLogger().handlers
