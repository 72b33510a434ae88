from __future__ import annotations

import logging

import pytest

from mdpdf.utils.log import configure_logging


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_debug_flag_wins():
    assert configure_logging("WARNING", debug=True) == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


@pytest.mark.parametrize("name, expected", [("info", logging.INFO), (" warning ", logging.WARNING), ("ERROR", logging.ERROR)])
def test_level_names(name, expected):
    assert configure_logging(name) == expected


def test_unknown_or_missing_level_is_info():
    assert configure_logging("chatty") == logging.INFO
    assert configure_logging(None) == logging.INFO


def test_numeric_level_passes_through():
    assert configure_logging(logging.ERROR) == logging.ERROR
