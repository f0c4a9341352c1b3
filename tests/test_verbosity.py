"""Tests for symbolic verbosity levels."""

import logging

import pytest

from crackparams.core.errors import ParseError
from crackparams.core.verbosity import LEVEL_NAMES, Verbosity, decode, encode, logging_level


def test_level_order():
    assert LEVEL_NAMES == ("ERROR", "SILENT", "NORMAL", "VERBOSE", "NERD", "ANAL")
    assert Verbosity.ERROR < Verbosity.SILENT < Verbosity.NORMAL < Verbosity.VERBOSE
    assert Verbosity.VERBOSE < Verbosity.NERD < Verbosity.ANAL


def test_decode_verbose():
    assert decode("VERBOSE") == 3
    assert decode("VERBOSE") is Verbosity.VERBOSE


def test_decode_strips_whitespace():
    assert decode("  NERD ") is Verbosity.NERD


@pytest.mark.parametrize("name", ["verbose", "Normal", "LOUD", "", "2"])
def test_decode_rejects_unknown(name):
    with pytest.raises(ParseError, match="unknown verbosity"):
        decode(name)


@pytest.mark.parametrize("name", LEVEL_NAMES)
def test_encode_inverts_decode(name):
    assert encode(decode(name)) == name


def test_encode_accepts_plain_int():
    assert encode(0) == "ERROR"
    assert encode(5) == "ANAL"


def test_logging_level():
    assert logging_level(Verbosity.ERROR) == logging.ERROR
    assert logging_level(Verbosity.NORMAL) == logging.INFO
    assert logging_level(Verbosity.ANAL) == logging.DEBUG
