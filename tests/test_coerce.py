"""Tests for raw attribute text coercion."""

from __future__ import annotations

import pytest

from crackparams.core.coerce import INT_MAX, INT_MIN, coerce, parse_logical, parse_real, parse_vector3
from crackparams.core.errors import ParseError
from crackparams.core.schema import FieldKind


@pytest.mark.parametrize("raw", ["T", "t", "true", "TRUE", ".true.", ".T.", "1", " T "])
def test_logical_true(raw):
    assert parse_logical(raw) is True


@pytest.mark.parametrize("raw", ["F", "f", "false", "False", ".false.", ".f.", "0"])
def test_logical_false(raw):
    assert parse_logical(raw) is False


@pytest.mark.parametrize("raw", ["maybe", "yes", "", "2", "TF"])
def test_logical_rejects(raw):
    with pytest.raises(ParseError, match="not a logical"):
        parse_logical(raw)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1.0", 1.0),
        ("200", 200.0),
        ("-3.5", -3.5),
        ("+.5", 0.5),
        ("1.", 1.0),
        ("1e-3", 1e-3),
        ("2.5E+2", 250.0),
        ("1d-3", 1e-3),
        ("1.5D2", 150.0),
        ("  7.25  ", 7.25),
    ],
)
def test_real(raw, expected):
    assert parse_real(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["abc", "", "1.0abc", "1_000", "inf", "nan", "1.0 2.0", "."])
def test_real_rejects(raw):
    with pytest.raises(ParseError, match="not a real number"):
        parse_real(raw)


@pytest.mark.parametrize("raw", ["1e400", "-1d999", "1.0e309"])
def test_real_overflow_rejected(raw):
    with pytest.raises(ParseError, match="out of range for a real number"):
        parse_real(raw)


def test_real_underflow_is_zero():
    assert parse_real("1e-400") == 0.0


def test_integer():
    assert coerce("42", FieldKind.INTEGER) == 42
    assert coerce(" -7 ", FieldKind.INTEGER) == -7
    assert coerce(str(INT_MAX), FieldKind.INTEGER) == 2147483647
    assert coerce(str(INT_MIN), FieldKind.INTEGER) == -2147483648
    assert coerce("+00000000000000042", FieldKind.INTEGER) == 42


@pytest.mark.parametrize("raw", ["1.5", "1e3", "ten", ""])
def test_integer_rejects(raw):
    with pytest.raises(ParseError, match="not an integer"):
        coerce(raw, FieldKind.INTEGER)


@pytest.mark.parametrize(
    "raw", ["2147483648", "-2147483649", "99999999999999999999999", "9" * 5000]
)
def test_integer_out_of_range(raw):
    with pytest.raises(ParseError, match="out of range for an integer") as info:
        coerce(raw, FieldKind.INTEGER, namespace="minim", attribute="max_steps")
    assert info.value.key == "minim_max_steps"


def test_text_is_trimmed_only():
    assert coerce("  IP SW label=PRB_31_plus_H \n", FieldKind.TEXT) == "IP SW label=PRB_31_plus_H"
    assert coerce("", FieldKind.TEXT) == ""


def test_vector3():
    assert parse_vector3("8.0 5.0 10.0") == (8.0, 5.0, 10.0)
    assert parse_vector3(" 1\t2\n3 ") == (1.0, 2.0, 3.0)
    assert parse_vector3("1.0, 2.0, 3.0") == (1.0, 2.0, 3.0)


@pytest.mark.parametrize("raw", ["1.0 2.0", "1 2 3 4", "", "1.0 x 3.0"])
def test_vector3_rejects(raw):
    with pytest.raises(ParseError):
        parse_vector3(raw)


def test_error_names_location():
    with pytest.raises(ParseError) as excinfo:
        coerce("abc", FieldKind.REAL, namespace="crack", attribute="width")
    err = excinfo.value
    assert err.namespace == "crack"
    assert err.attribute == "width"
    assert err.raw == "abc"
    assert err.key == "crack_width"
    assert "<crack width=...>" in str(err)
    assert "'abc'" in str(err)


@pytest.mark.parametrize("kind", [FieldKind.VERBOSITY, FieldKind.NAME_LIST])
def test_special_kinds_have_no_generic_parser(kind):
    with pytest.raises(ValueError, match="No generic parser"):
        coerce("x", kind)
