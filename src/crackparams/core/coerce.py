"""Conversion of raw attribute text into typed parameter values.

Accepted spellings:

- integer: ``[+-]digits`` within the signed 32-bit range
- real: decimal literal with optional exponent; Fortran ``d``/``D`` exponents
  (``1d-3``) are read like ``e``; values that overflow to infinity are errors
- logical: ``t``, ``true``, ``.t.``, ``.true.``, ``1`` and
  ``f``, ``false``, ``.f.``, ``.false.``, ``0``, case-insensitive
- vector3: three reals separated by whitespace and/or commas
- text: anything, with surrounding whitespace removed

The whole token must match; trailing garbage is an error.
"""

from __future__ import annotations

import math
import re
from typing import Any

from .errors import ParseError
from .schema import FieldKind

_INTEGER_RE = re.compile(r"[+-]?\d+")
_REAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eEdD][+-]?\d+)?")
_VECTOR_SPLIT_RE = re.compile(r"[\s,]+")

TRUE_TOKENS = frozenset({"t", "true", ".t.", ".true.", "1"})
FALSE_TOKENS = frozenset({"f", "false", ".f.", ".false.", "0"})

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def parse_integer(raw: str) -> int:
    token = raw.strip()
    if not _INTEGER_RE.fullmatch(token):
        raise ParseError(f"{raw!r} is not an integer", raw=raw)
    digits = token.lstrip("+-").lstrip("0")
    if len(digits) > 10 or not INT_MIN <= int(token) <= INT_MAX:
        raise ParseError(f"{raw!r} is out of range for an integer", raw=raw)
    return int(token)


def parse_real(raw: str) -> float:
    token = raw.strip()
    if not _REAL_RE.fullmatch(token):
        raise ParseError(f"{raw!r} is not a real number", raw=raw)
    value = float(token.replace("d", "e").replace("D", "e"))
    if not math.isfinite(value):
        raise ParseError(f"{raw!r} is out of range for a real number", raw=raw)
    return value


def parse_logical(raw: str) -> bool:
    token = raw.strip().lower()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    raise ParseError(f"{raw!r} is not a logical value (expected T or F)", raw=raw)


def parse_vector3(raw: str) -> tuple[float, float, float]:
    tokens = [t for t in _VECTOR_SPLIT_RE.split(raw.strip()) if t]
    if len(tokens) != 3:
        raise ParseError(f"expected 3 components, got {len(tokens)} in {raw!r}", raw=raw)
    try:
        x, y, z = (parse_real(t) for t in tokens)
    except ParseError:
        raise ParseError(f"{raw!r} is not a vector of 3 reals", raw=raw) from None
    return (x, y, z)


def parse_text(raw: str) -> str:
    return raw.strip()


_PARSERS = {
    FieldKind.TEXT: parse_text,
    FieldKind.REAL: parse_real,
    FieldKind.INTEGER: parse_integer,
    FieldKind.LOGICAL: parse_logical,
    FieldKind.VECTOR3: parse_vector3,
}


def coerce(
    raw: str,
    kind: FieldKind,
    *,
    namespace: str | None = None,
    attribute: str | None = None,
) -> Any:
    """Convert ``raw`` to the Python value for ``kind``.

    Args:
        raw: Attribute text as found in the document
        kind: Target field kind (scalar kinds and VECTOR3)
        namespace: Namespace reported in errors
        attribute: Attribute name reported in errors

    Returns:
        Converted value

    Raises:
        ParseError: If the text does not parse as ``kind``
        ValueError: If ``kind`` has no generic parser (verbosity, name lists)
    """
    try:
        parser = _PARSERS[kind]
    except KeyError:
        raise ValueError(f"No generic parser for {kind.value} fields") from None
    try:
        return parser(raw)
    except ParseError as e:
        raise ParseError(e.message, namespace=namespace, attribute=attribute, raw=raw) from None


__all__ = [
    "TRUE_TOKENS",
    "FALSE_TOKENS",
    "INT_MIN",
    "INT_MAX",
    "parse_integer",
    "parse_real",
    "parse_logical",
    "parse_vector3",
    "parse_text",
    "coerce",
]
