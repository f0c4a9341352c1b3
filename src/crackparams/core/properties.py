"""Normalisation of the printable-property list.

Older input documents omitted the ``species`` entry, which consumers of the
movie files expect in first position. Every override of ``io_print_properties``
is passed through :func:`normalize_property_list` so that the list always
starts with it.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import FatalConfigError

SENTINEL = "species"
SEPARATOR = ":"
MAX_PROPERTIES = 100


def split_property_list(raw: str) -> list[str]:
    """Split a colon-delimited property string, dropping empty entries."""
    return [token.strip() for token in raw.split(SEPARATOR) if token.strip()]


def normalize_property_list(raw: str | Sequence[str]) -> tuple[str, ...]:
    """Return the property list with the sentinel moved (or added) to the front.

    The remaining entries keep their relative order. Repeated sentinels collapse
    into the single leading one.

    Args:
        raw: Colon-delimited string such as ``"pos:species:nn"``, or an
            already split sequence of names

    Returns:
        Normalised tuple of property names

    Raises:
        FatalConfigError: If the result has more than MAX_PROPERTIES entries
    """
    names = split_property_list(raw) if isinstance(raw, str) else [str(n).strip() for n in raw]
    rest = [name for name in names if name and name != SENTINEL]
    if len(rest) + 1 > MAX_PROPERTIES:
        raise FatalConfigError(
            f"print_properties has {len(rest) + 1} entries, "
            f"MAX_PROPERTIES({MAX_PROPERTIES}) exceeded"
        )
    return (SENTINEL, *rest)


__all__ = [
    "SENTINEL",
    "SEPARATOR",
    "MAX_PROPERTIES",
    "split_property_list",
    "normalize_property_list",
]
