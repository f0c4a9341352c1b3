"""Type definitions and aliases for crack parameters."""

from collections.abc import Mapping

# Field value shapes
Vector3 = tuple[float, float, float]
NameList = tuple[str, ...]

# Markup attributes as handed over by the adapter
AttributeMap = Mapping[str, str]

__all__ = [
    "Vector3",
    "NameList",
    "AttributeMap",
]
