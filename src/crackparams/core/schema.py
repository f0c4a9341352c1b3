"""Static table of every recognised parameter.

The table is derived from the section models in :mod:`crackparams.core.params`:
each ``(namespace, attribute)`` pair gets a :class:`FieldSpec` holding its
kind, default and unit. Fully-qualified keys (``namespace_attribute``) must be
unique across the whole record; construction fails otherwise.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from .errors import SchemaError
from .params import CrackParams, Section
from .types import NameList, Vector3
from .verbosity import Verbosity


class FieldKind(str, Enum):
    """Semantic type of a parameter."""

    TEXT = "text"
    REAL = "real"
    INTEGER = "integer"
    LOGICAL = "logical"
    VECTOR3 = "vector3"
    NAME_LIST = "name_list"
    VERBOSITY = "verbosity"


_KIND_BY_ANNOTATION: dict[Any, FieldKind] = {
    str: FieldKind.TEXT,
    float: FieldKind.REAL,
    int: FieldKind.INTEGER,
    bool: FieldKind.LOGICAL,
    Vector3: FieldKind.VECTOR3,
    NameList: FieldKind.NAME_LIST,
    Verbosity: FieldKind.VERBOSITY,
}


@dataclass(frozen=True)
class FieldSpec:
    """One schema entry."""

    namespace: str
    attribute: str
    kind: FieldKind
    default: Any
    unit: str = ""
    description: str = ""

    @property
    def key(self) -> str:
        return f"{self.namespace}_{self.attribute}"


def kind_for(annotation: Any) -> FieldKind:
    """Map a model field annotation to its FieldKind."""
    try:
        return _KIND_BY_ANNOTATION[annotation]
    except (KeyError, TypeError):
        raise SchemaError(f"No field kind for annotation {annotation!r}") from None


class Schema:
    """Ordered, read-only collection of FieldSpecs grouped by namespace."""

    def __init__(self, sections: Sequence[tuple[str, type[Section]]]):
        """Build the table from ``(namespace, section model)`` pairs.

        Raises:
            SchemaError: On a repeated namespace, a repeated fully-qualified
                key, or a field whose annotation has no kind
        """
        self._models: dict[str, type[Section]] = {}
        self._namespaces: dict[str, Mapping[str, FieldSpec]] = {}
        self._by_key: dict[str, FieldSpec] = {}

        for namespace, model in sections:
            if namespace in self._models:
                raise SchemaError(f"Namespace {namespace!r} declared twice")
            specs: dict[str, FieldSpec] = {}
            for attribute, info in model.model_fields.items():
                spec = FieldSpec(
                    namespace=namespace,
                    attribute=attribute,
                    kind=kind_for(info.annotation),
                    default=info.get_default(call_default_factory=True),
                    unit=model.units.get(attribute, ""),
                    description=info.description or "",
                )
                if spec.key in self._by_key:
                    other = self._by_key[spec.key]
                    raise SchemaError(
                        f"Key {spec.key!r} is defined by both "
                        f"{other.namespace}.{other.attribute} and {namespace}.{attribute}"
                    )
                self._by_key[spec.key] = spec
                specs[attribute] = spec
            self._models[namespace] = model
            self._namespaces[namespace] = MappingProxyType(specs)

    @classmethod
    def from_record(cls, record: type[BaseModel]) -> Schema:
        """Build the schema from a record model whose fields are sections."""
        return cls([(name, info.annotation) for name, info in record.model_fields.items()])

    @property
    def namespaces(self) -> tuple[str, ...]:
        return tuple(self._namespaces)

    def defaults_for(self, namespace: str) -> Mapping[str, FieldSpec]:
        """Attribute -> FieldSpec for one namespace, in declared order.

        Raises:
            KeyError: If the namespace is unknown
        """
        return self._namespaces[namespace]

    def model_for(self, namespace: str) -> type[Section]:
        return self._models[namespace]

    def field(self, key: str) -> FieldSpec:
        """Look up a FieldSpec by fully-qualified key."""
        return self._by_key[key]

    def keys(self) -> tuple[str, ...]:
        return tuple(self._by_key)

    def defaults(self) -> dict[str, dict[str, Any]]:
        """Fresh nested copy of the default values, namespace -> attribute -> value."""
        return {
            namespace: {attribute: spec.default for attribute, spec in specs.items()}
            for namespace, specs in self._namespaces.items()
        }

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[FieldSpec]:
        for specs in self._namespaces.values():
            yield from specs.values()

    def __len__(self) -> int:
        return len(self._by_key)


SCHEMA = Schema.from_record(CrackParams)


__all__ = [
    "FieldKind",
    "FieldSpec",
    "Schema",
    "SCHEMA",
    "kind_for",
]
