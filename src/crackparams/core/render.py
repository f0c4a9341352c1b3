"""Human-readable dump of a CrackParams record.

Output order follows the schema exactly; tooling that scrapes run logs relies
on it. Each namespace prints as::

      MD parameters:
         time_step             = 1.0 fs
         extrapolate_steps     = 10

followed by a blank line.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .params import CrackParams
from .schema import SCHEMA, FieldKind, FieldSpec, Schema
from .verbosity import encode as encode_verbosity

HEADER_INDENT = "  "
FIELD_INDENT = "     "
LABEL_WIDTH = 22


def format_value(kind: FieldKind, value: Any) -> str:
    """Format one value; logicals as T/F, sequences space-joined."""
    if kind is FieldKind.LOGICAL:
        return "T" if value else "F"
    if kind is FieldKind.REAL:
        return repr(float(value))
    if kind is FieldKind.VECTOR3:
        return " ".join(repr(float(v)) for v in value)
    if kind is FieldKind.NAME_LIST:
        return " ".join(value)
    if kind is FieldKind.VERBOSITY:
        return encode_verbosity(value)
    return str(value)


def format_line(spec: FieldSpec, value: Any) -> str:
    text = format_value(spec.kind, value)
    if spec.unit:
        text = f"{text} {spec.unit}"
    return f"{FIELD_INDENT}{spec.attribute:<{LABEL_WIDTH}}= {text}"


def render_lines(record: CrackParams, schema: Schema = SCHEMA) -> Iterator[str]:
    for namespace in schema.namespaces:
        section = getattr(record, namespace)
        yield HEADER_INDENT + schema.model_for(namespace).title
        for attribute, spec in schema.defaults_for(namespace).items():
            yield format_line(spec, getattr(section, attribute))
        yield ""


def render(record: CrackParams, schema: Schema = SCHEMA) -> str:
    """Render ``record`` as a newline-terminated block of text."""
    return "\n".join(render_lines(record, schema)) + "\n"


__all__ = [
    "format_value",
    "format_line",
    "render_lines",
    "render",
]
