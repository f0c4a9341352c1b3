"""Core module with parameter models, schema, coercion, builder and rendering."""

__all__ = [
    "types",
    "errors",
    "logging",
    "verbosity",
    "properties",
    "params",
    "schema",
    "coerce",
    "markup",
    "builder",
    "render",
]
