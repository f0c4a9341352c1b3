"""Population of a CrackParams record from markup events.

The builder starts from the schema defaults and applies attribute overrides in
document order while inside the ``<crack_params>`` stanza::

    <crack_params>
      <crack structure="diamond" width="200.0" seed_length="50.0"/>
      <md time_step="1.0" sim_temp="300.0"/>
      <io verbosity="NORMAL" print_properties="pos:nn"/>
    </crack_params>

Element and attribute names join with an underscore into the fully-qualified
key, so ``<md time_step=...>`` sets ``md_time_step``. Unknown names are
ignored. A bad value is collected as a ParseError and the field keeps its
previous value; a FatalConfigError aborts the build.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .coerce import coerce
from .errors import ParseError, UnknownKeyError
from .logging import get_logger
from .markup import EventKind, MarkupEvent, iter_events, iter_file_events
from .params import CrackParams
from .properties import normalize_property_list
from .schema import SCHEMA, FieldKind, FieldSpec, Schema
from .verbosity import decode as decode_verbosity

logger = get_logger(__name__)

DEFAULT_STANZA = "crack_params"

# Kinds that bypass the generic coercer
_SPECIAL_DECODERS: dict[FieldKind, Callable[[str], Any]] = {
    FieldKind.VERBOSITY: decode_verbosity,
    FieldKind.NAME_LIST: normalize_property_list,
}


@dataclass
class BuildResult:
    """Finished record plus the diagnostics collected while building it."""

    record: CrackParams
    diagnostics: list[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def raise_for_errors(self) -> CrackParams:
        """Return the record, or raise the first collected diagnostic."""
        if self.diagnostics:
            raise self.diagnostics[0]
        return self.record


@dataclass
class BuildContext:
    """Mutable state of a single build."""

    values: dict[str, dict[str, Any]]
    in_stanza: bool = False
    finished: bool = False
    applied: int = 0
    diagnostics: list[ParseError] = field(default_factory=list)


class ConfigBuilder:
    """Builds CrackParams records from markup events.

    A builder holds only settings; each ``build`` call gets its own context, so
    one instance can serve several builds at once.
    """

    def __init__(
        self,
        stanza: str = DEFAULT_STANZA,
        schema: Schema = SCHEMA,
        strict: bool = False,
        reject_unknown: bool = False,
    ):
        """
        Args:
            stanza: Name of the root element whose content is read
            schema: Parameter table, the module-level SCHEMA by default
            strict: Raise the first ParseError instead of collecting it
            reject_unknown: Report unknown element/attribute names inside the
                stanza as UnknownKeyError diagnostics instead of ignoring them
        """
        self.stanza = stanza
        self.schema = schema
        self.strict = strict
        self.reject_unknown = reject_unknown

    def build(self, events: Iterable[MarkupEvent]) -> BuildResult:
        """Apply ``events`` on top of the defaults.

        Returns at the end of the stanza or when ``events`` is exhausted.

        Raises:
            ParseError: In strict mode, on the first bad attribute
            FatalConfigError: If a list-valued attribute is too long
        """
        ctx = BuildContext(values=self.schema.defaults())
        for event in events:
            self.process(ctx, event)
            if ctx.finished:
                break

        record = self._freeze(ctx.values)
        logger.info(
            "Built crack parameters",
            {
                "stanza": self.stanza,
                "applied": ctx.applied,
                "diagnostics": len(ctx.diagnostics),
                "terminated": ctx.finished,
            },
        )
        return BuildResult(record=record, diagnostics=ctx.diagnostics)

    def process(self, ctx: BuildContext, event: MarkupEvent) -> None:
        """Advance ``ctx`` by one event."""
        if event.kind is EventKind.START:
            if event.name == self.stanza:
                ctx.in_stanza = True
            elif ctx.in_stanza:
                self._apply_element(ctx, event.name, event.attributes)
        elif event.kind is EventKind.END:
            if ctx.in_stanza and event.name == self.stanza:
                ctx.in_stanza = False
                ctx.finished = True

    def _apply_element(self, ctx: BuildContext, name: str, attributes: Mapping[str, str]) -> None:
        try:
            specs = self.schema.defaults_for(name)
        except KeyError:
            if self.reject_unknown:
                self._report(ctx, UnknownKeyError(f"unknown element <{name}>", namespace=name))
            return

        for attribute, raw in attributes.items():
            spec = specs.get(attribute)
            if spec is None:
                if self.reject_unknown:
                    self._report(
                        ctx,
                        UnknownKeyError(
                            f"unknown attribute {attribute!r}",
                            namespace=name,
                            attribute=attribute,
                            raw=raw,
                        ),
                    )
                continue
            try:
                value = self._decode(spec, raw)
            except ParseError as e:
                self._report(ctx, e)
                continue
            ctx.values[name][attribute] = value
            ctx.applied += 1
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Set {spec.key}", {"key": spec.key, "raw": raw, "value": value})

    def _decode(self, spec: FieldSpec, raw: str) -> Any:
        decoder = _SPECIAL_DECODERS.get(spec.kind)
        if decoder is None:
            return coerce(raw, spec.kind, namespace=spec.namespace, attribute=spec.attribute)
        try:
            return decoder(raw)
        except ParseError as e:
            raise e.located(spec.namespace, spec.attribute) from None

    def _report(self, ctx: BuildContext, error: ParseError) -> None:
        if self.strict:
            raise error
        logger.warning(
            f"Ignoring {error}",
            {"key": error.key, "raw": error.raw, "error": type(error).__name__},
        )
        ctx.diagnostics.append(error)

    def _freeze(self, values: dict[str, dict[str, Any]]) -> CrackParams:
        sections = {
            namespace: self.schema.model_for(namespace)(**attrs)
            for namespace, attrs in values.items()
        }
        return CrackParams(**sections)


def build(
    events: Iterable[MarkupEvent],
    stanza: str = DEFAULT_STANZA,
    strict: bool = False,
    reject_unknown: bool = False,
) -> BuildResult:
    """Build a record from events with a one-off ConfigBuilder."""
    return ConfigBuilder(stanza=stanza, strict=strict, reject_unknown=reject_unknown).build(events)


def parse_params(text: str | bytes, **kwargs: Any) -> BuildResult:
    """Build a record from an XML document held in memory.

    Raises:
        MarkupError: If the document is not well-formed XML
    """
    return build(iter_events(text), **kwargs)


def load_params(path: str | Path, **kwargs: Any) -> BuildResult:
    """Build a record from an XML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        MarkupError: If the file is not well-formed XML
    """
    return build(iter_file_events(path), **kwargs)


__all__ = [
    "DEFAULT_STANZA",
    "BuildContext",
    "BuildResult",
    "ConfigBuilder",
    "build",
    "parse_params",
    "load_params",
]
