"""XML adapter producing start/end element events.

The builder never touches XML directly; it consumes :class:`MarkupEvent`
objects. Documents are fed incrementally to an ElementTree pull parser so that
a consumer which stops early (at the end of the stanza) never parses the rest.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from .errors import MarkupError

CHUNK_SIZE = 64 * 1024


class EventKind(str, Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class MarkupEvent:
    """An element boundary with, for START events, the element's attributes."""

    kind: EventKind
    name: str
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def start(name: str, attributes: Mapping[str, str] | None = None, **kwargs: str) -> MarkupEvent:
    """Build a START event, e.g. ``start("md", time_step="1.0")``."""
    attrs = dict(attributes or {})
    attrs.update(kwargs)
    return MarkupEvent(EventKind.START, name, MappingProxyType(attrs))


def end(name: str) -> MarkupEvent:
    return MarkupEvent(EventKind.END, name)


def _local_name(tag: str) -> str:
    # ElementTree spells namespaced tags as "{uri}local"
    return tag.rsplit("}", 1)[-1]


def _drain(parser: ET.XMLPullParser) -> Iterator[MarkupEvent]:
    for kind, elem in parser.read_events():
        name = _local_name(elem.tag)
        if kind == "start":
            attrs = {_local_name(k): v for k, v in elem.attrib.items()}
            yield MarkupEvent(EventKind.START, name, MappingProxyType(attrs))
        else:
            yield MarkupEvent(EventKind.END, name)
            elem.clear()


def iter_chunk_events(chunks: Iterable[str | bytes]) -> Iterator[MarkupEvent]:
    """Yield events from a document supplied in pieces.

    A document consisting only of whitespace yields no events.

    Raises:
        MarkupError: If the document is not well-formed XML
    """
    parser = ET.XMLPullParser(events=("start", "end"))
    seen_content = False
    try:
        for chunk in chunks:
            if not seen_content:
                if not chunk.strip():
                    continue
                seen_content = True
            parser.feed(chunk)
            yield from _drain(parser)
        if seen_content:
            parser.close()
            yield from _drain(parser)
    except ET.ParseError as e:
        raise MarkupError(f"Malformed XML: {e}") from e


def iter_events(text: str | bytes) -> Iterator[MarkupEvent]:
    """Yield events from a complete XML document held in memory."""
    return iter_chunk_events([text])


def iter_file_events(path: str | Path, chunk_size: int = CHUNK_SIZE) -> Iterator[MarkupEvent]:
    """Yield events from an XML file, reading it in chunks.

    Raises:
        FileNotFoundError: If the file doesn't exist
        MarkupError: If the file is not well-formed XML
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Parameter file not found: {path}")

    def chunks() -> Iterator[bytes]:
        with open(path, "rb") as f:
            while True:
                data = f.read(chunk_size)
                if not data:
                    return
                yield data

    return iter_chunk_events(chunks())


__all__ = [
    "EventKind",
    "MarkupEvent",
    "start",
    "end",
    "iter_chunk_events",
    "iter_events",
    "iter_file_events",
]
