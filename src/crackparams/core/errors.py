"""Custom exception types for crack parameter handling."""

from __future__ import annotations


class CrackParamsError(Exception):
    """Base exception for all crack parameter errors."""

    pass


class SchemaError(CrackParamsError):
    """The parameter schema itself is inconsistent."""

    pass


class ParseError(CrackParamsError):
    """An attribute value could not be converted to its declared type.

    Recoverable: the builder skips the attribute, keeps the previous value and
    collects the error as a diagnostic.
    """

    def __init__(
        self,
        message: str,
        *,
        namespace: str | None = None,
        attribute: str | None = None,
        raw: str | None = None,
    ) -> None:
        self.message = message
        self.namespace = namespace
        self.attribute = attribute
        self.raw = raw
        super().__init__(str(self))

    @property
    def key(self) -> str | None:
        """Fully-qualified key of the offending attribute, if known."""
        if self.namespace is None or self.attribute is None:
            return None
        return f"{self.namespace}_{self.attribute}"

    def located(self, namespace: str, attribute: str) -> ParseError:
        """Return a copy of this error tied to ``namespace``/``attribute``."""
        return type(self)(self.message, namespace=namespace, attribute=attribute, raw=self.raw)

    def __str__(self) -> str:
        where = ""
        if self.namespace is not None and self.attribute is not None:
            where = f"<{self.namespace} {self.attribute}=...>: "
        elif self.namespace is not None:
            where = f"<{self.namespace}>: "
        return f"{where}{self.message}"


class UnknownKeyError(ParseError):
    """Unrecognised element or attribute inside the stanza (opt-in check)."""

    pass


class FatalConfigError(CrackParamsError):
    """The document is structurally untrustworthy; the build is aborted."""

    pass


class MarkupError(CrackParamsError):
    """The markup document could not be read."""

    pass


def format_error(e: BaseException) -> str:
    """Return a short message like 'ParseError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name


__all__ = [
    "CrackParamsError",
    "SchemaError",
    "ParseError",
    "UnknownKeyError",
    "FatalConfigError",
    "MarkupError",
    "format_error",
]
