"""
Parse error type for cfg attributes.
"""

from __future__ import annotations

import pyparsing as pp

from .meta import Span


class CfgParseError(ValueError):
    """
    Raised when text or structured meta cannot be turned into a predicate.

    `str(err)` is exactly the message; location details live on the
    attributes.

    Attributes:
        message: Human-readable description
        span: Location of the offending item
        source: Text the span refers to, when known
        lineno: 1-based line of span.start (None when source is unknown)
        col: 1-based column of span.start (None when source is unknown)
    """

    def __init__(self, message: str, span: Span | None = None, source: str | None = None):
        super().__init__(message)
        self.message = message
        self.span = span if span is not None else Span()
        self.source = source

    @property
    def lineno(self) -> int | None:
        if self.source is None:
            return None
        return pp.lineno(self.span.start, self.source)

    @property
    def col(self) -> int | None:
        if self.source is None:
            return None
        return pp.col(self.span.start, self.source)

    def with_source(self, source: str) -> "CfgParseError":
        """Attach the source text if none was recorded yet."""
        if self.source is None:
            self.source = source
        return self

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"CfgParseError({self.message!r}, {self.span!r})"


__all__ = ["CfgParseError"]
