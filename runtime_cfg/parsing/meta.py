"""
Structured attribute model produced by the tokenizer.

The parser never looks at raw text: it consumes these already-structured
items.

- Span: a [start, end) character range in the tokenized text
- Lit: a literal (string, byte string, byte, char, int, float, bool, verbatim)
- MetaWord: `ident`
- MetaNameValue: `ident = literal`
- MetaList: `ident(nested, ...)`
- Attribute: one `#[path ...]` attribute, tokenized lazily into a Meta

Callers with their own front end may build these nodes directly and hand
them to the parser (cfg_from_meta / predicate_from_meta).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class Span:
    """
    A [start, end) character range in the tokenized text.

    Attributes:
        start: Offset of the first character
        end: Offset one past the last character
    """
    start: int = 0
    end: int = 0

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Span: invalid range [{self.start}, {self.end})")

    def shifted(self, offset: int) -> "Span":
        """Return the same range moved by `offset` characters."""
        return Span(self.start + offset, self.end + offset)

    def __repr__(self) -> str:
        return f"Span({self.start}..{self.end})"


class LitKind(str, Enum):
    """Literal categories, each with its own canonical string form."""

    STR = "str"
    BYTE_STR = "byte_str"
    BYTE = "byte"
    CHAR = "char"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    VERBATIM = "verbatim"


@dataclass(frozen=True)
class Lit:
    """
    A literal value.

    Attributes:
        kind: Literal category
        value: Decoded value (str, bytes, int, float or bool; the raw text
            for VERBATIM)
        raw: Source text of the literal, exactly as written
        span: Location of the literal

    Examples:
        Lit(LitKind.STR, "macos", '"macos"')
        Lit(LitKind.INT, 32, "0x20")
        Lit(LitKind.BYTE, 98, "b'b'")
    """
    kind: LitKind
    value: Any
    raw: str = ""
    span: Span = field(default_factory=Span)

    def shifted(self, offset: int) -> "Lit":
        return replace(self, span=self.span.shifted(offset))


@dataclass(frozen=True)
class MetaWord:
    """A bare identifier: `unix`."""
    ident: str
    span: Span = field(default_factory=Span)

    def shifted(self, offset: int) -> "MetaWord":
        return replace(self, span=self.span.shifted(offset))


@dataclass(frozen=True)
class MetaNameValue:
    """An identifier bound to a literal: `target_os = "macos"`."""
    ident: str
    lit: Lit
    span: Span = field(default_factory=Span)

    def shifted(self, offset: int) -> "MetaNameValue":
        return replace(
            self,
            lit=self.lit.shifted(offset),
            span=self.span.shifted(offset),
        )


@dataclass(frozen=True)
class MetaList:
    """An identifier applied to a parenthesized list: `any(a, b)`."""
    ident: str
    nested: tuple["NestedMeta", ...] = ()
    span: Span = field(default_factory=Span)

    def __post_init__(self):
        object.__setattr__(self, "nested", tuple(self.nested))

    def shifted(self, offset: int) -> "MetaList":
        return replace(
            self,
            nested=tuple(item.shifted(offset) for item in self.nested),
            span=self.span.shifted(offset),
        )


Meta = Union[MetaWord, MetaNameValue, MetaList]
NestedMeta = Union[MetaWord, MetaNameValue, MetaList, Lit]

META_TYPES = (MetaWord, MetaNameValue, MetaList)


@dataclass(frozen=True)
class Attribute:
    """
    One `#[path ...]` attribute.

    The body is kept as text and only tokenized into a Meta on demand,
    so attributes that are not meta-shaped can still be collected.

    Attributes:
        path: Attribute path (e.g. "cfg", "derive", "a::b")
        text: Text between the brackets (e.g. "cfg(all(unix))")
        span: Location of the whole attribute, `#` through `]`
        text_offset: Offset of `text` within the source
        inner: True for `#![...]` attributes
        source: The text the attribute was tokenized from
    """
    path: str
    text: str
    span: Span = field(default_factory=Span)
    text_offset: int = 0
    inner: bool = False
    source: str = field(default="", repr=False, compare=False)

    @classmethod
    def from_meta(cls, meta: Meta) -> "PreparsedAttribute":
        """Wrap an already-built Meta as an attribute."""
        return PreparsedAttribute(
            path=meta.ident, text="", span=meta.span, meta=meta
        )

    def parse_meta(self) -> Meta:
        """
        Tokenize the attribute body into a Meta.

        Raises:
            CfgParseError: If the body is not a well-formed meta item.
        """
        from .tokenizer import tokenize_meta

        return tokenize_meta(
            self.text, offset=self.text_offset, source=self.source or None
        )


@dataclass(frozen=True)
class PreparsedAttribute(Attribute):
    """An Attribute whose Meta was supplied by the caller."""
    meta: Meta | None = None

    def parse_meta(self) -> Meta:
        return self.meta


__all__ = [
    "Span",
    "LitKind",
    "Lit",
    "MetaWord",
    "MetaNameValue",
    "MetaList",
    "Meta",
    "NestedMeta",
    "META_TYPES",
    "Attribute",
    "PreparsedAttribute",
]
