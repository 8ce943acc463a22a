"""
Attribute tokenizer.

Turns raw attribute text into the structured meta model (meta.py) with a
pyparsing grammar:

    meta        := ident "(" [nested ("," nested)* [","]] ")"     -> MetaList
                 | ident "=" literal                               -> MetaNameValue
                 | ident                                           -> MetaWord
    nested      := literal | meta
    attribute   := "#" ["!"] "[" path tokens... "]"                -> Attribute

Spans are character offsets into the tokenized text. Tabs are kept as-is
so offsets line up with the caller's string.

Usage:
    tokenize_meta('cfg(any(unix, target_os = "macos"))')
    tokenize_attribute('#[cfg(unix)]')
    tokenize_attributes(source_text)
"""

from __future__ import annotations

import logging
import re

import pyparsing as pp

from .errors import CfgParseError
from .literals import decode_literal
from .meta import (
    Attribute,
    LitKind,
    Meta,
    MetaList,
    MetaNameValue,
    MetaWord,
    NestedMeta,
    Span,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Literals
# =============================================================================

def _literal(pattern: str, kind: LitKind, flags: int = 0) -> pp.ParserElement:
    def action(s, loc, toks):
        return decode_literal(kind, toks[0], loc)

    return pp.Regex(pattern, flags=flags).set_parse_action(action)


_byte_str = _literal(r'b"(?:[^"\\]|\\.)*"', LitKind.BYTE_STR, re.DOTALL)
_raw_byte_str = _literal(r'br(#*)".*?"\1', LitKind.BYTE_STR, re.DOTALL)
_byte = _literal(r"b'(?:[^'\\]|\\x[0-9A-Fa-f]{2}|\\.)'", LitKind.BYTE)
_raw_str = _literal(r'r(#*)".*?"\1', LitKind.STR, re.DOTALL)
_str = _literal(r'"(?:[^"\\]|\\.)*"', LitKind.STR, re.DOTALL)
_char = _literal(
    r"'(?:[^'\\]|\\x[0-9A-Fa-f]{2}|\\u\{[0-9A-Fa-f_]{1,8}\}|\\.)'",
    LitKind.CHAR,
)
_float = _literal(
    r"\d[\d_]*(?:\.\d[\d_]*(?:[eE][+-]?_*\d[\d_]*)?|[eE][+-]?_*\d[\d_]*)(?:f32|f64)?"
    r"|\d[\d_]*(?:f32|f64)",
    LitKind.FLOAT,
)
_int = _literal(
    r"(?:0x[0-9A-Fa-f_]+|0o[0-7_]+|0b[01_]+|\d[\d_]*)"
    r"(?:[ui](?:8|16|32|64|128|size))?",
    LitKind.INT,
)
_bool = _literal(r"(?:true|false)(?!\w)", LitKind.BOOL)

_literal_expr = (
    _byte_str | _raw_byte_str | _byte | _raw_str | _str | _char | _float | _int | _bool
).set_name("literal")


# =============================================================================
# Meta items
# =============================================================================

_IDENT_PATTERN = r"(?:r#)?[^\W\d]\w*"

_ident = pp.Regex(_IDENT_PATTERN).set_name("identifier")
_lpar = pp.Suppress("(")
_rpar = pp.Suppress(")")
_comma = pp.Suppress(",")
_eq = pp.Suppress("=")

_meta = pp.Forward().set_name("meta item")
_nested = (_literal_expr | _meta).set_name("predicate")


def _span(toks) -> Span:
    return Span(toks["locn_start"], toks["locn_end"])


def _make_list(s, loc, toks):
    ident, nested = toks["value"]
    return MetaList(ident=ident, nested=tuple(nested), span=_span(toks))


def _make_name_value(s, loc, toks):
    ident, lit = toks["value"]
    return MetaNameValue(ident=ident, lit=lit, span=_span(toks))


def _make_word(s, loc, toks):
    return MetaWord(ident=toks["value"][0], span=_span(toks))


_meta_list = pp.Located(
    _ident
    + _lpar
    + pp.Group(pp.Opt(_nested + pp.ZeroOrMore(_comma + _nested) + pp.Opt(_comma)))
    + _rpar
).set_parse_action(_make_list)
_meta_name_value = pp.Located(_ident + _eq + _literal_expr).set_parse_action(
    _make_name_value
)
_meta_word = pp.Located(_ident).set_parse_action(_make_word)

_meta <<= _meta_list | _meta_name_value | _meta_word

_meta_expr = _meta.parse_with_tabs()
_nested_expr = _nested.parse_with_tabs()


# =============================================================================
# Attributes
# =============================================================================

_attribute_body = pp.nested_expr("[", "]")
_attribute = pp.Located(pp.Literal("#") + pp.Opt("!") + _attribute_body).set_name(
    "attribute"
)
_attribute_expr = _attribute.parse_with_tabs()

_PATH_RE = re.compile(
    r"\s*(?P<path>{0}(?:\s*::\s*{0})*)".format(_IDENT_PATTERN)
)


# =============================================================================
# Public API
# =============================================================================

def _describe(exc: pp.ParseBaseException, text: str) -> str:
    message = exc.msg[:1].lower() + exc.msg[1:]
    if exc.loc >= len(text):
        return f"{message}, found end of input"
    return f"{message}, found {text[exc.loc]!r}"


def _run(expr: pp.ParserElement, text: str):
    try:
        return expr.parse_string(text, parse_all=True)[0]
    except pp.ParseBaseException as exc:
        loc = min(exc.loc, len(text))
        raise CfgParseError(
            _describe(exc, text), Span(loc, min(loc + 1, len(text))), source=text
        ) from None
    except RecursionError:
        raise CfgParseError(
            "expression nests too deeply to tokenize", Span(0, len(text)), source=text
        ) from None
    except CfgParseError as exc:
        raise exc.with_source(text)


def tokenize_meta(text: str, offset: int = 0, source: str | None = None) -> Meta:
    """
    Tokenize a single meta item: `unix`, `a = "b"` or `cfg(any(a, b))`.

    Args:
        text: Meta item text
        offset: Added to every span, for text cut out of a larger source
        source: The larger source `offset` refers to (for line/column)

    Raises:
        CfgParseError: If `text` is not exactly one well-formed meta item.
    """
    try:
        meta = _run(_meta_expr, text)
    except CfgParseError as exc:
        if offset:
            exc.span = exc.span.shifted(offset)
            exc.source = source
        raise
    return meta.shifted(offset) if offset else meta


def tokenize_nested_meta(text: str) -> NestedMeta:
    """
    Tokenize a meta item or a bare literal.

    Used for predicate text, where a literal is a grammar error reported
    by the parser rather than a lexing error.
    """
    return _run(_nested_expr, text)


def _make_attribute(source: str, toks) -> Attribute:
    start, end = toks["locn_start"], toks["locn_end"]
    open_bracket = source.index("[", start)
    text_offset = open_bracket + 1
    text = source[text_offset : end - 1]

    match = _PATH_RE.match(text)
    if match is None:
        loc = text_offset + len(text) - len(text.lstrip())
        raise CfgParseError("expected identifier", Span(loc, loc + 1), source=source)
    path = re.sub(r"\s+", "", match.group("path"))

    return Attribute(
        path=path,
        text=text,
        span=Span(start, end),
        text_offset=text_offset,
        inner="!" in source[start:open_bracket],
        source=source,
    )


def tokenize_attribute(text: str) -> Attribute:
    """
    Tokenize exactly one `#[...]` (or `#![...]`) attribute.

    The attribute body is not tokenized yet; see Attribute.parse_meta().

    Raises:
        CfgParseError: If `text` is not a single bracketed attribute with a
            path.
    """
    try:
        toks = _attribute_expr.parse_string(text, parse_all=True)
    except pp.ParseBaseException as exc:
        loc = min(exc.loc, len(text))
        raise CfgParseError(
            _describe(exc, text), Span(loc, min(loc + 1, len(text))), source=text
        ) from None
    return _make_attribute(text, toks)


def tokenize_attributes(source: str, skip_invalid: bool = False) -> list[Attribute]:
    """
    Collect every `#[...]` attribute in a source string, in order.

    Text outside attributes is ignored. Inner attributes (`#![...]`) are
    collected too.

    Args:
        source: Source text to scan
        skip_invalid: Drop bracketed groups without a path (`#[1]`, `#[]`)
            instead of raising

    Raises:
        CfgParseError: If a bracketed attribute has no path and
            `skip_invalid` is False.
    """
    attrs = []
    for toks, _, _ in _attribute_expr.scan_string(source):
        try:
            attrs.append(_make_attribute(source, toks))
        except CfgParseError as exc:
            if not skip_invalid:
                raise
            logger.debug("Skipping attribute at offset %d: %s", toks["locn_start"], exc)
    return attrs


# =============================================================================
# Nesting
# =============================================================================

# Literals first so parentheses inside them are not counted
_NESTING_RE = re.compile(
    r'b?r(#*)".*?"\1'
    r'|b?"(?:[^"\\]|\\.)*"'
    r"|b?'(?:[^'\\]|\\.)*'"
    r"|[()]",
    re.DOTALL,
)


def nesting_overflow(text: str, max_level: int) -> int | None:
    """
    Offset of the first `(` that opens parenthesis level `max_level + 1`.

    The grammar above recurses once per level, so callers use this to
    reject deep input before tokenizing it. Returns None if `text` never
    nests that deep.
    """
    level = 0
    for match in _NESTING_RE.finditer(text):
        token = match.group()
        if token == "(":
            level += 1
            if level > max_level:
                return match.start()
        elif token == ")":
            level -= 1
    return None


__all__ = [
    "tokenize_meta",
    "tokenize_nested_meta",
    "tokenize_attribute",
    "tokenize_attributes",
    "nesting_overflow",
]
