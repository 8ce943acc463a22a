"""
Cfg Parser: structured meta to predicate conversion.

Grammar (over meta items produced by the tokenizer):
```
Expr      := Ident                        -> NameExpr(ident)
           | Ident "=" Literal             -> NameValueExpr(ident, lit_to_string(literal))
           | "any" "(" ExprList ")"        -> AnyExpr(list)
           | "all" "(" ExprList ")"        -> AllExpr(list)
           | "not" "(" Expr ")"            -> NotExpr(expr)    exactly one operand
ExprList  := Expr ("," Expr)*                                  zero or more
TopLevel  := "#" "[" "cfg" "(" Expr ")" "]" -> Cfg(expr)       exactly one operand
```

Usage:
    cfg = parse_cfg('#[cfg(all(unix, target_pointer_width = "32"))]')
    expr = parse_predicate('any(foo, bar)')
    cfg = cfg_from_meta(MetaList("cfg", (MetaWord("unix"),)))
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from ..predicate import (
    AllExpr,
    AnyExpr,
    Cfg,
    NameExpr,
    NameValueExpr,
    NotExpr,
    Predicate,
    PREDICATE_TYPES,
)
from .errors import CfgParseError
from .literals import format_float
from .meta import (
    Attribute,
    Lit,
    LitKind,
    Meta,
    META_TYPES,
    MetaList,
    MetaNameValue,
    MetaWord,
    NestedMeta,
    PreparsedAttribute,
    Span,
)
from .tokenizer import (
    nesting_overflow,
    tokenize_attribute,
    tokenize_attributes,
    tokenize_nested_meta,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Literals
# =============================================================================

def lit_to_string(lit: Lit) -> str:
    """
    Canonical string form of a literal.

    Examples:
        "hello world"  -> 'hello world'
        b"hello world" -> 'hello world'
        b'b'           -> 'b'
        'c'            -> 'c'
        0x7b           -> '123'
        3.14           -> '3.14'
        1.0            -> '1'
        true           -> 'true'

    Raises:
        CfgParseError: If a byte string is not valid UTF-8.
    """
    kind = lit.kind
    if kind in (LitKind.STR, LitKind.CHAR):
        return lit.value
    if kind == LitKind.BYTE_STR:
        try:
            return bytes(lit.value).decode("utf-8")
        except UnicodeDecodeError:
            raise CfgParseError("byte string literal is not valid UTF-8", lit.span) from None
    if kind == LitKind.BYTE:
        return chr(lit.value)
    if kind == LitKind.INT:
        return str(int(lit.value))
    if kind == LitKind.FLOAT:
        return format_float(float(lit.value))
    if kind == LitKind.BOOL:
        return "true" if lit.value else "false"
    return lit.raw if lit.raw else str(lit.value)


def _debug_string(text: str) -> str:
    """Double-quoted, escaped rendering used in error messages."""
    return json.dumps(text, ensure_ascii=False)


# =============================================================================
# Meta -> Predicate
# =============================================================================

def _resolve_max_depth(max_depth: int | None) -> int:
    if max_depth is not None:
        return max_depth
    from ..config import get_config

    return get_config().parser.max_depth


def _check_depth(meta: NestedMeta, depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise CfgParseError(
            f"predicate nesting exceeds maximum depth of {max_depth}", meta.span
        )


def _check_text_depth(text: str, levels: int, max_depth: int, offset: int = 0) -> None:
    """Reject text nesting more than `levels` parentheses deep, before tokenizing."""
    loc = nesting_overflow(text, levels)
    if loc is not None:
        raise CfgParseError(
            f"predicate nesting exceeds maximum depth of {max_depth}",
            Span(offset + loc, offset + loc + 1),
        )


def _single_operand(meta: MetaList, label: str, depth: int, max_depth: int) -> Predicate:
    """Parse the one operand of `not(..)` or `cfg(..)`."""
    operands = meta.nested
    if not operands:
        raise CfgParseError(f"{label} predicate can't be empty", meta.span)
    if len(operands) > 1:
        raise CfgParseError(f"{label} only support one predicate", operands[1].span)
    return _parse_nested_meta(operands[0], depth, max_depth)


def _parse_meta_list(meta: MetaList, depth: int, max_depth: int) -> Predicate:
    operator = meta.ident
    if operator == "any":
        return AnyExpr(tuple(
            _parse_nested_meta(item, depth + 1, max_depth) for item in meta.nested
        ))
    elif operator == "all":
        return AllExpr(tuple(
            _parse_nested_meta(item, depth + 1, max_depth) for item in meta.nested
        ))
    elif operator == "not":
        return NotExpr(_single_operand(meta, "#[cfg(not(..))]", depth + 1, max_depth))
    else:
        raise CfgParseError(f"unexpected operator `{operator}`", meta.span)


def _parse_meta(meta: Meta, depth: int, max_depth: int) -> Predicate:
    _check_depth(meta, depth, max_depth)
    if isinstance(meta, MetaWord):
        return NameExpr(meta.ident)
    elif isinstance(meta, MetaNameValue):
        return NameValueExpr(meta.ident, lit_to_string(meta.lit))
    elif isinstance(meta, MetaList):
        return _parse_meta_list(meta, depth, max_depth)
    else:
        raise TypeError(f"Expected a meta item, got {type(meta).__name__}")


def _parse_nested_meta(item: NestedMeta, depth: int, max_depth: int) -> Predicate:
    if isinstance(item, Lit):
        raise CfgParseError(
            f"unexpected literal: {_debug_string(lit_to_string(item))}", item.span
        )
    return _parse_meta(item, depth, max_depth)


def predicate_from_meta(meta: NestedMeta, max_depth: int | None = None) -> Predicate:
    """
    Convert a nested meta item to a predicate.

    Operator names are interpreted at nested position: `any`, `all` and
    `not` are operators, any other list (including `cfg(..)`) is an error.

    Args:
        meta: A MetaWord, MetaNameValue, MetaList or Lit
        max_depth: Nesting limit (default: ParserConfig.max_depth)

    Raises:
        CfgParseError: On grammar errors.
    """
    return _parse_nested_meta(meta, 1, _resolve_max_depth(max_depth))


def cfg_from_meta(meta: Meta, max_depth: int | None = None) -> Cfg:
    """
    Convert the meta item of a whole attribute (`cfg(...)`) to a Cfg.

    Raises:
        CfgParseError: If the item is not `cfg(<one predicate>)` or the
            predicate is malformed.
    """
    if isinstance(meta, MetaList) and meta.ident == "cfg":
        limit = _resolve_max_depth(max_depth)
        return Cfg(_single_operand(meta, "#[cfg(..)]", 1, limit))
    if not isinstance(meta, META_TYPES):
        raise TypeError(f"Expected a meta item, got {type(meta).__name__}")
    raise CfgParseError("expect #[cfg(..)] attribute", meta.span)


def cfg_from_attribute(attr: Attribute, max_depth: int | None = None) -> Cfg:
    """
    Parse a tokenized attribute into a Cfg.

    Raises:
        CfgParseError: If the attribute body does not tokenize or is not a
            valid `cfg(...)` item.
    """
    try:
        limit = _resolve_max_depth(max_depth)
        if not isinstance(attr, PreparsedAttribute):
            # The `cfg(` parenthesis is one level deeper than its predicate
            _check_text_depth(attr.text, limit + 1, limit, attr.text_offset)
        return cfg_from_meta(attr.parse_meta(), max_depth=limit)
    except CfgParseError as exc:
        if attr.source:
            exc.with_source(attr.source)
        raise


# =============================================================================
# Text entry points
# =============================================================================

def parse_cfg(text: str, max_depth: int | None = None) -> Cfg:
    """
    Parse `#[cfg(...)]` text.

    Only the outer form is accepted; `#![cfg(...)]` is an error here but
    is still collected by tokenize_attributes() and find_cfg_in_source().

    Raises:
        CfgParseError: On lexing or grammar errors.
    """
    attr = tokenize_attribute(text)
    if attr.inner:
        bang = text.index("!", attr.span.start)
        raise CfgParseError("expected `[`", Span(bang, bang + 1), source=text)
    return cfg_from_attribute(attr, max_depth=max_depth)


def parse_predicate(text: str, max_depth: int | None = None) -> Predicate:
    """
    Parse bare predicate text such as `all(unix, target_os = "macos")`.

    Raises:
        CfgParseError: On lexing or grammar errors.
    """
    try:
        limit = _resolve_max_depth(max_depth)
        _check_text_depth(text, limit, limit)
        return predicate_from_meta(tokenize_nested_meta(text), max_depth=limit)
    except CfgParseError as exc:
        raise exc.with_source(text)


def find_cfg(attrs: Iterable[Attribute]) -> Cfg | None:
    """
    Find the first attribute whose path is `cfg` and parse it.

    Returns None when there is no such attribute *and* when it fails to
    parse; only the first `cfg` attribute is considered. The failure is
    logged at DEBUG level. Use cfg_from_attribute() to see the error.
    """
    for attr in attrs:
        if attr.path != "cfg":
            continue
        try:
            return cfg_from_attribute(attr)
        except CfgParseError as exc:
            logger.debug("Ignoring malformed cfg attribute %r: %s", attr.text, exc)
            return None
    return None


def find_cfg_in_source(source: str) -> Cfg | None:
    """
    find_cfg() over every attribute in `source`.

    Bracketed groups that are not attributes (`#[1]`, `#[]`) are skipped.
    """
    return find_cfg(tokenize_attributes(source, skip_invalid=True))


def cfg(source: Any, max_depth: int | None = None) -> Cfg:
    """
    Convert anything that describes a cfg attribute into a Cfg.

    Accepts a Cfg (returned unchanged), a predicate node (wrapped),
    `#[cfg(...)]` text, an Attribute, or a meta item.

    Raises:
        CfgParseError: If parsing fails.
        TypeError: For unsupported inputs.
    """
    if isinstance(source, Cfg):
        return source
    if isinstance(source, PREDICATE_TYPES):
        return Cfg(source)
    if isinstance(source, str):
        return parse_cfg(source, max_depth=max_depth)
    if isinstance(source, Attribute):
        return cfg_from_attribute(source, max_depth=max_depth)
    if isinstance(source, META_TYPES):
        return cfg_from_meta(source, max_depth=max_depth)
    raise TypeError(f"Cannot convert {type(source).__name__} to Cfg")


__all__ = [
    "lit_to_string",
    "predicate_from_meta",
    "cfg_from_meta",
    "cfg_from_attribute",
    "parse_cfg",
    "parse_predicate",
    "find_cfg",
    "find_cfg_in_source",
    "cfg",
]
