"""
Literal decoding.

Turns the source text of a literal into its value:

- "a\\tb"        -> 'a\tb'             (str)
- r#"a"b"#       -> 'a"b'              (str)
- b"ab"          -> b'ab'              (bytes)
- b'b'           -> 98                 (int)
- 'c'            -> 'c'                (str)
- 0x_ff_u8       -> 255                (int)
- 1e3f64         -> 1000.0             (float)
- true           -> True               (bool)

Malformed escapes raise CfgParseError with the span of the escape.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from .errors import CfgParseError
from .meta import Lit, LitKind, Span

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "0": "\0",
    "'": "'",
    '"': '"',
}

_ESCAPE_RE = re.compile(
    r"\\(?:x(?P<hex>[0-9A-Fa-f]{2})"
    r"|u\{(?P<unicode>[0-9A-Fa-f_]{1,8})\}"
    r"|(?P<newline>\n[ \t\r\n]*)"
    r"|(?P<simple>.))",
    re.DOTALL,
)

_INT_SUFFIX_RE = re.compile(r"[ui](?:8|16|32|64|128|size)$")
_FLOAT_SUFFIX_RE = re.compile(r"f(?:32|64)$")
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def _unescape(body: str, start: int, *, byte: bool) -> str:
    """
    Resolve backslash escapes in a quoted literal body.

    `start` is the offset of `body` in the tokenized text and is only used
    to locate errors. Byte literals decode to a str of code points < 256.
    """
    if byte and not body.isascii():
        raise CfgParseError(
            "non-ASCII character in byte literal", Span(start, start + len(body))
        )

    def replace(match: re.Match) -> str:
        span = Span(start + match.start(), start + match.end())
        if match.group("hex") is not None:
            code = int(match.group("hex"), 16)
            if not byte and code > 0x7F:
                raise CfgParseError(
                    "out of range hex escape: must be \\x7F or less", span
                )
            return chr(code)
        if match.group("unicode") is not None:
            if byte:
                raise CfgParseError("unicode escape in byte literal", span)
            digits = match.group("unicode").replace("_", "")
            if not digits:
                raise CfgParseError("invalid unicode character escape", span)
            code = int(digits, 16)
            if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                raise CfgParseError("invalid unicode character escape", span)
            return chr(code)
        if match.group("newline") is not None:
            return ""
        simple = match.group("simple")
        if simple in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[simple]
        raise CfgParseError(f"unknown character escape: `\\{simple}`", span)

    return _ESCAPE_RE.sub(replace, body)


def _raw_body(raw: str, prefix: str) -> str:
    """Strip `prefix`, the hashes and the quotes from a raw (byte) string."""
    rest = raw[len(prefix):]
    hashes = len(rest) - len(rest.lstrip("#"))
    return rest[hashes + 1 : len(rest) - hashes - 1]


def _parse_int(raw: str, span: Span) -> int:
    digits = _INT_SUFFIX_RE.sub("", raw).replace("_", "")
    base = _RADIX_PREFIXES.get(digits[:2].lower(), 10)
    if base != 10:
        digits = digits[2:]
    # `0x_` and friends lex as integers but have no digits
    if not digits:
        raise CfgParseError("invalid integer literal", span)
    return int(digits, base)


def format_float(value: float) -> str:
    """Shortest round-trip decimal form, no exponent, no trailing `.0`."""
    if math.isinf(value):
        return "inf"
    if math.isnan(value):
        return "NaN"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def decode_literal(kind: LitKind, raw: str, loc: int = 0) -> Lit:
    """
    Build a Lit from the source text of a literal.

    Args:
        kind: Literal category, as recognized by the tokenizer
        raw: Literal text exactly as written
        loc: Offset of `raw` in the tokenized text

    Raises:
        CfgParseError: If an escape sequence is invalid or an integer
            literal has no digits.
    """
    span = Span(loc, loc + len(raw))

    if kind == LitKind.STR:
        if raw.startswith("r"):
            value = _raw_body(raw, "r")
        else:
            value = _unescape(raw[1:-1], loc + 1, byte=False)
    elif kind == LitKind.BYTE_STR:
        if raw.startswith("br"):
            body = _raw_body(raw, "br")
            if not body.isascii():
                raise CfgParseError("non-ASCII character in byte literal", span)
            value = body.encode("ascii")
        else:
            value = _unescape(raw[2:-1], loc + 2, byte=True).encode("latin-1")
    elif kind == LitKind.BYTE:
        value = ord(_unescape(raw[2:-1], loc + 2, byte=True))
    elif kind == LitKind.CHAR:
        value = _unescape(raw[1:-1], loc + 1, byte=False)
    elif kind == LitKind.INT:
        value = _parse_int(raw, span)
    elif kind == LitKind.FLOAT:
        value = float(_FLOAT_SUFFIX_RE.sub("", raw).replace("_", ""))
    elif kind == LitKind.BOOL:
        value = raw == "true"
    else:
        value = raw

    return Lit(kind=kind, value=value, raw=raw, span=span)


__all__ = ["decode_literal", "format_float"]
