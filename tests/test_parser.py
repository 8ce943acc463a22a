"""
Tests for the cfg parser.

Validates that:
1. Well-formed attributes and predicates parse to the expected trees
2. Grammar errors carry the right message and location
3. Literal values are canonicalized to strings
4. Nesting depth is bounded
5. The cfg() entry point accepts every supported input
"""

import re

import pytest

from runtime_cfg import format_cfg, format_predicate
from runtime_cfg.config import DEFAULT_MAX_DEPTH
from runtime_cfg.parsing import (
    Attribute,
    CfgParseError,
    Lit,
    LitKind,
    MetaList,
    MetaNameValue,
    MetaWord,
    Span,
    cfg,
    cfg_from_attribute,
    cfg_from_meta,
    lit_to_string,
    parse_cfg,
    parse_predicate,
    predicate_from_meta,
)
from runtime_cfg.predicate import (
    AllExpr,
    AnyExpr,
    Cfg,
    NameExpr,
    NameValueExpr,
    NotExpr,
    all_,
    any_,
    get_depth,
    name,
    name_value,
    not_,
)


class TestParseCfg:
    """Test parsing whole #[cfg(...)] attributes."""

    @pytest.mark.parametrize("text, expected", [
        ("#[cfg(any(foo, bar))]", AnyExpr((NameExpr("foo"), NameExpr("bar")))),
        ('#[cfg(target_os = "macos")]', NameValueExpr("target_os", "macos")),
        (
            '#[cfg(all(unix, target_pointer_width = "32"))]',
            AllExpr((NameExpr("unix"), NameValueExpr("target_pointer_width", "32"))),
        ),
        ("#[cfg(not(foo))]", NotExpr(NameExpr("foo"))),
        ("#[cfg(test)]", NameExpr("test")),
    ])
    def test_parse_table(self, text, expected):
        """Each attribute parses to its predicate tree."""
        assert parse_cfg(text) == Cfg(expected)

    def test_empty_any_and_all(self):
        """any() and all() are valid with no operands."""
        assert parse_cfg("#[cfg(any())]") == Cfg(AnyExpr(()))
        assert parse_cfg("#[cfg(all())]") == Cfg(AllExpr(()))

    def test_whitespace_and_newlines(self):
        """Whitespace between tokens is insignificant."""
        text = "#[cfg(\n    all(\n        unix,\n        not( windows ),\n    )\n)]"
        assert parse_cfg(text) == Cfg(AllExpr((NameExpr("unix"), NotExpr(NameExpr("windows")))))

    def test_inner_attribute_rejected(self):
        """#![cfg(...)] is not a cfg attribute; the error points at the `!`."""
        with pytest.raises(CfgParseError, match=re.escape("expected `[`")) as exc_info:
            parse_cfg("#![cfg(unix)]")
        assert exc_info.value.span == Span(1, 2)
        assert exc_info.value.source == "#![cfg(unix)]"

    def test_inner_attribute_rejected_by_cfg_function(self):
        """cfg() on text goes through the same check."""
        with pytest.raises(CfgParseError, match="expected"):
            cfg("#![cfg(unix)]")

    def test_cfg_parse_classmethod(self):
        """Cfg.parse is parse_cfg."""
        cfg_ = Cfg.parse('#[cfg(all(unix, target_pointer_width = "32"))]')
        assert cfg_.matches([("unix", None), ("target_pointer_width", "32")])
        assert not cfg_.matches([("unix", None), ("target_pointer_width", "64")])


class TestParseErrors:
    """Test grammar error messages and locations."""

    @pytest.mark.parametrize("text, message", [
        ("#[test]", "expect #[cfg(..)] attribute"),
        ("#[cfg(foo(bar))]", "unexpected operator `foo`"),
        ("#[cfg(foo, bar)]", "#[cfg(..)] only support one predicate"),
        ("#[cfg(not(foo, bar))]", "#[cfg(not(..))] only support one predicate"),
        ("#[cfg(not())]", "#[cfg(not(..))] predicate can't be empty"),
        ("#[cfg()]", "#[cfg(..)] predicate can't be empty"),
        ('#[cfg("hello")]', 'unexpected literal: "hello"'),
    ])
    def test_error_table(self, text, message):
        """Each malformed attribute fails with its message, verbatim."""
        with pytest.raises(CfgParseError, match=re.escape(message)) as exc_info:
            parse_cfg(text)
        assert str(exc_info.value) == message

    @pytest.mark.parametrize("text, span", [
        ("#[test]", Span(2, 6)),
        ("#[cfg(foo(bar))]", Span(6, 14)),
        ("#[cfg(foo, bar)]", Span(11, 14)),
        ("#[cfg()]", Span(2, 7)),
        ('#[cfg("hello")]', Span(6, 13)),
    ])
    def test_error_spans_index_source(self, text, span):
        """Error spans point at the offending item in the attribute text."""
        with pytest.raises(CfgParseError) as exc_info:
            parse_cfg(text)
        assert exc_info.value.span == span
        assert exc_info.value.source == text

    def test_nested_cfg_is_not_an_operator(self):
        """cfg(..) is only valid at the top level."""
        with pytest.raises(CfgParseError, match="unexpected operator `cfg`"):
            parse_cfg("#[cfg(cfg(unix))]")

    @pytest.mark.parametrize("text", ["#[cfg]", '#[cfg = "unix"]', "#[derive(Debug)]"])
    def test_non_list_cfg_rejected(self, text):
        """Only the list form of cfg is accepted."""
        with pytest.raises(CfgParseError, match=re.escape("expect #[cfg(..)] attribute")):
            parse_cfg(text)

    def test_unexpected_operator_anywhere(self):
        """Unknown operators fail at any depth."""
        with pytest.raises(CfgParseError, match="unexpected operator `xor`"):
            parse_cfg("#[cfg(all(unix, any(a, xor(b, c))))]")

    def test_literal_at_nested_position(self):
        """Literals are rejected inside any/all too."""
        with pytest.raises(CfgParseError, match=re.escape("unexpected literal: \"32\"")):
            parse_cfg("#[cfg(any(unix, 32))]")

    def test_literal_message_escapes_quotes(self):
        """The quoted literal in the message is escaped."""
        with pytest.raises(CfgParseError) as exc_info:
            parse_cfg('#[cfg("a\\"b")]')
        assert str(exc_info.value) == 'unexpected literal: "a\\"b"'

    def test_line_and_column(self):
        """lineno/col are computed against the attribute source."""
        text = "#[cfg(\n  foo,\n  bar)]"
        with pytest.raises(CfgParseError) as exc_info:
            parse_cfg(text)
        err = exc_info.value
        assert err.lineno == 3
        assert err.col == 3

    def test_lexing_error_propagates(self):
        """Tokenizer failures surface as CfgParseError with the source."""
        text = "#[cfg(unix foo)]"
        with pytest.raises(CfgParseError, match="^expected") as exc_info:
            parse_cfg(text)
        assert exc_info.value.source == text
        assert exc_info.value.span.start >= 2

    @pytest.mark.parametrize("text, span", [
        ("#[cfg(a = 0x_)]", Span(10, 13)),
        ("#[cfg(a = 0b_)]", Span(10, 13)),
        ("#[cfg(a = 0o_)]", Span(10, 13)),
        ("#[cfg(a = 0x__u8)]", Span(10, 16)),
    ])
    def test_integer_without_digits(self, text, span):
        """A radix prefix with only underscores is a located parse error."""
        with pytest.raises(CfgParseError, match="invalid integer literal") as exc_info:
            parse_cfg(text)
        assert exc_info.value.span == span
        assert exc_info.value.source == text

    def test_integer_without_digits_in_predicate(self):
        """Bare predicate text reports the same error."""
        with pytest.raises(CfgParseError, match="invalid integer literal") as exc_info:
            parse_predicate("any(a, b = 0b_)")
        assert exc_info.value.span == Span(11, 14)

    def test_error_without_source(self):
        """Errors from hand-built meta have no line/column."""
        with pytest.raises(CfgParseError) as exc_info:
            cfg_from_meta(MetaWord("test"))
        assert exc_info.value.source is None
        assert exc_info.value.lineno is None
        assert exc_info.value.col is None


class TestLiteralCanonicalization:
    """Test name = literal value conversion."""

    @pytest.mark.parametrize("literal, value", [
        ('"hello world"', "hello world"),
        ('b"hello world"', "hello world"),
        ("b'b'", "b"),
        ("'c'", "c"),
        ("123", "123"),
        ("0x7b", "123"),
        ("1_000u32", "1000"),
        ("3.14", "3.14"),
        ("1.0", "1"),
        ("1e3", "1000"),
        ("2.5e-1", "0.25"),
        ("true", "true"),
        ("false", "false"),
        ('"a\\"b"', 'a"b'),
    ])
    def test_literal_table(self, literal, value):
        """Every literal kind converts to its canonical string."""
        assert parse_predicate(f"key = {literal}") == NameValueExpr("key", value)

    def test_non_utf8_byte_string(self):
        """Byte strings must decode as UTF-8."""
        with pytest.raises(CfgParseError, match="not valid UTF-8"):
            parse_predicate('key = b"\\xff"')

    def test_utf8_byte_string(self):
        """Escaped UTF-8 sequences decode."""
        assert parse_predicate('key = b"caf\\xc3\\xa9"') == NameValueExpr("key", "café")

    def test_verbatim_uses_raw_text(self):
        """Verbatim literals render as written."""
        assert lit_to_string(Lit(LitKind.VERBATIM, "1.0e+", "1.0e+")) == "1.0e+"

    def test_float_specials(self):
        """inf and NaN have fixed spellings."""
        assert lit_to_string(Lit(LitKind.FLOAT, float("inf"))) == "inf"
        assert lit_to_string(Lit(LitKind.FLOAT, float("nan"))) == "NaN"


class TestParsePredicate:
    """Test parsing bare predicate text."""

    def test_bare_predicate(self):
        """Predicate text without the attribute wrapper."""
        assert parse_predicate("any(unix, windows)") == AnyExpr((NameExpr("unix"), NameExpr("windows")))

    def test_bare_literal_rejected(self):
        """A bare literal is a grammar error, located at the literal."""
        with pytest.raises(CfgParseError) as exc_info:
            parse_predicate('"hello"')
        err = exc_info.value
        assert str(err) == 'unexpected literal: "hello"'
        assert err.span == Span(0, 7)
        assert err.source == '"hello"'

    def test_unicode_literal_in_message(self):
        """Non-ASCII text is kept as-is in the message."""
        with pytest.raises(CfgParseError) as exc_info:
            parse_predicate('"héllo"')
        assert str(exc_info.value) == 'unexpected literal: "héllo"'

    def test_cfg_is_rejected_at_predicate_level(self):
        """cfg(..) is not a predicate operator."""
        with pytest.raises(CfgParseError, match="unexpected operator `cfg`"):
            parse_predicate("cfg(unix)")


class TestDepthLimit:
    """Test the nesting guard."""

    def test_depth_within_limit(self):
        """A tree exactly at the limit parses."""
        expr = parse_predicate("not(not(unix))", max_depth=3)
        assert get_depth(expr) == 3

    def test_depth_over_limit(self):
        """One level more fails, pointing at the too-deep item."""
        with pytest.raises(CfgParseError, match="exceeds maximum depth of 2") as exc_info:
            parse_predicate("not(not(unix))", max_depth=2)
        assert exc_info.value.span == Span(8, 12)

    def test_cfg_wrapper_does_not_count(self):
        """The leaf directly inside cfg(..) is at depth 1."""
        assert parse_cfg("#[cfg(unix)]", max_depth=1) == Cfg(NameExpr("unix"))
        with pytest.raises(CfgParseError, match="maximum depth"):
            parse_cfg("#[cfg(not(unix))]", max_depth=1)

    def test_limit_from_environment(self, monkeypatch):
        """RUNTIME_CFG_MAX_DEPTH sets the default limit."""
        monkeypatch.setenv("RUNTIME_CFG_MAX_DEPTH", "2")
        assert parse_predicate("not(unix)") == NotExpr(NameExpr("unix"))
        with pytest.raises(CfgParseError, match="maximum depth of 2"):
            parse_predicate("not(not(unix))")

    def test_default_limit_allows_realistic_nesting(self):
        """Ordinary attributes are far below the default limit."""
        text = "not(" * 20 + "unix" + ")" * 20
        assert get_depth(parse_predicate(text)) == 21

    def test_pathological_nesting_is_an_error(self):
        """Absurd nesting fails cleanly instead of crashing the interpreter."""
        text = "any(" * 5000 + "unix" + ")" * 5000
        with pytest.raises(CfgParseError, match="exceeds maximum depth"):
            parse_predicate(text)
        with pytest.raises(CfgParseError, match="exceeds maximum depth"):
            parse_cfg(f"#[cfg({text})]")

    def test_round_trip_at_default_limit(self):
        """A tree exactly DEFAULT_MAX_DEPTH deep prints and parses back."""
        expr = name("unix")
        for _ in range(DEFAULT_MAX_DEPTH - 1):
            expr = not_(expr)
        assert get_depth(expr) == DEFAULT_MAX_DEPTH
        assert parse_predicate(format_predicate(expr)) == expr
        assert parse_cfg(format_cfg(Cfg(expr))) == Cfg(expr)

    def test_mixed_operators_at_default_limit(self):
        """any/all chains at the default limit round-trip too."""
        expr = name_value("target_os", "macos")
        for level in range(DEFAULT_MAX_DEPTH - 1):
            wrap = any_ if level % 2 else all_
            expr = wrap([name(f"n{level}"), expr])
        assert get_depth(expr) == DEFAULT_MAX_DEPTH
        assert parse_predicate(format_predicate(expr)) == expr

    def test_one_past_default_limit(self):
        """One level past the default is the depth error, not a tokenizer failure."""
        expr = name("unix")
        for _ in range(DEFAULT_MAX_DEPTH):
            expr = not_(expr)
        message = f"exceeds maximum depth of {DEFAULT_MAX_DEPTH}"
        with pytest.raises(CfgParseError, match=message):
            parse_predicate(format_predicate(expr))
        with pytest.raises(CfgParseError, match=message):
            parse_cfg(format_cfg(Cfg(expr)))

    def test_deep_text_rejected_before_tokenizing(self):
        """Text nesting past the limit fails at the first too-deep parenthesis."""
        with pytest.raises(CfgParseError, match="maximum depth of 2") as exc_info:
            parse_predicate("all(any(not(unix)))", max_depth=2)
        assert exc_info.value.span == Span(11, 12)
        with pytest.raises(CfgParseError, match="maximum depth of 2") as exc_info:
            parse_cfg("#[cfg(all(any(not(unix))))]", max_depth=2)
        assert exc_info.value.span == Span(17, 18)
        assert exc_info.value.source == "#[cfg(all(any(not(unix))))]"

    def test_parentheses_in_literals_do_not_count(self):
        """Parentheses inside string literals are not nesting."""
        assert parse_predicate('a = "((((("', max_depth=1) == NameValueExpr("a", "(((((")
        assert parse_predicate('a = r#"(("#', max_depth=1) == NameValueExpr("a", "((")
        assert parse_cfg("#[cfg(a = '(')]", max_depth=1) == Cfg(NameValueExpr("a", "("))


class TestMetaEntryPoints:
    """Test parsing hand-built meta items."""

    def test_predicate_from_meta(self):
        """Hand-built meta items need no spans."""
        meta = MetaList("all", (
            MetaWord("unix"),
            MetaNameValue("target_os", Lit(LitKind.STR, "linux", '"linux"')),
        ))
        assert predicate_from_meta(meta) == AllExpr((
            NameExpr("unix"),
            NameValueExpr("target_os", "linux"),
        ))

    def test_predicate_from_literal_meta(self):
        """A literal is rejected whatever its kind."""
        with pytest.raises(CfgParseError, match=re.escape('unexpected literal: "5"')):
            predicate_from_meta(Lit(LitKind.INT, 5, "5"))

    def test_cfg_from_meta(self):
        """cfg_from_meta requires the cfg(..) list."""
        meta = MetaList("cfg", (MetaWord("unix"),))
        assert cfg_from_meta(meta) == Cfg(NameExpr("unix"))
        assert Cfg.from_meta(meta) == Cfg(NameExpr("unix"))

    def test_cfg_from_meta_rejects_non_meta(self):
        """Non-meta input is a TypeError, not a parse error."""
        with pytest.raises(TypeError):
            cfg_from_meta("cfg(unix)")

    def test_preparsed_attribute(self):
        """Attribute.from_meta wraps a meta item for the attribute API."""
        attr = Attribute.from_meta(MetaList("cfg", (MetaWord("windows"),)))
        assert attr.path == "cfg"
        assert cfg_from_attribute(attr) == Cfg(NameExpr("windows"))


class TestCfgFunction:
    """Test the cfg() conversion entry point."""

    def test_cfg_passthrough(self):
        """A Cfg is returned unchanged."""
        existing = Cfg(NameExpr("unix"))
        assert cfg(existing) is existing

    def test_predicate_wrapped(self):
        """A predicate node is wrapped."""
        assert cfg(NameExpr("unix")) == Cfg(NameExpr("unix"))

    def test_text(self):
        """Strings are parsed as attributes."""
        assert cfg("#[cfg(unix)]") == Cfg(NameExpr("unix"))

    def test_attribute_and_meta(self):
        """Attributes and meta items are accepted."""
        meta = MetaList("cfg", (MetaWord("unix"),))
        assert cfg(meta) == Cfg(NameExpr("unix"))
        assert cfg(Attribute.from_meta(meta)) == Cfg(NameExpr("unix"))

    def test_unsupported_type(self):
        """Anything else is a TypeError."""
        with pytest.raises(TypeError, match="Cannot convert int to Cfg"):
            cfg(42)
