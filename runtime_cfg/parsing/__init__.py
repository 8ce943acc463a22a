"""
Cfg Parsing Package.

This package turns attribute text into predicates:

- meta.py: Span, Lit, MetaWord, MetaNameValue, MetaList, Attribute
- errors.py: CfgParseError
- literals.py: Literal decoding (escapes, radix prefixes, suffixes)
- tokenizer.py: pyparsing grammar, text -> meta items / attributes
- parser.py: meta items -> predicates, plus the text entry points

Usage:
    from runtime_cfg.parsing import parse_cfg, parse_predicate

    cfg = parse_cfg('#[cfg(any(unix, target_os = "macos"))]')
"""

from .errors import CfgParseError
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
    tokenize_attribute,
    tokenize_attributes,
    tokenize_meta,
    tokenize_nested_meta,
)
from .parser import (
    cfg,
    cfg_from_attribute,
    cfg_from_meta,
    find_cfg,
    find_cfg_in_source,
    lit_to_string,
    parse_cfg,
    parse_predicate,
    predicate_from_meta,
)

__all__ = [
    # Errors
    "CfgParseError",
    # Meta model
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
    # Tokenizer
    "tokenize_meta",
    "tokenize_nested_meta",
    "tokenize_attribute",
    "tokenize_attributes",
    # Parser
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
