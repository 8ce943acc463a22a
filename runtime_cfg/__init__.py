"""
runtime_cfg - cfg predicates at runtime

Parses `#[cfg(...)]` attribute predicates (`any`, `all`, `not`, `name`,
`name = "value"`) into an immutable tree, evaluates them against a flag
source, and prints them back in canonical form.

Usage:
    from runtime_cfg import Cfg

    cfg = Cfg.parse('#[cfg(all(unix, target_pointer_width = "32"))]')
    cfg.matches([("unix", None), ("target_pointer_width", "32")])  # True
    str(cfg)  # '#[cfg(all(unix, target_pointer_width = "32"))]'
"""

__version__ = "1.0.0"
__author__ = "runtime_cfg"

from .predicate import (
    AnyExpr,
    AllExpr,
    NotExpr,
    NameExpr,
    NameValueExpr,
    Cfg,
    Predicate,
    any_,
    all_,
    not_,
    name,
    name_value,
)
from .matching import (
    Matcher,
    Pattern,
    ExactMatcher,
    AnyOfMatcher,
    OptionalMatcher,
    FlagList,
    FlagMap,
    PredicateEvaluator,
    evaluate_predicate,
)
from .parsing import (
    CfgParseError,
    Attribute,
    cfg,
    cfg_from_attribute,
    cfg_from_meta,
    find_cfg,
    parse_cfg,
    parse_predicate,
    predicate_from_meta,
)
from .printing import format_cfg, format_predicate

__all__ = [
    "__version__",
    # Predicate tree
    "AnyExpr",
    "AllExpr",
    "NotExpr",
    "NameExpr",
    "NameValueExpr",
    "Cfg",
    "Predicate",
    "any_",
    "all_",
    "not_",
    "name",
    "name_value",
    # Matching
    "Matcher",
    "Pattern",
    "ExactMatcher",
    "AnyOfMatcher",
    "OptionalMatcher",
    "FlagList",
    "FlagMap",
    "PredicateEvaluator",
    "evaluate_predicate",
    # Parsing
    "CfgParseError",
    "Attribute",
    "cfg",
    "cfg_from_attribute",
    "cfg_from_meta",
    "find_cfg",
    "parse_cfg",
    "parse_predicate",
    "predicate_from_meta",
    # Printing
    "format_cfg",
    "format_predicate",
]
