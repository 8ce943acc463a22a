"""
Predicate Matching Package.

This package provides flag sources and the predicate evaluator:

- protocols.py: Matcher and Pattern capability protocols
- matchers.py: ExactMatcher, AnyOfMatcher, OptionalMatcher
- patterns.py: FlagList and FlagMap flag sources
- boolean_ops.py: AnyExpr, AllExpr, NotExpr evaluation
- core.py: PredicateEvaluator class and main evaluate() dispatch

Usage:
    from runtime_cfg.matching import PredicateEvaluator, evaluate_predicate

    evaluate_predicate(expr, {"unix": None, "target_os": ["linux"]})
"""

from .protocols import Matcher, Pattern
from .matchers import AnyOfMatcher, ExactMatcher, OptionalMatcher, as_matcher
from .patterns import FlagEntry, FlagList, FlagMap, as_pattern
from .core import PredicateEvaluator, evaluate_predicate

__all__ = [
    "Matcher",
    "Pattern",
    "ExactMatcher",
    "AnyOfMatcher",
    "OptionalMatcher",
    "as_matcher",
    "FlagEntry",
    "FlagList",
    "FlagMap",
    "as_pattern",
    "PredicateEvaluator",
    "evaluate_predicate",
]
