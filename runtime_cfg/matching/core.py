"""
Predicate Evaluator.

Evaluates predicate trees against a flag source (Pattern).

Key Features:
- Short-circuit evaluation for AnyExpr/AllExpr
- Presence queries for NameExpr, value queries for NameValueExpr
- Plain lists of pairs and dicts accepted as flag sources

Usage:
    evaluator = PredicateEvaluator()
    evaluator.matches(expr, [("unix", None), ("target_pointer_width", "32")])
"""

from __future__ import annotations

from typing import Any

from ..predicate import (
    AllExpr,
    AnyExpr,
    NameExpr,
    NameValueExpr,
    NotExpr,
    Predicate,
)
from .boolean_ops import eval_all, eval_any, eval_not
from .patterns import as_pattern
from .protocols import Pattern


class PredicateEvaluator:
    """
    Evaluates predicate trees against a Pattern.

    Thread-safe and stateless - can be reused across evaluations.

    Example:
        evaluator = PredicateEvaluator()

        expr = AllExpr((NameExpr("unix"), NameValueExpr("target_os", "linux")))
        flags = FlagMap.from_mapping({"unix": None, "target_os": "linux"})
        evaluator.evaluate(expr, flags)  # True
    """

    def evaluate(self, expr: Predicate, pattern: Pattern) -> bool:
        """
        Evaluate a predicate tree against an already-coerced Pattern.

        Args:
            expr: The predicate to evaluate.
            pattern: Pattern providing flag lookups.

        Returns:
            True if the flags satisfy the predicate.

        Raises:
            TypeError: If `expr` is not a predicate node.
        """
        if isinstance(expr, NameExpr):
            return pattern.matches(expr.name, None)
        elif isinstance(expr, NameValueExpr):
            return pattern.matches(expr.name, expr.value)
        elif isinstance(expr, AnyExpr):
            return eval_any(expr, pattern, self)
        elif isinstance(expr, AllExpr):
            return eval_all(expr, pattern, self)
        elif isinstance(expr, NotExpr):
            return eval_not(expr, pattern, self)
        else:
            raise TypeError(f"Unknown predicate type: {type(expr).__name__}")

    def matches(self, expr: Predicate, flags: Any) -> bool:
        """Coerce `flags` with as_pattern() and evaluate `expr` against it."""
        return self.evaluate(expr, as_pattern(flags))


_DEFAULT_EVALUATOR = PredicateEvaluator()


def evaluate_predicate(expr: Predicate, flags: Any) -> bool:
    """
    Convenience function to evaluate a predicate.

    Args:
        expr: The predicate to evaluate.
        flags: A Pattern, a list of (key, value) pairs or a mapping.

    Returns:
        True if the flags satisfy the predicate.
    """
    return _DEFAULT_EVALUATOR.matches(expr, flags)
