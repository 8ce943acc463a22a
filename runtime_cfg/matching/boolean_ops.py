"""
Boolean operators for predicate evaluation.

Handles AnyExpr, AllExpr, NotExpr evaluation with short-circuit semantics.
Short-circuiting never changes the result: children are pure, so the
outcome is independent of sibling order.
"""

from __future__ import annotations

from ..predicate import AllExpr, AnyExpr, NotExpr
from .protocols import Pattern, PredicateEvaluatorProtocol


def eval_any(
    expr: AnyExpr,
    pattern: Pattern,
    evaluator: PredicateEvaluatorProtocol,
) -> bool:
    """
    Evaluate AnyExpr (OR) with short-circuit.

    Returns True on first passing child; an empty AnyExpr is False.
    """
    for child in expr.children:
        if evaluator.evaluate(child, pattern):
            return True  # Short-circuit: first success wins
    return False


def eval_all(
    expr: AllExpr,
    pattern: Pattern,
    evaluator: PredicateEvaluatorProtocol,
) -> bool:
    """
    Evaluate AllExpr (AND) with short-circuit.

    Returns False on first failing child; an empty AllExpr is True.
    """
    for child in expr.children:
        if not evaluator.evaluate(child, pattern):
            return False  # Short-circuit: first failure wins
    return True


def eval_not(
    expr: NotExpr,
    pattern: Pattern,
    evaluator: PredicateEvaluatorProtocol,
) -> bool:
    """Evaluate NotExpr (negation)."""
    return not evaluator.evaluate(expr.child, pattern)
