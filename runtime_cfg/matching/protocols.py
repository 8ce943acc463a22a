"""
Capability protocols for predicate matching.

Matcher: does a single candidate string satisfy some criterion?
Pattern: does a flag source declare key K (with a value accepted by V)?
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..predicate import Predicate


@runtime_checkable
class Matcher(Protocol):
    """A matcher for string matching."""

    def matches(self, value: str) -> bool: ...


@runtime_checkable
class Pattern(Protocol):
    """
    A pattern for flag matching.

    `value` is None for a presence query and a string for a value query.
    """

    def matches(self, key: str, value: str | None) -> bool: ...


class PredicateEvaluatorProtocol(Protocol):
    """Protocol for the evaluator to avoid circular imports."""

    def evaluate(self, expr: "Predicate", pattern: Pattern) -> bool: ...
