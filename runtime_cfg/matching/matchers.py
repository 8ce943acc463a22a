"""
Concrete string matchers.

- ExactMatcher: candidate equals one string
- AnyOfMatcher: candidate is one of a fixed set of strings
- OptionalMatcher: wraps a matcher that may be absent (absent never matches)

as_matcher() turns the plain values callers naturally write (a string, a
list of strings, None) into one of these.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .protocols import Matcher


@dataclass(frozen=True)
class ExactMatcher:
    """Matches exactly one string."""

    value: str

    def matches(self, value: str) -> bool:
        return self.value == value

    def __repr__(self) -> str:
        return f"Exact({self.value!r})"


@dataclass(frozen=True)
class AnyOfMatcher:
    """Matches any string in `values` (OR semantics)."""

    values: frozenset[str]

    def __post_init__(self):
        object.__setattr__(self, "values", frozenset(self.values))

    def matches(self, value: str) -> bool:
        return value in self.values

    def __repr__(self) -> str:
        return f"AnyOf({sorted(self.values)!r})"


@dataclass(frozen=True)
class OptionalMatcher:
    """
    A matcher that may be absent.

    An absent matcher (inner=None) reports False for every candidate, so a
    flag declared without a value never satisfies a value query.
    """

    inner: Matcher | None = None

    @property
    def is_present(self) -> bool:
        return self.inner is not None

    def matches(self, value: str) -> bool:
        return self.inner is not None and self.inner.matches(value)

    def __repr__(self) -> str:
        return f"Optional({self.inner!r})"


def as_matcher(obj: Any) -> Matcher | None:
    """
    Coerce a plain value into a Matcher.

    Conversions:
        None            -> None (no declared value)
        "macos"         -> ExactMatcher("macos")
        ["a", "b"]      -> AnyOfMatcher({"a", "b"})
        Matcher         -> unchanged

    Raises:
        TypeError: If the value cannot act as a matcher.
    """
    if obj is None:
        return None
    if isinstance(obj, str):
        return ExactMatcher(obj)
    if isinstance(obj, Matcher):
        return obj
    if isinstance(obj, Iterable):
        values = list(obj)
        for item in values:
            if not isinstance(item, str):
                raise TypeError(
                    f"Matcher values must be strings, got {type(item).__name__}"
                )
        return AnyOfMatcher(frozenset(values))
    raise TypeError(f"Cannot use {type(obj).__name__} as a matcher")


__all__ = [
    "ExactMatcher",
    "AnyOfMatcher",
    "OptionalMatcher",
    "as_matcher",
]
