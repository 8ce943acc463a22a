"""
Builder functions for predicate trees.

    all_([name("unix"), name_value("target_pointer_width", "32")])
    -> All(Name('unix'), NameValue('target_pointer_width', '32'))

`any`, `all` and `not` are Python builtins/keywords, hence the trailing
underscores.
"""

from __future__ import annotations

from collections.abc import Iterable

from .nodes import AllExpr, AnyExpr, NameExpr, NameValueExpr, NotExpr
from .types import Predicate


def any_(predicates: Iterable[Predicate]) -> AnyExpr:
    """A predicate that succeeds when any of `predicates` succeeds."""
    return AnyExpr(tuple(predicates))


def all_(predicates: Iterable[Predicate]) -> AllExpr:
    """A predicate that succeeds when all of `predicates` succeed."""
    return AllExpr(tuple(predicates))


def not_(predicate: Predicate) -> NotExpr:
    """A predicate that negates `predicate`."""
    return NotExpr(predicate)


def name(name: str) -> NameExpr:
    """A predicate testing that a flag called `name` is declared."""
    return NameExpr(name)


def name_value(name: str, value: str) -> NameValueExpr:
    """A predicate testing that flag `name` declares `value`."""
    return NameValueExpr(name, value)


__all__ = [
    "any_",
    "all_",
    "not_",
    "name",
    "name_value",
]
