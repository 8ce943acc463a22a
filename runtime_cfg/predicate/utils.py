"""
Predicate Utility Functions.

This module provides utility functions for working with predicate trees:
- iter_nodes: Pre-order walk over every node
- get_referenced_names: Extract all referenced flag names
- get_depth: Nesting depth of a tree
- Serialization functions: Convert trees to/from dict format
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .nodes import AllExpr, AnyExpr, NameExpr, NameValueExpr, NotExpr
from .types import Predicate


# =============================================================================
# Tree Walking
# =============================================================================

def _children(expr: Predicate) -> tuple[Predicate, ...]:
    if isinstance(expr, (AnyExpr, AllExpr)):
        return expr.children
    if isinstance(expr, NotExpr):
        return (expr.child,)
    return ()


def iter_nodes(expr: Predicate) -> Iterator[Predicate]:
    """
    Yield every node of the tree in pre-order (parent before children).

    Uses an explicit stack, so arbitrarily deep trees are safe to walk.
    """
    stack = [expr]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(_children(node)))


def get_referenced_names(expr: Predicate) -> list[str]:
    """
    Get all flag names referenced by a predicate.

    Args:
        expr: Predicate to analyze.

    Returns:
        Sorted list of unique flag names.
    """
    names: set[str] = set()
    for node in iter_nodes(expr):
        if isinstance(node, (NameExpr, NameValueExpr)):
            names.add(node.name)
    return sorted(names)


def get_depth(expr: Predicate) -> int:
    """Nesting depth of a tree. A single leaf has depth 1."""
    depth = 0
    stack = [(expr, 1)]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in _children(node))
    return depth


# =============================================================================
# Serialization Functions
# =============================================================================

def predicate_to_dict(expr: Predicate) -> dict:
    """
    Serialize a predicate tree to dict format.

    The resulting dict can be dumped to JSON/YAML and read back by
    predicate_from_dict().

    Examples:
        {"all": [{"name": "unix"}, {"name": "target_os", "value": "linux"}]}
    """
    if isinstance(expr, AnyExpr):
        return {"any": [predicate_to_dict(c) for c in expr.children]}

    elif isinstance(expr, AllExpr):
        return {"all": [predicate_to_dict(c) for c in expr.children]}

    elif isinstance(expr, NotExpr):
        return {"not": predicate_to_dict(expr.child)}

    elif isinstance(expr, NameValueExpr):
        return {"name": expr.name, "value": expr.value}

    elif isinstance(expr, NameExpr):
        return {"name": expr.name}

    else:
        raise ValueError(f"Unknown predicate type: {type(expr)}")


def predicate_from_dict(data: Any) -> Predicate:
    """
    Parse a predicate tree from dict format (inverse of predicate_to_dict).

    Raises:
        ValueError: If the data does not describe a predicate.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Predicate must be a dict, got {type(data).__name__}")

    if "any" in data or "all" in data:
        key = "any" if "any" in data else "all"
        items = data[key]
        if not isinstance(items, list):
            raise ValueError(f"'{key}' must be a list")
        children = tuple(predicate_from_dict(item) for item in items)
        return AnyExpr(children) if key == "any" else AllExpr(children)

    if "not" in data:
        return NotExpr(predicate_from_dict(data["not"]))

    if "name" in data:
        name = data["name"]
        if not isinstance(name, str):
            raise ValueError("'name' must be a string")
        if "value" not in data:
            return NameExpr(name)
        value = data["value"]
        if not isinstance(value, str):
            raise ValueError("'value' must be a string")
        return NameValueExpr(name, value)

    raise ValueError(f"Cannot parse predicate: {data}")


__all__ = [
    # Tree walking
    "iter_nodes",
    "get_referenced_names",
    "get_depth",
    # Serialization
    "predicate_to_dict",
    "predicate_from_dict",
]
