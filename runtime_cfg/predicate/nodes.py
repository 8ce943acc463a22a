"""
Predicate AST Nodes for the cfg Expression Language.

This module defines the predicate tree node types:
- AnyExpr: OR expression (any child must be true)
- AllExpr: AND expression (all children must be true)
- NotExpr: NOT expression (negates child)
- NameExpr: Presence test for a flag name
- NameValueExpr: Equality test for a flag name and value

Nodes are frozen dataclasses: immutable, hashable and structurally
comparable. Children live in tuples owned by their parent node.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types import Predicate


class _PredicateNode:
    """Behaviour shared by every predicate node."""

    __slots__ = ()

    def matches(self, pattern: Any) -> bool:
        """
        Return True if the flags described by `pattern` satisfy this predicate.

        Args:
            pattern: A Pattern implementation, or a list of (key, value) pairs,
                or a mapping of key -> value(s). See matching.as_pattern().
        """
        from ..matching import evaluate_predicate

        return evaluate_predicate(self, pattern)

    def __str__(self) -> str:
        from ..printing import format_predicate

        return format_predicate(self)


def _check_child(owner: str, child: object) -> None:
    if not isinstance(child, PREDICATE_TYPES):
        raise TypeError(
            f"{owner}: child must be a predicate node, got {type(child).__name__}"
        )


def _check_text(owner: str, label: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(
            f"{owner}: {label} must be a string, got {type(value).__name__}"
        )


# =============================================================================
# Boolean Expression Nodes
# =============================================================================

@dataclass(frozen=True, repr=False)
class AnyExpr(_PredicateNode):
    """
    OR expression: true when at least one child is true.

    Short-circuit evaluation: first true result stops evaluation.
    An empty AnyExpr is false.

    Attributes:
        children: Tuple of child predicates (zero or more)

    Examples:
        AnyExpr((NameExpr("unix"), NameExpr("windows")))
    """
    children: tuple["Predicate", ...] = ()

    def __post_init__(self):
        """Freeze children into a tuple and validate them."""
        object.__setattr__(self, "children", tuple(self.children))
        for child in self.children:
            _check_child("AnyExpr", child)

    def __repr__(self) -> str:
        children_str = ", ".join(repr(c) for c in self.children)
        return f"Any({children_str})"


@dataclass(frozen=True, repr=False)
class AllExpr(_PredicateNode):
    """
    AND expression: true when every child is true.

    Short-circuit evaluation: first false result stops evaluation.
    An empty AllExpr is true.

    Attributes:
        children: Tuple of child predicates (zero or more)

    Examples:
        AllExpr((NameExpr("unix"), NameValueExpr("target_pointer_width", "32")))
    """
    children: tuple["Predicate", ...] = ()

    def __post_init__(self):
        """Freeze children into a tuple and validate them."""
        object.__setattr__(self, "children", tuple(self.children))
        for child in self.children:
            _check_child("AllExpr", child)

    def __repr__(self) -> str:
        children_str = ", ".join(repr(c) for c in self.children)
        return f"All({children_str})"


@dataclass(frozen=True, repr=False)
class NotExpr(_PredicateNode):
    """
    NOT expression: negates exactly one child.

    Attributes:
        child: The predicate to negate

    Examples:
        NotExpr(NameExpr("windows"))
    """
    child: "Predicate"

    def __post_init__(self):
        """Validate the single child."""
        _check_child("NotExpr", self.child)

    def __repr__(self) -> str:
        return f"Not({self.child!r})"


# =============================================================================
# Leaf Nodes
# =============================================================================

@dataclass(frozen=True, repr=False)
class NameExpr(_PredicateNode):
    """
    Presence test: true when a flag with this name is declared.

    A flag declared with a value still satisfies a presence test.

    Attributes:
        name: Flag name (opaque text, compared exactly)
    """
    name: str

    def __post_init__(self):
        _check_text("NameExpr", "name", self.name)

    def __repr__(self) -> str:
        return f"Name({self.name!r})"


@dataclass(frozen=True, repr=False)
class NameValueExpr(_PredicateNode):
    """
    Value test: true when a flag with this name declares a matching value.

    Attributes:
        name: Flag name (opaque text, compared exactly)
        value: Requested value (opaque text, compared exactly)
    """
    name: str
    value: str

    def __post_init__(self):
        _check_text("NameValueExpr", "name", self.name)
        _check_text("NameValueExpr", "value", self.value)

    def __repr__(self) -> str:
        return f"NameValue({self.name!r}, {self.value!r})"


PREDICATE_TYPES = (AnyExpr, AllExpr, NotExpr, NameExpr, NameValueExpr)


# =============================================================================
# Top-level Attribute Wrapper
# =============================================================================

@dataclass(frozen=True, repr=False)
class Cfg:
    """
    A whole `#[cfg(...)]` attribute: a thin wrapper around one predicate.

    Attributes:
        predicate: The operand of the outermost cfg(...)

    Usage:
        cfg = Cfg.parse('#[cfg(all(unix, target_pointer_width = "32"))]')
        cfg.matches([("unix", None), ("target_pointer_width", "32")])  # True
    """
    predicate: "Predicate"

    def __post_init__(self):
        _check_child("Cfg", self.predicate)

    def __repr__(self) -> str:
        return f"Cfg({self.predicate!r})"

    def __str__(self) -> str:
        from ..printing import format_cfg

        return format_cfg(self)

    def matches(self, pattern: Any) -> bool:
        """Return True if `pattern` satisfies the wrapped predicate."""
        return self.predicate.matches(pattern)

    @classmethod
    def from_predicate(cls, predicate: "Predicate") -> "Cfg":
        """Wrap a predicate."""
        return cls(predicate)

    @classmethod
    def parse(cls, text: str) -> "Cfg":
        """
        Parse `#[cfg(...)]` text.

        Raises:
            CfgParseError: On any lexing or grammar error.
        """
        from ..parsing import parse_cfg

        return parse_cfg(text)

    @classmethod
    def from_meta(cls, meta) -> "Cfg":
        """Build from an already-tokenized meta item (skips lexing)."""
        from ..parsing import cfg_from_meta

        return cfg_from_meta(meta)

    @classmethod
    def from_attribute(cls, attr) -> "Cfg":
        """Build from a tokenized Attribute."""
        from ..parsing import cfg_from_attribute

        return cfg_from_attribute(attr)

    @classmethod
    def find(cls, attrs) -> "Cfg | None":
        """
        Find and parse the first `cfg` attribute.

        Parse failures are swallowed and reported as None, exactly like a
        missing attribute. Use from_attribute() when diagnostics matter.
        """
        from ..parsing import find_cfg

        return find_cfg(attrs)


__all__ = [
    "AnyExpr",
    "AllExpr",
    "NotExpr",
    "NameExpr",
    "NameValueExpr",
    "Cfg",
    "PREDICATE_TYPES",
]
