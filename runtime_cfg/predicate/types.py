"""
Predicate Type Aliases.

Placed in a separate module to avoid circular imports.
"""

from __future__ import annotations

from .nodes import AllExpr, AnyExpr, NameExpr, NameValueExpr, NotExpr


# =============================================================================
# Type Alias
# =============================================================================

# All node types that can appear in a predicate tree
Predicate = AnyExpr | AllExpr | NotExpr | NameExpr | NameValueExpr

# Nodes that carry children
BooleanExpr = AnyExpr | AllExpr | NotExpr

# Nodes that query a flag source
LeafExpr = NameExpr | NameValueExpr


__all__ = [
    "Predicate",
    "BooleanExpr",
    "LeafExpr",
]
