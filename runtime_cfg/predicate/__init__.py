"""
Predicate AST for the cfg Expression Language.

Nodes are frozen dataclasses for immutability and hashability.

Type Hierarchy:
    Predicate = AnyExpr | AllExpr | NotExpr | NameExpr | NameValueExpr

Usage:
    # cfg(all(unix, target_pointer_width = "32"))
    expr = AllExpr((
        NameExpr("unix"),
        NameValueExpr("target_pointer_width", "32"),
    ))

    # The same tree through the builder functions
    expr = all_([name("unix"), name_value("target_pointer_width", "32")])
"""

# Nodes
from .nodes import (
    AnyExpr,
    AllExpr,
    NotExpr,
    NameExpr,
    NameValueExpr,
    Cfg,
    PREDICATE_TYPES,
)

# Type aliases
from .types import Predicate, BooleanExpr, LeafExpr

# Builders
from .builders import any_, all_, not_, name, name_value

# Utilities
from .utils import (
    iter_nodes,
    get_referenced_names,
    get_depth,
    predicate_to_dict,
    predicate_from_dict,
)

__all__ = [
    # Nodes
    "AnyExpr",
    "AllExpr",
    "NotExpr",
    "NameExpr",
    "NameValueExpr",
    "Cfg",
    "PREDICATE_TYPES",
    # Types
    "Predicate",
    "BooleanExpr",
    "LeafExpr",
    # Builders
    "any_",
    "all_",
    "not_",
    "name",
    "name_value",
    # Utilities
    "iter_nodes",
    "get_referenced_names",
    "get_depth",
    "predicate_to_dict",
    "predicate_from_dict",
]
