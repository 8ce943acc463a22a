"""
Canonical text rendering of predicates.

    any(a, b)              -> "any(a, b)"
    NameValue("k", "v")    -> 'k = "v"'
    Cfg(Name("unix"))      -> "#[cfg(unix)]"

Output re-parses to an equal tree with parse_predicate / parse_cfg.
Backslashes and double quotes in values are escaped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .predicate import AllExpr, AnyExpr, NameExpr, NameValueExpr, NotExpr

if TYPE_CHECKING:
    from .predicate import Cfg, Predicate


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_predicate(expr: "Predicate") -> str:
    """Render a predicate in canonical cfg syntax."""
    if isinstance(expr, NameExpr):
        return expr.name
    elif isinstance(expr, NameValueExpr):
        return f"{expr.name} = {_quote(expr.value)}"
    elif isinstance(expr, AnyExpr):
        return "any(" + ", ".join(format_predicate(c) for c in expr.children) + ")"
    elif isinstance(expr, AllExpr):
        return "all(" + ", ".join(format_predicate(c) for c in expr.children) + ")"
    elif isinstance(expr, NotExpr):
        return f"not({format_predicate(expr.child)})"
    else:
        raise TypeError(f"Unknown predicate type: {type(expr).__name__}")


def format_cfg(cfg: "Cfg") -> str:
    """Render a whole attribute: `#[cfg(<predicate>)]`."""
    return f"#[cfg({format_predicate(cfg.predicate)})]"


__all__ = ["format_predicate", "format_cfg"]
