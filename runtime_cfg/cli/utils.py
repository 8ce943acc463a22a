"""
CLI utility functions for runtime_cfg.

Contains:
- The shared rich Console
- Error display (print_error, print_parse_error)
- Predicate rendering (predicate_tree, flags_table)
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from ..matching import FlagMap
from ..parsing import CfgParseError
from ..predicate import AllExpr, AnyExpr, NameExpr, NameValueExpr, NotExpr
from ..printing import format_predicate


# Global Console
console = Console()


def print_error(message: str, hint: str = None):
    """Print an error message in red, with an optional dim hint."""
    console.print(f"[bold red]Error:[/] [red]{escape(message)}[/]")
    if hint:
        console.print(f"[dim]{escape(hint)}[/]")


def describe_location(err: CfgParseError) -> str:
    """
    Render the error location as `line N, col M` plus a caret line.

    Returns an empty string when the source text is unknown.
    """
    if err.source is None or err.lineno is None:
        return ""
    lines = err.source.splitlines() or [""]
    line = lines[min(err.lineno, len(lines)) - 1]
    width = max(1, min(err.span.end, err.span.start + len(line)) - err.span.start)
    caret = " " * (err.col - 1) + "^" * width
    return f"line {err.lineno}, col {err.col}\n  {line}\n  {caret}"


def print_parse_error(err: CfgParseError):
    """Print a CfgParseError with its location."""
    location = describe_location(err)
    body = f"[red]{escape(str(err))}[/]"
    if location:
        body += f"\n[dim]{escape(location)}[/]"
    console.print(Panel(body, title="[bold red]Parse error[/]", border_style="red"))


def _node_label(expr) -> str:
    if isinstance(expr, NameExpr):
        return f"[cyan]{escape(expr.name)}[/]"
    if isinstance(expr, NameValueExpr):
        return f"[cyan]{escape(expr.name)}[/] = [green]{escape(repr(expr.value))}[/]"
    if isinstance(expr, AnyExpr):
        return f"[bold yellow]any[/] [dim]({len(expr.children)})[/]"
    if isinstance(expr, AllExpr):
        return f"[bold yellow]all[/] [dim]({len(expr.children)})[/]"
    if isinstance(expr, NotExpr):
        return "[bold yellow]not[/]"
    return escape(format_predicate(expr))


def predicate_tree(expr, title: str = "predicate") -> Tree:
    """Build a rich Tree mirroring the predicate structure."""
    root = Tree(f"[bold]{escape(title)}[/]")
    stack = [(root, expr)]
    while stack:
        parent, node = stack.pop()
        branch = parent.add(_node_label(node))
        if isinstance(node, (AnyExpr, AllExpr)):
            # Reversed so children render in source order
            stack.extend((branch, child) for child in reversed(node.children))
        elif isinstance(node, NotExpr):
            stack.append((branch, node.child))
    return root


def flags_table(flags) -> Table:
    """Tabulate a FlagList or FlagMap."""
    table = Table(title="Flags", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Value", style="green")

    entries = flags.entries() if isinstance(flags, FlagMap) else list(flags)
    for key, value in entries:
        table.add_row(escape(repr(key)), escape(repr(value.inner)) if value.is_present else "[dim]-[/]")
    return table


__all__ = [
    "console",
    "print_error",
    "describe_location",
    "print_parse_error",
    "predicate_tree",
    "flags_table",
]
