"""
Subcommand handlers for the runtime_cfg CLI.

All handle_* functions are module-level, accept an `args` namespace and
return a process exit code. They are dispatched from main() in cfg_cli.py.

Exit codes:
- 0: success (check: the predicate matched)
- 1: check did not match / find found nothing
- 2: the expression, file or flags could not be read
"""

from __future__ import annotations

import json
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from ..config import get_config
from ..flags import FlagSourceError, load_flags_file, merge_flags, parse_flag_args
from ..matching import FlagList
from ..parsing import CfgParseError, find_cfg_in_source, parse_cfg, parse_predicate
from ..predicate import Cfg, get_depth, get_referenced_names, predicate_to_dict
from ..utils.logger import get_logger
from .utils import console, flags_table, predicate_tree, print_error, print_parse_error

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


# =============================================================================
# SHARED HELPERS
# =============================================================================

def _parse_text(text: str):
    """
    Parse CLI input as a whole attribute or a bare predicate.

    Returns:
        (predicate, cfg) where cfg is None for bare predicates.
    """
    if text.lstrip().startswith("#"):
        parsed = parse_cfg(text)
        return parsed.predicate, parsed
    return parse_predicate(text), None


def _parse_or_report(text: str):
    """Parse, logging the outcome; prints the error and returns None on failure."""
    logger = get_logger()
    try:
        predicate, parsed = _parse_text(text)
    except CfgParseError as e:
        logger.parse_result(text, ok=False, error=str(e))
        print_parse_error(e)
        return None
    logger.parse_result(text, ok=True)
    return predicate, parsed


def _load_flags(args):
    """Combine --flags-file (or RUNTIME_CFG_FLAGS_FILE) with --flag arguments."""
    sources = []
    flags_file = args.flags_file
    if flags_file is None and not args.flags:
        config = get_config()
        if config.flags.has_flags_file:
            flags_file = config.flags.flags_file

    if flags_file:
        sources.append(load_flags_file(flags_file))
    if args.flags:
        sources.append(parse_flag_args(args.flags))

    if not sources:
        return FlagList(), flags_file
    if len(sources) == 1:
        return sources[0], flags_file
    return merge_flags(*sources), flags_file


# =============================================================================
# HANDLERS
# =============================================================================

def handle_parse(args) -> int:
    """Parse an expression and print its tree (or JSON)."""
    result = _parse_or_report(args.text)
    if result is None:
        return EXIT_ERROR
    predicate, parsed = result

    if args.json_output:
        output = {
            "status": "ok",
            "kind": "cfg" if parsed is not None else "predicate",
            "predicate": predicate_to_dict(predicate),
            "canonical": str(parsed) if parsed is not None else str(predicate),
            "names": get_referenced_names(predicate),
            "depth": get_depth(predicate),
        }
        print(json.dumps(output, indent=2))
        return EXIT_OK

    title = "#[cfg(..)]" if parsed is not None else "predicate"
    console.print(predicate_tree(predicate, title=title))
    names = get_referenced_names(predicate)
    console.print(f"[dim]names: {', '.join(names) or '(none)'} | depth: {get_depth(predicate)}[/]")
    return EXIT_OK


def handle_check(args) -> int:
    """Evaluate an expression against flags."""
    result = _parse_or_report(args.text)
    if result is None:
        return EXIT_ERROR
    predicate, _ = result

    try:
        flags, flags_file = _load_flags(args)
    except (FlagSourceError, FileNotFoundError) as e:
        print_error(str(e), "Flag files need a top-level 'flags' mapping or list.")
        return EXIT_ERROR

    matched = predicate.matches(flags)
    get_logger().check_result(
        str(predicate), matched, flags=len(flags), flags_file=flags_file or "-"
    )

    if args.json_output:
        print(json.dumps({"matched": matched, "predicate": str(predicate)}, indent=2))
    else:
        if matched:
            console.print(Panel("[bold green]MATCH[/]", border_style="green", expand=False))
        else:
            console.print(Panel("[bold red]NO MATCH[/]", border_style="red", expand=False))
        if len(flags):
            console.print(flags_table(flags))

    return EXIT_OK if matched else EXIT_NO_MATCH


def handle_fmt(args) -> int:
    """Print the canonical rendering of an expression."""
    result = _parse_or_report(args.text)
    if result is None:
        return EXIT_ERROR
    predicate, parsed = result
    print(str(parsed) if parsed is not None else str(predicate))
    return EXIT_OK


def handle_find(args) -> int:
    """Print the first cfg attribute of a source file."""
    path = Path(args.file)
    if not path.is_file():
        print_error(f"File not found: {path}")
        return EXIT_ERROR

    source = path.read_text(encoding="utf-8")
    found: Cfg | None = find_cfg_in_source(source)

    if args.json_output:
        output = {
            "found": found is not None,
            "cfg": str(found) if found is not None else None,
            "predicate": predicate_to_dict(found.predicate) if found is not None else None,
        }
        print(json.dumps(output, indent=2))
    elif found is not None:
        print(str(found))
    else:
        console.print(f"[yellow]No valid #\\[cfg(..)] attribute in {escape(str(path))}[/]")

    return EXIT_OK if found is not None else EXIT_NO_MATCH
