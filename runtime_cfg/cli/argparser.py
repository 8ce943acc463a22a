"""
Argument parser setup for the runtime_cfg CLI.

Defines all subcommands and their arguments:
- parse: parse an expression and show its tree (or JSON)
- check: evaluate an expression against flags
- fmt: print the canonical rendering
- find: locate the first #[cfg(...)] attribute in a source file
"""

import argparse


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="runtime-cfg",
        description="runtime_cfg - parse, print and evaluate cfg predicates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  runtime-cfg parse '#[cfg(any(unix, target_os = "macos"))]'
  runtime-cfg parse 'all(unix, feature = "std")' --json
  runtime-cfg check 'all(unix, target_pointer_width = "32")' --flag unix --flag target_pointer_width=32
  runtime-cfg check 'feature = "std"' --flags-file flags.yml
  runtime-cfg fmt 'any( foo,bar )'
  runtime-cfg find src/lib.rs
        """
    )

    # Verbosity: mutually exclusive group (-q / -v / --debug)
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Quiet mode: WARNING only, minimal output"
    )
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Verbose mode: INFO + evaluation results"
    )
    verbosity.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Debug mode: full DEBUG logging"
    )

    # Add subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    _setup_parse_subcommand(subparsers)
    _setup_check_subcommand(subparsers)
    _setup_fmt_subcommand(subparsers)
    _setup_find_subcommand(subparsers)

    return parser


def setup_argparse(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Supports:
      parse TEXT [--json]                       Show the predicate tree
      check TEXT [--flag K[=V]]... [--flags-file F]   Evaluate against flags
      fmt TEXT                                  Canonical rendering
      find FILE                                 First cfg attribute in FILE
    """
    return build_parser().parse_args(argv)


def _setup_parse_subcommand(subparsers) -> None:
    """Set up the parse subcommand."""
    parse_parser = subparsers.add_parser("parse", help="Parse an expression and show its tree")
    parse_parser.add_argument("text", help='#[cfg(...)] attribute or bare predicate, e.g. \'any(unix, windows)\'')
    parse_parser.add_argument("--json", action="store_true", dest="json_output", help="Output the tree as JSON")


def _setup_check_subcommand(subparsers) -> None:
    """Set up the check subcommand."""
    check_parser = subparsers.add_parser(
        "check",
        help="Evaluate an expression against flags (exit 0 = match, 1 = no match, 2 = error)",
    )
    check_parser.add_argument("text", help="#[cfg(...)] attribute or bare predicate")
    check_parser.add_argument(
        "--flag",
        action="append",
        default=[],
        dest="flags",
        metavar="NAME[=VALUE]",
        help="Declare a flag (repeatable; repeat a name to declare several values)",
    )
    check_parser.add_argument(
        "--flags-file",
        default=None,
        help="YAML flag file (default: RUNTIME_CFG_FLAGS_FILE)",
    )
    check_parser.add_argument("--json", action="store_true", dest="json_output", help="Output the result as JSON")


def _setup_fmt_subcommand(subparsers) -> None:
    """Set up the fmt subcommand."""
    fmt_parser = subparsers.add_parser("fmt", help="Print the canonical rendering of an expression")
    fmt_parser.add_argument("text", help="#[cfg(...)] attribute or bare predicate")


def _setup_find_subcommand(subparsers) -> None:
    """Set up the find subcommand."""
    find_parser = subparsers.add_parser("find", help="Find the first #[cfg(...)] attribute in a source file")
    find_parser.add_argument("file", help="Source file to scan")
    find_parser.add_argument("--json", action="store_true", dest="json_output", help="Output the result as JSON")
