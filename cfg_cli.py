#!/usr/bin/env python3
"""
runtime_cfg - command-line entry point

This is a PURE SHELL - it only:
- Parses arguments
- Configures logging
- Dispatches to runtime_cfg.cli handlers

NO parsing or evaluation logic lives here.

Examples:
  python cfg_cli.py parse '#[cfg(any(unix, target_os = "macos"))]'
  python cfg_cli.py check 'all(unix, feature = "std")' --flag unix --flag feature=std
  python cfg_cli.py fmt 'any( foo,bar )'
  python cfg_cli.py find src/lib.rs
"""

import sys

from rich.markup import escape

from runtime_cfg.cli import (
    EXIT_ERROR,
    build_parser,
    console,
    handle_check,
    handle_find,
    handle_fmt,
    handle_parse,
)
from runtime_cfg.config import get_config
from runtime_cfg.utils.logger import setup_logger

HANDLERS = {
    "parse": handle_parse,
    "check": handle_check,
    "fmt": handle_fmt,
    "find": handle_find,
}


def _log_level(args, configured: str) -> str:
    """Verbosity flags override RUNTIME_CFG_LOG_LEVEL."""
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    if args.quiet:
        return "WARNING"
    return configured


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    # Parse CLI arguments FIRST (before any config or logging)
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    is_valid, errors = config.validate()
    if not is_valid:
        for error in errors:
            console.print(f"[red]{escape(error)}[/]")
        return EXIT_ERROR

    setup_logger(
        log_dir=config.log.log_dir,
        log_level=_log_level(args, config.log.level),
        log_to_file=config.log.log_to_file,
    )

    handler = HANDLERS.get(args.command)
    if handler is None:
        parser.print_help()
        return EXIT_ERROR

    try:
        return handler(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/]")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
