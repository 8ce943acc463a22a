"""
Command-line interface for runtime_cfg.
"""

from .argparser import build_parser, setup_argparse
from .subcommands import (
    EXIT_ERROR,
    EXIT_NO_MATCH,
    EXIT_OK,
    handle_check,
    handle_find,
    handle_fmt,
    handle_parse,
)
from .utils import console

__all__ = [
    "build_parser",
    "setup_argparse",
    "handle_parse",
    "handle_check",
    "handle_fmt",
    "handle_find",
    "EXIT_OK",
    "EXIT_NO_MATCH",
    "EXIT_ERROR",
    "console",
]
