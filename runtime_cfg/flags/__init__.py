"""
Flag source loading (YAML files, command-line arguments).
"""

from .loader import (
    FlagSourceError,
    flags_from_data,
    load_flags_file,
    parse_flag_args,
    merge_flags,
)

__all__ = [
    "FlagSourceError",
    "flags_from_data",
    "load_flags_file",
    "parse_flag_args",
    "merge_flags",
]
