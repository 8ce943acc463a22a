"""
Flag sources from YAML files and command-line arguments.

YAML Schema:
```yaml
# Mapping form -> FlagMap (unique names)
flags:
  unix: null              # presence-only flag
  target_os: macos        # single value
  feature: [std, alloc]   # value set

# List form -> FlagList (duplicates allowed, order kept)
flags:
  - unix
  - target_os: macos
  - feature: [std, alloc]
```

Scalar values (numbers, booleans) are turned into their cfg spelling:
32 -> "32", 1.0 -> "1", true -> "true".

Usage:
    flags = load_flags_file("flags.yml")
    flags = parse_flag_args(["unix", "target_os=macos"])
    merged = merge_flags(flags, more_flags)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..matching import FlagList, FlagMap
from ..parsing.literals import format_float

logger = logging.getLogger(__name__)


class FlagSourceError(ValueError):
    """Raised when a flag file or flag argument is malformed."""
    pass


# =============================================================================
# Value normalization
# =============================================================================

def _scalar(value: Any, where: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, (str, int)):
        return str(value)
    raise FlagSourceError(
        f"{where}: values must be strings, numbers or booleans, got {type(value).__name__}"
    )


def _normalize_value(value: Any, where: str) -> str | list[str] | None:
    """
    Normalize one declared value.

    Examples:
        None           -> None
        "macos"        -> "macos"
        32             -> "32"
        ["std", 1]     -> ["std", "1"]
    """
    if value is None:
        return None
    if isinstance(value, list):
        return [_scalar(item, where) for item in value]
    return _scalar(value, where)


def _flag_name(key: Any, where: str) -> str:
    if not isinstance(key, str) or not key:
        raise FlagSourceError(f"{where}: flag names must be non-empty strings, got {key!r}")
    return key


# =============================================================================
# Data -> Pattern
# =============================================================================

def _flags_from_mapping(flags: dict) -> FlagMap:
    normalized = {}
    for key, value in flags.items():
        name = _flag_name(key, "flags")
        normalized[name] = _normalize_value(value, f"flags.{name}")
    return FlagMap.from_mapping(normalized)


def _flags_from_list(flags: list) -> FlagList:
    pairs = []
    for index, item in enumerate(flags):
        where = f"flags[{index}]"
        if isinstance(item, str):
            pairs.append((_flag_name(item, where), None))
        elif isinstance(item, dict) and len(item) == 1:
            (key, value), = item.items()
            pairs.append((_flag_name(key, where), _normalize_value(value, where)))
        else:
            raise FlagSourceError(
                f"{where}: expected a flag name or a single-key mapping, got {item!r}"
            )
    return FlagList.from_pairs(pairs)


def flags_from_data(data: Any) -> FlagMap | FlagList:
    """
    Build a flag source from parsed YAML data.

    Args:
        data: A dict with a "flags" key holding a mapping or a list

    Returns:
        FlagMap for the mapping form, FlagList for the list form.

    Raises:
        FlagSourceError: If the data does not follow the schema.
    """
    if not isinstance(data, dict) or "flags" not in data:
        raise FlagSourceError("Flag data must be a mapping with a 'flags' key")

    unknown = sorted(str(key) for key in data if key != "flags")
    if unknown:
        raise FlagSourceError(f"Unknown top-level keys in flag data: {unknown}")

    flags = data["flags"]
    if flags is None:
        return FlagMap()
    if isinstance(flags, dict):
        return _flags_from_mapping(flags)
    if isinstance(flags, list):
        return _flags_from_list(flags)
    raise FlagSourceError(
        f"'flags' must be a mapping or a list, got {type(flags).__name__}"
    )


def load_flags_file(path: str | Path) -> FlagMap | FlagList:
    """
    Load a YAML flag file.

    Raises:
        FileNotFoundError: If the file does not exist.
        FlagSourceError: If the file is empty, not valid YAML, or does not
            follow the schema.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Flag file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise FlagSourceError(f"Invalid YAML in {path}: {e}") from e

    if not raw:
        raise FlagSourceError(f"Empty or invalid YAML in {path}")

    try:
        flags = flags_from_data(raw)
    except FlagSourceError as e:
        raise FlagSourceError(f"{path}: {e}") from e

    logger.debug("Loaded %d flag(s) from %s", len(flags), path)
    return flags


# =============================================================================
# Command-line flags
# =============================================================================

def parse_flag_args(args: list[str]) -> FlagList:
    """
    Parse `NAME` and `NAME=VALUE` arguments into a FlagList.

    Surrounding double quotes around VALUE are removed, so
    `target_os="macos"` and `target_os=macos` are equivalent. Repeating a
    name declares several values for it.

    Raises:
        FlagSourceError: If a name is empty.
    """
    pairs = []
    for arg in args:
        name, sep, value = arg.partition("=")
        name = name.strip()
        if not name:
            raise FlagSourceError(f"Invalid flag {arg!r}: missing name")
        if not sep:
            pairs.append((name, None))
            continue
        value = value.strip()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        pairs.append((name, value))
    return FlagList.from_pairs(pairs)


def merge_flags(*sources: FlagMap | FlagList) -> FlagList:
    """Concatenate flag sources into one FlagList (later entries add, never replace)."""
    entries = []
    for source in sources:
        if isinstance(source, FlagMap):
            entries.extend(source.entries())
        elif isinstance(source, FlagList):
            entries.extend(source)
        else:
            raise TypeError(f"Cannot merge {type(source).__name__} as a flag source")
    return FlagList(entries)
