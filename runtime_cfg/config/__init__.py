"""
Configuration management.
"""

from .config import (
    Config,
    get_config,
    LogConfig,
    ParserConfig,
    FlagsConfig,
    DEFAULT_MAX_DEPTH,
    LOG_LEVELS,
)

__all__ = [
    "Config",
    "get_config",
    "LogConfig",
    "ParserConfig",
    "FlagsConfig",
    "DEFAULT_MAX_DEPTH",
    "LOG_LEVELS",
]
