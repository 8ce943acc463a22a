"""
Utility modules.
"""

from .logger import get_logger, setup_logger, CfgLogger, ColoredFormatter, ROOT_LOGGER_NAME

__all__ = [
    # Logger
    "get_logger",
    "setup_logger",
    "CfgLogger",
    "ColoredFormatter",
    "ROOT_LOGGER_NAME",
]
