"""
Logging system for runtime_cfg.
Provides human-readable console logs with optional file output.

Library modules log through `logging.getLogger(__name__)`; every such
logger lives under the "runtime_cfg" namespace, so the handlers installed
here pick them up once the CLI (or an application) calls setup_logger().
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "runtime_cfg"


# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record):
        # Work on a copy so file handlers still see the plain record
        record = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.msg = f"{color}{record.getMessage()}{Colors.RESET}"
        record.args = None
        return super().format(record)


class CfgLogger:
    """
    Central logging system for runtime_cfg.

    Features:
    - Console output with colors
    - Optional daily log file (runtime_cfg_YYYYMMDD.log)
    - Structured one-line records for parse and check results
    """

    _instance: Optional['CfgLogger'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = False):
        if CfgLogger._initialized:
            return

        self.log_dir = Path(log_dir)
        self.log_to_file = log_to_file
        if log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._create_logger(ROOT_LOGGER_NAME, log_level)

        CfgLogger._initialized = True

    def _create_logger(self, name: str, level: str) -> logging.Logger:
        """Create a configured logger instance."""
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level.upper()))
        logger.handlers.clear()

        # Console handler with colors
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColoredFormatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        logger.addHandler(console_handler)

        # File handler (plain text, no colors)
        if self.log_to_file:
            log_file = self.log_dir / f"runtime_cfg_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

        return logger

    def info(self, msg: str, *args, **kwargs):
        """Log info message."""
        self.main_logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message."""
        self.main_logger.debug(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message."""
        self.main_logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        """Log error message."""
        self.main_logger.error(msg, *args, **kwargs)

    def parse_result(self, text: str, ok: bool, error: str = None, **kwargs):
        """
        Log the outcome of parsing one expression.

        Args:
            text: The expression text
            ok: Whether parsing succeeded
            error: Error message when it did not
            **kwargs: Additional fields
        """
        parts = ["[PARSE:OK]" if ok else "[PARSE:ERROR]", f"text={text!r}"]
        if error:
            parts.append(f"error={error}")
        for key, value in kwargs.items():
            parts.append(f"{key}={value}")

        msg = " | ".join(parts)
        if ok:
            self.main_logger.debug(msg)
        else:
            self.main_logger.warning(msg)

    def check_result(self, predicate: str, matched: bool, **kwargs):
        """
        Log the outcome of evaluating a predicate against a flag source.

        Args:
            predicate: Canonical rendering of the predicate
            matched: Evaluation result
            **kwargs: Additional context (flag count, flag file, ...)
        """
        parts = ["[CHECK:MATCH]" if matched else "[CHECK:NO_MATCH]", predicate]
        for key, value in kwargs.items():
            parts.append(f"{key}={value}")
        self.main_logger.info(" | ".join(parts))


# Global logger instance
_logger: Optional[CfgLogger] = None


def get_logger(log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = False) -> CfgLogger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = CfgLogger(log_dir, log_level, log_to_file)
    return _logger


def setup_logger(log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = False) -> CfgLogger:
    """Initialize the logger with custom settings."""
    global _logger
    CfgLogger._initialized = False
    CfgLogger._instance = None
    _logger = CfgLogger(log_dir, log_level, log_to_file)
    return _logger
