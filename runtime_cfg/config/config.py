"""
Configuration management for runtime_cfg.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from typing import List, Optional
from pathlib import Path
from dotenv import load_dotenv


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# The tokenizer recurses about 16 frames per nesting level, so 32 levels
# stay well inside the default interpreter recursion limit.
DEFAULT_MAX_DEPTH = 32


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = False


@dataclass
class ParserConfig:
    """
    Parser limits.

    max_depth bounds how deeply predicates may nest (a leaf inside
    `cfg(...)` is depth 1). Deeper input is rejected with a CfgParseError
    instead of exhausting the call stack. Values much above the default
    can still overflow the tokenizer, which reports "expression nests too
    deeply to tokenize".
    """
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class FlagsConfig:
    """Flag source defaults for the CLI."""
    flags_file: str = ""  # YAML flag file used by `check` when no --flag is given

    @property
    def has_flags_file(self) -> bool:
        return bool(self.flags_file)


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables and provides
    typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        # Later files override earlier ones
        for env_name in [".env", env_file]:
            env_path = Path(env_name)
            if env_path.exists():
                load_dotenv(env_path, override=True)

        self.log = self._load_log_config()
        self.parser = self._load_parser_config()
        self.flags = self._load_flags_config()

        self._initialized = True

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration."""
        return LogConfig(
            level=os.getenv("RUNTIME_CFG_LOG_LEVEL", "INFO").upper(),
            log_dir=os.getenv("RUNTIME_CFG_LOG_DIR", "logs"),
            log_to_file=os.getenv("RUNTIME_CFG_LOG_TO_FILE", "false").lower() == "true",
        )

    def _load_parser_config(self) -> ParserConfig:
        """Load parser limits."""
        raw = os.getenv("RUNTIME_CFG_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))
        try:
            max_depth = int(raw)
        except ValueError:
            # Reported by validate()
            max_depth = -1
        return ParserConfig(max_depth=max_depth)

    def _load_flags_config(self) -> FlagsConfig:
        """Load flag source defaults."""
        return FlagsConfig(
            flags_file=os.getenv("RUNTIME_CFG_FLAGS_FILE", ""),
        )

    def reload(self, env_file: str = ".env"):
        """Reload configuration from environment."""
        self._initialized = False
        Config._instance = None
        return Config(env_file)

    def validate(self) -> tuple[bool, List[str]]:
        """
        Validate configuration.

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = []

        if self.log.level not in LOG_LEVELS:
            errors.append(
                f"INVALID: RUNTIME_CFG_LOG_LEVEL={self.log.level!r}. "
                f"Expected one of: {', '.join(LOG_LEVELS)}."
            )

        if self.parser.max_depth < 1:
            errors.append(
                "INVALID: RUNTIME_CFG_MAX_DEPTH must be a positive integer."
            )

        if self.flags.has_flags_file and not Path(self.flags.flags_file).is_file():
            errors.append(
                f"MISSING: RUNTIME_CFG_FLAGS_FILE points to {self.flags.flags_file!r}, "
                "which does not exist."
            )

        return len(errors) == 0, errors

    def summary(self) -> str:
        """Generate a human-readable configuration summary."""
        lines = [
            "=" * 40,
            "runtime_cfg configuration",
            "=" * 40,
            "Logging:",
            f"  Level: {self.log.level}",
            f"  Directory: {self.log.log_dir}",
            f"  To file: {self.log.log_to_file}",
            "Parser:",
            f"  Max depth: {self.parser.max_depth}",
            "Flags:",
            f"  Default file: {self.flags.flags_file or '(none)'}",
            "=" * 40,
        ]
        return "\n".join(lines)


def get_config(env_file: str = ".env") -> Config:
    """Get or create the global config instance."""
    return Config(env_file)
