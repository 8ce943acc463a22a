"""
Pytest configuration for runtime_cfg tests.
"""

import pytest

from runtime_cfg.config import Config
from runtime_cfg.matching import FlagList, FlagMap
from runtime_cfg.utils import logger as logger_module
from runtime_cfg.utils.logger import CfgLogger


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Fresh Config singleton per test, with no .env and no RUNTIME_CFG_* overrides."""
    for var in (
        "RUNTIME_CFG_LOG_LEVEL",
        "RUNTIME_CFG_LOG_DIR",
        "RUNTIME_CFG_LOG_TO_FILE",
        "RUNTIME_CFG_MAX_DEPTH",
        "RUNTIME_CFG_FLAGS_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(logger_module, "_logger", None)
    Config._instance = None
    CfgLogger._instance = None
    CfgLogger._initialized = False
    yield
    Config._instance = None
    CfgLogger._instance = None
    CfgLogger._initialized = False


@pytest.fixture
def unix_32bit_flags() -> FlagList:
    """List-shaped flags for a 32-bit unix target."""
    return FlagList.from_pairs([
        ("unix", None),
        ("target_pointer_width", "32"),
    ])


@pytest.fixture
def macos_flags() -> FlagMap:
    """Map-shaped flags for a macOS target."""
    return FlagMap.from_mapping({
        "foo": None,
        "target_os": ["macos"],
        "target_pointer_width": "32",
    })
