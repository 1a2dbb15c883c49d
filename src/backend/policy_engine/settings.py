from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .evaluator import UNCONFIGURED_RULE_MODES


load_dotenv()


@dataclass(frozen=True)
class EngineSettings:
    config_path: Optional[Path]
    unconfigured_rules: str
    log_level: str


def get_engine_settings() -> EngineSettings:
    """
    Load engine settings from environment variables.

    Reads:
      POLICY_CONFIG_PATH         JSON/YAML entries file (unset: built-in defaults)
      POLICY_UNCONFIGURED_RULES  "skip" or "error" (default "skip")
      POLICY_LOG_LEVEL           logging level name (default "WARNING")
    """
    raw_path = os.getenv("POLICY_CONFIG_PATH", "").strip()
    return EngineSettings(
        config_path=Path(raw_path) if raw_path else None,
        unconfigured_rules=_unconfigured_rules_mode(),
        log_level=_log_level(),
    )


def _unconfigured_rules_mode() -> str:
    mode = os.getenv("POLICY_UNCONFIGURED_RULES", "skip").strip().lower()
    if mode not in UNCONFIGURED_RULE_MODES:
        raise ValueError("POLICY_UNCONFIGURED_RULES must be 'skip' or 'error'.")
    return mode


def _log_level() -> str:
    level = os.getenv("POLICY_LOG_LEVEL", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"POLICY_LOG_LEVEL is not a valid logging level: {level}")
    return level
