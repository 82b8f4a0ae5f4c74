"""Enums and configuration shared across the di-lens pipeline."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass


class NodeKind(enum.Enum):
    TYPE = "type"
    PROVIDER = "provider"
    CONSUMER = "consumer"


class EdgeKind(enum.Enum):
    PROVIDES = "provides"
    REQUIRES = "requires"
    NEEDS = "needs"


class SmellType(enum.Enum):
    DUPLICATE_PROVIDERS = "duplicate_providers"
    HIGH_FAN_OUT = "high_fan_out"
    HIGH_FAN_IN = "high_fan_in"


def _env_int(name: str, default: int) -> int:
    """Positive integer from the environment, else ``default``."""
    raw = os.getenv(name, "")
    try:
        value = int(raw) if raw else default
    except ValueError:
        return default
    return value if value >= 1 else default


@dataclass
class AnalysisConfig:
    """Configuration for the analysis pipeline."""
    top_n: int = 0          # entries in the fan-in / fan-out rankings
    max_paths: int = 0      # longest paths reported
    log_level: str = ""

    def __post_init__(self):
        if not self.top_n:
            self.top_n = _env_int("DI_LENS_TOP_N", 10)
        if not self.max_paths:
            self.max_paths = _env_int("DI_LENS_MAX_PATHS", 5)
        if not self.log_level:
            self.log_level = os.getenv("DI_LENS_LOG_LEVEL", "WARNING").upper()
