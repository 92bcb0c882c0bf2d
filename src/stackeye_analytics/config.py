"""Configuration management

Tree rendering, colour display, statistics and logging defaults.
Every setting can be overridden through environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Literal

from stackeye_analytics.exceptions import ConfigurationError

ColorMode = Literal["auto", "always", "never"]
LogFormat = Literal["json", "console"]

COLOR_MODES: tuple[str, ...] = ("auto", "always", "never")
LOG_FORMATS: tuple[str, ...] = ("json", "console")
DEFAULT_ORPHAN_TITLE = "Orphan Probes (no dependencies)"
DEFAULT_PERIOD = "24h"

# period -> (bucket aggregate, lookback)
PERIODS: dict[str, tuple[str, timedelta]] = {
    "24h": ("1h", timedelta(hours=24)),
    "7d": ("1h", timedelta(days=7)),
    "30d": ("1d", timedelta(days=30)),
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _get_bool(name: str, default: bool) -> bool:
    """Read a boolean environment variable, ignoring unrecognised values."""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class TreeConfig:
    """Dependency tree rendering settings"""

    use_ascii: bool = False
    orphan_title: str = DEFAULT_ORPHAN_TITLE

    @classmethod
    def from_env(cls) -> TreeConfig:
        """Read settings from the environment"""
        return cls(
            use_ascii=_get_bool("STACKEYE_TREE_ASCII", False),
            orphan_title=os.getenv("STACKEYE_TREE_ORPHAN_TITLE") or DEFAULT_ORPHAN_TITLE,
        )


@dataclass(frozen=True)
class DisplayConfig:
    """Terminal colour settings

    Follows the NO_COLOR convention (https://no-color.org/): when the variable
    is set to any non-empty value colours are disabled regardless of
    STACKEYE_COLOR.
    """

    color: ColorMode = "auto"

    @classmethod
    def from_env(cls) -> DisplayConfig:
        """Read settings from the environment

        Raises:
            ConfigurationError: STACKEYE_COLOR is not auto, always or never
        """
        if os.getenv("NO_COLOR"):
            return cls(color="never")

        value = os.getenv("STACKEYE_COLOR", "auto").strip().lower() or "auto"
        if value not in COLOR_MODES:
            raise ConfigurationError(f"invalid STACKEYE_COLOR {value!r}: must be one of {', '.join(COLOR_MODES)}")
        return cls(color=value)  # type: ignore[arg-type]


@dataclass(frozen=True)
class StatsConfig:
    """Probe statistics settings"""

    default_period: str = DEFAULT_PERIOD

    @classmethod
    def from_env(cls) -> StatsConfig:
        """Read settings from the environment, falling back on unknown periods"""
        period = os.getenv("STACKEYE_STATS_PERIOD", DEFAULT_PERIOD).strip()
        if period not in PERIODS:
            period = DEFAULT_PERIOD
        return cls(default_period=period)


@dataclass(frozen=True)
class LoggingConfig:
    """structlog output settings"""

    level: int = logging.INFO
    format: LogFormat = "json"

    @classmethod
    def from_env(cls) -> LoggingConfig:
        """Read settings from the environment, falling back on unknown values"""
        level = logging.getLevelName(os.getenv("STACKEYE_LOG_LEVEL", "INFO").strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

        log_format = os.getenv("STACKEYE_LOG_FORMAT", "json").strip().lower()
        if log_format not in LOG_FORMATS:
            log_format = "json"
        return cls(level=level, format=log_format)  # type: ignore[arg-type]
