"""Processing options shared by the builder, trends and dashboard."""

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from healthsync.core.config import Config
from healthsync.core.exceptions import ConfigurationError

from .models import METRIC_SPECS, CanonicalMetric, MetricSpec, build_catalog

DEFAULT_TREND_WINDOW = 7

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}
_KNOWN_PROCESSING_KEYS = {"timezone", "trend_window", "stand_zero_as_null", "window_days"}


@dataclass
class ProcessingOptions:
    """How exports are turned into daily records.

    Attributes:
        timezone: Timezone that defines calendar days and clock hours.
            None means the system's local timezone.
        trend_window: Width of the centered rolling-average window, in days.
        stand_zero_as_null: Report a day with stand samples but no
            qualifying hour as None (True) or 0 (False).
        catalog: Canonical metric definitions (aliases, policies, units).
        window_days: Only use exports ingested in the last N days; 0 uses all.
    """

    timezone: tzinfo | None = None
    trend_window: int = DEFAULT_TREND_WINDOW
    stand_zero_as_null: bool = True
    catalog: dict[CanonicalMetric, MetricSpec] = field(default_factory=lambda: dict(METRIC_SPECS))
    window_days: int = 0

    def __post_init__(self):
        if self.trend_window < 1:
            raise ValueError(f"trend_window must be at least 1, got {self.trend_window}")
        if self.window_days < 0:
            raise ValueError(f"window_days cannot be negative, got {self.window_days}")

    @classmethod
    def from_config(cls, config: Config) -> "ProcessingOptions":
        """Build options from the ``processing`` and ``metrics`` config sections."""
        unknown = sorted(set(config.get("processing", {}) or {}) - _KNOWN_PROCESSING_KEYS)
        if unknown:
            logger.warning(f"Ignoring unknown processing config key(s): {', '.join(unknown)}")

        window = _to_int(config.get("processing.trend_window", DEFAULT_TREND_WINDOW), "processing.trend_window", 1)
        window_days = _to_int(config.get("processing.window_days", 0), "processing.window_days", 0)

        return cls(
            timezone=parse_timezone(config.get("processing.timezone", "")),
            trend_window=window,
            stand_zero_as_null=_to_bool(
                config.get("processing.stand_zero_as_null", True), "processing.stand_zero_as_null"
            ),
            catalog=build_catalog(config.get("metrics.aliases", {}) or {}),
            window_days=window_days,
        )


def parse_timezone(name: str | None) -> tzinfo | None:
    """Look up an IANA timezone name. Empty means system local (None)."""
    if not name:
        return None
    try:
        return ZoneInfo(str(name))
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone '{name}'. Use an IANA name like 'America/New_York'.") from e


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"{key} must be true or false, got '{value}'")


def _to_int(value: Any, key: str, minimum: int) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be an integer, got '{value}'")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be an integer: {e}") from e
    if number < minimum:
        raise ConfigurationError(f"{key} must be at least {minimum}, got {number}")
    return number
