"""Tests for health.options — processing options from config."""

from zoneinfo import ZoneInfo

import pytest

from healthsync.core.config import Config
from healthsync.core.exceptions import ConfigurationError
from healthsync.health.models import METRIC_SPECS, CanonicalMetric
from healthsync.health.options import ProcessingOptions, parse_timezone


class TestProcessingOptions:
    def test_defaults(self):
        options = ProcessingOptions()
        assert options.timezone is None
        assert options.trend_window == 7
        assert options.stand_zero_as_null is True
        assert options.catalog == METRIC_SPECS

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            ProcessingOptions(trend_window=0)

    def test_invalid_window_days(self):
        with pytest.raises(ValueError):
            ProcessingOptions(window_days=-1)

    def test_window_days_from_config(self, monkeypatch):
        assert ProcessingOptions.from_config(Config()).window_days == 0
        monkeypatch.setenv("HEALTHSYNC_PROCESSING__WINDOW_DAYS", "30")
        assert ProcessingOptions.from_config(Config()).window_days == 30

    def test_from_default_config(self):
        options = ProcessingOptions.from_config(Config())
        assert options.timezone is None
        assert options.trend_window == 7

    def test_from_env_strings(self, monkeypatch):
        monkeypatch.setenv("HEALTHSYNC_PROCESSING__TREND_WINDOW", "14")
        monkeypatch.setenv("HEALTHSYNC_PROCESSING__STAND_ZERO_AS_NULL", "no")
        monkeypatch.setenv("HEALTHSYNC_PROCESSING__TIMEZONE", "America/New_York")
        options = ProcessingOptions.from_config(Config())
        assert options.trend_window == 14
        assert options.stand_zero_as_null is False
        assert options.timezone == ZoneInfo("America/New_York")

    def test_alias_overrides(self):
        config = Config(defaults={"metrics": {"aliases": {"steps": ["pedometer"]}}})
        options = ProcessingOptions.from_config(config)
        assert options.catalog[CanonicalMetric.STEPS].aliases == ("pedometer",)

    @pytest.mark.parametrize(
        "key, value",
        [
            ("processing.trend_window", "weekly"),
            ("processing.trend_window", 0),
            ("processing.stand_zero_as_null", "maybe"),
            ("processing.timezone", "Mars/Olympus_Mons"),
            ("processing.window_days", "monthly"),
            ("processing.window_days", -1),
            ("processing.window_days", True),
        ],
    )
    def test_bad_values(self, key, value):
        config = Config()
        config.set(key, value)
        with pytest.raises(ConfigurationError):
            ProcessingOptions.from_config(config)


class TestParseTimezone:
    def test_empty_is_local(self):
        assert parse_timezone("") is None
        assert parse_timezone(None) is None

    def test_known(self):
        assert parse_timezone("UTC") == ZoneInfo("UTC")
