"""Tests for health.aggregator — per-day aggregation and stand hours."""

from datetime import date, timedelta, timezone

import pytest

from healthsync.health.aggregator import (
    aggregate,
    count_stand_hours,
    local_date,
    round_half_up,
    to_meters,
)
from healthsync.health.models import AggregationPolicy

D1 = date(2026, 1, 1)
D2 = date(2026, 1, 2)


@pytest.fixture
def daily_metric(make_metric):
    return make_metric(
        "steps",
        [
            ("2026-01-01T08:00:00", 5),
            ("2026-01-01T20:00:00", 3),
            ("2026-01-02T09:00:00", 10),
        ],
    )


class TestAggregate:
    def test_sum(self, daily_metric, utc):
        assert aggregate(daily_metric, D1, AggregationPolicy.SUM, utc) == 8
        assert aggregate(daily_metric, D2, AggregationPolicy.SUM, utc) == 10

    def test_avg(self, daily_metric, utc):
        assert aggregate(daily_metric, D1, AggregationPolicy.AVG, utc) == pytest.approx(4.0)

    def test_min_max(self, daily_metric, utc):
        assert aggregate(daily_metric, D1, AggregationPolicy.MIN, utc) == 3
        assert aggregate(daily_metric, D1, AggregationPolicy.MAX, utc) == 5

    def test_no_samples_that_day(self, daily_metric, utc):
        assert aggregate(daily_metric, date(2026, 1, 5), AggregationPolicy.SUM, utc) is None

    def test_accepts_policy_string(self, daily_metric, utc):
        assert aggregate(daily_metric, D1, "sum", utc) == 8

    def test_days_follow_target_timezone(self, daily_metric):
        # 20:00 UTC on Jan 1 is already Jan 2 at UTC+5
        plus_five = timezone(timedelta(hours=5))
        assert aggregate(daily_metric, D1, AggregationPolicy.SUM, plus_five) == 5
        assert aggregate(daily_metric, D2, AggregationPolicy.SUM, plus_five) == 13


class TestLocalDate:
    def test_converts_before_taking_date(self, make_metric):
        sample = make_metric("x", [("2026-01-01T23:30:00", 1)]).samples[0]
        assert local_date(sample.timestamp, timezone.utc) == D1
        assert local_date(sample.timestamp, timezone(timedelta(hours=1))) == D2


class TestStandHours:
    def test_counts_hours_with_a_minute(self, make_metric, utc):
        metric = make_metric(
            "apple_stand_time",
            [("2026-01-01T08:00:00", 1.0), ("2026-01-01T08:30:00", 0.5), ("2026-01-01T14:00:00", 2.0)],
        )
        assert count_stand_hours(metric, D1, utc) == 2

    def test_minutes_summed_within_hour(self, make_metric, utc):
        metric = make_metric("apple_stand_time", [("2026-01-01T09:10:00", 0.5), ("2026-01-01T09:40:00", 0.5)])
        assert count_stand_hours(metric, D1, utc) == 1

    def test_no_samples_is_null(self, make_metric, utc):
        metric = make_metric("apple_stand_time", [("2026-01-02T09:00:00", 3.0)])
        assert count_stand_hours(metric, D1, utc) is None
        assert count_stand_hours(metric, D1, utc, zero_as_null=False) is None

    def test_zero_qualifying_hours(self, make_metric, utc):
        metric = make_metric("apple_stand_time", [("2026-01-01T09:00:00", 0.4), ("2026-01-01T10:00:00", 0.2)])
        assert count_stand_hours(metric, D1, utc) is None
        assert count_stand_hours(metric, D1, utc, zero_as_null=False) == 0


class TestUnits:
    def test_miles_to_meters(self):
        assert to_meters(2.0, "mi") == pytest.approx(3218.68)
        assert to_meters(1.0, "Miles") == pytest.approx(1609.34)

    def test_km_to_meters(self):
        assert to_meters(1.5, "km") == pytest.approx(1500.0)

    def test_meters_and_unknown_unchanged(self):
        assert to_meters(800.0, "m") == 800.0
        assert to_meters(800.0, "") == 800.0
        assert to_meters(800.0, "min") == 800.0

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2
        assert round_half_up(300.6) == 301
