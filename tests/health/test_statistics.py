"""Tests for health.statistics — historical min / max / mean."""

from datetime import date

import pytest

from healthsync.health.models import CanonicalMetric, DailyRecord
from healthsync.health.statistics import compute_historical_stats


def _record(day: int, **values) -> DailyRecord:
    return DailyRecord(date=date(2026, 1, day), values={CanonicalMetric(k): v for k, v in values.items()})


class TestHistoricalStats:
    def test_empty(self):
        assert compute_historical_stats([]) == []

    def test_ignores_nulls(self):
        records = [_record(1, steps=1000), _record(2, steps=None), _record(3, steps=3000)]
        (stat,) = compute_historical_stats(records)
        assert stat.metric is CanonicalMetric.STEPS
        assert stat.min == 1000
        assert stat.max == 3000
        assert stat.mean == pytest.approx(2000)
        assert stat.unit == "steps"

    def test_metrics_without_data_omitted(self):
        records = [_record(1, vo2Max=41.5, timeAsleep=420.0), _record(2)]
        stats = compute_historical_stats(records)
        assert [s.metric for s in stats] == [CanonicalMetric.TIME_ASLEEP, CanonicalMetric.VO2_MAX]

    def test_catalog_order(self):
        records = [_record(1, vo2Max=40.0, activeCalories=500, restingHeartRate=58.0)]
        metrics = [s.metric for s in compute_historical_stats(records)]
        assert metrics == [
            CanonicalMetric.ACTIVE_CALORIES,
            CanonicalMetric.RESTING_HEART_RATE,
            CanonicalMetric.VO2_MAX,
        ]
