"""Shared test fixtures for healthsync."""

import tempfile
from datetime import datetime, timezone

import pytest

from healthsync.health.models import Export, RawMetric, RawSample

UTC = timezone.utc


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def utc():
    return UTC


@pytest.fixture
def make_metric():
    """Build a RawMetric from ``(iso_timestamp, value)`` pairs (UTC if naive)."""

    def _make(name: str, samples: list[tuple[str, float]], unit: str = "count") -> RawMetric:
        return RawMetric(
            name=name,
            unit=unit,
            samples=[RawSample(timestamp=_ts(when), value=value) for when, value in samples],
        )

    return _make


@pytest.fixture
def make_export(make_metric):
    """Build an Export from ``{name: [(iso_timestamp, value), ...]}``."""

    def _make(
        metrics: dict[str, list[tuple[str, float]]],
        ingested_at: str = "2026-01-20T12:00:00",
        units: dict[str, str] | None = None,
    ) -> Export:
        units = units or {}
        return Export(
            ingested_at=_ts(ingested_at),
            metrics=[make_metric(name, samples, units.get(name, "count")) for name, samples in metrics.items()],
        )

    return _make


@pytest.fixture
def export_payload():
    """A stored export document as the export client delivers it."""
    return {
        "timestamp": "2026-01-16T20:00:00Z",
        "metrics": [
            {
                "name": "step_count",
                "units": "count",
                "data": [
                    {"date": "2026-01-15 08:00:00 +0000", "qty": 1200},
                    {"date": "2026-01-15 18:00:00 +0000", "qty": 800},
                    {"date": "2026-01-16 09:00:00 +0000", "qty": 4000},
                ],
            },
            {
                "name": "active_energy",
                "units": "kcal",
                "data": [
                    {"date": "2026-01-15 08:00:00 +0000", "qty": 150.4},
                    {"date": "2026-01-15 08:05:00 +0000", "qty": 150.4},
                    {"date": "2026-01-16 09:00:00 +0000", "qty": 300.6},
                ],
            },
            {
                "name": "walking_running_distance",
                "units": "mi",
                "data": [{"date": "2026-01-15 10:00:00 +0000", "qty": 2.0}],
            },
            {
                "name": "apple_exercise_time",
                "units": "min",
                "data": [{"date": "2026-01-15 10:00:00 +0000", "qty": 40}],
            },
            {
                "name": "apple_stand_time",
                "units": "min",
                "data": [
                    {"date": "2026-01-15 08:00:00 +0000", "qty": 1.0},
                    {"date": "2026-01-15 08:30:00 +0000", "qty": 0.5},
                    {"date": "2026-01-15 14:00:00 +0000", "qty": 2.0},
                ],
            },
        ],
    }


def _ts(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
