"""
Health data models.

Raw export types (what the export client sends), the canonical metric
catalog, and the normalized outputs (daily records, statistics, time series).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from healthsync.core.exceptions import ConfigurationError

# ── Raw export data ──────────────────────────────────────────────────


@dataclass(frozen=True)
class RawSample:
    """One observation of one metric."""

    timestamp: datetime  # timezone-aware
    value: float


@dataclass
class RawMetric:
    """A named metric as delivered by the exporter.

    The same health concept can show up under different names across
    exporter versions; see ``resolver.resolve``.
    """

    name: str
    unit: str = ""
    samples: list[RawSample] = field(default_factory=list)


@dataclass
class Export:
    """One ingested payload: an ingestion instant plus its raw metrics."""

    ingested_at: datetime
    metrics: list[RawMetric] = field(default_factory=list)

    def get(self, name: str) -> RawMetric | None:
        for metric in self.metrics:
            if metric.name == name:
                return metric
        return None


# ── Canonical metrics ────────────────────────────────────────────────


class AggregationPolicy(StrEnum):
    """How same-day samples collapse into one daily value."""

    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"


class CanonicalMetric(StrEnum):
    """Health concepts the pipeline understands. Values double as JSON keys."""

    ACTIVE_CALORIES = "activeCalories"
    EXERCISE_MINUTES = "exerciseMinutes"
    STAND_HOURS = "standHours"
    STEPS = "steps"
    DISTANCE = "distance"
    FLIGHTS_CLIMBED = "flightsClimbed"
    RESTING_HEART_RATE = "restingHeartRate"
    AVERAGE_HEART_RATE = "averageHeartRate"
    MIN_HEART_RATE = "minHeartRate"
    MAX_HEART_RATE = "maxHeartRate"
    HEART_RATE_VARIABILITY = "heartRateVariability"
    TIME_IN_BED = "timeInBed"
    TIME_ASLEEP = "timeAsleep"
    VO2_MAX = "vo2Max"


@dataclass(frozen=True)
class MetricSpec:
    """Aliases, aggregation and output unit for one canonical metric.

    Attributes:
        metric: The canonical metric this spec describes.
        aliases: Raw names to look for, most preferred first.
        policy: Daily aggregation policy.
        unit: Unit of the daily value after conversion.
        label: Human-readable name for reports.
        integral: Round the daily value to a whole number.
    """

    metric: CanonicalMetric
    aliases: tuple[str, ...]
    policy: AggregationPolicy
    unit: str
    label: str
    integral: bool = False


def _spec(metric, aliases, policy, unit, label, integral=False) -> tuple[CanonicalMetric, MetricSpec]:
    return metric, MetricSpec(metric, tuple(aliases), policy, unit, label, integral)


# Stand hours are counted per clock hour (see aggregator.count_stand_hours);
# the SUM policy describes how minutes add up inside one hour.
METRIC_SPECS: dict[CanonicalMetric, MetricSpec] = dict(
    [
        _spec(
            CanonicalMetric.ACTIVE_CALORIES,
            ["active_energy_burned", "active_energy", "active_calories"],
            AggregationPolicy.SUM,
            "kcal",
            "Active Calories",
            integral=True,
        ),
        _spec(
            CanonicalMetric.EXERCISE_MINUTES,
            ["apple_exercise_time", "exercise_time", "exercise_minutes"],
            AggregationPolicy.SUM,
            "min",
            "Exercise Minutes",
            integral=True,
        ),
        _spec(
            CanonicalMetric.STAND_HOURS,
            ["apple_stand_time", "stand_time", "stand_hours"],
            AggregationPolicy.SUM,
            "hrs",
            "Stand Hours",
        ),
        _spec(
            CanonicalMetric.STEPS,
            ["step_count", "steps"],
            AggregationPolicy.SUM,
            "steps",
            "Steps",
            integral=True,
        ),
        _spec(
            CanonicalMetric.DISTANCE,
            ["distance_walking_running", "distance", "walking_distance"],
            AggregationPolicy.SUM,
            "m",
            "Distance",
        ),
        _spec(
            CanonicalMetric.FLIGHTS_CLIMBED,
            ["flights_climbed", "flights"],
            AggregationPolicy.SUM,
            "flights",
            "Flights Climbed",
            integral=True,
        ),
        _spec(
            CanonicalMetric.RESTING_HEART_RATE,
            ["resting_heart_rate", "resting_hr"],
            AggregationPolicy.AVG,
            "bpm",
            "Resting HR",
        ),
        _spec(
            CanonicalMetric.AVERAGE_HEART_RATE,
            ["heart_rate", "average_heart_rate", "avg_hr"],
            AggregationPolicy.AVG,
            "bpm",
            "Average HR",
        ),
        _spec(
            CanonicalMetric.MIN_HEART_RATE,
            ["min_heart_rate", "heart_rate_min"],
            AggregationPolicy.MIN,
            "bpm",
            "Min HR",
        ),
        _spec(
            CanonicalMetric.MAX_HEART_RATE,
            ["max_heart_rate", "heart_rate_max"],
            AggregationPolicy.MAX,
            "bpm",
            "Max HR",
        ),
        _spec(
            CanonicalMetric.HEART_RATE_VARIABILITY,
            ["heart_rate_variability_sdnn", "hrv"],
            AggregationPolicy.AVG,
            "ms",
            "HRV",
        ),
        _spec(
            CanonicalMetric.TIME_IN_BED,
            ["sleep_time_in_bed", "time_in_bed"],
            AggregationPolicy.SUM,
            "min",
            "Time in Bed",
        ),
        _spec(
            CanonicalMetric.TIME_ASLEEP,
            ["sleep_time_asleep", "time_asleep", "sleep_duration"],
            AggregationPolicy.SUM,
            "min",
            "Sleep Duration",
        ),
        _spec(
            CanonicalMetric.VO2_MAX,
            ["vo2_max", "cardio_fitness", "vo2max"],
            AggregationPolicy.AVG,
            "ml/kg/min",
            "VO2 Max",
        ),
    ]
)


def build_catalog(overrides: dict[str, Any] | None = None) -> dict[CanonicalMetric, MetricSpec]:
    """Return a metric catalog with alias lists replaced per ``overrides``.

    ``overrides`` maps a canonical metric value (e.g. ``"steps"``) to a list
    of aliases, or a single alias string.  The default catalog is never mutated.
    """
    catalog = dict(METRIC_SPECS)
    for key, aliases in (overrides or {}).items():
        try:
            metric = CanonicalMetric(key)
        except ValueError as e:
            valid = ", ".join(m.value for m in CanonicalMetric)
            raise ConfigurationError(f"Unknown metric '{key}' in alias overrides. Valid: {valid}") from e

        if isinstance(aliases, str):
            aliases = [aliases]
        if not isinstance(aliases, list | tuple) or not all(isinstance(a, str) and a for a in aliases):
            raise ConfigurationError(f"Aliases for '{key}' must be a list of non-empty strings")

        base = catalog[metric]
        catalog[metric] = MetricSpec(
            metric=metric,
            aliases=tuple(aliases),
            policy=base.policy,
            unit=base.unit,
            label=base.label,
            integral=base.integral,
        )
    return catalog


# ── Normalized outputs ───────────────────────────────────────────────


@dataclass
class DailyRecord:
    """One calendar day of normalized metrics.

    ``values`` always carries every canonical metric; metrics without data
    that day are ``None``.
    """

    date: date
    values: dict[CanonicalMetric, float | int | None] = field(default_factory=dict)
    speed: float | None = None  # km/h, derived from distance and exercise time

    def __post_init__(self):
        self.values = {metric: self.values.get(metric) for metric in CanonicalMetric}

    def __getitem__(self, metric: CanonicalMetric) -> float | int | None:
        return self.values[metric]

    def has_data(self) -> bool:
        return any(v is not None for v in self.values.values())

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"date": self.date.isoformat()}
        for metric in CanonicalMetric:
            out[metric.value] = self.values[metric]
        out["speed"] = self.speed
        return out


@dataclass
class HistoricalStat:
    """Min / max / mean of one metric across all days that have a value."""

    metric: CanonicalMetric
    min: float
    max: float
    mean: float
    unit: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric": self.metric.value,
            "label": METRIC_SPECS[self.metric].label,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "unit": self.unit,
        }


@dataclass
class TimeSeriesPoint:
    """Raw and trend values of the tracked metrics for one day."""

    date: date
    values: dict[CanonicalMetric, float | int | None] = field(default_factory=dict)
    trends: dict[CanonicalMetric, float | None] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"date": self.date.isoformat()}
        for metric, value in self.values.items():
            out[metric.value] = value
            out[f"{metric.value}Trend"] = self.trends.get(metric)
        return out
