"""
Daily aggregation of raw samples.

Samples are bucketed by their calendar date in the target timezone
(system local time when no timezone is given) and collapsed according to
the metric's :class:`AggregationPolicy`.
"""

import math
from collections import defaultdict
from collections.abc import Callable
from datetime import date, datetime, tzinfo

from .models import AggregationPolicy, RawMetric

METERS_PER_MILE = 1609.34
METERS_PER_KM = 1000.0
STAND_MINUTES_PER_HOUR = 1.0

_REDUCERS: dict[AggregationPolicy, Callable[[list[float]], float]] = {
    AggregationPolicy.SUM: sum,
    AggregationPolicy.AVG: lambda values: sum(values) / len(values),
    AggregationPolicy.MIN: min,
    AggregationPolicy.MAX: max,
}


def to_local(timestamp: datetime, tz: tzinfo | None = None) -> datetime:
    return timestamp.astimezone(tz)


def local_date(timestamp: datetime, tz: tzinfo | None = None) -> date:
    return timestamp.astimezone(tz).date()


def aggregate(
    metric: RawMetric,
    day: date,
    policy: AggregationPolicy,
    tz: tzinfo | None = None,
) -> float | None:
    """Collapse the samples of ``metric`` that fall on ``day``.

    Returns None when no sample falls on that day.  No unit conversion
    happens here.
    """
    values = [s.value for s in metric.samples if local_date(s.timestamp, tz) == day]
    if not values:
        return None
    return _REDUCERS[AggregationPolicy(policy)](values)


def count_stand_hours(
    metric: RawMetric,
    day: date,
    tz: tzinfo | None = None,
    zero_as_null: bool = True,
) -> int | None:
    """Count the clock hours of ``day`` with at least one minute stood.

    Samples are minutes-stood contributions; they are summed per local
    hour (0-23) first.  With ``zero_as_null`` a day whose samples reach
    no qualifying hour yields None, otherwise 0.  A day without samples is
    always None.
    """
    minutes_by_hour: dict[int, float] = defaultdict(float)
    for sample in metric.samples:
        local = to_local(sample.timestamp, tz)
        if local.date() == day:
            minutes_by_hour[local.hour] += sample.value

    if not minutes_by_hour:
        return None

    hours = sum(1 for minutes in minutes_by_hour.values() if minutes >= STAND_MINUTES_PER_HOUR)
    if hours == 0 and zero_as_null:
        return None
    return hours


def to_meters(value: float, unit: str) -> float:
    """Convert a distance to meters. Unknown units are assumed to be meters."""
    u = (unit or "").strip().lower()
    if u in {"km", "kilometer", "kilometers", "kilometre", "kilometres"}:
        return value * METERS_PER_KM
    if u in {"mi", "mile", "miles"} or ("mi" in u and "min" not in u):
        return value * METERS_PER_MILE
    return value


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
