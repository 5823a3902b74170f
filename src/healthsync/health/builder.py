"""
Daily metrics builder.

Pipeline: merge exports → resolve each canonical metric → aggregate per
day → convert units / round → derive speed.  Every call recomputes from
the given exports; nothing is cached between calls.
"""

from collections.abc import Iterable
from datetime import date, tzinfo

from loguru import logger

from healthsync.core.exceptions import DataProcessingError

from .aggregator import aggregate, count_stand_hours, local_date, round_half_up, to_meters
from .merger import merge_exports
from .models import CanonicalMetric, DailyRecord, Export, RawMetric
from .options import ProcessingOptions
from .resolver import resolve_all


def collect_days(metrics: Iterable[RawMetric], tz: tzinfo | None = None) -> list[date]:
    """Every calendar day that has at least one sample of any metric, ascending."""
    days = {local_date(s.timestamp, tz) for metric in metrics for s in metric.samples}
    return sorted(days)


def derive_speed(distance_m: float | None, exercise_minutes: float | None) -> float | None:
    """Average speed in km/h, or None without both inputs (and some exercise time)."""
    if distance_m is None or exercise_minutes is None or exercise_minutes <= 0:
        return None
    return (distance_m / 1000) / (exercise_minutes / 60)


def build_daily_records(
    exports: Iterable[Export],
    options: ProcessingOptions | None = None,
) -> list[DailyRecord]:
    """Build one :class:`DailyRecord` per day present in any sample.

    Raises:
        DataProcessingError: If any day fails to build.  The whole batch is
            abandoned so callers never see a partial result.
    """
    options = options or ProcessingOptions()
    exports = list(exports)
    if not exports:
        return []

    merged = merge_exports(exports)
    days = collect_days(merged.values(), options.timezone)
    if not days:
        return []

    resolved = resolve_all(merged.values(), options.catalog)

    records: list[DailyRecord] = []
    for day in days:
        try:
            records.append(_build_day(day, resolved, options))
        except Exception as e:
            logger.error(f"Failed to build daily record for {day.isoformat()}: {e}")
            raise DataProcessingError(f"Failed to build daily record for {day.isoformat()}: {e}") from e

    logger.info(
        f"Built {len(records)} daily record(s) from {len(exports)} export(s), "
        f"{days[0].isoformat()} to {days[-1].isoformat()}"
    )
    return records


def _build_day(
    day: date,
    resolved: dict[CanonicalMetric, RawMetric | None],
    options: ProcessingOptions,
) -> DailyRecord:
    values: dict[CanonicalMetric, float | int | None] = {}

    for metric, spec in options.catalog.items():
        raw = resolved.get(metric)
        if raw is None:
            values[metric] = None
            continue

        if metric is CanonicalMetric.STAND_HOURS:
            values[metric] = count_stand_hours(raw, day, options.timezone, options.stand_zero_as_null)
            continue

        value = aggregate(raw, day, spec.policy, options.timezone)
        if value is not None:
            if metric is CanonicalMetric.DISTANCE:
                value = to_meters(value, raw.unit)
            if spec.integral:
                value = round_half_up(value)
        values[metric] = value

    speed = derive_speed(
        values.get(CanonicalMetric.DISTANCE),
        values.get(CanonicalMetric.EXERCISE_MINUTES),
    )
    return DailyRecord(date=day, values=values, speed=speed)
