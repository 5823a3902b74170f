"""
Trend lines for charting.

A trend value is the mean of the non-null values inside a centered window
``[i - floor(w/2), i + ceil(w/2))`` clipped to the series.  Days without
their own value get no trend, whatever their neighbours hold.
"""

from collections.abc import Iterable, Sequence

from .models import CanonicalMetric, DailyRecord, TimeSeriesPoint
from .options import DEFAULT_TREND_WINDOW

DEFAULT_TREND_METRICS: tuple[CanonicalMetric, ...] = (
    CanonicalMetric.ACTIVE_CALORIES,
    CanonicalMetric.STEPS,
    CanonicalMetric.TIME_ASLEEP,
    CanonicalMetric.VO2_MAX,
)


def _check_window(window: int) -> None:
    if window < 1:
        raise ValueError(f"Trend window must be at least 1, got {window}")


def rolling_average(values: Sequence[float | int | None], window: int, index: int) -> float | None:
    """Mean of the non-null values in the centered window around ``index``."""
    start = max(0, index - window // 2)
    end = min(len(values), index + (window + 1) // 2)
    in_window = [v for v in values[start:end] if v is not None]
    if not in_window:
        return None
    return sum(in_window) / len(in_window)


def trend_line(values: Sequence[float | int | None], window: int = DEFAULT_TREND_WINDOW) -> list[float | None]:
    _check_window(window)
    return [rolling_average(values, window, i) if v is not None else None for i, v in enumerate(values)]


def compute_trends(
    records: Sequence[DailyRecord],
    window: int = DEFAULT_TREND_WINDOW,
    metrics: Iterable[CanonicalMetric] | None = None,
) -> dict[CanonicalMetric, list[float | None]]:
    """Trend values per metric, aligned index-for-index with ``records``.

    Returns an empty mapping (not a mapping of empty lists) when there are
    no records.
    """
    _check_window(window)
    if not records:
        return {}
    metrics = tuple(metrics) if metrics is not None else tuple(CanonicalMetric)
    return {m: trend_line([r.values.get(m) for r in records], window) for m in metrics}


def generate_time_series(
    records: Sequence[DailyRecord],
    window: int = DEFAULT_TREND_WINDOW,
    metrics: Iterable[CanonicalMetric] = DEFAULT_TREND_METRICS,
) -> list[TimeSeriesPoint]:
    """One :class:`TimeSeriesPoint` per record with raw and trend values."""
    metrics = tuple(metrics)
    trends = compute_trends(records, window, metrics)
    return [
        TimeSeriesPoint(
            date=record.date,
            values={m: record.values.get(m) for m in metrics},
            trends={m: trends[m][i] for m in metrics},
        )
        for i, record in enumerate(records)
    ]
