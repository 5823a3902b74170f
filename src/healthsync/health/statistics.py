"""Historical min / max / mean per metric across daily records."""

from collections.abc import Sequence

from .models import METRIC_SPECS, CanonicalMetric, DailyRecord, HistoricalStat, MetricSpec


def compute_historical_stats(
    records: Sequence[DailyRecord],
    catalog: dict[CanonicalMetric, MetricSpec] | None = None,
) -> list[HistoricalStat]:
    """One :class:`HistoricalStat` per metric with at least one non-null day.

    Metrics without any data are left out entirely.
    """
    catalog = catalog or METRIC_SPECS
    stats: list[HistoricalStat] = []

    for metric, spec in catalog.items():
        values = [float(v) for v in (r.values.get(metric) for r in records) if v is not None]
        if not values:
            continue
        stats.append(
            HistoricalStat(
                metric=metric,
                min=min(values),
                max=max(values),
                mean=sum(values) / len(values),
                unit=spec.unit,
            )
        )
    return stats
