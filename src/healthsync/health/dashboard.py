"""
Dashboard snapshot: records, statistics and time series in one call.

Refreshing is recompute-on-demand.  Whoever wants periodic updates
(cron, a web handler, a timer) simply calls :func:`compute_dashboard` again.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .builder import build_daily_records
from .models import DailyRecord, Export, HistoricalStat, TimeSeriesPoint
from .options import ProcessingOptions
from .statistics import compute_historical_stats
from .trends import DEFAULT_TREND_METRICS, generate_time_series


@dataclass
class DashboardSnapshot:
    """Everything a renderer needs, computed from one set of exports."""

    records: list[DailyRecord] = field(default_factory=list)
    stats: list[HistoricalStat] = field(default_factory=list)
    series: list[TimeSeriesPoint] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "generatedAt": self.generated_at.isoformat(),
            "count": len(self.records),
            "records": [r.to_dict() for r in self.records],
            "stats": [s.to_dict() for s in self.stats],
            "series": [p.to_dict() for p in self.series],
        }


def compute_dashboard(
    exports: Iterable[Export],
    options: ProcessingOptions | None = None,
    trend_metrics=DEFAULT_TREND_METRICS,
) -> DashboardSnapshot:
    """Recompute the full snapshot from ``exports``.

    A ``DataProcessingError`` from the builder propagates unchanged.
    """
    options = options or ProcessingOptions()
    records = build_daily_records(exports, options)
    return DashboardSnapshot(
        records=records,
        stats=compute_historical_stats(records, options.catalog),
        series=generate_time_series(records, options.trend_window, trend_metrics),
    )
