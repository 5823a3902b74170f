"""
Health export processing.

Merges overlapping export payloads, resolves exporter metric names to
canonical metrics, aggregates them per day, and derives statistics and
trend lines for charting.
"""

from .builder import build_daily_records
from .dashboard import DashboardSnapshot, compute_dashboard
from .merger import merge_exports
from .models import (
    METRIC_SPECS,
    AggregationPolicy,
    CanonicalMetric,
    DailyRecord,
    Export,
    HistoricalStat,
    MetricSpec,
    RawMetric,
    RawSample,
    TimeSeriesPoint,
    build_catalog,
)
from .options import ProcessingOptions
from .payload import load_exports, parse_export
from .resolver import resolve
from .statistics import compute_historical_stats
from .trends import compute_trends, generate_time_series

__all__ = [
    "METRIC_SPECS",
    "AggregationPolicy",
    "CanonicalMetric",
    "DailyRecord",
    "DashboardSnapshot",
    "Export",
    "HistoricalStat",
    "MetricSpec",
    "ProcessingOptions",
    "RawMetric",
    "RawSample",
    "TimeSeriesPoint",
    "build_catalog",
    "build_daily_records",
    "compute_dashboard",
    "compute_historical_stats",
    "compute_trends",
    "generate_time_series",
    "load_exports",
    "merge_exports",
    "parse_export",
    "resolve",
]
