"""
Multi-export merger.

Exports overlap: the client re-sends windows it already delivered and
also delivers bucketed contributions (e.g. 5-minute calorie totals) that
must all be kept.  Merging therefore only drops a sample when the same
metric already holds one with the same timestamp and a value within
``DUPLICATE_TOLERANCE``.
"""

from collections.abc import Iterable
from datetime import datetime
from operator import attrgetter

from loguru import logger

from .models import Export, RawMetric, RawSample

DUPLICATE_TOLERANCE = 1e-4

_by_timestamp = attrgetter("timestamp")


def merge_exports(exports: Iterable[Export]) -> dict[str, RawMetric]:
    """Combine exports into one sample set per raw metric name.

    The unit comes from the first export carrying the metric.  Sample
    lists are kept sorted by timestamp.  Input exports are not modified.
    """
    merged: dict[str, RawMetric] = {}
    dropped = 0

    for export in exports:
        for metric in export.metrics:
            if not metric.samples:
                continue

            existing = merged.get(metric.name)
            if existing is None:
                merged[metric.name] = RawMetric(
                    name=metric.name,
                    unit=metric.unit,
                    samples=sorted(metric.samples, key=_by_timestamp),
                )
                continue

            added = _append_new_samples(existing, metric.samples)
            dropped += len(metric.samples) - added
            existing.samples.sort(key=_by_timestamp)

    if dropped:
        logger.debug(f"Dropped {dropped} duplicate sample(s) while merging exports")
    return merged


def _append_new_samples(target: RawMetric, samples: Iterable[RawSample]) -> int:
    """Append samples that are not already in ``target``; return how many were added."""
    seen: dict[datetime, list[float]] = {}
    for sample in target.samples:
        seen.setdefault(sample.timestamp, []).append(sample.value)

    added = 0
    for sample in samples:
        values = seen.setdefault(sample.timestamp, [])
        if any(abs(v - sample.value) < DUPLICATE_TOLERANCE for v in values):
            continue
        values.append(sample.value)
        target.samples.append(sample)
        added += 1
    return added
