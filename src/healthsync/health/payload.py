"""
Export payload parsing.

Turns the JSON documents produced by the health-export client (or stored
copies of them) into :class:`Export` objects.  Two shapes are accepted:

    {"timestamp": "...", "metrics": [...]}          # stored document
    {"data": {"metrics": [...]}}                    # raw export body

Each metric entry looks like ``{"name", "units", "data": [{"date", "qty"}]}``.
Exports are expected to be partial at times, so bad samples are dropped
rather than rejected.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone, tzinfo
from pathlib import Path
from typing import Any

from loguru import logger

from healthsync.core.exceptions import FileIOError, PayloadError

from .models import Export, RawMetric, RawSample

_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S",
)


def parse_timestamp(value: Any, tz: tzinfo | None = None) -> datetime | None:
    """Parse an exporter timestamp into an aware datetime.

    Naive values are placed in ``tz`` (system local time when ``tz`` is None).
    Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        parsed = _parse_timestamp_text(value.strip())
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz) if tz is not None else parsed.astimezone()
    return parsed


def _parse_timestamp_text(text: str) -> datetime | None:
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _parse_samples(name: str, entries: Any, tz: tzinfo | None) -> list[RawSample]:
    if not isinstance(entries, list):
        return []

    samples: list[RawSample] = []
    skipped = 0
    for entry in entries:
        if not isinstance(entry, dict):
            skipped += 1
            continue
        when = parse_timestamp(entry.get("date"), tz)
        value = _to_float(entry.get("qty"))
        if when is None or value is None:
            skipped += 1
            continue
        samples.append(RawSample(timestamp=when, value=value))

    if skipped:
        logger.debug(f"Skipped {skipped} malformed sample(s) in metric '{name}'")
    return samples


def parse_export(
    payload: Any,
    tz: tzinfo | None = None,
    ingested_at: datetime | None = None,
) -> Export:
    """Build an :class:`Export` from one payload.

    Args:
        payload: Decoded JSON document.
        tz: Timezone for naive timestamps (None = system local).
        ingested_at: Fallback ingestion instant when the payload has none.
            Defaults to now (UTC).

    Raises:
        PayloadError: If the payload is not a mapping or has no metrics list.
    """
    if not isinstance(payload, dict):
        raise PayloadError(f"Export payload must be an object, got {type(payload).__name__}")

    entries = payload.get("metrics")
    if entries is None and isinstance(payload.get("data"), dict):
        entries = payload["data"].get("metrics")
    if not isinstance(entries, list):
        raise PayloadError("Export payload has no 'metrics' list")

    when = parse_timestamp(payload.get("timestamp"), tz) or parse_timestamp(payload.get("createdAt"), tz)
    if when is None:
        when = ingested_at or datetime.now(timezone.utc)

    export = Export(ingested_at=when)
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("name"):
            logger.debug("Skipping metric entry without a name")
            continue

        name = str(entry["name"])
        samples = _parse_samples(name, entry.get("data"), tz)

        existing = export.get(name)
        if existing is not None:
            existing.samples.extend(samples)
            continue
        export.metrics.append(RawMetric(name=name, unit=str(entry.get("units") or ""), samples=samples))

    return export


def load_exports(paths: Iterable[str | Path], tz: tzinfo | None = None) -> list[Export]:
    """Read export payloads from JSON files, oldest ingestion first.

    A file may hold one payload or a list of payloads.
    """
    exports: list[Export] = []
    for path in paths:
        path = Path(path).expanduser()
        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except OSError as e:
            raise FileIOError(f"Cannot read export file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise PayloadError(f"Invalid JSON in export file {path}: {e}") from e

        payloads = document if isinstance(document, list) else [document]
        for payload in payloads:
            exports.append(parse_export(payload, tz=tz))
        logger.debug(f"Loaded {len(payloads)} export(s) from {path}")

    exports.sort(key=lambda e: e.ingested_at)
    return exports


def select_recent(exports: Iterable[Export], days: int, now: datetime | None = None) -> list[Export]:
    """Keep exports ingested within the last ``days`` days."""
    if days < 1:
        raise ValueError(f"days must be at least 1, got {days}")
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=days)
    return [e for e in exports if e.ingested_at >= cutoff]
