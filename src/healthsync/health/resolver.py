"""
Metric resolver: map free-form exporter names to canonical metrics.

Exporters rename metrics between versions (``step_count`` vs ``Steps``),
so lookups are fuzzy.  For each alias, in priority order, three rules are
tried against every raw metric (all case-insensitive):

1. exact name match
2. match with underscores stripped from both sides
3. substring match in either direction

The first alias that matches anything wins.
"""

from collections.abc import Callable, Iterable, Sequence

from loguru import logger

from .models import CanonicalMetric, MetricSpec, RawMetric

_Rule = Callable[[str, str], bool]

_RULES: tuple[tuple[str, _Rule], ...] = (
    ("exact", lambda name, alias: name == alias),
    ("underscore", lambda name, alias: name.replace("_", "") == alias.replace("_", "")),
    ("substring", lambda name, alias: alias in name or name in alias),
)


def resolve(metrics: Iterable[RawMetric], aliases: Sequence[str]) -> RawMetric | None:
    """Return the raw metric best matching ``aliases``, or None."""
    candidates = [(m.name.lower(), m) for m in metrics if m.name]
    if not candidates:
        return None

    for alias in aliases:
        wanted = alias.lower()
        if not wanted:
            continue
        for rule_name, rule in _RULES:
            for name, metric in candidates:
                if rule(name, wanted):
                    logger.debug(f"Resolved alias '{alias}' to '{metric.name}' ({rule_name} match)")
                    return metric
    return None


def resolve_all(
    metrics: Iterable[RawMetric],
    catalog: dict[CanonicalMetric, MetricSpec],
) -> dict[CanonicalMetric, RawMetric | None]:
    """Resolve every metric in ``catalog``. Unmatched metrics map to None."""
    metrics = list(metrics)
    resolved = {metric: resolve(metrics, spec.aliases) for metric, spec in catalog.items()}

    missing = [m.value for m, raw in resolved.items() if raw is None]
    if missing:
        logger.debug(f"No raw metric found for: {', '.join(missing)}")
    return resolved
