"""healthsync report — daily metrics, statistics and trends for export files."""

from __future__ import annotations

import json

import click

from healthsync.core.exceptions import HealthSyncError

_TABLE_COLUMNS = (
    ("activeCalories", "Move"),
    ("exerciseMinutes", "Exercise"),
    ("standHours", "Stand"),
    ("steps", "Steps"),
    ("distance", "Dist(m)"),
    ("restingHeartRate", "RHR"),
    ("timeAsleep", "Sleep"),
    ("vo2Max", "VO2"),
)


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML or JSON config file.")
@click.option(
    "--days",
    type=click.IntRange(min=1),
    help="Only use exports ingested in the last N days (default: processing.window_days).",
)
@click.option("--window", type=click.IntRange(min=1), help="Trend window in days.")
@click.option("--timezone", "tz_name", help="IANA timezone that defines calendar days.")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default="text", show_default=True)
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR).")
def report(files, config_path, days, window, tz_name, fmt, log_level) -> None:
    """Build daily metrics from export FILES and print them."""
    from healthsync.core.cli.common import configure_logging, fail, load_config
    from healthsync.health.dashboard import compute_dashboard
    from healthsync.health.options import ProcessingOptions, parse_timezone
    from healthsync.health.payload import load_exports, select_recent

    try:
        config = load_config(config_path)
        configure_logging(config, log_level)

        options = ProcessingOptions.from_config(config)
        if tz_name:
            options.timezone = parse_timezone(tz_name)
        if window:
            options.trend_window = window

        exports = load_exports(files, tz=options.timezone)
        days = days or options.window_days
        if days:
            exports = select_recent(exports, days)

        snapshot = compute_dashboard(exports, options)
    except HealthSyncError as e:
        fail(e)
        return

    if fmt == "json":
        click.echo(json.dumps(snapshot.to_dict(), indent=2))
        return

    if not snapshot.records:
        click.echo("No health data found.")
        return

    click.echo(_format_records(snapshot.records))
    if snapshot.stats:
        click.echo("")
        click.echo(_format_stats(snapshot.stats))


def _format_records(records) -> str:
    from healthsync.core.cli.common import format_value
    from healthsync.health.models import CanonicalMetric

    header = f"{'Date':<12}" + "".join(f"{title:>10}" for _, title in _TABLE_COLUMNS) + f"{'Speed':>8}"
    lines = [header, "-" * len(header)]
    for record in records:
        cells = "".join(f"{format_value(record[CanonicalMetric(key)]):>10}" for key, _ in _TABLE_COLUMNS)
        lines.append(f"{record.date.isoformat():<12}{cells}{format_value(record.speed):>8}")
    return "\n".join(lines)


def _format_stats(stats) -> str:
    from healthsync.core.cli.common import format_value
    from healthsync.health.models import METRIC_SPECS

    lines = ["Historical averages:"]
    for stat in stats:
        label = METRIC_SPECS[stat.metric].label
        lines.append(
            f"  {label:<18} min {format_value(stat.min):>10}  max {format_value(stat.max):>10}  "
            f"mean {format_value(stat.mean):>10} {stat.unit}"
        )
    return "\n".join(lines)
