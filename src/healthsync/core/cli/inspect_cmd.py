"""healthsync inspect — show the raw metrics inside export files."""

from __future__ import annotations

import click

from healthsync.core.exceptions import HealthSyncError


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML or JSON config file.")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR).")
def inspect(files, config_path, log_level) -> None:
    """List raw metric names in export FILES and what they resolve to."""
    from healthsync.core.cli.common import configure_logging, fail, load_config
    from healthsync.health.merger import merge_exports
    from healthsync.health.options import ProcessingOptions
    from healthsync.health.payload import load_exports
    from healthsync.health.resolver import resolve_all

    try:
        config = load_config(config_path)
        configure_logging(config, log_level)

        options = ProcessingOptions.from_config(config)
        exports = load_exports(files, tz=options.timezone)
    except HealthSyncError as e:
        fail(e)
        return

    merged = merge_exports(exports)
    click.echo(f"Exports: {len(exports)}")
    if not merged:
        click.echo("No metrics with samples found.")
        return

    resolved_by_name: dict[str, list[str]] = {}
    for metric, raw in resolve_all(merged.values(), options.catalog).items():
        if raw is not None:
            resolved_by_name.setdefault(raw.name, []).append(metric.value)

    click.echo(f"Metrics: {len(merged)}\n")
    for i, raw in enumerate(merged.values(), start=1):
        target = ", ".join(resolved_by_name.get(raw.name, [])) or "(unmapped)"
        click.echo(f'{i}. "{raw.name}" ({raw.unit or "no unit"}) -> {target}')
        click.echo(f"   Samples: {len(raw.samples)}")
        first, last = raw.samples[0], raw.samples[-1]
        click.echo(f"   First: {first.timestamp.isoformat()} = {first.value:g}")
        if len(raw.samples) > 1:
            click.echo(f"   Last: {last.timestamp.isoformat()} = {last.value:g}")
