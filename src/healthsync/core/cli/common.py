"""Shared setup logic for CLI commands."""

from __future__ import annotations

import sys

import click

from healthsync.core.exceptions import HealthSyncError


def load_config(config_path: str | None):
    """Load config from an explicit file, or defaults + env vars."""
    from healthsync.core.config import Config

    return Config(config_file=config_path)


def configure_logging(config, level: str | None = None) -> None:
    from healthsync.core.utils.logging import configure_from_config

    configure_from_config(config, level)


def fail(error: HealthSyncError) -> None:
    """Report a library error and exit non-zero."""
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def format_value(value: float | int | None, digits: int = 1) -> str:
    if value is None:
        return "-"
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:,.{digits}f}"
