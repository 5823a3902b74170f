"""HealthSync CLI — entry point for the report and inspect commands."""

import click

from healthsync import __version__


@click.group()
@click.version_option(version=__version__, package_name="healthsync")
def main() -> None:
    """HealthSync — daily health metrics from export payloads."""


# Register subcommands (lazy imports keep startup fast)
from .inspect_cmd import inspect
from .report_cmd import report

main.add_command(report)
main.add_command(inspect)
