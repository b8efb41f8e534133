"""
CLI interface for the challenge analytics engine.

Usage:
    runchallenge report --snapshot snapshot.json
    runchallenge report --snapshot snapshot.json --today 2026-01-10 --output all
    runchallenge journey --snapshot snapshot.json --service-number 4521
"""

import logging
import sys
from datetime import datetime

import click

from runchallenge.config import settings
from runchallenge.features.challenge import (
    ChallengeAnalyticsService,
    ChallengeError,
    JsonSnapshotSource,
    ReportGenerator,
)
from runchallenge.features.challenge import export

logger = logging.getLogger(__name__)


def _configure_logging():
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _today(value):
    """Injected day, or the current day in the challenge timezone."""
    if value is not None:
        return value.date()
    return datetime.now(settings.zone()).date()


@click.group()
def cli():
    """Analytics for the 100K run challenge."""
    _configure_logging()


@cli.command()
@click.option("--snapshot", required=True, type=click.Path(exists=True, dir_okay=False), help="Snapshot JSON file")
@click.option("--today", default=None, type=click.DateTime(formats=["%Y-%m-%d"]), help="Override current day")
@click.option(
    "--output",
    default="console",
    type=click.Choice(["console", "json", "csv", "all"]),
    help="Output format"
)
@click.option("--output-dir", default="./reports", help="Output directory for files")
@click.option("--top", default=10, type=int, help="Rows per board in console output")
def report(snapshot, today, output, output_dir, top):
    """
    Build every board from one snapshot.

    Boards: leaderboard, active days, stations, 100K finishers,
    consistency and awards.
    """
    service = ChallengeAnalyticsService.from_settings(settings)
    try:
        result = service.build_report_from(JsonSnapshotSource(snapshot), _today(today))
    except ChallengeError as e:
        raise click.ClickException(str(e)) from e

    generator = ReportGenerator(settings.active_day_threshold)

    if output in ["console", "all"]:
        click.echo(generator.generate_console(result, top=top))

    if output in ["json", "all"]:
        json_path = generator.save_json(result, output_dir)
        click.echo(f"JSON saved: {json_path}")

    if output in ["csv", "all"]:
        for csv_path in generator.save_csv(result, output_dir):
            click.echo(f"CSV saved: {csv_path}")


@cli.command()
@click.option("--snapshot", required=True, type=click.Path(exists=True, dir_okay=False), help="Snapshot JSON file")
@click.option("--service-number", required=True, help="Participant service number")
@click.option("--csv", "csv_path", default=None, help="Also write the journey to this CSV file")
def journey(snapshot, service_number, csv_path):
    """Show one participant's day-by-day progress to the finish line."""
    service = ChallengeAnalyticsService.from_settings(settings)
    source = JsonSnapshotSource(snapshot)
    try:
        trip = service.journey(source.get_runs(), source.get_participants(), service_number)
    except ChallengeError as e:
        raise click.ClickException(str(e)) from e

    if trip is None:
        raise click.ClickException(f"No participant with service number {service_number}")

    click.echo(ReportGenerator(settings.active_day_threshold).generate_journey(trip))
    if csv_path:
        path = export.write_csv(export.journey_rows(trip), csv_path)
        click.echo(f"CSV saved: {path}")


if __name__ == "__main__":
    cli()
