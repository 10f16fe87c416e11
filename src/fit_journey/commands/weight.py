"""Body-weight logging commands."""

from datetime import datetime

import click

from ..db.repositories import GoalRepository, MeasurementRepository
from ..errors import FitJourneyError
from ..models.goal import Measurement
from ..utils.time import ensure_aware, utcnow
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_db_path,
    get_user_id,
)


@click.group()
def weight():
    """Log and review body-weight measurements."""
    pass


@weight.command("log")
@click.argument("value", type=float)
@click.option(
    "-d",
    "--date",
    "measured_at",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%d %H:%M"]),
    help="When the measurement was taken (default: now)",
)
@click.option("-n", "--notes", default=None, help="Free-form notes")
@click.pass_context
@async_command
async def log(ctx: click.Context, value: float, measured_at: datetime | None, notes: str | None):
    """Log a body-weight measurement.

    The measurement is linked to the active goal when there is one.
    """
    ensure_initialized(ctx)

    user_id = get_user_id(ctx)
    active = await GoalRepository(get_db_path(ctx)).get_active(user_id)

    measurement = Measurement(
        user_id=user_id,
        weight=value,
        date=ensure_aware(measured_at) if measured_at else utcnow(),
        goal_id=active.id if active else None,
        notes=notes,
    )

    try:
        await MeasurementRepository(get_db_path(ctx)).create(measurement)
    except FitJourneyError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Logged {measurement.weight:g} on {measurement.date.strftime('%Y-%m-%d')}")


@weight.command("list")
@click.option("-l", "--limit", type=click.IntRange(min=1), default=MeasurementRepository.DEFAULT_LIMIT)
@click.pass_context
@async_command
async def list_measurements(ctx: click.Context, limit: int):
    """Show recent measurements, newest first."""
    ensure_initialized(ctx)

    measurements = await MeasurementRepository(get_db_path(ctx)).list_by_user(
        get_user_id(ctx), limit=limit
    )
    if not measurements:
        echo_info("No measurements yet. Run 'fit-journey weight log <value>'.")
        return

    rows = [
        [m.date.strftime("%Y-%m-%d %H:%M"), f"{m.weight:g}", m.notes or ""]
        for m in measurements
    ]
    click.echo()
    click.echo(format_table(["Date", "Weight", "Notes"], rows))
