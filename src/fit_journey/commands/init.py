"""Initialize project command."""

import click

from ..db import init_db
from .base import async_command, echo_info, echo_success, get_db_path


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the fit-journey database.

    Creates the data directory and the SQLite schema for goals,
    measurements and streaks. Safe to run more than once.
    """
    db_path = get_db_path(ctx)
    echo_info(f"Initializing fit-journey in {db_path.parent}")

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Set a goal:")
    click.echo("     fit-journey goals create")
    click.echo()
    click.echo("  2. Log your weight and workouts:")
    click.echo("     fit-journey weight log 80.5")
    click.echo("     fit-journey streak complete")
