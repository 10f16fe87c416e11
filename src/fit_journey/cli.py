"""CLI entry point for fit-journey."""

import logging
from pathlib import Path

import click

from . import __version__
from .commands import goals, init, serve, streak, weight
from .config import get_settings
from .db import get_db_path
from .utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="fit-journey")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="FIT_JOURNEY_DATA_DIR",
    help="Directory holding the database",
)
@click.option("-u", "--user", "user_id", help="User to act as (default: FIT_JOURNEY_DEFAULT_USER)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, user_id: str | None, verbose: bool):
    """fit-journey: weight goals and workout streaks.

    Example usage:

        # Initialize the database
        fit-journey init

        # Set a goal and log measurements
        fit-journey goals create --type fat_loss -s 80 -w 75 -d 2026-04-01
        fit-journey weight log 79.4

        # Check progress and keep your streak alive
        fit-journey goals progress
        fit-journey streak complete
    """
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)
    logging.getLogger(__name__).debug("Using data dir %s", data_dir or settings.data_dir)

    ctx.ensure_object(dict)
    ctx.obj["db_path"] = get_db_path(data_dir)
    ctx.obj["user_id"] = user_id or settings.default_user


# Register commands
main.add_command(init)
main.add_command(goals)
main.add_command(weight)
main.add_command(streak)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
