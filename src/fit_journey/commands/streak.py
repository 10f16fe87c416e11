"""Workout streak commands."""

import click

from ..config import get_settings
from ..models.streak import StreakReport, StreakStatus
from ..services.streaks import StreakService
from .base import async_command, ensure_initialized, get_db_path, get_user_id

STATUS_STYLES = {
    StreakStatus.ON_FIRE: ("ON FIRE", "red"),
    StreakStatus.ACTIVE: ("active", "green"),
    StreakStatus.AT_RISK: ("at risk", "yellow"),
    StreakStatus.BROKEN: ("broken", "white"),
}


def _service(ctx: click.Context) -> StreakService:
    return StreakService(get_db_path(ctx), tz=get_settings().tzinfo)


def print_streak(report: StreakReport) -> None:
    label, color = STATUS_STYLES[report.streak_status]
    click.echo()
    click.echo(
        click.style(f"Streak: {report.current_streak} days", bold=True)
        + " ["
        + click.style(label, fg=color)
        + "]"
    )
    click.echo(f"Longest: {report.longest_streak} days")
    if report.last_workout_date:
        click.echo(f"Last workout: {report.last_workout_date.strftime('%Y-%m-%d %H:%M')}")
    if report.hours_until_break is not None and report.is_streak_active:
        click.echo(f"Hours until break: {report.hours_until_break:.0f}")
    click.echo()
    click.echo(report.message)


@click.group()
def streak():
    """Track your workout streak."""
    pass


@streak.command("show")
@click.pass_context
@async_command
async def show(ctx: click.Context):
    """Show the current streak."""
    ensure_initialized(ctx)
    report = await _service(ctx).get_streak(get_user_id(ctx))
    print_streak(report)


@streak.command("complete")
@click.pass_context
@async_command
async def complete(ctx: click.Context):
    """Record a completed workout.

    Several workouts on the same day only count once.
    """
    ensure_initialized(ctx)
    report = await _service(ctx).on_workout_completed(get_user_id(ctx))
    print_streak(report)


@streak.command("stats")
@click.pass_context
@async_command
async def stats(ctx: click.Context):
    """Show streak records and workout counts."""
    ensure_initialized(ctx)
    result = await _service(ctx).get_streak_stats(get_user_id(ctx))

    click.echo()
    click.echo(f"Current streak:      {result.current}")
    click.echo(f"Longest streak:      {result.longest}")
    click.echo(f"Workouts (7 days):   {result.workouts_this_week}")
    click.echo(f"Workouts (30 days):  {result.workouts_this_month}")
    click.echo(f"Workouts (all time): {result.total_workouts}")
