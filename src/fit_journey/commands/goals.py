"""Goal management and progress commands."""

from datetime import datetime, timedelta

import click
import questionary
from questionary import Style

from ..db.repositories import GoalRepository
from ..errors import FitJourneyError
from ..models.goal import Goal, GoalStatus, GoalType
from ..models.progress import GoalProgress, ProgressStatus
from ..services.progress import ProgressService
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

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
    ]
)

STATUS_COLORS = {
    ProgressStatus.AHEAD: "green",
    ProgressStatus.ON_TRACK: "blue",
    ProgressStatus.BEHIND: "yellow",
}


def _positive_float(text: str) -> bool | str:
    try:
        return float(text) > 0 or "Enter a positive number"
    except ValueError:
        return "Enter a number"


def _valid_date(text: str) -> bool | str:
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return "Use the format YYYY-MM-DD"
    return True


async def prompt_for_goal(
    goal_type: GoalType | None,
    starting_weight: float | None,
    target_weight: float | None,
    target_date: datetime | None,
) -> tuple[GoalType, float, float, datetime]:
    """Ask for whichever goal fields were not given on the command line."""
    if goal_type is None:
        goal_type = await questionary.select(
            "What is your goal?",
            choices=[
                questionary.Choice("Lose fat", GoalType.FAT_LOSS),
                questionary.Choice("Build muscle", GoalType.MUSCLE_BUILDING),
                questionary.Choice("Recomp (keep weight, change composition)", GoalType.RECOMP),
            ],
            style=custom_style,
        ).ask_async()
        if goal_type is None:
            raise click.Abort()

    if starting_weight is None:
        answer = await questionary.text(
            "Current weight?", validate=_positive_float, style=custom_style
        ).ask_async()
        if answer is None:
            raise click.Abort()
        starting_weight = float(answer)

    if target_weight is None:
        if goal_type == GoalType.RECOMP:
            target_weight = starting_weight
        else:
            answer = await questionary.text(
                "Target weight?", validate=_positive_float, style=custom_style
            ).ask_async()
            if answer is None:
                raise click.Abort()
            target_weight = float(answer)

    if target_date is None:
        default = (utcnow() + timedelta(weeks=12)).strftime("%Y-%m-%d")
        answer = await questionary.text(
            "Target date (YYYY-MM-DD)?",
            default=default,
            validate=_valid_date,
            style=custom_style,
        ).ask_async()
        if answer is None:
            raise click.Abort()
        target_date = datetime.strptime(answer, "%Y-%m-%d")

    return goal_type, starting_weight, target_weight, target_date


def print_progress(goal: Goal, progress: GoalProgress) -> None:
    """Render a progress report."""
    click.echo()
    click.echo(click.style(f"Goal #{goal.id}: {goal.goal_type.value.replace('_', ' ')}", bold=True))
    click.echo("=" * 50)
    click.echo(f"Status: {goal.get_status_display()}")
    click.echo(
        f"Weight: {progress.current_weight:.1f} "
        f"(start {progress.starting_weight:.1f}, target {progress.target_weight:.1f})"
    )
    click.echo(f"Expected today: {progress.expected_weight:.1f}")
    click.echo(f"Progress: {progress.percent_complete:.1f}%")

    if progress.is_overdue:
        click.echo(f"Days: {progress.days_elapsed} elapsed, overdue by {-progress.days_remaining}")
    else:
        click.echo(f"Days: {progress.days_elapsed} elapsed, {progress.days_remaining} remaining")

    label = progress.status.value.replace("_", " ")
    click.echo("Pace: " + click.style(label, fg=STATUS_COLORS[progress.status]))
    click.echo(f"Trend: {progress.trend.value}")

    click.echo()
    click.echo(click.style("Recommendations:", bold=True))
    for line in progress.recommendations:
        click.echo(f"  - {line}")


@click.group()
def goals():
    """Create and track weight goals."""
    pass


@goals.command("create")
@click.option(
    "-t",
    "--type",
    "goal_type",
    type=click.Choice([t.value for t in GoalType]),
    help="Goal type",
)
@click.option("-s", "--starting-weight", type=float, help="Current body weight")
@click.option("-w", "--target-weight", type=float, help="Target body weight")
@click.option("-d", "--target-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Target date")
@click.option(
    "--start-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Start date (default: now)",
)
@click.pass_context
@async_command
async def create(
    ctx: click.Context,
    goal_type: str | None,
    starting_weight: float | None,
    target_weight: float | None,
    target_date: datetime | None,
    start_date: datetime | None,
):
    """Create a new goal.

    Any option left out is asked for interactively.
    """
    ensure_initialized(ctx)

    goal_type, starting_weight, target_weight, target_date = await prompt_for_goal(
        GoalType(goal_type) if goal_type else None,
        starting_weight,
        target_weight,
        target_date,
    )

    goal = Goal(
        user_id=get_user_id(ctx),
        goal_type=goal_type,
        start_date=ensure_aware(start_date) if start_date else utcnow(),
        target_date=ensure_aware(target_date),
        starting_weight=starting_weight,
        target_weight=target_weight,
    )

    try:
        goal_id = await GoalRepository(get_db_path(ctx)).create(goal)
    except FitJourneyError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Created goal #{goal_id}")
    click.echo(
        f"{goal.goal_type.value}: {goal.starting_weight:g} -> {goal.target_weight:g} "
        f"by {goal.target_date.strftime('%Y-%m-%d')}"
    )


@goals.command("list")
@click.pass_context
@async_command
async def list_goals(ctx: click.Context):
    """List all goals for the current user."""
    ensure_initialized(ctx)

    all_goals = await GoalRepository(get_db_path(ctx)).list_by_user(get_user_id(ctx))
    if not all_goals:
        echo_info("No goals yet. Run 'fit-journey goals create'.")
        return

    rows = [
        [
            str(goal.id),
            goal.goal_type.value,
            goal.get_status_display(),
            f"{goal.starting_weight:g} -> {goal.target_weight:g}",
            goal.target_date.strftime("%Y-%m-%d"),
        ]
        for goal in all_goals
    ]
    click.echo()
    click.echo(format_table(["ID", "Type", "Status", "Weight", "Target Date"], rows))


async def _resolve_goal(ctx: click.Context, repo: GoalRepository, goal_id: int | None) -> Goal:
    if goal_id is None:
        goal = await repo.get_active(get_user_id(ctx))
        if goal is None:
            echo_error("No active goal. Pass a goal ID or create one.")
            ctx.exit(1)
    else:
        goal = await repo.get(goal_id)
        if goal is None:
            echo_error(f"Goal {goal_id} not found.")
            ctx.exit(1)
    return goal


@goals.command("progress")
@click.argument("goal_id", type=int, required=False)
@click.pass_context
@async_command
async def progress(ctx: click.Context, goal_id: int | None):
    """Show progress for a goal (default: the active goal)."""
    ensure_initialized(ctx)

    repo = GoalRepository(get_db_path(ctx))
    goal = await _resolve_goal(ctx, repo, goal_id)

    try:
        report = await ProgressService(get_db_path(ctx)).get_goal_progress(goal.id)
    except FitJourneyError as e:
        echo_error(str(e))
        ctx.exit(1)

    print_progress(goal, report)


def _status_command(name: str, status: GoalStatus, verb: str):
    @goals.command(name, help=f"Mark a goal as {status.value}.")
    @click.argument("goal_id", type=int)
    @click.pass_context
    @async_command
    async def command(ctx: click.Context, goal_id: int):
        ensure_initialized(ctx)

        repo = GoalRepository(get_db_path(ctx))
        goal = await _resolve_goal(ctx, repo, goal_id)

        try:
            goal.transition_to(status)
            await repo.update(goal)
        except FitJourneyError as e:
            echo_error(str(e))
            ctx.exit(1)

        echo_success(f"Goal #{goal.id} {verb}")

    return command


pause = _status_command("pause", GoalStatus.PAUSED, "paused")
resume = _status_command("resume", GoalStatus.ACTIVE, "resumed")
complete = _status_command("complete", GoalStatus.COMPLETED, "completed")
archive = _status_command("archive", GoalStatus.ARCHIVED, "archived")
