"""Terminal front end for HabitTracker."""

from __future__ import annotations

import calendar
import functools
from datetime import date, datetime
from typing import Optional

import click

from .context import AppContext, create_app_context
from .errors import HabitTrackerError, NotFoundError, PersistenceError
from .logging_config import get_logger, setup_logging
from .models.habit import Habit
from .services import onboarding
from .services.clock import DayOrder, compare_day_only, month_start
from .services.navigation import can_advance
from .services.progress import ProgressTier
from .services.streaks import habit_streaks

logger = get_logger(__name__)

TIER_SYMBOLS = {
    ProgressTier.NONE: ".",
    ProgressTier.LOW: "-",
    ProgressTier.HIGH: "+",
    ProgressTier.COMPLETE: "*",
}
TODAY_MARKER = "@"
CELEBRATION = "Congratulations! You've completed all your habits for today. Keep it up!"

DATE_OPTION = click.DateTime(formats=["%Y-%m-%d"])
MONTH_OPTION = click.DateTime(formats=["%Y-%m"])


def reports_errors(func):
    """Render core errors as click errors instead of tracebacks."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PersistenceError as exc:
            logger.error("Storage failure", exc_info=True)
            raise click.ClickException(f"Storage error: {exc}") from exc
        except HabitTrackerError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


def _selected_day(value: Optional[datetime]) -> date:
    day = value.date() if value else date.today()
    if compare_day_only(day, date.today()) == DayOrder.AFTER:
        raise click.BadParameter("Future dates cannot be selected", param_hint="--date")
    return day


def _require_habit(ctx: AppContext, habit_id: int) -> Habit:
    habit = ctx.habit_store.get_habit(habit_id)
    if habit is None:
        raise NotFoundError(habit_id)
    return habit


def _habit_line(habit: Habit, done: bool) -> str:
    mark = "x" if done else " "
    return f"  [{mark}] {habit.id:>3}  {habit.name}"


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track daily habits from the terminal."""

    if ctx.obj is None:
        app = create_app_context()
        setup_logging(app.config)
        ctx.obj = app


@cli.command("add")
@click.argument("name", nargs=-1, required=True)
@click.pass_obj
@reports_errors
def add_habit(app: AppContext, name: tuple[str, ...]) -> None:
    """Add a new daily habit."""

    habit = app.habit_store.create_habit(" ".join(name))
    click.echo(f"Habit added: {habit.name} (#{habit.id})")


@cli.command("archive")
@click.argument("habit_id", type=int)
@click.pass_obj
@reports_errors
def archive_habit(app: AppContext, habit_id: int) -> None:
    """Archive a habit; its history is kept."""

    app.habit_store.archive_habit(habit_id)
    click.echo(f"Habit #{habit_id} archived")


@cli.command("restore")
@click.argument("habit_id", type=int)
@click.pass_obj
@reports_errors
def restore_habit(app: AppContext, habit_id: int) -> None:
    """Bring an archived habit back."""

    habit = app.habit_store.restore_habit(habit_id)
    click.echo(f"Habit restored: {habit.name} (#{habit.id})")


@cli.command("rename")
@click.argument("habit_id", type=int)
@click.argument("name", nargs=-1, required=True)
@click.pass_obj
@reports_errors
def rename_habit(app: AppContext, habit_id: int, name: tuple[str, ...]) -> None:
    """Rename a habit."""

    habit = app.habit_store.rename_habit(habit_id, " ".join(name))
    click.echo(f"Habit #{habit.id} renamed to {habit.name}")


@cli.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived habits")
@click.pass_obj
@reports_errors
def list_habits(app: AppContext, include_archived: bool) -> None:
    """List habits in the order they were created."""

    habits = app.habit_store.list_habits(include_archived=include_archived)
    if not habits:
        click.echo("No habits yet. Add one with: habittracker add <name>")
        return
    for habit in habits:
        suffix = " (archived)" if habit.archived else ""
        click.echo(f"{habit.id:>3}  {habit.name}{suffix}")


@cli.command("day")
@click.option("--date", "on", type=DATE_OPTION, default=None, help="Day to show (YYYY-MM-DD)")
@click.pass_obj
@reports_errors
def show_day(app: AppContext, on: Optional[datetime]) -> None:
    """Show which habits are done for a day."""

    day = _selected_day(on)
    habits = app.habit_store.list_active_habits()

    title = day.strftime("%A, %b %d")
    if day == date.today():
        title += " (today)"
    click.echo(title)

    if not habits:
        if not onboarding.is_onboarding_completed(app.settings_repo):
            click.echo("Pick some starter habits with: habittracker onboard --examples")
        else:
            click.echo("No habits yet. Add one with: habittracker add <name>")
        return

    incomplete = app.day_query.incomplete_habits(habits, day)
    completed = app.day_query.completed_habits(habits, day)

    click.echo("Daily Habits")
    for habit in incomplete:
        click.echo(_habit_line(habit, done=False))
    if completed:
        click.echo("Completed")
        for habit in completed:
            click.echo(_habit_line(habit, done=True))

    ratio = app.progress.day_progress(habits, day)
    click.echo(f"Progress: {ratio:.0%}")
    if not can_advance(day):
        click.echo("(latest day)")


@cli.command("toggle")
@click.argument("habit_id", type=int)
@click.option("--date", "on", type=DATE_OPTION, default=None, help="Day to toggle (YYYY-MM-DD)")
@click.pass_obj
@reports_errors
def toggle(app: AppContext, habit_id: int, on: Optional[datetime]) -> None:
    """Mark a habit done for a day, or undo it."""

    day = _selected_day(on)
    habit = _require_habit(app, habit_id)
    result = app.day_query.toggle_completion(habit, day)
    if result.completed:
        click.echo(f"Done: {habit.name} on {day.isoformat()}")
    else:
        click.echo(f"Undone: {habit.name} on {day.isoformat()}")
    if result.celebrate:
        click.echo(CELEBRATION)


@cli.command("calendar")
@click.option("--month", type=MONTH_OPTION, default=None, help="Month to show (YYYY-MM)")
@click.pass_obj
@reports_errors
def show_calendar(app: AppContext, month: Optional[datetime]) -> None:
    """Show a month grid with each day's completion tier."""

    focus = month_start(month.date() if month else date.today())
    habits = app.habit_store.list_active_habits()
    cells = app.progress.month_progress(habits, focus, first_weekday=app.first_weekday)

    click.echo(focus.strftime("%B %Y").center(34).rstrip())
    headers = [calendar.day_abbr[(app.first_weekday + i) % 7][:2] for i in range(7)]
    click.echo(" ".join(f"{h:>3} " for h in headers).rstrip())
    for week_start in range(0, len(cells), 7):
        row = []
        for cell in cells[week_start:week_start + 7]:
            if not cell.in_month:
                row.append("    ")
                continue
            marker = TODAY_MARKER if cell.is_today else " "
            row.append(f"{cell.day.day:>2}{TIER_SYMBOLS[cell.tier]}{marker}")
        click.echo(" ".join(row).rstrip())
    click.echo("Legend: . none  - under half  + half or more  * all  @ today")


@cli.command("streaks")
@click.pass_obj
@reports_errors
def show_streaks(app: AppContext) -> None:
    """Show current and longest streaks for active habits."""

    habits = app.habit_store.list_active_habits()
    if not habits:
        click.echo("No habits yet.")
        return
    for habit in habits:
        stats = habit_streaks(app.habit_store, habit.id)
        click.echo(
            f"{habit.id:>3}  {habit.name}: current {stats.current}, "
            f"longest {stats.longest}, total {stats.total}"
        )


@cli.command("onboard")
@click.argument("choices", nargs=-1)
@click.option("--examples", is_flag=True, help="List suggested habits and exit")
@click.option("--skip", is_flag=True, help="Finish onboarding without adding habits")
@click.pass_obj
@reports_errors
def onboard(app: AppContext, choices: tuple[str, ...], examples: bool, skip: bool) -> None:
    """Choose starter habits by number or name (at least two)."""

    if examples:
        for index, name in enumerate(onboarding.EXAMPLE_HABITS, start=1):
            click.echo(f"{index:>3}  {name}")
        return
    if onboarding.is_onboarding_completed(app.settings_repo):
        click.echo("Onboarding already completed.")
        return
    if skip:
        onboarding.skip_onboarding(app.settings_repo)
        click.echo("Onboarding skipped.")
        return

    names = []
    for choice in choices:
        if choice.isdigit():
            index = int(choice)
            if not 1 <= index <= len(onboarding.EXAMPLE_HABITS):
                raise click.BadParameter(f"No example habit #{index}", param_hint="CHOICES")
            names.append(onboarding.EXAMPLE_HABITS[index - 1])
        else:
            names.append(choice)

    created = onboarding.complete_onboarding(app.habit_store, app.settings_repo, names)
    click.echo(f"Added {len(created)} habits:")
    for habit in created:
        click.echo(f"  {habit.id:>3}  {habit.name}")


def main() -> None:  # pragma: no cover - console entry point
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
