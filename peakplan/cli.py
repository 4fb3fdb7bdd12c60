"""Command-line interface for the peakplan training planner."""

import logging

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import config
from .db import get_db
from .db.models import CheckInRating, ExerciseType, FitnessLevel, LogStatus, WorkoutStatus
from .db.seed import seed_library
from .errors import NotFoundError, PeakPlanError
from .planning import (
    CheckInAdapter,
    ScheduleService,
    create_goal as create_goal_record,
    generate_plan,
    list_exercises,
    list_goals,
    list_sports,
    set_profile as set_profile_record,
    WorkoutLogService,
)

console = Console()

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

PHASE_STYLES = {
    "base": "cyan",
    "build": "yellow",
    "peak": "red",
    "recovery": "green",
    "transition": "magenta",
}


def _fail(error: Exception):
    console.print(f"[red]❌ {error}[/red]")
    raise SystemExit(1)


def _user_option(func):
    return click.option(
        "--user", "user_id", default=config.DEFAULT_USER_ID, show_default=True,
        help="User ID",
    )(func)


def _render_workout(detail):
    workout = detail.workout
    skipped = workout.status == WorkoutStatus.SKIPPED.value
    title = f"{DAY_NAMES[workout.day_of_week]} · {workout.name}"
    if skipped:
        title += " [dim](skipped)[/dim]"

    table = Table(title=title, box=box.SIMPLE, title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Exercise")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Rest", justify="right")

    for item, exercise in detail.exercises:
        rest = f"{item.rest_seconds}s" if item.rest_seconds else "-"
        table.add_row(str(item.order_in_workout), exercise.name, str(item.sets), item.reps, rest)

    console.print(table)
    caption = f"[dim]{workout.focus or ''} · ~{workout.estimated_minutes or '?'} min · id {workout.id}[/dim]"
    console.print(caption)


def _render_log(log):
    effort = f" · RPE {log.perceived_effort}" if log.perceived_effort else ""
    minutes = f" · {log.duration_minutes} min" if log.duration_minutes else ""
    console.print(f"[green]📝 Logged {log.status} on {log.date}{minutes}{effort}[/green]")
    for entry in log.sets:
        parts = [f"set {entry.set_number}"]
        if entry.reps_completed is not None:
            parts.append(f"{entry.reps_completed} reps")
        if entry.weight_kg is not None:
            parts.append(f"{entry.weight_kg} kg")
        if entry.duration_seconds is not None:
            parts.append(f"{entry.duration_seconds}s")
        console.print(f"  [dim]{entry.exercise.name}:[/dim] " + ", ".join(parts))


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """Periodized strength training plans for outdoor sports."""
    logging.basicConfig(
        level=(log_level or config.LOG_LEVEL).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@cli.command("init-db")
def init_db():
    """Create tables and seed sports and exercises."""
    console.print(Panel.fit("🗄️  Database Setup", style="bold blue"))
    try:
        config.validate()
        db = get_db()
        db.create_tables()
        counts = seed_library(db)
    except (PeakPlanError, ValueError) as e:
        _fail(e)

    console.print(
        f"[green]✅ Ready: {counts['sports']} new sports, {counts['exercises']} new exercises[/green]"
    )


@cli.command("set-profile")
@click.option("--fitness-level", type=click.Choice([l.value for l in FitnessLevel]))
@click.option("--training-days", type=int, help="Preferred training days per week")
@_user_option
def set_profile(fitness_level, training_days, user_id):
    """Set fitness level and weekly training days."""
    try:
        user = set_profile_record(user_id, fitness_level, training_days)
    except (PeakPlanError, ValueError) as e:
        _fail(e)

    console.print(
        f"[green]✅ Profile saved:[/green] level={user.fitness_level or '-'}, "
        f"days/week={user.training_days_per_week or '-'}"
    )


@cli.command("create-goal")
@click.option("--sport", "sport_slug", required=True, help="Sport slug, e.g. skiing")
@click.option("--target-date", required=True, help="Goal date (YYYY-MM-DD)")
@click.option("--name", required=True, help="Goal name")
@click.option("--description", default=None)
@_user_option
def create_goal(sport_slug, target_date, name, description, user_id):
    """Create a goal to train toward."""
    try:
        goal = create_goal_record(user_id, sport_slug, target_date, name, description)
    except (PeakPlanError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✅ Goal created:[/green] {goal.name} on {goal.target_date}")
    console.print(f"[dim]id {goal.id}[/dim]")


@cli.command()
@click.option("--goal", "goal_id", required=True, help="Goal ID")
@_user_option
def generate(goal_id, user_id):
    """Generate (or regenerate) the plan for a goal."""
    with console.status("Building plan..."):
        try:
            plan_id = generate_plan(user_id, goal_id)
        except (PeakPlanError, ValueError) as e:
            _fail(e)

    console.print(f"[green]✅ Plan generated:[/green] {plan_id}")


@cli.command("show-plan")
@_user_option
def show_plan(user_id):
    """Show the weeks of the current plan."""
    overview = ScheduleService().get_current_plan(user_id)
    if overview is None:
        console.print("[yellow]⚠️  No active plan. Create a goal and run 'peakplan generate'.[/yellow]")
        return

    plan = overview.plan
    console.print(Panel.fit(
        f"{overview.sport.icon or ''} {plan.name}\n"
        f"{plan.start_date} → {plan.end_date} · {plan.total_weeks} weeks",
        style="bold blue",
    ))

    table = Table(box=box.ROUNDED)
    table.add_column("Week", justify="right")
    table.add_column("Start")
    table.add_column("Phase")
    table.add_column("Volume", justify="right")
    table.add_column("Intensity", justify="right")
    table.add_column("Workouts", justify="right")
    table.add_column("Notes")
    table.add_column("ID", style="dim")

    for week in overview.weeks:
        style = PHASE_STYLES.get(week.phase, "white")
        table.add_row(
            str(week.week_number),
            str(week.start_date),
            f"[{style}]{week.phase}[/{style}]",
            str(week.volume_score),
            str(week.intensity_score),
            str(week.workouts_per_week),
            week.notes or "",
            week.id,
        )

    console.print(table)


@cli.command("show-week")
@click.option("--week", "week_id", required=True, help="Week ID")
@_user_option
def show_week(week_id, user_id):
    """Show the workouts and prescriptions of a week."""
    detail = ScheduleService().get_week(week_id, user_id)
    if detail is None:
        _fail(NotFoundError("Week", week_id))

    week = detail.week
    console.print(Panel.fit(
        f"Week {week.week_number} · {week.phase} · from {week.start_date}\n"
        f"Volume {week.volume_score} · Intensity {week.intensity_score}",
        style="bold blue",
    ))
    if week.notes:
        console.print(f"[italic]{week.notes}[/italic]")

    for workout in detail.workouts:
        _render_workout(workout)


@cli.command()
@_user_option
def today(user_id):
    """Show today's workout."""
    detail = ScheduleService().get_today_workout(user_id)
    if detail is None:
        console.print("[green]😴 Rest day. Nothing scheduled today.[/green]")
        return
    _render_workout(detail)
    if detail.log is not None:
        _render_log(detail.log)


@cli.command("check-in")
@click.option("--week", "week_id", required=True, help="Week ID")
@click.option("--rating", required=True, type=click.Choice([r.value for r in CheckInRating]))
@click.option("--notes", default=None)
@_user_option
def check_in(week_id, rating, notes, user_id):
    """Rate a week and adapt the weeks ahead."""
    try:
        result = CheckInAdapter().submit_check_in(week_id, user_id, rating, notes)
    except (PeakPlanError, ValueError) as e:
        _fail(e)

    color = "green" if result.adapted else "blue"
    console.print(f"[{color}]{result.message}[/{color}]")


@cli.command()
@click.option("--workout", "workout_id", required=True, help="Workout ID")
@_user_option
def skip(workout_id, user_id):
    """Skip a workout, or restore a skipped one."""
    try:
        status = ScheduleService().toggle_skip_workout(workout_id, user_id)
    except (PeakPlanError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✅ Workout is now {status}[/green]")


@cli.command()
@click.option("--workout", "workout_id", required=True, help="Workout ID")
@click.option("--day", type=click.IntRange(0, 6), required=True, help="0=Mon ... 6=Sun")
@_user_option
def move(workout_id, day, user_id):
    """Move a workout to another day of its week."""
    try:
        ScheduleService().swap_workout_day(workout_id, user_id, day)
    except (PeakPlanError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✅ Workout moved to {DAY_NAMES[day]}[/green]")


@cli.command()
@click.option("--search", default=None, help="Name contains")
@click.option("--type", "exercise_type", type=click.Choice([t.value for t in ExerciseType]))
def exercises(search, exercise_type):
    """Browse the exercise library."""
    rows = list_exercises(get_db(), search=search, exercise_type=exercise_type)
    if not rows:
        console.print("[yellow]No exercises match.[/yellow]")
        return

    table = Table(title=f"Exercises ({len(rows)})", box=box.ROUNDED)
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Equipment")
    table.add_column("Description", overflow="fold")
    for exercise in rows:
        table.add_row(exercise.name, exercise.type, exercise.equipment, exercise.description or "")
    console.print(table)


@cli.command()
def sports():
    """List sports and their slugs."""
    table = Table(title="Sports", box=box.ROUNDED)
    table.add_column("Slug", style="bold")
    table.add_column("Name")
    table.add_column("Season")
    for sport in list_sports():
        table.add_row(sport.slug, f"{sport.icon or ''} {sport.name}", sport.category)
    console.print(table)


@cli.command()
@click.option("--active", "active_only", is_flag=True, help="Only active goals")
@_user_option
def goals(active_only, user_id):
    """List goals and their IDs."""
    rows = list_goals(user_id, active_only=active_only)
    if not rows:
        console.print("[yellow]⚠️  No goals yet. Create one with 'peakplan create-goal'.[/yellow]")
        return

    table = Table(title="Goals", box=box.ROUNDED)
    table.add_column("Name")
    table.add_column("Sport")
    table.add_column("Target")
    table.add_column("Status")
    table.add_column("ID", style="dim")
    for goal in rows:
        table.add_row(goal.name, goal.sport.slug, str(goal.target_date), goal.status, goal.id)
    console.print(table)


@cli.command("log")
@click.option("--workout", "workout_id", required=True, help="Workout ID")
@click.option("--status", required=True, type=click.Choice([s.value for s in LogStatus]))
@click.option("--duration", "duration_minutes", type=int, help="Minutes spent")
@click.option("--effort", "perceived_effort", type=click.IntRange(1, 10), help="RPE 1-10")
@click.option("--notes", default=None)
@_user_option
def log_workout(workout_id, status, duration_minutes, perceived_effort, notes, user_id):
    """Log how a workout went."""
    try:
        log = WorkoutLogService().log_workout(
            workout_id, user_id, status, duration_minutes, perceived_effort, notes
        )
    except (PeakPlanError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✅ Workout logged as {log.status}[/green]")


@cli.command("log-set")
@click.option("--workout", "workout_id", required=True, help="Workout ID")
@click.option("--exercise", "order_in_workout", type=int, required=True, help="Exercise # in the workout")
@click.option("--set", "set_number", type=int, required=True, help="Set number")
@click.option("--reps", "reps_completed", type=int)
@click.option("--weight", "weight_kg", default=None, help="Weight in kg")
@click.option("--seconds", "duration_seconds", type=int)
@click.option("--notes", default=None)
@_user_option
def log_set(workout_id, order_in_workout, set_number, reps_completed, weight_kg,
            duration_seconds, notes, user_id):
    """Log one set of an exercise in a logged workout."""
    try:
        WorkoutLogService().log_set(
            workout_id, user_id, order_in_workout, set_number,
            reps_completed, weight_kg, duration_seconds, notes,
        )
    except (PeakPlanError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✅ Set {set_number} of exercise #{order_in_workout} logged[/green]")


@cli.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries")
@_user_option
def history(limit, user_id):
    """Show recently logged workouts."""
    entries = WorkoutLogService().get_history(user_id, limit=limit)
    if not entries:
        console.print("[yellow]No workouts logged yet.[/yellow]")
        return

    table = Table(title="Workout History", box=box.ROUNDED)
    table.add_column("Date")
    table.add_column("Workout")
    table.add_column("Status")
    table.add_column("Minutes", justify="right")
    table.add_column("RPE", justify="right")
    for entry in entries:
        log = entry.log
        table.add_row(
            str(log.date),
            entry.workout.name,
            log.status,
            str(log.duration_minutes or "-"),
            str(log.perceived_effort or "-"),
        )
    console.print(table)


if __name__ == "__main__":
    cli()
