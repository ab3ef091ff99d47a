"""CLI interface using Typer."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt

from fittrack.api.response import ApiResponse
from fittrack.api.services import Services
from fittrack.config.settings import Settings
from fittrack.export.formatters import JSONFormatter, TableFormatter
from fittrack.pages.base import FormMessage, FormPage
from fittrack.pages.dashboard import DashboardPage
from fittrack.pages.habits import HabitsPage
from fittrack.pages.navigation import NAVIGATION_ITEMS, Navigation
from fittrack.pages.photos import PhotosPage
from fittrack.pages.weight import WeightPage
from fittrack.pages.workouts import COMMON_EXERCISES, WorkoutsPage
from fittrack.tracking.calculations import (
    can_estimate_one_rep_max,
    estimate_one_rep_max,
    habit_completion_percentage,
)

app = typer.Typer(
    help="Personal fitness tracking backed by a spreadsheet",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

# Subcommand groups
weight_app = typer.Typer(help="Log body weight and measurements")
workouts_app = typer.Typer(help="Log workout sets and view personal records")
habits_app = typer.Typer(help="Log daily habits (sleep, water, cardio)")
photos_app = typer.Typer(help="Upload and list progress photos")
config_app = typer.Typer(help="Show or write configuration")

app.add_typer(weight_app, name="weight")
app.add_typer(workouts_app, name="workouts")
app.add_typer(habits_app, name="habits")
app.add_typer(photos_app, name="photos")
app.add_typer(config_app, name="config")


# ============================================================================
# Setup helpers
# ============================================================================


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml (default: ~/.fittrack/config.yaml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Load settings and build the backend services once per invocation."""
    configure_logging(verbose)

    settings = Settings.load(config_path)
    settings.validate()

    if isinstance(ctx.obj, Services):
        # Injected by the caller (tests, embedding)
        services = ctx.obj
    else:
        services = Services.from_settings(settings)
        ctx.call_on_close(services.close)

    ctx.obj = {"settings": settings, "services": services, "config_path": config_path}


def get_services(ctx: typer.Context) -> Services:
    return ctx.obj["services"]


def get_settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def parse_date(date_str: Optional[str]) -> date:
    """Parse YYYY-MM-DD, defaulting to today."""
    if not date_str:
        return date.today()
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        console.print(f"[red]Invalid date '{date_str}', expected YYYY-MM-DD[/red]")
        raise typer.Exit(1)


def output_json(text: str) -> None:
    """Print JSON without Rich markup processing."""
    print(text)


def report_submit(
    page: FormPage,
    message: FormMessage,
    command: str,
    json_output: bool,
    human_summary: str = "",
) -> None:
    """Print a page's submit result and exit with 1 on failure."""
    if json_output:
        if page.last_response is None:
            output_json(JSONFormatter().error(command, message.text))
        else:
            output_json(
                JSONFormatter().format(command, page.last_response, human_summary)
            )
    else:
        TableFormatter(console).message(message)

    if message.is_error:
        raise typer.Exit(1)


def report_read(
    response: ApiResponse[Any],
    command: str,
    json_output: bool,
    human_summary: str = "",
) -> bool:
    """Print a read failure (or JSON result). Returns True if a table should follow."""
    if json_output:
        output_json(JSONFormatter().format(command, response, human_summary))
        if not response.success:
            raise typer.Exit(1)
        return False

    if not response.success:
        console.print(f"[red]{response.error_message}[/red]")
        raise typer.Exit(1)
    return True


# ============================================================================
# Dashboard
# ============================================================================


@app.command()
def dashboard(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the summary dashboard computed by the backend."""
    page = DashboardPage(get_services(ctx).weight)
    page.load()

    if json_output:
        summary = ""
        if page.data is not None:
            summary = (
                f"Weight {page.data.current_weight:.1f} kg, "
                f"progress {page.data.progress_percentage:.1f}%"
            )
        output_json(
            JSONFormatter().format("dashboard", page.last_response, summary)
        )
        if page.data is None:
            raise typer.Exit(1)
        return

    if page.data is None:
        console.print(f"[red]{page.error}[/red]")
        raise typer.Exit(1)
    TableFormatter(console).dashboard(page.data)


# ============================================================================
# Weight Commands
# ============================================================================


@weight_app.command("add")
def weight_add(
    ctx: typer.Context,
    weight: float = typer.Argument(..., help="Weight in kg"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    body_fat: float = typer.Option(0.0, "--body-fat", "-b", help="Body fat percentage"),
    notes: str = typer.Option("", "--notes", "-n", help="Optional notes"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a weight measurement."""
    page = WeightPage(get_services(ctx).weight)
    page.form.date = parse_date(date_str)
    page.form.weight = weight
    page.form.body_fat = body_fat
    page.form.notes = notes

    message = page.submit()
    report_submit(page, message, "weight add", json_output, f"Logged {weight:.1f} kg")


@weight_app.command("list")
def weight_list(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List all weight entries."""
    response = get_services(ctx).weight.get_all()
    if report_read(response, "weight list", json_output):
        if not response.data:
            console.print("No weight entries found")
            return
        TableFormatter(console).weights(response.data)


@weight_app.command("current")
def weight_current(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the latest weight entry."""
    response = get_services(ctx).weight.get_current()
    if report_read(response, "weight current", json_output):
        if response.data is None:
            console.print("No weight entries found")
            return
        TableFormatter(console).weights([response.data])


# ============================================================================
# Workout Commands
# ============================================================================


@workouts_app.command("add")
def workouts_add(
    ctx: typer.Context,
    exercise: str = typer.Argument(..., help="Exercise name"),
    weight: float = typer.Argument(..., help="Load in kg"),
    reps: int = typer.Argument(..., help="Repetitions"),
    sets: int = typer.Option(1, "--sets", "-s", help="Number of sets"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    notes: str = typer.Option("", "--notes", "-n", help="Optional notes"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a workout set."""
    page = WorkoutsPage(get_services(ctx).workouts)
    page.form.date = parse_date(date_str)
    page.form.exercise = exercise
    page.form.weight = weight
    page.form.reps = reps
    page.form.sets = sets
    page.form.notes = notes

    one_rm = page.estimated_one_rep_max
    message = page.submit()
    summary = f"Logged {exercise} {weight:g} kg x {reps}"
    if one_rm is not None:
        summary += f", estimated 1RM {one_rm} kg"
    report_submit(page, message, "workouts add", json_output, summary)

    if not json_output and one_rm is not None:
        console.print(f"[blue]1RM estimado:[/blue] {one_rm} kg")


@workouts_app.command("list")
def workouts_list(
    ctx: typer.Context,
    exercise: Optional[str] = typer.Option(
        None, "--exercise", "-e", help="Only show this exercise"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List logged workout sets."""
    service = get_services(ctx).workouts
    response = service.get_by_exercise(exercise) if exercise else service.get_all()
    if report_read(response, "workouts list", json_output):
        if not response.data:
            console.print("No workouts found")
            return
        TableFormatter(console).workouts(response.data)


@workouts_app.command("prs")
def workouts_prs(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show personal records computed by the backend."""
    response = get_services(ctx).workouts.get_personal_records()
    if report_read(response, "workouts prs", json_output):
        if not response.data:
            console.print("No personal records yet")
            return
        TableFormatter(console).personal_records(response.data)


@workouts_app.command("exercises")
def workouts_exercises() -> None:
    """List the common exercise names."""
    for name in COMMON_EXERCISES:
        console.print(name)


@workouts_app.command("one-rm")
def workouts_one_rm(
    weight: float = typer.Argument(..., help="Load in kg"),
    reps: int = typer.Argument(..., help="Repetitions"),
) -> None:
    """Estimate a one-rep max with the Epley formula (no request is made)."""
    if not can_estimate_one_rep_max(weight, reps):
        console.print("[red]El peso y las repeticiones deben ser mayores a 0[/red]")
        raise typer.Exit(1)
    console.print(f"1RM estimado: {estimate_one_rep_max(weight, reps)} kg")


# ============================================================================
# Habit Commands
# ============================================================================


@habits_app.command("log")
def habits_log(
    ctx: typer.Context,
    sleep: bool = typer.Option(False, "--sleep/--no-sleep", help="Slept 7-8 hours"),
    water: bool = typer.Option(False, "--water/--no-water", help="Drank 2-3 liters"),
    cardio: bool = typer.Option(False, "--cardio/--no-cardio", help="Did cardio"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    notes: str = typer.Option("", "--notes", "-n", help="Optional notes"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Save the habits for a day (replaces that day's entry)."""
    page = HabitsPage(get_services(ctx).habits)
    page.form.date = parse_date(date_str)
    page.form.sleep = sleep
    page.form.water = water
    page.form.cardio = cardio
    page.form.notes = notes

    percentage = page.completion_percentage
    message = page.submit()
    report_submit(
        page,
        message,
        "habits log",
        json_output,
        f"{page.completed_count}/3 habits, {percentage}% complete",
    )
    if not json_output:
        console.print(f"{page.completed_count}/3 hábitos - {percentage}% completado")


@habits_app.command("show")
def habits_show(
    ctx: typer.Context,
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the habits saved for a day."""
    day = parse_date(date_str)
    response = get_services(ctx).habits.get_by_date(day)
    if report_read(response, "habits show", json_output):
        entry = response.data
        if entry is None:
            console.print(f"No habits logged for {day.isoformat()}")
            return
        TableFormatter(console).habits(entry, habit_completion_percentage(entry))


@habits_app.command("compliance")
def habits_compliance(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show weekly habit compliance computed by the backend."""
    response = get_services(ctx).habits.get_weekly_compliance()
    if report_read(response, "habits compliance", json_output):
        console.print(f"Cumplimiento semanal: {response.data:.0f}%")


# ============================================================================
# Photo Commands
# ============================================================================


@photos_app.command("upload")
def photos_upload(
    ctx: typer.Context,
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Image file (max 5MB)"
    ),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    description: str = typer.Option("", "--description", help="Optional description"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Upload a progress photo and save it to the log."""
    services = get_services(ctx)
    page = PhotosPage(services.photos, services.uploader)
    page.form.date = parse_date(date_str)
    page.form.description = description

    if not page.select_file(file):
        report_submit(page, page.message, "photos upload", json_output)  # type: ignore[arg-type]
        return

    if not json_output:
        with console.status("Subiendo..."):
            message = page.submit()
    else:
        message = page.submit()
    report_submit(page, message, "photos upload", json_output, f"Uploaded {file.name}")


@photos_app.command("list")
def photos_list(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", help="Number of recent photos (default from config)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List recent progress photos."""
    if limit is None:
        limit = get_settings(ctx).defaults.recent_photos
    response = get_services(ctx).photos.get_recent(limit)
    if report_read(response, "photos list", json_output):
        TableFormatter(console).photos(response.data or [])


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration (API key masked)."""
    settings = get_settings(ctx)
    key = settings.backend.api_key
    masked = f"{key[:4]}…" if key else None
    rows = [
        ("backend.url", settings.backend.url),
        ("backend.api_key", masked),
        ("backend.timeout", settings.backend.timeout),
        ("images.cloud_name", settings.images.cloud_name),
        ("images.upload_preset", settings.images.upload_preset),
        ("images.api_base", settings.images.api_base),
        ("defaults.output_format", settings.defaults.output_format),
        ("defaults.recent_photos", settings.defaults.recent_photos),
    ]
    for name, value in rows:
        shown = "[red]not set[/red]" if value is None else f"[cyan]{value}[/cyan]"
        console.print(f"{name}: {shown}")

    missing = settings.missing()
    if missing:
        console.print(f"[yellow]Missing: {', '.join(missing)}[/yellow]")


@config_app.command("init")
def config_init(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(None, "--url", help="Apps Script web app URL"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Static API key"),
    cloud_name: Optional[str] = typer.Option(None, "--cloud-name", help="Cloudinary account"),
    upload_preset: Optional[str] = typer.Option(
        None, "--upload-preset", help="Cloudinary unsigned upload preset"
    ),
    save_key: bool = typer.Option(
        False, "--save-key", help="Store the API key in the config file"
    ),
) -> None:
    """Write a config.yaml with the given values."""
    settings = get_settings(ctx)
    if url:
        settings.backend.url = url
    if api_key:
        settings.backend.api_key = api_key
    if cloud_name:
        settings.images.cloud_name = cloud_name
    if upload_preset:
        settings.images.upload_preset = upload_preset

    config_path = ctx.obj["config_path"]
    settings.save(config_path, include_secrets=save_key)
    console.print(
        f"[green]Configuration saved[/green] to {config_path or '~/.fittrack/config.yaml'}"
    )


# ============================================================================
# Interactive Shell
# ============================================================================


def _ask_date(current: date) -> Optional[date]:
    """Prompt for a date; print an error and return None if it is malformed."""
    value = Prompt.ask("Fecha", default=current.isoformat())
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Invalid date '{value}', expected YYYY-MM-DD[/red]")
        return None


def _run_page(page: Any, table: TableFormatter) -> None:
    """Collect input for the current page and submit it."""
    if isinstance(page, DashboardPage):
        page.load()
        if page.data is None:
            console.print(f"[red]{page.error}[/red]")
        else:
            table.dashboard(page.data)
        return

    if isinstance(page, WeightPage):
        day = _ask_date(page.form.date)
        if day is None:
            return
        page.form.date = day
        page.form.weight = FloatPrompt.ask("Peso (kg)", default=0.0)
        page.form.body_fat = FloatPrompt.ask("Grasa corporal (%)", default=0.0)
        page.form.notes = Prompt.ask("Notas", default="")
    elif isinstance(page, WorkoutsPage):
        day = _ask_date(page.form.date)
        if day is None:
            return
        page.form.date = day
        page.form.exercise = Prompt.ask("Ejercicio", choices=list(COMMON_EXERCISES))
        page.form.weight = FloatPrompt.ask("Peso (kg)", default=0.0)
        page.form.reps = IntPrompt.ask("Repeticiones", default=0)
        page.form.sets = IntPrompt.ask("Series", default=1)
        page.form.notes = Prompt.ask("Notas", default="")
        if page.estimated_one_rep_max is not None:
            console.print(f"[blue]1RM estimado:[/blue] {page.estimated_one_rep_max} kg")
    elif isinstance(page, HabitsPage):
        day = _ask_date(page.form.date)
        if day is None:
            return
        page.form.date = day
        page.form.sleep = Confirm.ask("Dormir 7-8 horas", default=False)
        page.form.water = Confirm.ask("Beber 2-3 litros de agua", default=False)
        page.form.cardio = Confirm.ask("Cardio", default=False)
        console.print(
            f"{page.completed_count}/3 hábitos - {page.completion_percentage}% completado"
        )
        page.form.notes = Prompt.ask("Notas", default="")
    elif isinstance(page, PhotosPage):
        table.photos(page.load_photos())
        path = Prompt.ask("Archivo (vacío para volver)", default="")
        if not path:
            return
        file = Path(path).expanduser()
        if not file.is_file():
            console.print(f"[red]File not found: {file}[/red]")
            return
        if not page.select_file(file):
            table.message(page.message)  # type: ignore[arg-type]
            return
        day = _ask_date(page.form.date)
        if day is None:
            return
        page.form.date = day
        page.form.description = Prompt.ask("Descripción", default="")

    table.message(page.submit())


@app.command()
def shell(ctx: typer.Context) -> None:
    """Interactive menu: pick a page, fill in its form, repeat."""
    nav = Navigation(get_services(ctx))
    table = TableFormatter(console)
    choices = [page_id for page_id, _ in NAVIGATION_ITEMS] + ["quit"]

    while True:
        console.rule("Fitness Tracker")
        console.print(
            "  ".join(
                f"[bold]{label}[/bold]" if page_id == nav.current_page else label
                for page_id, label in NAVIGATION_ITEMS
            )
        )
        selected = Prompt.ask("Página", choices=choices, default=nav.current_page)
        if selected == "quit":
            break
        _run_page(nav.select(selected), table)


if __name__ == "__main__":
    app()
