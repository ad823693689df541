"""
adapters.cli.main - CLI adapter for the health log.

The terminal counterpart of the app's screens. Every command goes through
the same ServiceFactory and trackers, so validation, the calendar index
and the chart series behave exactly as they would behind any other UI.

Commands
--------
  register          Create the user profile
  home              Greet the user (falls back to the default name)
  fluid day         List a day's fluid entries with the 2-hour chart
  fluid add         Log an amount at HH:MM on a day
  fluid edit        Replace an entry's amount and time
  fluid delete      Delete an entry (asks for confirmation)
  fluid chart       Show only the chart for a day
  fluid calendar    Show which days have fluid entries
  fluid report      Export every fluid entry as a PDF
  mood list         Show the moods logged on a day
  mood add          Log a mood with an optional comment
  mood edit         Replace a mood entry
  mood delete       Delete a mood entry (asks for confirmation)
  mood calendar     Show which days have moods
  mood report       Export every mood entry as a PDF

Usage
-----
  python run_cli.py fluid add 250 --time 09:15 --date 2024-01-01
  python run_cli.py fluid chart 2024-01-01
  python run_cli.py mood add Happy --comment "slept well"
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional

# ── Ensure src/ is on the path when run as a script ──
_SRC = Path(__file__).resolve().parent.parent.parent
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from adapters.cli.share import ConsoleShareSink
from application.dto import ExportResult, ProfileForm
from application.services.fluid_tracker import FluidTracker
from application.services.mood_tracker import MoodTracker
from application.services.validation import BLOOD_TYPES, format_dob_input
from domain.entities import MOOD_LEVELS, Mood
from domain.exceptions import (
    NotFoundError,
    SchemaError,
    StoreIOError,
    ValidationError,
)
from domain.models import SlotSeries, SlotState
from factory import ServiceFactory
from infrastructure.config import Settings

__version__ = "1.0.0"

GENERIC_ALERT = "Something went wrong while accessing your data."

console = Console()
app = typer.Typer(
    help="Personal health log CLI",
    add_completion=False,
    no_args_is_help=True,
)
fluid_app = typer.Typer(help="Fluid intake tracking", no_args_is_help=True)
mood_app = typer.Typer(help="Mood tracking", no_args_is_help=True)
app.add_typer(fluid_app, name="fluid")
app.add_typer(mood_app, name="mood")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _run(work: Callable[[ServiceFactory], Awaitable[None]]) -> None:
    """Open the store, run one command, close the store.

    Domain errors end the command with a blocking message and exit code 1.
    """
    async def _main() -> None:
        async with ServiceFactory(Settings.from_env()) as factory:
            await work(factory)

    try:
        asyncio.run(_main())
    except ValidationError as exc:
        console.print(Panel(exc.message, title="Invalid input", border_style="red"))
        raise typer.Exit(code=1)
    except NotFoundError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1)
    except (SchemaError, StoreIOError):
        console.print(f"[bold red]Error:[/bold red] {GENERIC_ALERT}")
        raise typer.Exit(code=1)


def _print_export(result: ExportResult) -> None:
    if result.ok:
        console.print(f"[green]Report ready[/green] ({result.row_count} rows).")
    else:
        console.print(Panel(result.message, title="Error", border_style="red"))
        raise typer.Exit(code=1)


def _print_chart(chart: Optional[SlotSeries]) -> None:
    if chart is None or chart.state is SlotState.ABSENT:
        console.print("[dim]There is no record for this day[/dim]")
        return
    if chart.state is SlotState.ZERO:
        console.print("[dim]Entries were logged, but none adds to the 8AM-8PM chart[/dim]")
        return
    peak = max(chart.values)
    t = Table(box=box.SIMPLE, show_header=False, padding=(0, 1))
    t.add_column("Slot", style="bold", justify="right")
    t.add_column("Bar")
    t.add_column("ml", justify="right")
    for label, value in chart.labelled():
        width = int(round(30 * value / peak)) if peak else 0
        t.add_row(label, "[blue]" + "█" * width + "[/blue]", f"{value:g}")
    console.print(Panel(t, title=f"Water Intake Chart - {chart.date}", border_style="blue"))


def _print_marks(marks: dict, title: str, color: str) -> None:
    t = Table(box=box.SIMPLE, padding=(0, 2))
    t.add_column("Date", style="bold")
    t.add_column("Logged")
    t.add_column("Selected")
    for day in sorted(marks, reverse=True):
        marker = marks[day]
        t.add_row(day, "●" if marker.marked else "", "✓" if marker.selected else "")
    console.print(Panel(t, title=title, border_style=color))


async def _fluid_for(factory: ServiceFactory, day: Optional[str]) -> FluidTracker:
    tracker = factory.create_fluid_tracker()
    await tracker.load()
    if day:
        await tracker.select_date(day)
    return tracker


async def _mood_for(factory: ServiceFactory, day: Optional[str]) -> MoodTracker:
    tracker = factory.create_mood_tracker()
    await tracker.load()
    if day:
        await tracker.select_date(day)
    return tracker


def _mood_value(text: str) -> str:
    """Accept either the emoji or its label (case-insensitive)."""
    for emoji, label in MOOD_LEVELS:
        if text.lower() == label.lower():
            return emoji
    return text


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"healthlog v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands: Profile
# ---------------------------------------------------------------------------

@app.command()
def register() -> None:
    """Create the user profile."""
    console.print(Panel("[bold]New Account[/bold]", border_style="blue"))

    full_name  = Prompt.ask("[bold]Full Name[/bold]")
    contact    = Prompt.ask("[bold]Phone Number[/bold]")
    blood_type = Prompt.ask("[bold]Blood Type[/bold]", choices=list(BLOOD_TYPES),
                            case_sensitive=False)
    email      = Prompt.ask("[bold]Email[/bold]")
    dob        = format_dob_input(Prompt.ask("[bold]Date of Birth[/bold] (YYYY-MM-DD)"))

    form = ProfileForm(
        fullName=full_name, contact=contact, bloodType=blood_type,
        email=email, dob=dob,
    )

    async def _work(factory: ServiceFactory) -> None:
        await factory.create_profile_service().register(form)
        console.print("[bold green]User profile saved successfully[/bold green]")

    _run(_work)


@app.command()
def home() -> None:
    """Greet the registered user."""
    config = Settings.from_env()

    async def _main() -> str:
        async with ServiceFactory(config) as factory:
            return await factory.create_profile_service().display_name()

    try:
        name = asyncio.run(_main())
    except (SchemaError, StoreIOError):
        name = config.default_display_name
    console.print(f"[bold]Hello, {name}![/bold]")


# ---------------------------------------------------------------------------
# Commands: Fluid
# ---------------------------------------------------------------------------

@fluid_app.command("day")
def fluid_day(day: Optional[str] = typer.Argument(None, help="YYYY-MM-DD, default today")) -> None:
    """List a day's fluid entries and its chart."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _fluid_for(factory, day)
        state = tracker.state
        t = Table(box=box.SIMPLE, title=f"Fluid Tracker - {state.selected_date}")
        t.add_column("#", justify="right")
        t.add_column("Time")
        t.add_column("Amount", justify="right")
        for entry in state.entries:
            t.add_row(str(entry.id), entry.timestamp[11:16], f"{entry.amount} ml")
        if state.entries:
            console.print(t)
        _print_chart(state.chart)

    _run(_work)


@fluid_app.command("add")
def fluid_add(
    amount: str = typer.Argument(..., help="Amount in ml"),
    time: str = typer.Option("12:00", "--time", "-t", help="HH:MM"),
    day: Optional[str] = typer.Option(None, "--date", "-d", help="YYYY-MM-DD, default today"),
) -> None:
    """Add a fluid entry."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _fluid_for(factory, day)
        tracker.begin_add()
        entry_id = await tracker.save(amount, time)
        console.print(f"[green]Saved entry #{entry_id}[/green] for {tracker.state.selected_date}.")
        _print_chart(tracker.state.chart)

    _run(_work)


@fluid_app.command("edit")
def fluid_edit(
    entry_id: int = typer.Argument(...),
    amount: str = typer.Argument(..., help="New amount in ml"),
    time: Optional[str] = typer.Option(None, "--time", "-t", help="HH:MM, default unchanged"),
    day: Optional[str] = typer.Option(None, "--date", "-d", help="Day of the entry, default today"),
) -> None:
    """Replace a fluid entry's amount and time."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _fluid_for(factory, day)
        entry = next((e for e in tracker.state.entries if e.id == entry_id), None)
        if entry is None:
            console.print(f"[bold red]No entry #{entry_id} on {tracker.state.selected_date}.[/bold red]")
            raise typer.Exit(code=1)
        tracker.begin_edit(entry)
        await tracker.save(amount, time)
        console.print(f"[green]Updated entry #{entry_id}.[/green]")
        _print_chart(tracker.state.chart)

    _run(_work)


@fluid_app.command("delete")
def fluid_delete(
    entry_id: int = typer.Argument(...),
    day: Optional[str] = typer.Option(None, "--date", "-d", help="Day of the entry, default today"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete a fluid entry."""
    confirmed = yes or Confirm.ask("Are you sure you want to delete this entry?")

    async def _work(factory: ServiceFactory) -> None:
        tracker = await _fluid_for(factory, day)
        if await tracker.delete(entry_id, confirmed=confirmed):
            console.print(f"[green]Deleted entry #{entry_id}.[/green]")
        else:
            console.print("[dim]Cancelled.[/dim]")

    _run(_work)


@fluid_app.command("chart")
def fluid_chart(day: Optional[str] = typer.Argument(None, help="YYYY-MM-DD, default today")) -> None:
    """Show the 2-hour chart for a day."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _fluid_for(factory, day)
        _print_chart(tracker.state.chart)

    _run(_work)


@fluid_app.command("calendar")
def fluid_calendar(day: Optional[str] = typer.Argument(None, help="Selected day")) -> None:
    """Show every day that has fluid entries."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _fluid_for(factory, day)
        _print_marks(tracker.calendar_marks(), "Fluid Calendar", "blue")

    _run(_work)


@fluid_app.command("report")
def fluid_report() -> None:
    """Export all fluid entries as a PDF report."""
    async def _work(factory: ServiceFactory) -> None:
        service = factory.create_export_service(ConsoleShareSink(console))
        _print_export(await service.export_fluid())

    _run(_work)


# ---------------------------------------------------------------------------
# Commands: Mood
# ---------------------------------------------------------------------------

@mood_app.command("list")
def mood_list(day: Optional[str] = typer.Option(None, "--date", "-d", help="YYYY-MM-DD, default today")) -> None:
    """Show the moods logged on a day."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _mood_for(factory, day)
        moods = tracker.state.daily_moods
        if not moods:
            console.print("[dim]No moods logged for this day[/dim]")
            return
        t = Table(box=box.SIMPLE, title=f"Mood Tracker - {tracker.state.selected_date}")
        t.add_column("#", justify="right")
        t.add_column("Mood")
        t.add_column("Comment")
        for entry in moods:
            t.add_row(str(entry.id), entry.mood, entry.comment)
        console.print(t)

    _run(_work)


@mood_app.command("add")
def mood_add(
    mood: str = typer.Argument(..., help="Emoji or one of: " + ", ".join(m.label for m in Mood)),
    comment: str = typer.Option("", "--comment", "-c"),
    day: Optional[str] = typer.Option(None, "--date", "-d", help="YYYY-MM-DD, default today"),
) -> None:
    """Log a mood."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _mood_for(factory, day)
        tracker.begin_add()
        entry_id = await tracker.save(_mood_value(mood), comment)
        console.print(f"[green]Saved mood #{entry_id}[/green] for {tracker.state.selected_date}.")

    _run(_work)


@mood_app.command("edit")
def mood_edit(
    entry_id: int = typer.Argument(...),
    mood: str = typer.Argument(...),
    comment: Optional[str] = typer.Option(None, "--comment", "-c", help="Default unchanged"),
) -> None:
    """Replace a mood entry."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _mood_for(factory, None)
        entry = next((e for e in tracker.state.entries if e.id == entry_id), None)
        if entry is None:
            console.print(f"[bold red]No mood entry #{entry_id}.[/bold red]")
            raise typer.Exit(code=1)
        tracker.begin_edit(entry)
        await tracker.save(_mood_value(mood), comment)
        console.print(f"[green]Updated mood #{entry_id}.[/green]")

    _run(_work)


@mood_app.command("delete")
def mood_delete(
    entry_id: int = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete a mood entry."""
    confirmed = yes or Confirm.ask("Are you sure you want to delete this mood entry?")

    async def _work(factory: ServiceFactory) -> None:
        tracker = await _mood_for(factory, None)
        if await tracker.delete(entry_id, confirmed=confirmed):
            console.print(f"[green]Deleted mood #{entry_id}.[/green]")
        else:
            console.print("[dim]Cancelled.[/dim]")

    _run(_work)


@mood_app.command("calendar")
def mood_calendar(day: Optional[str] = typer.Argument(None, help="Selected day")) -> None:
    """Show every day that has a mood."""
    async def _work(factory: ServiceFactory) -> None:
        tracker = await _mood_for(factory, day)
        _print_marks(tracker.calendar_marks(), "Mood Calendar", "yellow")

    _run(_work)


@mood_app.command("report")
def mood_report() -> None:
    """Export all mood entries as a PDF report."""
    async def _work(factory: ServiceFactory) -> None:
        service = factory.create_export_service(ConsoleShareSink(console))
        _print_export(await service.export_mood())

    _run(_work)


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------

@app.callback()
def _callback(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output."),
) -> None:
    """Personal health log CLI"""
    level = "DEBUG" if verbose else Settings.from_env().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
