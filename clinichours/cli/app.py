"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.table import Table

from ..adapters.roster_loader import ExampleRosterSource, RosterFileLoader, StaticRosterSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import ClinicHoursError, RosterLoadError
from ..domain.models import WEEKDAY_ABBREVIATIONS, weekday_index
from ..services.clinic_finder import ClinicFinderService, RosterSourceProtocol

app = typer.Typer(
    name="clinichours",
    help="Find out which clinics are open at a given time",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
RosterOption = Annotated[Optional[Path], typer.Option("--roster", "-r", help="Roster file (JSON or YAML). Overrides the config.")]
ExampleOption = Annotated[bool, typer.Option("--example", help="Use the bundled example clinics.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Clinic opening hours lookup.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the config file, falling back to defaults when no file exists.

    An explicitly requested config file must exist.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)

    return AppConfig()


def _build_roster_source(
    config: AppConfig,
    roster: Optional[Path],
    example: bool
) -> RosterSourceProtocol:
    """
    Pick the roster source: example data, --roster, config roster_file,
    then inline config clinics.
    """
    if example:
        return ExampleRosterSource()
    if roster is not None:
        return RosterFileLoader(roster)
    if config.roster_file is not None:
        return RosterFileLoader(config.roster_file)
    if config.clinics:
        return StaticRosterSource(config.inline_roster())

    raise RosterLoadError(
        "No clinic roster configured. Use --roster, --example, "
        "or set roster_file / clinics in config.yaml."
    )


def _build_service(config_file: Optional[Path], roster: Optional[Path], example: bool):
    config = _load_config(config_file)
    service = ClinicFinderService(roster_source=_build_roster_source(config, roster, example))
    return config, service


def _resolve_query_time(
    *,
    tz: str,
    at: Optional[str],
    weekday: Optional[str],
    hour: Optional[int]
) -> DateTime:
    """
    Resolve the moment to query from the options.

    --at wins and is converted to the clinics' timezone; otherwise
    --weekday/--hour pick a moment in the current week, keeping the
    current time for whichever is not given; otherwise now.
    """
    if at:
        return pendulum.parse(at, tz=tz).in_timezone(tz)

    now = pendulum.now(tz)

    if weekday is None and hour is None:
        return now

    moment = now
    if weekday is not None:
        moment = now.start_of("week").add(days=weekday_index(weekday) - 1).set(
            hour=now.hour, minute=now.minute, second=now.second, microsecond=now.microsecond
        )
    if hour is not None:
        moment = moment.set(hour=hour, minute=0, second=0, microsecond=0)

    return moment


@app.command("open")
def open_now(
    at: Annotated[Optional[str], typer.Option("--at", help="Moment to check, e.g. '2024-11-25 13:00'. Defaults to now.")] = None,
    weekday: Annotated[Optional[str], typer.Option("--weekday", "-w", help="Weekday to check (Mon..Sun). Keeps the current time unless --hour is given.")] = None,
    hour: Annotated[Optional[int], typer.Option("--hour", "-H", min=0, max=23, help="Hour of day to check (0-23).")] = None,
    config_file: ConfigOption = None,
    roster: RosterOption = None,
    example: ExampleOption = False,
):
    """
    List the clinics open at a given moment.

    Examples:

        # Open right now
        clinichours open --roster clinics.json

        # Open on Monday at noon this week
        clinichours open --weekday Mon --hour 12 --example

        # Open at an exact moment
        clinichours open --at "2024-11-25 13:00"
    """
    try:
        config, service = _build_service(config_file, roster, example)

        if weekday is not None and weekday.title() not in WEEKDAY_ABBREVIATIONS:
            console.print(f"[red]Fehler: Unbekannter Wochentag '{weekday}'. Erlaubt: {', '.join(WEEKDAY_ABBREVIATIONS)}[/red]")
            raise typer.Exit(1)

        try:
            query_time = _resolve_query_time(tz=config.timezone, at=at, weekday=weekday, hour=hour)
        except Exception as e:
            console.print(f"[red]Fehler beim Parsen des Zeitpunkts: {e}[/red]")
            raise typer.Exit(1)

        open_clinics = service.open_clinics(query_time)

        console.print(f"\n[bold cyan]{query_time.format('ddd DD.MM.YYYY HH:mm')} ({config.timezone})[/bold cyan]\n")

        if not open_clinics:
            console.print("[yellow]⚠ Keine Klinik geöffnet.[/yellow]\n")
            return

        console.print(f"[bold green]✓ {len(open_clinics)} Klinik(en) geöffnet:[/bold green]\n")
        for name in open_clinics:
            console.print(f"  {name}")
        console.print()

    except (FileNotFoundError, ValueError, ClinicHoursError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_clinics(
    config_file: ConfigOption = None,
    roster: RosterOption = None,
    example: ExampleOption = False,
):
    """
    List all clinics in the roster with their opening hours.
    """
    try:
        _, service = _build_service(config_file, roster, example)
        clinics = service.clinics()
        schedule = service.schedule

        if not clinics:
            console.print("[yellow]Keine Kliniken im Verzeichnis.[/yellow]")
            return

        table = Table(
            title="Kliniken",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name", style="bold yellow")
        table.add_column("Öffnungszeiten", style="dim")
        table.add_column("Zeitfenster")

        for clinic in sorted(clinics, key=lambda c: c.name):
            windows = [
                f"{day} {window}"
                for day in WEEKDAY_ABBREVIATIONS
                for window in schedule.windows_for(day, clinic.name)
            ]
            table.add_row(clinic.name, "\n".join(clinic.opening_hours), "\n".join(windows))

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, ClinicHoursError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def week(
    hour: Annotated[Optional[int], typer.Option("--hour", "-H", min=0, max=23, help="Hour of day to check. Defaults to the config's query_hour.")] = None,
    config_file: ConfigOption = None,
    roster: RosterOption = None,
    example: ExampleOption = False,
):
    """
    Show which clinics are open on each weekday at a given hour.
    """
    try:
        config, service = _build_service(config_file, roster, example)
        query_hour = hour if hour is not None else config.defaults.query_hour

        table = Table(
            title=f"Geöffnet um {query_hour}:00",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Tag", style="bold yellow")
        table.add_column("Kliniken")

        for day in WEEKDAY_ABBREVIATIONS:
            moment = _resolve_query_time(tz=config.timezone, at=None, weekday=day, hour=query_hour)
            open_clinics: List[str] = service.open_clinics(moment)
            table.add_row(day, ", ".join(open_clinics) or "[dim]-[/dim]")

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, ClinicHoursError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]clinichours[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
