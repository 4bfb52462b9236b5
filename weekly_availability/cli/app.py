"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain import day_rules
from ..domain.exceptions import ScheduleError
from ..domain.locale import PendulumLocaleProvider
from ..domain.models import DayBucket, TimeOfDay, TimeRange, WeeklySchedule
from ..domain.policy import default_schedule
from ..domain.slot_generator import TimeSlotGenerator
from ..adapters.file_schedule_client import FileScheduleClient
from ..adapters.http_schedule_client import HttpScheduleClient
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="weekly-availability",
    help="View and edit your recurring weekly availability",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
LocalOption = Annotated[bool, typer.Option("--local", help="Use the local JSON store instead of the backend.")]
DayArgument = Annotated[str, typer.Argument(help="Day index (0-6) or weekday name, e.g. 'monday'.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Weekly availability: one list of time ranges per weekday.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _fail(error) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Explicit config paths must exist; a missing default config means defaults."""
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)
    return AppConfig()


def _build_service(config: AppConfig, local: bool) -> AvailabilityService:
    if local:
        client = FileScheduleClient(config.store_file)
    else:
        client = HttpScheduleClient(
            base_url=config.api_url,
            access_token=config.access_token,
            timeout=config.timeout_seconds
        )

    generator = TimeSlotGenerator(
        increment_minutes=config.increment_minutes,
        locale_provider=PendulumLocaleProvider(week_start=config.week_start)
    )
    return AvailabilityService(client=client, generator=generator, locale=config.locale)


def _resolve_day(day: str, weekday_names: List[str]) -> int:
    """
    Resolve a day argument to a bucket index.

    Accepts an index (0-6), a full weekday name or an unambiguous prefix.
    """
    value = day.strip().lower()

    if value.isdigit():
        index = int(value)
        if index in range(len(weekday_names)):
            return index
        raise ValueError(f"Day index must be between 0 and {len(weekday_names) - 1}, got {day}")

    names = [name.lower() for name in weekday_names]
    if value in names:
        return names.index(value)

    matches = [index for index, name in enumerate(names) if value and name.startswith(value)]
    if len(matches) == 1:
        return matches[0]

    raise ValueError(f"Unknown day '{day}'. Use 0-6 or one of: {', '.join(weekday_names)}")


def _parse_range(text: str) -> TimeRange:
    """Parse 'HH:mm[:ss]-HH:mm[:ss]' into a well-formed range."""
    start_text, separator, end_text = text.partition("-")
    if not separator:
        raise ValueError(f"Invalid range '{text}', expected START-END, e.g. 09:00-12:00")

    time_range = TimeRange(
        start=TimeOfDay.parse(start_text.strip(), strict=False),
        end=TimeOfDay.parse(end_text.strip(), strict=False)
    )
    if not time_range.is_well_formed():
        raise ValueError(f"Invalid range '{text}': start must be before end")
    return time_range


def _format_day(bucket: DayBucket, service: AvailabilityService) -> str:
    if not bucket.is_enabled:
        return "[dim]No availability[/dim]"

    provider = service.generator.locale_provider
    return ", ".join(
        f"{provider.time_label(r.start, service.locale)} - {provider.time_label(r.end, service.locale)}"
        for r in bucket
    )


def _print_schedule(schedule: WeeklySchedule, service: AvailabilityService) -> None:
    table = Table(
        title="Weekly availability",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Day", style="bold yellow")
    table.add_column("Availability")

    for index, (weekday, bucket) in enumerate(zip(service.weekday_names(), schedule)):
        table.add_row(str(index), weekday.capitalize(), _format_day(bucket, service))

    console.print()
    console.print(table)
    console.print()


def _edit_day(config_file: Optional[Path], local: bool, day: str, edit) -> None:
    """Load, apply ``edit`` to one day, save and show the result."""
    try:
        config = _load_config(config_file)
        service = _build_service(config, local)

        index = _resolve_day(day, service.weekday_names())
        schedule = service.load_schedule()
        changed = edit(schedule[index])

        if changed is False:
            _print_schedule(schedule, service)
            return

        service.save_schedule(schedule)
        console.print(f"[green]✓ {service.weekday_names()[index].capitalize()} saved[/green]")
        _print_schedule(schedule, service)

    except (ScheduleError, ValueError, IndexError, FileNotFoundError) as e:
        _fail(e)


@app.command()
def show(
    config_file: ConfigOption = None,
    local: LocalOption = False,
):
    """
    Show the stored schedule (or the default week if none is stored).
    """
    try:
        config = _load_config(config_file)
        service = _build_service(config, local)
        schedule = service.load_schedule()

        _print_schedule(schedule, service)

        for issue in schedule.find_issues():
            console.print(f"[yellow]⚠ {issue}[/yellow]")

    except (ScheduleError, ValueError, FileNotFoundError) as e:
        _fail(e)


@app.command()
def enable(
    day: DayArgument,
    config_file: ConfigOption = None,
    local: LocalOption = False,
):
    """
    Make a day available (09:00-17:00 if it had no ranges).
    """
    _edit_day(config_file, local, day, day_rules.enable_day)


@app.command()
def disable(
    day: DayArgument,
    config_file: ConfigOption = None,
    local: LocalOption = False,
):
    """
    Remove all availability from a day.
    """
    _edit_day(config_file, local, day, day_rules.disable_day)


@app.command()
def add(
    day: DayArgument,
    config_file: ConfigOption = None,
    local: LocalOption = False,
):
    """
    Add a one-hour range after the day's last range.
    """
    def edit(bucket: DayBucket):
        if not day_rules.can_append(bucket):
            console.print("[yellow]⚠ Nothing to add: the day is empty or the next hour runs past midnight.[/yellow]")
            return False
        day_rules.append_range(bucket)
        return True

    _edit_day(config_file, local, day, edit)


@app.command()
def remove(
    day: DayArgument,
    index: Annotated[int, typer.Argument(help="Position of the range within the day (0-based).")],
    config_file: ConfigOption = None,
    local: LocalOption = False,
):
    """
    Remove one range from a day.
    """
    _edit_day(config_file, local, day, lambda bucket: day_rules.remove_range_at(bucket, index))


@app.command(name="set")
def set_ranges(
    day: DayArgument,
    ranges: Annotated[List[str], typer.Argument(help="Ranges as START-END, e.g. 09:00-12:00 13:00-17:00.")],
    config_file: ConfigOption = None,
    local: LocalOption = False,
):
    """
    Replace all ranges of a day.

    Examples:

        weekly-availability set monday 09:00-12:00 13:00-17:00
    """
    try:
        new_ranges = [_parse_range(text) for text in ranges]
    except ValueError as e:
        _fail(e)

    for previous, current in zip(new_ranges, new_ranges[1:]):
        if current.start < previous.end:
            _fail(f"{current} starts before {previous} ends")

    _edit_day(config_file, local, day, lambda bucket: day_rules.replace_ranges(bucket, new_ranges))


@app.command()
def options(
    after: Annotated[Optional[str], typer.Option("--after", help="Only times after HH:mm:ss.")] = None,
    before: Annotated[Optional[str], typer.Option("--before", help="Only times before HH:mm:ss.")] = None,
    config_file: ConfigOption = None,
):
    """
    List the selectable times on the configured increment.
    """
    try:
        config = _load_config(config_file)
        generator = TimeSlotGenerator(
            increment_minutes=config.increment_minutes,
            locale_provider=PendulumLocaleProvider(week_start=config.week_start)
        )
        choices = generator.options(
            after=TimeOfDay.parse(after) if after else None,
            before=TimeOfDay.parse(before) if before else None,
            locale=config.locale
        )
    except (ScheduleError, ValueError, FileNotFoundError) as e:
        _fail(e)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Value", style="dim")
    table.add_column("Label", style="bold")
    for choice in choices:
        table.add_row(choice.value, choice.label)

    console.print(table)
    console.print(f"{len(choices)} option(s)")


@app.command()
def reset(
    config_file: ConfigOption = None,
    local: LocalOption = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
):
    """
    Overwrite the stored schedule with the default week.
    """
    if not yes:
        typer.confirm("Replace the stored schedule with weekdays 09:00-17:00?", abort=True)

    try:
        config = _load_config(config_file)
        service = _build_service(config, local)
        schedule = default_schedule()
        service.save_schedule(schedule)
        console.print("[green]✓ Default schedule saved[/green]")
        _print_schedule(schedule, service)

    except (ScheduleError, ValueError, FileNotFoundError) as e:
        _fail(e)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]weekly-availability[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
