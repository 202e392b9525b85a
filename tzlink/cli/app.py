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
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig
from ..domain.exceptions import TzLinkError
from ..domain.models import Region
from ..services.scheduling import SchedulingService

app = typer.Typer(
    name="tzlink",
    help="Parse meeting times and check business hours across timezones",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./tzlink.yaml")] = None,
    timezone: Annotated[Optional[str], typer.Option("--tz", help="Timezone to read and show times in (IANA name).")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    tzlink - scheduling intelligence for shareable timezone links.
    """
    _configure_logging(verbose)
    ctx.obj = {"config_file": config_file, "timezone": timezone}


def _build_service(ctx: typer.Context) -> SchedulingService:
    """Load configuration and build the service, exiting on bad settings."""
    options = ctx.obj or {}
    try:
        config = AppConfig.load_or_default(options.get("config_file"))
        if options.get("timezone"):
            config = AppConfig.model_validate({**config.model_dump(), "timezone": options["timezone"]})
        return SchedulingService.from_config(config)
    except (TzLinkError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


def _resolve_when(service: SchedulingService, when: Optional[str], now: DateTime) -> DateTime:
    """
    Turn a WHEN argument into an instant.

    Accepts an ISO-8601 timestamp or a natural-language phrase; None means now.
    ISO is tried first so an offset like "+00:00" is not read as a bare time.
    """
    if not when:
        return now

    try:
        value = pendulum.parse(when, tz=service.timezone)
    except ValueError as exc:
        logger.debug("'%s' is not an ISO-8601 timestamp: %s", when, exc)
        value = None

    if isinstance(value, DateTime):
        return value

    value = service.parse_natural_language(when, now)
    if value is None:
        console.print(
            f"[bold red]Error:[/bold red] Could not understand '{when}'. "
            "Try e.g. 'tomorrow 2 pm', 'next monday 10:30 am' or '2024-03-12T14:00'."
        )
        raise typer.Exit(1)

    return value


def _select_regions(service: SchedulingService, names: Optional[List[str]]) -> Optional[List[Region]]:
    """Map --region names onto configured regions; None keeps the defaults."""
    if not names:
        return None

    by_name = {region.name.lower(): region for region in service.regions}
    unknown = [name for name in names if name.lower() not in by_name]
    if unknown:
        console.print(
            f"[bold red]Error:[/bold red] Unknown region(s): {', '.join(unknown)}. "
            f"Configured: {', '.join(region.name for region in service.regions)}"
        )
        raise typer.Exit(1)

    return [by_name[name.lower()] for name in names]


@app.command()
def parse(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Phrase such as 'tomorrow 2 pm' or 'next friday'.")],
):
    """
    Parse a natural-language time phrase.

    Examples:

        tzlink parse "tomorrow 2 pm"
        tzlink --tz Europe/London parse "next monday 9:30 am"
    """
    service = _build_service(ctx)
    now = pendulum.now(service.timezone)

    result = service.parse_natural_language(text, now)
    if result is None:
        console.print(f"[yellow]⚠ Could not understand '{text}'.[/yellow]")
        raise typer.Exit(1)

    local = result.in_timezone(service.timezone)
    console.print(f"[bold green]✓[/bold green] {local.format('dddd, MMM D, YYYY [at] h:mm A zz', locale='en')}")
    console.print(f"  [dim]{result.to_iso8601_string()}[/dim]")


@app.command()
def status(
    ctx: typer.Context,
    when: Annotated[Optional[str], typer.Argument(help="Time to check (phrase or ISO-8601). Defaults to now.")] = None,
    region: Annotated[Optional[List[str]], typer.Option("--region", "-r", help="Limit to configured region(s) by name.")] = None,
):
    """
    Show which regions are inside business hours at a given time.
    """
    service = _build_service(ctx)
    instant = _resolve_when(service, when, pendulum.now(service.timezone))

    try:
        statuses = service.get_business_hours_status(instant, _select_regions(service, region))
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(
        title="Business Hours Impact",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Region", style="bold")
    table.add_column("Local time")
    table.add_column("Business hours")

    for entry in statuses:
        verdict = "[green]✓ Business Hours[/green]" if entry.is_business_hours else "[red]✗ Outside Business Hours[/red]"
        table.add_row(entry.region.name, entry.local_time_label, verdict)

    console.print()
    console.print(table)
    console.print()


@app.command()
def suggest(
    ctx: typer.Context,
    when: Annotated[Optional[str], typer.Argument(help="Centre of the search window. Defaults to now.")] = None,
    region: Annotated[Optional[List[str]], typer.Option("--region", "-r", help="Limit to configured region(s) by name.")] = None,
):
    """
    Suggest meeting times when most regions are in business hours.

    Examples:

        tzlink suggest
        tzlink suggest "tomorrow 9 am" -r "US East Coast" -r Europe
    """
    service = _build_service(ctx)
    base = _resolve_when(service, when, pendulum.now(service.timezone))

    try:
        suggestions = service.get_optimal_meeting_times(base, _select_regions(service, region))
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print()
    if not suggestions:
        console.print(
            "[yellow]⚠ No time in the search window suits more than half of the regions.[/yellow]\n"
            "Try fewer regions or a different base time."
        )
        console.print()
        return

    table = Table(
        title=f"Optimal meeting times ({service.timezone})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("#", justify="right")
    table.add_column("Time", style="bold")
    table.add_column("Offset", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("In business hours", style="dim")

    for idx, suggestion in enumerate(suggestions, 1):
        local = suggestion.instant.in_timezone(service.timezone)
        table.add_row(
            str(idx),
            local.format("ddd, MMM D h:mm A zz", locale="en"),
            f"{suggestion.offset_hours:+d}h",
            f"{suggestion.score:.0%}",
            ", ".join(suggestion.regions_in_hours()),
        )

    console.print(table)
    console.print()


@app.command()
def convert(
    ctx: typer.Context,
    when: Annotated[str, typer.Argument(help="Event time (phrase or ISO-8601), read in the event timezone.")],
    to: Annotated[str, typer.Option("--to", help="Viewer timezone (IANA name).")],
):
    """
    Show an event time for a viewer in another timezone.
    """
    service = _build_service(ctx)
    instant = _resolve_when(service, when, pendulum.now(service.timezone))

    try:
        times = service.describe_event(instant, viewer_timezone=to, event_timezone=service.timezone)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Your time:[/bold]     {times.viewer_label}")
    console.print(f"[bold]Original time:[/bold] {times.event_label}\n")


@app.command()
def clock(ctx: typer.Context):
    """
    Show the current time in the configured world cities.
    """
    service = _build_service(ctx)
    clocks = service.world_clock(pendulum.now("UTC"))

    table = Table(
        title="World Clock",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("City", style="bold yellow")
    table.add_column("Country", style="dim")
    table.add_column("Time", style="bold blue")
    table.add_column("Date", style="dim")

    for entry in clocks:
        table.add_row(entry.city.name, entry.city.country, entry.time_label, entry.date_label)

    console.print()
    console.print(table)
    console.print()


@app.command()
def slug(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Event title.")],
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Event date (phrase or ISO-8601). Defaults to today.")] = None,
):
    """
    Generate the URL slug for an event link.
    """
    service = _build_service(ctx)
    when = _resolve_when(service, date, pendulum.now(service.timezone))
    console.print(service.generate_slug(title, when.in_timezone(service.timezone)))


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]tzlink[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
