from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from raceday.domain.models import Event, Race, Status

_STATUS_STYLES = {Status.OPEN: "bold green", Status.CLOSED: "red"}


def _status_cell(status: Status) -> Text:
    return Text(status.value, style=_STATUS_STYLES[status])


def _start_cell(record: Race | Event) -> str:
    return record.advertised_start_time.to_datetime().strftime("%Y-%m-%d %H:%M:%S UTC")


def print_races(races: Sequence[Race], console: Optional[Console] = None) -> None:
    """
    Render races as a rich table, in the order given.
    """
    console = console or Console()

    if not races:
        console.print("[yellow]No races to display.[/yellow]")
        return

    table = Table(title="Races", box=box.ROUNDED, caption=f"{len(races)} race(s)")
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Meeting", justify="right", style="magenta")
    table.add_column("No.", justify="right", style="blue")
    table.add_column("Name")
    table.add_column("Visible", justify="center")
    table.add_column("Advertised Start", style="green")
    table.add_column("Status", justify="center")

    for race in races:
        table.add_row(
            str(race.id),
            str(race.meeting_id),
            str(race.number),
            race.name,
            "yes" if race.visible else "no",
            _start_cell(race),
            _status_cell(race.status),
        )

    console.print(table)


def print_events(events: Sequence[Event], console: Optional[Console] = None) -> None:
    """
    Render sports events as a rich table, in the order given.
    """
    console = console or Console()

    if not events:
        console.print("[yellow]No events to display.[/yellow]")
        return

    table = Table(title="Sports Events", box=box.ROUNDED, caption=f"{len(events)} event(s)")
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Type", style="magenta")
    table.add_column("Location", style="blue")
    table.add_column("Visible", justify="center")
    table.add_column("Advertised Start", style="green")
    table.add_column("Status", justify="center")

    for event in events:
        table.add_row(
            str(event.id),
            event.name,
            event.type,
            event.location,
            "yes" if event.visible else "no",
            _start_cell(event),
            _status_cell(event.status),
        )

    console.print(table)


__all__ = ["print_events", "print_races"]
