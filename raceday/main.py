from __future__ import annotations

import sys
from typing import List, Optional

import typer

from raceday.config import get_settings
from raceday.domain.errors import RacedayError
from raceday.domain.models import (
    EventFilter,
    GetRaceRequest,
    ListEventsRequest,
    ListRacesRequest,
    OrderParam,
    RaceFilter,
)
from raceday.infrastructure.db_factory import get_shared_connection
from raceday.reporter import print_events, print_races
from raceday.repositories.events import EventsRepo
from raceday.repositories.races import RacesRepo
from raceday.services.racing import RacingService
from raceday.services.sports import SportsService
from raceday.utils.logging import configure_logging

app = typer.Typer(help="Query races and sports events.")


def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)


def _racing_service() -> RacingService:
    repo = RacesRepo(get_shared_connection())
    repo.init()
    return RacingService(repo)


def _sports_service() -> SportsService:
    repo = EventsRepo(get_shared_connection())
    repo.init()
    return SportsService(repo)


def _order(order_by: Optional[str], direction: Optional[str]) -> Optional[OrderParam]:
    if order_by is None and direction is None:
        return None
    return OrderParam(field=order_by, direction=direction)


ORDER_BY_HELP = "Column to sort by (unknown columns disable sorting)."
DIRECTION_HELP = "Sort direction, ASC or DESC."


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_path} | env={settings.app_env} log_level={settings.log_level} | "
        f"seed_rows={settings.seed_rows} seed={settings.seed_random_seed}"
    )


@app.command()
def seed() -> None:
    """
    Create and seed the races and sport_events tables (no-op if already seeded).
    """
    _setup()
    _racing_service()
    _sports_service()
    typer.echo(f"Store ready at {get_settings().db_path}.")


@app.command()
def races(
    meeting_id: Optional[List[int]] = typer.Option(
        None, "--meeting-id", "-m", help="Only races in these meetings (repeatable)."
    ),
    race_id: Optional[List[int]] = typer.Option(
        None, "--id", help="Only races with these ids (repeatable)."
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name contains this text."),
    visible: Optional[bool] = typer.Option(
        None, "--visible/--hidden", help="Only visible or only hidden races."
    ),
    order_by: Optional[str] = typer.Option(None, "--order-by", "-o", help=ORDER_BY_HELP),
    direction: Optional[str] = typer.Option(None, "--direction", "-d", help=DIRECTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """
    List races.
    """
    _setup()
    request = ListRacesRequest(
        filter=RaceFilter(
            ids=race_id or [], meeting_ids=meeting_id or [], name=name, visible=visible
        ),
        order=_order(order_by, direction),
    )
    response = _racing_service().list_races(request)
    if as_json:
        typer.echo(response.model_dump_json(indent=2))
    else:
        print_races(response.races)


@app.command()
def race(
    race_id: int = typer.Argument(..., help="Race id."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """
    Show a single race.
    """
    _setup()
    try:
        found = _racing_service().get_race(GetRaceRequest(id=race_id))
    except RacedayError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    if as_json:
        typer.echo(found.model_dump_json(indent=2))
    else:
        print_races([found])


@app.command()
def events(
    event_id: Optional[List[int]] = typer.Option(
        None, "--id", help="Only events with these ids (repeatable)."
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name contains this text."),
    sport_type: Optional[str] = typer.Option(None, "--type", "-t", help="Exact sport type."),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Exact location."),
    visible: Optional[bool] = typer.Option(
        None, "--visible/--hidden", help="Only visible or only hidden events."
    ),
    order_by: Optional[str] = typer.Option(None, "--order-by", "-o", help=ORDER_BY_HELP),
    direction: Optional[str] = typer.Option(None, "--direction", "-d", help=DIRECTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """
    List sports events.
    """
    _setup()
    request = ListEventsRequest(
        filter=EventFilter(
            ids=event_id or [],
            name=name,
            type=sport_type,
            location=location,
            visible=visible,
        ),
        order=_order(order_by, direction),
    )
    response = _sports_service().list_events(request)
    if as_json:
        typer.echo(response.model_dump_json(indent=2))
    else:
        print_events(response.events)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
