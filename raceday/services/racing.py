"""
Racing service facade.

Translates request messages into repository filter/order parameters and
wraps results in response messages.
"""

from __future__ import annotations

from raceday.domain.errors import InvalidRequestError
from raceday.domain.models import GetRaceRequest, ListRacesRequest, ListRacesResponse, Race
from raceday.repositories.races import RacesRepo
from raceday.utils.logging import get_logger

log = get_logger(__name__)


class RacingService:
    def __init__(self, repo: RacesRepo) -> None:
        self.repo = repo

    def list_races(self, request: ListRacesRequest) -> ListRacesResponse:
        races = self.repo.list(request.filter, request.order)
        log.info("Races listed", extra={"rows": len(races)})
        return ListRacesResponse(races=races)

    def get_race(self, request: GetRaceRequest) -> Race:
        """
        Fetch a single race.

        Raises
        ------
        InvalidRequestError
            If the requested id is not positive.
        RaceNotFoundError
            If no race has the requested id.
        """
        if request.id <= 0:
            raise InvalidRequestError(f"race id must be positive, got {request.id}")
        return self.repo.get_by_id(request.id)


__all__ = ["RacingService"]
