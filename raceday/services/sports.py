"""
Sports service facade.
"""

from __future__ import annotations

from raceday.domain.models import ListEventsRequest, ListEventsResponse
from raceday.repositories.events import EventsRepo
from raceday.utils.logging import get_logger

log = get_logger(__name__)


class SportsService:
    def __init__(self, repo: EventsRepo) -> None:
        self.repo = repo

    def list_events(self, request: ListEventsRequest) -> ListEventsResponse:
        events = self.repo.list(request.filter, request.order)
        log.info("Events listed", extra={"rows": len(events)})
        return ListEventsResponse(events=events)


__all__ = ["SportsService"]
