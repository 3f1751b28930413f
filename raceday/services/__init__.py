"""
Service facades for raceday.

Thin translation layer between request/response messages and the
repositories.
"""

from raceday.services.racing import RacingService
from raceday.services.sports import SportsService

__all__ = [
    "RacingService",
    "SportsService",
]
