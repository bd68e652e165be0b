"""
services/query_service.py
-------------------------
Read-only lookups for the GUI: sports, events, journeys and bookings.
Malformed identifiers are rejected; lookups that match nothing return
an empty list or None.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from db.connection import Database
from models.booking import BookingRecord, BookingSummary
from models.event import EventRecord, SportRecord
from models.journey import JourneyDetails, JourneySummary
from repositories.booking_repo import BookingRepository
from repositories.event_repo import EventRepository
from repositories.journey_repo import JourneyRepository
from utils.logger import get_logger
from utils.validators import parse_date, require_identifier, require_key, require_text

logger = get_logger(__name__)


class QueryService:
    """Thin lookups over events, journeys and bookings."""

    def __init__(self, db: Database):
        self.event_repo = EventRepository(db)
        self.journey_repo = JourneyRepository(db)
        self.booking_repo = BookingRepository(db)

    # ── Sports & events ───────────────────────────────────

    def get_sports(self) -> list[SportRecord]:
        return self.event_repo.list_sports()

    def get_events_of_sport(self, sport_id: int) -> list[EventRecord]:
        return self.event_repo.list_events_of_sport(require_key(sport_id, "sport id"))

    # ── Journeys ──────────────────────────────────────────

    def find_journeys(self, origin: str, destination: str,
                      journey_date: Union[date, datetime, str]) -> list[JourneySummary]:
        """
        Journeys from ``origin`` to ``destination`` departing on a given day.

        Args:
            origin: Place name of departure.
            destination: Place name of arrival.
            journey_date: Calendar day (date, datetime or ISO string).

        Returns:
            Matching journeys ordered by departure time.
        """
        origin = require_text(origin, "origin")
        destination = require_text(destination, "destination")
        day = parse_date(journey_date, "journey date")
        day_start = datetime.combine(day, time.min)
        journeys = self.journey_repo.find(origin, destination, day_start, day_start + timedelta(days=1))
        logger.debug(f"{len(journeys)} journeys {origin} -> {destination} on {day}")
        return journeys

    def get_journey_details(self, journey_id: int) -> Optional[JourneyDetails]:
        return self.journey_repo.get_details(require_key(journey_id, "journey id"))

    # ── Bookings ──────────────────────────────────────────

    def get_member_bookings(self, member_id: str) -> list[BookingSummary]:
        return self.booking_repo.list_for_member(require_identifier(member_id, "member id"))

    def get_booking_details(self, member_id: str, journey_id: int) -> Optional[BookingRecord]:
        """Booking of ``member_id`` on ``journey_id``, or None if there is none."""
        member_id = require_identifier(member_id, "member id")
        journey_id = require_key(journey_id, "journey id")
        return self.booking_repo.get_details(member_id, journey_id)
