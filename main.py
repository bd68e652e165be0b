"""
main.py
-------
Composition root for the Olympics backend.

Responsibilities:
    - Build the Database from configuration.
    - Wire the services into an OlympicsBackend for the GUI.
    - When run directly, check connectivity and print the sports list.
"""

from datetime import date, datetime
from typing import Optional, Union

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from db.connection import Database
from models.booking import BookingRecord, BookingSummary
from models.event import EventRecord, ResultRecord, SportRecord
from models.journey import JourneyDetails, JourneySummary
from models.member import LoginRecord, ProfileRecord
from security.auth import PasswordChecker, check_password
from services.aggregation_service import AggregationService
from services.auth_service import AuthService
from services.booking_service import BookingService
from services.query_service import QueryService
from utils.logger import get_logger

logger = get_logger(__name__)


class OlympicsBackend:
    """
    Every operation the GUI may call, backed by one shared Database.

    Records are returned typed; call ``to_dict()`` on them for the
    field-name mapping the GUI displays.
    """

    def __init__(self, db: Database, password_checker: PasswordChecker = check_password):
        self.db = db
        self.auth = AuthService(db, password_checker)
        self.aggregation = AggregationService(db)
        self.bookings = BookingService(db)
        self.queries = QueryService(db)

    # ── Members ───────────────────────────────────────────

    def check_login(self, member_id: str, password: str) -> Optional[LoginRecord]:
        return self.auth.check_login(member_id, password)

    def get_member_profile(self, member_id: str) -> Optional[ProfileRecord]:
        return self.aggregation.get_member_profile(member_id)

    # ── Events ────────────────────────────────────────────

    def get_sports(self) -> list[SportRecord]:
        return self.queries.get_sports()

    def get_events_of_sport(self, sport_id: int) -> list[EventRecord]:
        return self.queries.get_events_of_sport(sport_id)

    def get_event_results(self, event_id: int) -> list[ResultRecord]:
        return self.aggregation.get_event_results(event_id)

    # ── Journeys & bookings ───────────────────────────────

    def find_journeys(self, origin: str, destination: str,
                      journey_date: Union[date, datetime, str]) -> list[JourneySummary]:
        return self.queries.find_journeys(origin, destination, journey_date)

    def get_journey_details(self, journey_id: int) -> Optional[JourneyDetails]:
        return self.queries.get_journey_details(journey_id)

    def reserve_seat(self, staff_id: str, beneficiary: str, vehicle_code: str,
                     departure_time: Union[datetime, str]) -> BookingRecord:
        return self.bookings.reserve_seat(staff_id, beneficiary, vehicle_code, departure_time)

    def get_booking_details(self, member_id: str, journey_id: int) -> Optional[BookingRecord]:
        return self.queries.get_booking_details(member_id, journey_id)

    def get_member_bookings(self, member_id: str) -> list[BookingSummary]:
        return self.queries.get_member_bookings(member_id)


def create_backend(dsn: str = DATABASE_URL) -> OlympicsBackend:
    """Open a pooled Database for ``dsn`` and return a backend over it."""
    db = Database(dsn, min_conn=DB_POOL_MIN, max_conn=DB_POOL_MAX)
    db.open()
    return OlympicsBackend(db)


def main() -> None:
    """Check the configured database and list its sports."""
    logger.info("Connecting to database...")
    backend = create_backend()
    try:
        for sport in backend.get_sports():
            print(f"{sport.sport_id:>4}  {sport.sport_name} ({sport.discipline})")
    finally:
        backend.db.close()


if __name__ == "__main__":
    main()
