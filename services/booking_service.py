"""
services/booking_service.py
---------------------------
Seat reservation on journeys.

A reservation is a single transaction:

    1. lock the journey row (SELECT ... FOR UPDATE)
    2. refuse if nbooked >= capacity
    3. resolve staff and beneficiary display names
    4. insert the booking
    5. increment nbooked
    6. commit

The row lock is what keeps nbooked <= capacity when several callers race
for the last seat: the second caller waits at step 1 and then reads the
count the first one committed. Any failure rolls the whole thing back.
"""

from datetime import datetime
from typing import Union

from db.connection import Database
from exceptions import CapacityExceededError, DataIntegrityError, NotFoundError, ValidationError
from models.booking import BookingRecord
from models.journey import JourneyDetails
from repositories.booking_repo import BookingRepository
from repositories.journey_repo import JourneyRepository
from repositories.member_repo import MemberRepository
from utils.logger import get_logger
from utils.validators import is_identifier, parse_timestamp, require_identifier, require_text

logger = get_logger(__name__)


class BookingService:
    """Capacity-safe reservation of journey seats."""

    def __init__(self, db: Database):
        self.db = db
        self.journey_repo = JourneyRepository(db)
        self.booking_repo = BookingRepository(db)
        self.member_repo = MemberRepository(db)

    def reserve_seat(self, staff_id: str, beneficiary: str, vehicle_code: str,
                     departure_time: Union[datetime, str]) -> BookingRecord:
        """
        Book one seat for ``beneficiary`` on the journey of ``vehicle_code``
        departing at ``departure_time``.

        Args:
            staff_id: Member id of the staff member making the booking.
            beneficiary: Member id, or ``"family, given"`` display name.
            vehicle_code: Vehicle serving the journey.
            departure_time: Exact departure time (datetime or ISO string).

        Returns:
            The committed BookingRecord.

        Raises:
            ValidationError: Malformed input or ambiguous beneficiary name.
            NotFoundError: Unknown journey, staff member or beneficiary.
            CapacityExceededError: No seat left.
            QueryError / ConnectivityError: Store failures.
        """
        require_identifier(staff_id, "staff id")
        require_identifier(vehicle_code, "vehicle code")
        beneficiary = require_text(beneficiary, "beneficiary")
        departs = parse_timestamp(departure_time, "departure time")

        with self.db.transaction("Making booking") as cur:
            journey = self._lock_journey(cur, vehicle_code, departs)
            if journey.nbooked >= journey.capacity:
                logger.warning(
                    f"Journey #{journey.journey_id} full ({journey.nbooked}/{journey.capacity}), "
                    f"booking by {staff_id} refused"
                )
                raise CapacityExceededError(journey.journey_id, journey.capacity)

            bookedby_name = self.member_repo.find_display_name(cur, staff_id)
            if bookedby_name is None:
                raise NotFoundError(f"No member with id {staff_id!r}")
            booked_for, bookedfor_name = self._resolve_beneficiary(cur, beneficiary)

            when_booked = self.booking_repo.add(cur, booked_for, staff_id, journey.journey_id)
            nbooked = self.journey_repo.increment_booked(cur, journey.journey_id)

        logger.info(
            f"Booked journey #{journey.journey_id} for {booked_for} by {staff_id} "
            f"({nbooked}/{journey.capacity} seats taken)"
        )
        return BookingRecord(
            bookedby_name=bookedby_name,
            bookedfor_name=bookedfor_name,
            when_booked=when_booked,
            journey_id=journey.journey_id,
            vehicle_code=journey.vehicle_code,
            origin_name=journey.origin_name,
            dest_name=journey.dest_name,
            when_departs=journey.when_departs,
            when_arrives=journey.when_arrives,
        )

    # ── HELPERS ───────────────────────────────────────────

    def _lock_journey(self, cur, vehicle_code: str, departs: datetime) -> JourneyDetails:
        journeys = self.journey_repo.lock_by_departure(cur, vehicle_code, departs)
        if not journeys:
            raise NotFoundError(f"No journey for vehicle {vehicle_code} departing {departs}")
        if len(journeys) > 1:
            raise DataIntegrityError(
                f"{len(journeys)} journeys for vehicle {vehicle_code} departing {departs}"
            )
        return journeys[0]

    def _resolve_beneficiary(self, cur, beneficiary: str) -> tuple[str, str]:
        """
        Resolve a beneficiary reference to ``(member_id, display_name)``.

        A member id is tried first; anything else is matched against the
        ``"family, given"`` display form and must match exactly one member.
        """
        if is_identifier(beneficiary):
            name = self.member_repo.find_display_name(cur, beneficiary)
            if name is not None:
                return beneficiary, name

        member_ids = self.member_repo.find_ids_by_display_name(cur, beneficiary)
        if not member_ids:
            raise NotFoundError(f"No member matching {beneficiary!r}")
        if len(member_ids) > 1:
            raise ValidationError(
                f"{beneficiary!r} matches {len(member_ids)} members; use a member id"
            )
        return member_ids[0], beneficiary
