"""
repositories/journey_repo.py
----------------------------
Data access layer for journeys and the vehicles serving them.
All reads and writes of journey.nbooked live here.
"""

from datetime import datetime
from typing import Optional

from db.connection import Database
from db.record_mapper import map_row, to_int, to_str, to_timestamp
from models.journey import JourneyDetails, JourneySummary
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_JOURNEY = """
    SELECT j.journey_id, j.vehicle_code,
           origin.place_name AS origin_name, dest.place_name AS dest_name,
           j.depart_time AS when_departs, j.arrive_time AS when_arrives,
           v.capacity, j.nbooked
    FROM journey j
    JOIN vehicle v ON v.vehicle_code = j.vehicle_code
    JOIN place origin ON origin.place_id = j.from_place
    JOIN place dest ON dest.place_id = j.to_place
"""

_JOURNEY_FIELDS = {
    "journey_id": to_int,
    "vehicle_code": to_str,
    "origin_name": to_str,
    "dest_name": to_str,
    "when_departs": to_timestamp,
    "when_arrives": to_timestamp,
    "capacity": to_int,
    "nbooked": to_int,
}


class JourneyRepository:
    """Repository for journey lookups and the booked-seat counter."""

    def __init__(self, db: Database):
        self.db = db

    # ── READ ──────────────────────────────────────────────

    def find(self, origin: str, destination: str,
             day_start: datetime, day_end: datetime) -> list[JourneySummary]:
        """
        Journeys between two named places departing in ``[day_start, day_end)``.

        Returns:
            JourneySummary list ordered by departure time.
        """
        sql = f"""
            {_SELECT_JOURNEY}
            WHERE origin.place_name = %s AND dest.place_name = %s
              AND j.depart_time >= %s AND j.depart_time < %s
            ORDER BY j.depart_time, j.journey_id;
        """
        with self.db.cursor("Acquiring journey info") as cur:
            cur.execute(sql, (origin, destination, day_start, day_end))
            return [JourneySummary(**map_row(r, _JOURNEY_FIELDS)) for r in cur.fetchall()]

    def get_details(self, journey_id: int) -> Optional[JourneyDetails]:
        sql = f"{_SELECT_JOURNEY} WHERE j.journey_id = %s;"
        with self.db.cursor("Acquiring journey details") as cur:
            cur.execute(sql, (journey_id,))
            row = cur.fetchone()
            return JourneyDetails(**map_row(row, _JOURNEY_FIELDS)) if row else None

    # ── TRANSACTIONAL ─────────────────────────────────────

    @staticmethod
    def lock_by_departure(cur, vehicle_code: str, depart_time: datetime) -> list[JourneyDetails]:
        """
        Select the journey of a vehicle at a departure time and lock its row.

        The lock is held until the surrounding transaction ends, so a
        concurrent caller blocks here and then sees the committed nbooked.
        Only journey rows are locked; vehicles and places stay shared.
        """
        cur.execute(
            f"""
            {_SELECT_JOURNEY}
            WHERE j.vehicle_code = %s AND j.depart_time = %s
            FOR UPDATE OF j;
            """,
            (vehicle_code, depart_time),
        )
        return [JourneyDetails(**map_row(r, _JOURNEY_FIELDS)) for r in cur.fetchall()]

    @staticmethod
    def increment_booked(cur, journey_id: int) -> int:
        """
        Add one to the journey's booked count.

        Returns:
            The new booked count.
        """
        cur.execute(
            "UPDATE journey SET nbooked = nbooked + 1 WHERE journey_id = %s RETURNING nbooked;",
            (journey_id,),
        )
        nbooked = to_int(cur.fetchone()["nbooked"])
        logger.debug(f"Journey {journey_id} booked count now {nbooked}")
        return nbooked
