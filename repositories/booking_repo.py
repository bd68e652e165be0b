"""
repositories/booking_repo.py
----------------------------
Data access layer for bookings.
Bookings are append-only: rows are inserted by the booking transaction
and never updated or deleted here.
"""

from datetime import datetime
from typing import Optional

from db.connection import Database
from db.record_mapper import map_row, to_int, to_str, to_timestamp
from models.booking import BookingRecord, BookingSummary
from utils.logger import get_logger

logger = get_logger(__name__)

_SUMMARY_FIELDS = {
    "journey_id": to_int,
    "vehicle_code": to_str,
    "origin_name": to_str,
    "dest_name": to_str,
    "when_departs": to_timestamp,
    "when_arrives": to_timestamp,
}

_RECORD_FIELDS = {
    **_SUMMARY_FIELDS,
    "bookedby_name": to_str,
    "bookedfor_name": to_str,
    "when_booked": to_timestamp,
}


class BookingRepository:
    """Repository for the booking table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    @staticmethod
    def add(cur, booked_for: str, booked_by: str, journey_id: int) -> datetime:
        """
        Insert a booking inside the caller's transaction.

        Returns:
            The booking timestamp assigned by the database.
        """
        cur.execute(
            """
            INSERT INTO booking (booked_for, booked_by, when_booked, journey_id)
            VALUES (%s, %s, CURRENT_TIMESTAMP, %s)
            RETURNING when_booked;
            """,
            (booked_for, booked_by, journey_id),
        )
        when_booked = to_timestamp(cur.fetchone()["when_booked"])
        logger.debug(f"Inserted booking for {booked_for} by {booked_by} on journey {journey_id}")
        return when_booked

    # ── READ ──────────────────────────────────────────────

    def list_for_member(self, member_id: str) -> list[BookingSummary]:
        """All bookings made for a member, ordered by departure time."""
        sql = """
            SELECT j.journey_id, j.vehicle_code,
                   origin.place_name AS origin_name, dest.place_name AS dest_name,
                   j.depart_time AS when_departs, j.arrive_time AS when_arrives
            FROM booking b
            JOIN journey j ON j.journey_id = b.journey_id
            JOIN place origin ON origin.place_id = j.from_place
            JOIN place dest ON dest.place_id = j.to_place
            WHERE b.booked_for = %s
            ORDER BY j.depart_time, j.journey_id;
        """
        with self.db.cursor("Acquiring member bookings") as cur:
            cur.execute(sql, (member_id,))
            return [BookingSummary(**map_row(r, _SUMMARY_FIELDS)) for r in cur.fetchall()]

    def get_details(self, member_id: str, journey_id: int) -> Optional[BookingRecord]:
        """Full booking record of a member on a journey, or None."""
        sql = """
            SELECT (bf.family_name || ', ' || bf.given_names) AS bookedfor_name,
                   (bb.family_name || ', ' || bb.given_names) AS bookedby_name,
                   b.when_booked, j.journey_id, j.vehicle_code,
                   origin.place_name AS origin_name, dest.place_name AS dest_name,
                   j.depart_time AS when_departs, j.arrive_time AS when_arrives
            FROM booking b
            JOIN journey j ON j.journey_id = b.journey_id
            JOIN member bf ON bf.member_id = b.booked_for
            JOIN member bb ON bb.member_id = b.booked_by
            JOIN place origin ON origin.place_id = j.from_place
            JOIN place dest ON dest.place_id = j.to_place
            WHERE b.booked_for = %s AND b.journey_id = %s;
        """
        with self.db.cursor("Acquiring booking details") as cur:
            cur.execute(sql, (member_id, journey_id))
            row = cur.fetchone()
            return BookingRecord(**map_row(row, _RECORD_FIELDS)) if row else None
