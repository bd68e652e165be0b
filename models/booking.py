"""
models/booking.py
-----------------
Booking records: the full record returned by a reservation or a details
lookup, and the short summary used in a member's booking history.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class BookingRecord:
    """
    A seat reservation with every display field resolved.

    Attributes:
        bookedby_name: Display name of the staff member who booked.
        bookedfor_name: Display name of the beneficiary.
        when_booked: Commit-time timestamp of the booking.
        journey_id: Journey primary key.
        vehicle_code: Vehicle serving the journey.
        origin_name: Departure place name.
        dest_name: Arrival place name.
        when_departs: Departure time.
        when_arrives: Arrival time.
    """
    bookedby_name: str
    bookedfor_name: str
    when_booked: datetime
    journey_id: int
    vehicle_code: str
    origin_name: str
    dest_name: str
    when_departs: datetime
    when_arrives: datetime

    def to_dict(self) -> dict:
        return {
            "bookedby_name": self.bookedby_name,
            "bookedfor_name": self.bookedfor_name,
            "when_booked": self.when_booked,
            "journey_id": self.journey_id,
            "vehicle": self.vehicle_code,
            "origin_name": self.origin_name,
            "dest_name": self.dest_name,
            "when_departs": self.when_departs,
            "when_arrives": self.when_arrives,
        }


@dataclass
class BookingSummary:
    """One line of a member's booking history."""
    journey_id: int
    vehicle_code: str
    origin_name: str
    dest_name: str
    when_departs: datetime
    when_arrives: datetime

    def to_dict(self) -> dict:
        return {
            "journey_id": self.journey_id,
            "vehicle_code": self.vehicle_code,
            "origin_name": self.origin_name,
            "dest_name": self.dest_name,
            "when_departs": self.when_departs,
            "when_arrives": self.when_arrives,
        }
