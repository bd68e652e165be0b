"""
models/journey.py
-----------------
Journey records as returned by searches and detail lookups.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class JourneySummary:
    """A journey found by origin/destination/date search."""
    journey_id: int
    vehicle_code: str
    origin_name: str
    dest_name: str
    when_departs: datetime
    when_arrives: datetime
    capacity: int
    nbooked: int

    @property
    def available_seats(self) -> int:
        return self.capacity - self.nbooked

    def to_dict(self) -> dict:
        return {
            "journey_id": self.journey_id,
            "vehicle_code": self.vehicle_code,
            "origin_name": self.origin_name,
            "dest_name": self.dest_name,
            "when_departs": self.when_departs,
            "when_arrives": self.when_arrives,
            "available_seats": self.available_seats,
        }


@dataclass
class JourneyDetails(JourneySummary):
    """Full details of one journey: the summary fields plus raw capacity and booked count."""

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["capacity"] = self.capacity
        data["nbooked"] = self.nbooked
        return data
