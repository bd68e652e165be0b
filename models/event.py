"""
models/event.py
---------------
Sports, events and event results.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from exceptions import DataIntegrityError


class Medal(Enum):
    """Medal recorded against a participation or a team."""
    NONE = None
    GOLD = "G"
    SILVER = "S"
    BRONZE = "B"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Medal":
        """
        Map a stored medal code to a Medal.

        Raises:
            DataIntegrityError: For any non-NULL code other than G, S or B.
        """
        if code is not None:
            code = code.strip() or None
        try:
            return cls(code)
        except ValueError:
            raise DataIntegrityError(f"Unknown medal code {code!r}") from None

    @property
    def label(self) -> Optional[str]:
        return None if self is Medal.NONE else self.name.capitalize()


@dataclass
class SportRecord:
    sport_id: int
    sport_name: str
    discipline: str

    def to_dict(self) -> dict:
        return {
            "sport_id": self.sport_id,
            "sport_name": self.sport_name,
            "discipline": self.discipline,
        }


@dataclass
class EventRecord:
    """One event of a sport, with the name of its venue."""
    event_id: int
    sport_id: int
    event_name: str
    event_gender: str
    sport_venue: str
    event_start: datetime

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "sport_id": self.sport_id,
            "event_name": self.event_name,
            "event_gender": self.event_gender,
            "sport_venue": self.sport_venue,
            "event_start": self.event_start,
        }


@dataclass
class ResultRecord:
    """
    A single line of an event's results.

    Attributes:
        participant: Team name for team events, ``"family, given"`` otherwise.
        country_name: Country the participant competed for.
        medal: Medal won, ``Medal.NONE`` when none.
        is_team: Whether the participant is a team.
    """
    participant: str
    country_name: str
    medal: Medal
    is_team: bool = False

    def to_dict(self) -> dict:
        return {
            "participant": self.participant,
            "country_name": self.country_name,
            "medal": self.medal.label,
        }
