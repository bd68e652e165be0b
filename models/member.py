"""
models/member.py
----------------
Member records: login details and the full profile with medal tallies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MemberType(str, Enum):
    """Role of a member, derived from the athlete/official tables."""
    ATHLETE = "athlete"
    OFFICIAL = "official"
    STAFF = "staff"

    @classmethod
    def derive(cls, is_athlete: bool, is_official: bool) -> "MemberType":
        """Athlete wins over official; anyone else is staff."""
        if is_athlete:
            return cls.ATHLETE
        if is_official:
            return cls.OFFICIAL
        return cls.STAFF


def display_name(family_name: str, given_names: str) -> str:
    """The ``"family name, given names"`` form used for people everywhere."""
    return f"{family_name}, {given_names}"


@dataclass
class LoginRecord:
    """
    Basic details of an authenticated member.

    Attributes:
        member_id: Member identifier.
        title: Honorific (Mr, Ms, Dr...), may be NULL in the store.
        first_name: Given names.
        family_name: Family name.
        country_name: Full name of the member's country.
        residence: Name of the accommodation place, None if unassigned.
        member_type: Derived role.
    """
    member_id: str
    title: Optional[str]
    first_name: str
    family_name: str
    country_name: str
    residence: Optional[str]
    member_type: MemberType

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "title": self.title,
            "first_name": self.first_name,
            "family_name": self.family_name,
            "country_name": self.country_name,
            "residence": self.residence,
            "member_type": self.member_type.value,
        }


@dataclass
class MedalTally:
    """Per-colour medal counts of one athlete."""
    gold: int = 0
    silver: int = 0
    bronze: int = 0

    def __add__(self, other: "MedalTally") -> "MedalTally":
        return MedalTally(
            gold=self.gold + other.gold,
            silver=self.silver + other.silver,
            bronze=self.bronze + other.bronze,
        )


@dataclass
class ProfileRecord(LoginRecord):
    """
    Login details plus booking count and, for athletes only, medal tallies.

    ``medals`` is None for officials and staff so that "not an athlete"
    stays distinguishable from "athlete without medals".
    """
    num_bookings: int = 0
    medals: Optional[MedalTally] = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["num_bookings"] = self.num_bookings
        if self.medals is not None:
            data["num_gold"] = self.medals.gold
            data["num_silver"] = self.medals.silver
            data["num_bronze"] = self.medals.bronze
        return data
