"""
services/aggregation_service.py
-------------------------------
Cross-table facts derived from the normalized store: member profiles with
medal tallies, and the result sheet of an event.
"""

from typing import Iterable, Optional

from db.connection import Database
from models.event import Medal, ResultRecord
from models.member import MedalTally, MemberType, ProfileRecord
from repositories.event_repo import EventRepository
from repositories.member_repo import MemberRepository
from utils.validators import require_identifier, require_key


class AggregationService:
    """
    Builds derived records.

    Medal tallies add individual and team medals independently per colour.
    Event results are either all team lines or all individual lines,
    depending on whether any team is recorded for the event.
    """

    def __init__(self, db: Database):
        self.member_repo = MemberRepository(db)
        self.event_repo = EventRepository(db)

    # ── Members ───────────────────────────────────────────

    def get_member_profile(self, member_id: str) -> Optional[ProfileRecord]:
        """
        Full profile of a member.

        Returns:
            ProfileRecord (with medals only for athletes) or None if the
            member does not exist.

        Raises:
            ValidationError: If ``member_id`` is malformed.
            DataIntegrityError: If a stored medal code is unknown.
        """
        require_identifier(member_id, "member id")
        profile = self.member_repo.get_profile(member_id)
        if profile is None:
            return None

        if profile.member_type is MemberType.ATHLETE:
            individual = self.tally_medals(self.member_repo.count_individual_medals(member_id))
            team = self.tally_medals(self.member_repo.count_team_medals(member_id))
            profile.medals = individual + team
        return profile

    @staticmethod
    def tally_medals(counts: Iterable[tuple[Optional[str], int]]) -> MedalTally:
        """
        Fold ``(medal_code, count)`` pairs into a MedalTally.

        Raises:
            DataIntegrityError: On an unknown medal code.
        """
        tally = MedalTally()
        for code, count in counts:
            medal = Medal.from_code(code)
            if medal is Medal.GOLD:
                tally.gold += count
            elif medal is Medal.SILVER:
                tally.silver += count
            elif medal is Medal.BRONZE:
                tally.bronze += count
        return tally

    # ── Events ────────────────────────────────────────────

    def get_event_results(self, event_id: int) -> list[ResultRecord]:
        """
        Results of an event ordered by participant name.

        Returns:
            One ResultRecord per team for team events, one per athlete
            otherwise; empty if the event has no results or does not exist.

        Raises:
            ValidationError: If ``event_id`` is malformed.
            DataIntegrityError: If a stored medal code is unknown.
        """
        event_id = require_key(event_id, "event id")
        is_team = self.event_repo.is_team_event(event_id)
        if is_team:
            rows = self.event_repo.list_team_results(event_id)
        else:
            rows = self.event_repo.list_individual_results(event_id)

        results = [
            ResultRecord(
                participant=row["participant"],
                country_name=row["country_name"],
                medal=Medal.from_code(row["medal"]),
                is_team=is_team,
            )
            for row in rows
        ]
        results.sort(key=lambda r: r.participant)
        return results
