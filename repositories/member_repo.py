"""
repositories/member_repo.py
---------------------------
Data access layer for members, their roles and their medal facts.
"""

from typing import Optional

from db.connection import Database
from db.record_mapper import map_row, nullable, to_int, to_str
from models.member import LoginRecord, MemberType, ProfileRecord, display_name

_BASE_COLUMNS = """
    m.member_id, m.title, m.given_names, m.family_name,
    c.country_name, p.place_name AS residence,
    EXISTS (SELECT 1 FROM athlete a WHERE a.member_id = m.member_id) AS is_athlete,
    EXISTS (SELECT 1 FROM official o WHERE o.member_id = m.member_id) AS is_official
"""

_BASE_JOINS = """
    FROM member m
    JOIN country c ON c.country_code = m.country_code
    LEFT JOIN place p ON p.place_id = m.accommodation
"""

_BASE_FIELDS = {
    "member_id": to_str,
    "title": nullable(to_str),
    "given_names": to_str,
    "family_name": to_str,
    "country_name": to_str,
    "residence": nullable(to_str),
    "is_athlete": bool,
    "is_official": bool,
}


def _base_kwargs(values: dict) -> dict:
    return {
        "member_id": values["member_id"],
        "title": values["title"],
        "first_name": values["given_names"],
        "family_name": values["family_name"],
        "country_name": values["country_name"],
        "residence": values["residence"],
        "member_type": MemberType.derive(values["is_athlete"], values["is_official"]),
    }


class MemberRepository:
    """Repository for read access to the member table and its role tables."""

    def __init__(self, db: Database):
        self.db = db

    # ── READ ──────────────────────────────────────────────

    def get_credentials(self, member_id: str) -> Optional[tuple[LoginRecord, Optional[str]]]:
        """
        Fetch a member's login details together with the stored credential.

        Returns:
            ``(LoginRecord, stored_password)`` or None if no such member.
        """
        sql = f"SELECT {_BASE_COLUMNS}, m.pass_word {_BASE_JOINS} WHERE m.member_id = %s;"
        with self.db.cursor("Checking login details") as cur:
            cur.execute(sql, (member_id,))
            row = cur.fetchone()
        if row is None:
            return None
        values = map_row(row, {**_BASE_FIELDS, "pass_word": nullable(str)})
        return LoginRecord(**_base_kwargs(values)), values["pass_word"]

    def get_profile(self, member_id: str) -> Optional[ProfileRecord]:
        """
        Fetch a member's profile with the number of bookings made for them.
        Medal tallies are left unset; they are aggregated separately.
        """
        sql = f"""
            SELECT {_BASE_COLUMNS},
                   (SELECT COUNT(*) FROM booking b WHERE b.booked_for = m.member_id) AS num_bookings
            {_BASE_JOINS}
            WHERE m.member_id = %s;
        """
        with self.db.cursor("Acquiring member details") as cur:
            cur.execute(sql, (member_id,))
            row = cur.fetchone()
        if row is None:
            return None
        values = map_row(row, {**_BASE_FIELDS, "num_bookings": to_int})
        return ProfileRecord(**_base_kwargs(values), num_bookings=values["num_bookings"])

    def count_individual_medals(self, athlete_id: str) -> list[tuple[str, int]]:
        """Medal code -> count over the athlete's individual participations."""
        sql = """
            SELECT medal, COUNT(*) AS total
            FROM participates
            WHERE athlete_id = %s AND medal IS NOT NULL
            GROUP BY medal;
        """
        with self.db.cursor("Counting individual medals") as cur:
            cur.execute(sql, (athlete_id,))
            return [(r["medal"], int(r["total"])) for r in cur.fetchall()]

    def count_team_medals(self, athlete_id: str) -> list[tuple[str, int]]:
        """Medal code -> count over the teams the athlete was a member of."""
        sql = """
            SELECT t.medal, COUNT(*) AS total
            FROM teammember tm
            JOIN team t ON t.team_name = tm.team_name AND t.event_id = tm.event_id
            WHERE tm.athlete_id = %s AND t.medal IS NOT NULL
            GROUP BY t.medal;
        """
        with self.db.cursor("Counting team medals") as cur:
            cur.execute(sql, (athlete_id,))
            return [(r["medal"], int(r["total"])) for r in cur.fetchall()]

    # ── TRANSACTIONAL ─────────────────────────────────────

    @staticmethod
    def find_display_name(cur, member_id: str) -> Optional[str]:
        """Resolve ``"family, given"`` for a member id, or None."""
        cur.execute(
            "SELECT family_name, given_names FROM member WHERE member_id = %s;",
            (member_id,),
        )
        row = cur.fetchone()
        if row is None:
            return None
        values = map_row(row, {"family_name": to_str, "given_names": to_str})
        return display_name(values["family_name"], values["given_names"])

    @staticmethod
    def find_ids_by_display_name(cur, name: str) -> list[str]:
        """All member ids whose ``"family, given"`` form equals ``name``."""
        cur.execute(
            "SELECT member_id FROM member "
            "WHERE (family_name || ', ' || given_names) = %s ORDER BY member_id;",
            (name,),
        )
        return [to_str(r["member_id"]) for r in cur.fetchall()]
