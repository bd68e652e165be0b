"""
repositories/event_repo.py
--------------------------
Data access layer for sports, events and their recorded results.
"""

from db.connection import Database
from db.record_mapper import map_row, nullable, to_int, to_str, to_timestamp
from models.event import EventRecord, SportRecord

_RESULT_FIELDS = {
    "participant": to_str,
    "country_name": to_str,
    "medal": nullable(str),
}


class EventRepository:
    """Repository for read access to sport, event, participates and team."""

    def __init__(self, db: Database):
        self.db = db

    def list_sports(self) -> list[SportRecord]:
        sql = "SELECT sport_id, sport_name, discipline FROM sport ORDER BY sport_name, discipline;"
        fields = {"sport_id": to_int, "sport_name": to_str, "discipline": to_str}
        with self.db.cursor("Acquiring sports") as cur:
            cur.execute(sql)
            return [SportRecord(**map_row(r, fields)) for r in cur.fetchall()]

    def list_events_of_sport(self, sport_id: int) -> list[EventRecord]:
        """All events of a sport with their venue name, earliest first."""
        sql = """
            SELECT e.event_id, e.sport_id, e.event_name, e.event_gender,
                   p.place_name AS sport_venue, e.event_start
            FROM event e
            JOIN place p ON p.place_id = e.sport_venue
            WHERE e.sport_id = %s
            ORDER BY e.event_start, e.event_id;
        """
        fields = {
            "event_id": to_int,
            "sport_id": to_int,
            "event_name": to_str,
            "event_gender": to_str,
            "sport_venue": to_str,
            "event_start": to_timestamp,
        }
        with self.db.cursor("Acquiring events") as cur:
            cur.execute(sql, (sport_id,))
            return [EventRecord(**map_row(r, fields)) for r in cur.fetchall()]

    def is_team_event(self, event_id: int) -> bool:
        """True when at least one team is recorded for the event."""
        sql = "SELECT EXISTS (SELECT 1 FROM team WHERE event_id = %s) AS has_teams;"
        with self.db.cursor("Checking event kind") as cur:
            cur.execute(sql, (event_id,))
            return bool(cur.fetchone()["has_teams"])

    def list_individual_results(self, event_id: int) -> list[dict]:
        """
        Individual results of an event.

        Returns:
            Dicts with 'participant' (``"family, given"``), 'country_name'
            and the raw 'medal' code (None when no medal).
        """
        sql = """
            SELECT (m.family_name || ', ' || m.given_names) AS participant,
                   c.country_name, pa.medal
            FROM participates pa
            JOIN member m ON m.member_id = pa.athlete_id
            JOIN country c ON c.country_code = m.country_code
            WHERE pa.event_id = %s
            ORDER BY participant;
        """
        with self.db.cursor("Acquiring results of event") as cur:
            cur.execute(sql, (event_id,))
            return [map_row(r, _RESULT_FIELDS) for r in cur.fetchall()]

    def list_team_results(self, event_id: int) -> list[dict]:
        """Team results of an event, same shape as individual results."""
        sql = """
            SELECT t.team_name AS participant, c.country_name, t.medal
            FROM team t
            JOIN country c ON c.country_code = t.country_code
            WHERE t.event_id = %s
            ORDER BY participant;
        """
        with self.db.cursor("Acquiring results of event") as cur:
            cur.execute(sql, (event_id,))
            return [map_row(r, _RESULT_FIELDS) for r in cur.fetchall()]
