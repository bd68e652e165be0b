"""
Shared fixtures.

Unit tests get a MagicMock standing in for ``Database``: its ``cursor()``
and ``transaction()`` context managers both yield the same mock cursor,
so a test can script ``fetchone``/``fetchall`` and inspect ``execute``.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from db.connection import Database
from models.journey import JourneyDetails, JourneySummary


@pytest.fixture
def cursor():
    return MagicMock(name="cursor")


@pytest.fixture
def mock_db(cursor):
    db = MagicMock(spec=Database)
    db.cursor.return_value.__enter__.return_value = cursor
    db.cursor.return_value.__exit__.return_value = False
    db.transaction.return_value.__enter__.return_value = cursor
    db.transaction.return_value.__exit__.return_value = False
    return db


@pytest.fixture
def make_journey():
    """Factory for journey records; pass ``record_cls=JourneySummary`` for search results."""

    def _make(record_cls=JourneyDetails, **overrides) -> JourneySummary:
        values = {
            "journey_id": 101,
            "vehicle_code": "VAN01",
            "origin_name": "Olympic Village",
            "dest_name": "Stadium",
            "when_departs": datetime(2026, 7, 24, 9, 0),
            "when_arrives": datetime(2026, 7, 24, 9, 40),
            "capacity": 5,
            "nbooked": 4,
        }
        values.update(overrides)
        return record_cls(**values)

    return _make
