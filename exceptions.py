"""
exceptions.py
-------------
Error taxonomy shared by every layer.

Read operations raise only ``ValidationError`` (bad input shape),
``ConnectivityError`` and ``QueryError``; a lookup that matches nothing
returns an empty result instead. The booking path additionally raises
``NotFoundError`` and ``CapacityExceededError``, always after rollback.
"""


class OlympicsDBError(Exception):
    """Base class for all errors raised by the backend."""


class ValidationError(OlympicsDBError):
    """Malformed input, rejected before any query is issued."""


class NotFoundError(OlympicsDBError):
    """A lookup required by a write path matched no row."""


class CapacityExceededError(OlympicsDBError):
    """The journey has no free seat left."""

    def __init__(self, journey_id: int, capacity: int):
        super().__init__(f"Journey #{journey_id} is full ({capacity} seats booked)")
        self.journey_id = journey_id
        self.capacity = capacity


class ConnectivityError(OlympicsDBError):
    """The store is unreachable or the connection broke."""


class QueryError(OlympicsDBError):
    """The store rejected a statement."""


class DataIntegrityError(OlympicsDBError):
    """Stored data violates an assumption (unknown medal code, duplicate journey key)."""
