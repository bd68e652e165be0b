"""
utils/validators.py
-------------------
Input checks applied before any query is issued.
"""

import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

from exceptions import ValidationError

_IDENTIFIER_RE = re.compile(r"^[0-9A-Za-z]+$")


def is_identifier(value: Any) -> bool:
    """True for a non-empty alphanumeric string."""
    return isinstance(value, str) and bool(_IDENTIFIER_RE.match(value))


def require_identifier(value: Any, what: str = "identifier") -> str:
    """
    Ensure ``value`` is a well-formed member/vehicle identifier.

    Raises:
        ValidationError: If it is not a non-empty alphanumeric string.
    """
    if not is_identifier(value):
        raise ValidationError(f"Malformed {what}: {value!r}")
    return value


def require_key(value: Any, what: str = "id") -> int:
    """Ensure ``value`` is a non-negative integer key (ints or ASCII digit strings)."""
    if isinstance(value, bool):
        raise ValidationError(f"Malformed {what}: {value!r}")
    if isinstance(value, str):
        digits = value.strip()
        # isdigit() also accepts superscripts and non-ASCII numerals
        if not (digits.isascii() and digits.isdecimal()):
            raise ValidationError(f"Malformed {what}: {value!r}")
        value = int(digits)
    if not isinstance(value, int) or value < 0:
        raise ValidationError(f"Malformed {what}: {value!r}")
    return value


def require_text(value: Any, what: str) -> str:
    """Ensure ``value`` is a non-blank string and return it stripped."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing {what}")
    return value.strip()


def parse_timestamp(value: Any, what: str = "timestamp") -> datetime:
    """
    Accept a datetime or an ISO-8601 string.

    Raises:
        ValidationError: On anything else.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return date_parser.isoparse(value.strip())
        except ValueError as e:
            raise ValidationError(f"Malformed {what}: {value!r}") from e
    raise ValidationError(f"Malformed {what}: {value!r}")


def parse_date(value: Any, what: str = "date") -> date:
    """Accept a date, a datetime (its day is used) or an ISO-8601 string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_timestamp(value, what).date()
