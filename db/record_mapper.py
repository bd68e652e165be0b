"""
db/record_mapper.py
-------------------
Turns dict rows (RealDictCursor) into typed field mappings.

Every repository declares the fields it reads and the converter for each;
``map_row`` applies them so that models are always built from values of
a known type, with NULL allowed only where a ``nullable`` converter says so.
"""

from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional

from exceptions import DataIntegrityError

Converter = Callable[[Any], Any]


def to_str(value: Any) -> str:
    if value is None:
        raise TypeError("unexpected NULL")
    # CHAR(n) columns come back blank-padded
    return value.rstrip() if isinstance(value, str) else str(value)


def to_int(value: Any) -> int:
    if value is None:
        raise TypeError("unexpected NULL")
    return int(value)


def to_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"expected a timestamp, got {type(value).__name__}")


def nullable(converter: Converter) -> Converter:
    """Wrap a converter so that NULL maps to None instead of failing."""

    def convert(value: Any) -> Optional[Any]:
        return None if value is None else converter(value)

    return convert


def map_row(row: Mapping[str, Any], fields: Mapping[str, Converter]) -> dict:
    """
    Convert a result row into a dict holding exactly ``fields``.

    Args:
        row: A dict-like row as returned by RealDictCursor.
        fields: Field name -> converter.

    Returns:
        Dict with one typed value per declared field.

    Raises:
        DataIntegrityError: If a column is missing or has an unexpected value.
    """
    mapped = {}
    for name, convert in fields.items():
        if name not in row:
            raise DataIntegrityError(f"column '{name}' missing from result row")
        try:
            mapped[name] = convert(row[name])
        except (TypeError, ValueError) as e:
            raise DataIntegrityError(f"column '{name}': {e}") from e
    return mapped
