"""Closed classification of the argument values a translator knows about."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo

from .query import VettedQuery


class ValueKind(str, Enum):
    NULL = "NULL"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    DECIMAL = "DECIMAL"
    INSTANT = "INSTANT"
    ZONED_DATE_TIME = "ZONED_DATE_TIME"
    LOCAL_DATE = "LOCAL_DATE"
    QUERY = "QUERY"
    SEQUENCE = "SEQUENCE"
    OTHER = "OTHER"


def classify(value: Any) -> ValueKind:
    """
    Map a runtime value to exactly one ``ValueKind``.

    Order matters: bool before int (bool subclasses int) and datetime before
    date (datetime subclasses date).

    Datetimes:
    - tzinfo is a fixed offset (``datetime.timezone``): an instant.
    - tzinfo is a ``ZoneInfo``: a zoned date-time in that zone.
    - naive, or any other tzinfo implementation: OTHER (ambiguous, rejected).
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, Decimal):
        return ValueKind.DECIMAL
    if isinstance(value, datetime):
        if isinstance(value.tzinfo, timezone):
            return ValueKind.INSTANT
        if isinstance(value.tzinfo, ZoneInfo):
            return ValueKind.ZONED_DATE_TIME
        return ValueKind.OTHER
    if isinstance(value, date):
        return ValueKind.LOCAL_DATE
    if isinstance(value, VettedQuery):
        return ValueKind.QUERY
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.OTHER
