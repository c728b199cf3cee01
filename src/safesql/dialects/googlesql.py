"""
GoogleSQL (BigQuery) templates.

On top of the base rules, temporal values render as GoogleSQL constructor calls:

- an instant (datetime with a fixed-offset tzinfo, e.g. ``timezone.utc``) becomes
  ``TIMESTAMP('<local time in the reference zone>', '<reference zone>')``
- a zoned datetime (``ZoneInfo`` tzinfo) becomes
  ``DATETIME('<its wall-clock time>', '<its zone>')``
- a ``date`` becomes ``DATE(<year>, <month>, <day>)``

Times are formatted ``YYYY-MM-DDTHH:MM:SS`` with ``.ffffff`` appended only when
the microsecond is non-zero. Naive datetimes are rejected.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from ..errors import UnsupportedType
from ..query import VettedQuery
from ..spans import Placeholder
from ..translator import QueryTemplate, RejectUnsupported, Translator, UnquotedRenderer
from ..values import ValueKind, classify
from .base import BACKSLASH, DEFAULT_REFERENCE_ZONE, LiteralStyle, quote
from .registry import register

TIMESTAMP_EXPRESSION = "TIMESTAMP({time}, {zone})"
DATE_TIME_EXPRESSION = "DATETIME({time}, {zone})"
DATE_EXPRESSION = "DATE({year}, {month}, {day})"

_ZONE_ID = re.compile(r"[A-Za-z0-9_+\-/]+")


def format_local_date_time(dt: datetime) -> str:
    """Wall-clock time of ``dt``, ignoring its tzinfo."""
    return dt.replace(tzinfo=None).isoformat(timespec="microseconds" if dt.microsecond else "seconds")


def is_valid_zone_id(zone_id: Optional[str]) -> bool:
    return bool(zone_id) and _ZONE_ID.fullmatch(zone_id) is not None


class TemporalRenderer:
    """Renders instants, zoned datetimes and dates; delegates everything else to ``fallback``."""

    def __init__(
        self,
        reference_zone: ZoneInfo,
        literal_style: LiteralStyle = BACKSLASH,
        fallback: Optional[UnquotedRenderer] = None,
    ) -> None:
        if not is_valid_zone_id(reference_zone.key):
            raise ValueError(f"reference zone needs a valid IANA key, got {reference_zone.key!r}")
        self.reference_zone = reference_zone
        self.literal_style = literal_style
        self.fallback = fallback if fallback is not None else RejectUnsupported()

    def unquoted(self, placeholder: Placeholder, value: Any) -> str:
        kind = classify(value)
        if kind is ValueKind.INSTANT:
            try:
                return self.timestamp_expression(value)
            except OverflowError as e:
                raise UnsupportedType.of(
                    placeholder.name, placeholder.position, value, "out of range in the reference zone"
                ) from e
        if kind is ValueKind.ZONED_DATE_TIME:
            if not is_valid_zone_id(value.tzinfo.key):
                raise UnsupportedType.of(
                    placeholder.name, placeholder.position, value, "zone has no valid IANA key"
                )
            return self.date_time_expression(value)
        if kind is ValueKind.LOCAL_DATE:
            return self.date_expression(value)
        return self.fallback.unquoted(placeholder, value)

    def timestamp_expression(self, instant: datetime) -> str:
        local = instant.astimezone(self.reference_zone)
        return TIMESTAMP_EXPRESSION.format(
            time=quote(self.literal_style, format_local_date_time(local)),
            zone=quote(self.literal_style, self.reference_zone.key),
        )

    def date_time_expression(self, dt: datetime) -> str:
        return DATE_TIME_EXPRESSION.format(
            time=quote(self.literal_style, format_local_date_time(dt)),
            zone=quote(self.literal_style, dt.tzinfo.key),
        )

    @staticmethod
    def date_expression(d: date) -> str:
        return DATE_EXPRESSION.format(
            year=int.__repr__(d.year), month=int.__repr__(d.month), day=int.__repr__(d.day)
        )


class GoogleSqlDialect:
    name = "googlesql"
    identifier_quote = "`"
    sqlglot_dialect = "bigquery"
    literal_style = BACKSLASH

    def unquoted_hook(self, reference_zone: Optional[ZoneInfo] = None) -> UnquotedRenderer:
        zone = reference_zone if reference_zone is not None else ZoneInfo(DEFAULT_REFERENCE_ZONE)
        return TemporalRenderer(zone, self.literal_style)


GOOGLE_SQL = register(GoogleSqlDialect())


def template(query_template: str) -> QueryTemplate:
    """
    Scan ``query_template`` once for GoogleSQL translation.

    ``query_template`` must be a constant in the caller's code, never text built
    from runtime input.
    """
    return Translator(GOOGLE_SQL).template(query_template)


def query(query_template: str, *args: Any) -> VettedQuery:
    """Translate ``query_template`` with ``args`` matched to its placeholders in order."""
    return template(query_template).fill(*args)
