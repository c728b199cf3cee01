from __future__ import annotations

from typing import Optional
from zoneinfo import ZoneInfo

from ..translator import RejectUnsupported, UnquotedRenderer
from .base import DOUBLED_QUOTE
from .registry import register


class StandardDialect:
    """ANSI-style SQL: ``''`` inside string literals, double-quoted identifiers, no temporal rules."""

    name = "standard"
    identifier_quote = '"'
    sqlglot_dialect = None
    literal_style = DOUBLED_QUOTE

    def unquoted_hook(self, reference_zone: Optional[ZoneInfo] = None) -> UnquotedRenderer:
        return RejectUnsupported()


STANDARD = register(StandardDialect())
