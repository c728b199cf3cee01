from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Protocol
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from ..translator import UnquotedRenderer

DEFAULT_REFERENCE_ZONE = "America/Los_Angeles"


class LiteralStyle(Protocol):
    name: str
    escape_char: Optional[str]  # character that escapes the next one inside quotes, if any

    def escape(self, text: str) -> str: ...
    def unescape(self, text: str) -> str: ...


@dataclass(frozen=True)
class DoubledQuoteStyle:
    """
    ANSI string literals: ``'`` is written ``''``; backslash has no special meaning.
    """

    name: str = "doubled-quote"
    escape_char: Optional[str] = None

    def escape(self, text: str) -> str:
        return text.replace("'", "''")

    def unescape(self, text: str) -> str:
        out = []
        i = 0
        while i < len(text):
            ch = text[i]
            if ch == "'":
                if text[i + 1:i + 2] != "'":
                    raise ValueError(f"unpaired quote at offset {i}")
                i += 1
            out.append(ch)
            i += 1
        return "".join(out)


# escape character -> the character it stands for
_BACKSLASH_ESCAPES: Dict[str, str] = {
    "\\": "\\",
    "'": "'",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "0": "\0",
}
_BACKSLASH_REVERSE: Dict[str, str] = {v: "\\" + k for k, v in _BACKSLASH_ESCAPES.items()}


@dataclass(frozen=True)
class BackslashStyle:
    """
    GoogleSQL string literals: backslash introduces escapes. Both quote characters
    are escaped so the content is safe in single- or double-quoted literals, and
    line breaks and NUL are escaped since a quoted literal cannot span lines.
    """

    name: str = "backslash"
    escape_char: Optional[str] = "\\"

    def escape(self, text: str) -> str:
        return "".join(_BACKSLASH_REVERSE.get(ch, ch) for ch in text)

    def unescape(self, text: str) -> str:
        out = []
        i = 0
        while i < len(text):
            ch = text[i]
            if ch in ("'", '"'):
                raise ValueError(f"unescaped quote at offset {i}")
            if ch == "\\":
                nxt = text[i + 1:i + 2]
                if nxt not in _BACKSLASH_ESCAPES:
                    raise ValueError(f"unknown escape sequence at offset {i}")
                out.append(_BACKSLASH_ESCAPES[nxt])
                i += 2
                continue
            out.append(ch)
            i += 1
        return "".join(out)


DOUBLED_QUOTE = DoubledQuoteStyle()
BACKSLASH = BackslashStyle()


def quote(style: LiteralStyle, text: str) -> str:
    return "'" + style.escape(text) + "'"


def unquote(style: LiteralStyle, literal: str) -> str:
    """Inverse of ``quote``: strip the outer quotes and undo the escaping."""
    if len(literal) < 2 or literal[0] != "'" or literal[-1] != "'":
        raise ValueError("not a single-quoted literal")
    return style.unescape(literal[1:-1])


def identifier_problem(ident: str, identifier_quote: str) -> Optional[str]:
    """Return why ``ident`` cannot sit between identifier quotes, or None if it can."""
    if not ident:
        return "identifier is empty"
    if identifier_quote in ident:
        return f"identifier contains {identifier_quote!r}"
    if "\\" in ident:
        return "identifier contains a backslash"
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in ident):
        return "identifier contains a control character"
    return None


class SQLDialect(Protocol):
    name: str
    identifier_quote: str            # '"' | '`'
    sqlglot_dialect: Optional[str]   # tokenizer used to place each placeholder, None for sqlglot's default
    literal_style: LiteralStyle

    def unquoted_hook(self, reference_zone: Optional[ZoneInfo] = None) -> "UnquotedRenderer": ...
