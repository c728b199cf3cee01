"""
Lexical context of each placeholder in a template.

Each placeholder is replaced by a sentinel word and the template is tokenized
with the dialect's sqlglot tokenizer. The token covering a sentinel tells what
the placeholder sits inside:

- any unquoted token: the value renders as a complete fragment (quoted literal, number, ...)
- a string literal: the value must be a str and renders as escaped content
- a quoted identifier: the value must be a str and renders as a checked identifier
- no token at all, i.e. a comment: rejected, a value could end the comment

Raw, byte and other prefixed string literals are rejected, and so is a
placeholder right after an escape character. Templates that end inside a
string, quoted identifier or block comment are rejected, so a vetted query can
always be embedded in another one. A template ending inside a line comment gets
a closing newline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import sqlglot
from sqlglot.errors import TokenError
from sqlglot.tokens import Token, TokenType

from .dialects.base import SQLDialect
from .errors import MalformedTemplate
from .spans import Literal, Placeholder, Span


class QuoteContext(str, Enum):
    NONE = "NONE"
    STRING = "STRING"
    IDENTIFIER = "IDENTIFIER"


_CONTEXT_OF_TOKEN = {
    TokenType.STRING: QuoteContext.STRING,
    TokenType.NATIONAL_STRING: QuoteContext.STRING,
    TokenType.IDENTIFIER: QuoteContext.IDENTIFIER,
}

_END = "__safesql_end__"


def _sentinel(placeholder: Placeholder) -> str:
    return f"__safesql_{placeholder.position}__"


@dataclass(frozen=True)
class TemplateLayout:
    contexts: Tuple[QuoteContext, ...]  # one per placeholder, in order
    terminator: str                     # appended after the last span


def _tokenize(template: str, sql: str, dialect: SQLDialect) -> List[Token]:
    try:
        return sqlglot.tokenize(sql, read=dialect.sqlglot_dialect)
    except TokenError as e:
        raise MalformedTemplate.of(
            template, f"template ends inside an unterminated string or quoted identifier ({dialect.name})"
        ) from e


def _covering(tokens: Sequence[Token], offset: int) -> Optional[Token]:
    for token in tokens:
        if token.start > offset:
            break
        if offset <= token.end:
            return token
    return None


def _follows_escape(sql: str, offset: int, escape_char: str) -> bool:
    run = 0
    while run < offset and sql[offset - run - 1] == escape_char:
        run += 1
    return run % 2 == 1


def _context(template: str, sql: str, offset: int, token: Optional[Token], placeholder: Placeholder,
             dialect: SQLDialect) -> QuoteContext:
    name = placeholder.name
    if token is None:
        raise MalformedTemplate.of(template, f"placeholder {{{name}}} is inside a comment")
    context = _CONTEXT_OF_TOKEN.get(token.token_type)
    if context is None:
        if token.token_type.name.endswith("_STRING"):
            kind = token.token_type.name.lower().replace("_", " ")
            raise MalformedTemplate.of(template, f"placeholder {{{name}}} is inside a {kind} literal")
        return QuoteContext.NONE
    escape_char = dialect.literal_style.escape_char
    if escape_char and _follows_escape(sql, offset, escape_char):
        raise MalformedTemplate.of(template, f"placeholder {{{name}}} follows an escape character")
    return context


def layout(template: str, spans: Sequence[Span], dialect: SQLDialect) -> TemplateLayout:
    parts: List[str] = []
    placed: List[Tuple[Placeholder, int]] = []
    size = 0
    for span in spans:
        if isinstance(span, Literal):
            text = span.text
        else:
            text = _sentinel(span)
            placed.append((span, size))
        parts.append(text)
        size += len(text)
    sql = "".join(parts)

    tokens = _tokenize(template, sql + "\n" + _END, dialect)
    contexts = tuple(
        _context(template, sql, offset, _covering(tokens, offset), placeholder, dialect)
        for placeholder, offset in placed
    )

    if _covering(tokens, len(sql) + 1) is None:
        raise MalformedTemplate.of(template, "template ends inside an unterminated block comment")
    # without the newline the end marker is swallowed only by an open line comment
    in_line_comment = _covering(_tokenize(template, sql + _END, dialect), len(sql)) is None
    return TemplateLayout(contexts, "\n" if in_line_comment else "")
