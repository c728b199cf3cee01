"""
Placeholder span scanning for query templates.

Templates use ``{name}`` placeholders; literal braces are written ``{{`` and ``}}``.
Raw token scanning is delegated to ``string.Formatter().parse``; this module only
turns its output into an ordered tuple of ``Literal`` / ``Placeholder`` spans and
rejects the format-string features that would let a value pick its own rendering
(conversions, format specs, attribute and index lookups).
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import List, Tuple, Union

from .errors import MalformedTemplate

_FORMATTER = string.Formatter()


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Placeholder:
    name: str
    position: int  # 0-based ordinal among the template's placeholders


Span = Union[Literal, Placeholder]


def scan(template: str) -> Tuple[Span, ...]:
    """
    Split ``template`` into literal and placeholder spans, left to right.

    Adjacent literal text is merged, so literal and placeholder spans alternate
    except where two placeholders touch.
    """
    if not isinstance(template, str):
        raise TypeError(f"template must be a str, got {type(template).__name__}")
    try:
        parsed = list(_FORMATTER.parse(template))
    except ValueError as e:
        raise MalformedTemplate.of(template, str(e)) from e

    spans: List[Span] = []
    position = 0
    for literal_text, field_name, format_spec, conversion in parsed:
        if literal_text:
            if spans and isinstance(spans[-1], Literal):
                spans[-1] = Literal(spans[-1].text + literal_text)
            else:
                spans.append(Literal(literal_text))
        if field_name is None:
            continue
        if conversion or format_spec:
            raise MalformedTemplate.of(
                template, f"placeholder {{{field_name}}} must not carry a conversion or format spec"
            )
        if not field_name.isidentifier():
            raise MalformedTemplate.of(
                template, f"placeholder name {field_name!r} is not a plain identifier"
            )
        spans.append(Placeholder(field_name, position))
        position += 1
    return tuple(spans)


def placeholder_count(template: str) -> int:
    return sum(1 for s in scan(template) if isinstance(s, Placeholder))
