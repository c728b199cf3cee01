"""
Template translation: walk the spans of a template and render each placeholder.

Rendering rules, by the kind of the argument (see ``values.classify``):

- None: ``NullArgument``, unless the translator was built with ``render_null=True``.
- str: a single-quoted literal escaped with the dialect's literal style.
- bool / int / float / Decimal: canonical text, unquoted; negatives are parenthesized
  and non-finite numbers are rejected.
- VettedQuery: embedded as-is (subquery composition).
- list / tuple: each element rendered with these rules, joined by ", "; empty or nested
  sequences are rejected.
- anything else: the ``unquoted`` hook, which rejects by default and which a
  dialect can decorate with its own rules (see ``dialects.googlesql``).

A placeholder inside a string literal (``'{name}'``, ``'%{name}%'``) takes a str and
renders only its escaped content; one inside the dialect's identifier quotes
takes a str and renders it as an identifier. See ``context`` for how the
position of each placeholder is worked out.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any, Optional, Protocol, Sequence, Tuple

from .context import QuoteContext, TemplateLayout, layout
from .dialects.base import SQLDialect, identifier_problem, quote
from .errors import ArgumentCountMismatch, NullArgument, SafeSqlError, UnsupportedType
from .query import QueryAssembly, VettedQuery
from .spans import Literal, Placeholder, Span, scan
from .values import ValueKind, classify

logger = logging.getLogger(__name__)


def _numeral(text: str) -> str:
    # "x -{n}" with a negative n would otherwise start a "--" comment
    return f"({text})" if text.startswith("-") else text


class UnquotedRenderer(Protocol):
    def unquoted(self, placeholder: Placeholder, value: Any) -> str: ...


class RejectUnsupported:
    """Default hook: no rendering rule exists for the value."""

    def unquoted(self, placeholder: Placeholder, value: Any) -> str:
        raise UnsupportedType.of(placeholder.name, placeholder.position, value)


class Translator:
    def __init__(
        self,
        dialect: SQLDialect,
        hook: Optional[UnquotedRenderer] = None,
        *,
        render_null: bool = False,
    ) -> None:
        self.dialect = dialect
        self.hook = hook if hook is not None else dialect.unquoted_hook()
        self.render_null = render_null

    def translate(self, template: str, *args: Any) -> VettedQuery:
        return self.template(template).fill(*args)

    def template(self, template: str) -> "QueryTemplate":
        return QueryTemplate(template, self)

    def render(self, placeholder: Placeholder, value: Any) -> str:
        """Render ``value`` as a self-contained SQL fragment for an unquoted placeholder."""
        kind = classify(value)
        if kind is ValueKind.NULL:
            if self.render_null:
                return "NULL"
            raise NullArgument.of(placeholder.name, placeholder.position)
        if kind is ValueKind.STRING:
            return quote(self.dialect.literal_style, value)
        if kind is ValueKind.BOOLEAN:
            return "true" if value else "false"
        # base-type formatting so that a subclass's __str__ never reaches the output
        if kind is ValueKind.INTEGER:
            return _numeral(int.__repr__(value))
        if kind is ValueKind.FLOAT:
            if not math.isfinite(value):
                raise UnsupportedType.of(placeholder.name, placeholder.position, value, "non-finite number")
            return _numeral(float.__repr__(value))
        if kind is ValueKind.DECIMAL:
            if not value.is_finite():
                raise UnsupportedType.of(placeholder.name, placeholder.position, value, "non-finite number")
            return _numeral(Decimal.__str__(value))
        if kind is ValueKind.QUERY:
            return value.sql
        if kind is ValueKind.SEQUENCE:
            if not value:
                raise UnsupportedType.of(placeholder.name, placeholder.position, value, "empty sequence")
            if any(classify(v) is ValueKind.SEQUENCE for v in value):
                raise UnsupportedType.of(placeholder.name, placeholder.position, value, "nested sequence")
            return ", ".join(self.render(placeholder, v) for v in value)
        return self.hook.unquoted(placeholder, value)

    def render_quoted(self, placeholder: Placeholder, value: Any, context: QuoteContext) -> str:
        if value is None:
            raise NullArgument.of(placeholder.name, placeholder.position)
        if not isinstance(value, str):
            raise UnsupportedType.of(
                placeholder.name, placeholder.position, value, "a quoted placeholder takes a str"
            )
        if context is QuoteContext.STRING:
            return self.dialect.literal_style.escape(value)
        problem = identifier_problem(value, self.dialect.identifier_quote)
        if problem:
            raise UnsupportedType.of(placeholder.name, placeholder.position, value, problem)
        return value

    def assemble(
        self,
        spans: Sequence[Span],
        template_layout: TemplateLayout,
        args: Sequence[Any],
    ) -> VettedQuery:
        contexts = template_layout.contexts
        if len(args) != len(contexts):
            raise ArgumentCountMismatch.of(len(contexts), len(args))
        assembly = QueryAssembly()
        arg_iter = iter(zip(contexts, args))
        for span in spans:
            if isinstance(span, Literal):
                assembly.append_literal(span.text)
                continue
            context, value = next(arg_iter)
            if context is QuoteContext.NONE:
                assembly.append_fragment(self.render(span, value))
            else:
                assembly.append_fragment(self.render_quoted(span, value, context))
        if template_layout.terminator:
            assembly.append_literal(template_layout.terminator)
        return assembly.seal()


class QueryTemplate:
    """
    A template scanned once and bound to a translator.

    Immutable; every ``fill`` is an independent rendering pass.
    """

    __slots__ = ("_template", "_translator", "_spans", "_layout")

    def __init__(self, template: str, translator: Translator) -> None:
        self._template = template
        self._translator = translator
        self._spans = scan(template)
        self._layout = layout(template, self._spans, translator.dialect)

    @property
    def template(self) -> str:
        return self._template

    @property
    def placeholders(self) -> Tuple[Placeholder, ...]:
        return tuple(s for s in self._spans if isinstance(s, Placeholder))

    def fill(self, *args: Any) -> VettedQuery:
        logger.debug(
            "Translating template with %d placeholder(s) for dialect %s",
            len(self._layout.contexts),
            self._translator.dialect.name,
        )
        try:
            return self._translator.assemble(self._spans, self._layout, args)
        except SafeSqlError as e:
            logger.debug("Translation failed: %s", e.code)
            raise

    __call__ = fill

    def __repr__(self) -> str:
        preview = self._template[:50] + "..." if len(self._template) > 50 else self._template
        return f"QueryTemplate({preview!r}, dialect={self._translator.dialect.name!r})"
