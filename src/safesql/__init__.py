"""
safesql - SQL text from constant templates, with injection-safe value rendering.

    >>> import safesql
    >>> str(safesql.query("SELECT * FROM t WHERE name = {n}", "O'Brien"))
    "SELECT * FROM t WHERE name = 'O''Brien'"

Templates must be constants in the calling code; only the arguments may come
from untrusted input.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from .dialects import registry
from .dialects.base import SQLDialect
from .errors import (
    ArgumentCountMismatch,
    ConfigError,
    MalformedTemplate,
    NullArgument,
    SafeSqlError,
    SafeSqlProblem,
    UnsupportedType,
)
from .query import VettedQuery
from .translator import QueryTemplate, RejectUnsupported, Translator, UnquotedRenderer
from .dialects import googlesql, standard  # noqa: F401  (registers the built-in dialects)
from .config import TranslatorConfig, load_translator_config, translator_for

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"


def template(query_template: str, dialect: Union[str, SQLDialect] = "standard") -> QueryTemplate:
    return Translator(registry.resolve(dialect)).template(query_template)


def query(query_template: str, *args: Any, dialect: Union[str, SQLDialect] = "standard") -> VettedQuery:
    """Translate ``query_template`` with ``args`` matched to its placeholders in order."""
    return template(query_template, dialect).fill(*args)


__all__ = [
    "ArgumentCountMismatch",
    "ConfigError",
    "MalformedTemplate",
    "NullArgument",
    "QueryTemplate",
    "RejectUnsupported",
    "SafeSqlError",
    "SafeSqlProblem",
    "Translator",
    "TranslatorConfig",
    "UnquotedRenderer",
    "UnsupportedType",
    "VettedQuery",
    "load_translator_config",
    "query",
    "template",
    "translator_for",
]
