"""
The vetted query value and the assembly that produces it.

A ``VettedQuery`` can only be created by sealing a ``QueryAssembly``, which in
turn is fed by the translator with template literal spans and rendered
fragments. Execution boundaries should accept ``VettedQuery`` and never ``str``.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

_SEAL = object()


class VettedQuery:
    __slots__ = ("_sql",)

    EMPTY: "VettedQuery"

    def __init__(self, sql: str, *, _seal: object = None) -> None:
        if _seal is not _SEAL:
            raise TypeError("VettedQuery is produced by query translation only")
        object.__setattr__(self, "_sql", sql)

    @property
    def sql(self) -> str:
        return self._sql

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("VettedQuery is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("VettedQuery is immutable")

    def __str__(self) -> str:
        return self._sql

    def __repr__(self) -> str:
        return f"VettedQuery({self._sql!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VettedQuery):
            return NotImplemented
        return self._sql == other._sql

    def __hash__(self) -> int:
        return hash((VettedQuery, self._sql))

    def __bool__(self) -> bool:
        return bool(self._sql)

    def __copy__(self) -> "VettedQuery":
        return self

    def __deepcopy__(self, memo: dict) -> "VettedQuery":
        return self

    @staticmethod
    def join(separator: str, queries: Iterable["VettedQuery"]) -> "VettedQuery":
        """
        Join vetted queries with ``separator``, e.g. ``VettedQuery.join(" AND ", conditions)``.

        ``separator`` is trusted template text, same as a template string.
        """
        assembly = QueryAssembly()
        for i, q in enumerate(queries):
            if not isinstance(q, VettedQuery):
                raise TypeError(f"can only join VettedQuery values, got {type(q).__name__}")
            if i:
                assembly.append_literal(separator)
            assembly.append_fragment(q.sql)
        return assembly.seal()


VettedQuery.EMPTY = VettedQuery("", _seal=_SEAL)


class AssemblyState(str, Enum):
    BUILDING = "BUILDING"
    SEALED = "SEALED"


class QueryAssembly:
    """Accumulates spans in template order; ``seal()`` is the only way out."""

    def __init__(self) -> None:
        self._parts: List[str] = []
        self.state = AssemblyState.BUILDING

    def _check_building(self) -> None:
        if self.state is not AssemblyState.BUILDING:
            raise RuntimeError("query assembly is already sealed")

    def append_literal(self, text: str) -> None:
        self._check_building()
        self._parts.append(text)

    def append_fragment(self, fragment: str) -> None:
        self._check_building()
        self._parts.append(fragment)

    def seal(self) -> VettedQuery:
        self._check_building()
        self.state = AssemblyState.SEALED
        return VettedQuery("".join(self._parts), _seal=_SEAL)
