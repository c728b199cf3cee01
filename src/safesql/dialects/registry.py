from __future__ import annotations

from typing import Dict, Union

from .base import SQLDialect

_REGISTRY: Dict[str, SQLDialect] = {}


def register(dialect: SQLDialect) -> SQLDialect:
    """Register ``dialect`` under its lower-cased ``.name``; re-registering the same object is a no-op."""
    name = getattr(dialect, "name", None)
    if not name or not isinstance(name, str):
        raise ValueError("Dialect must define a non-empty .name")
    key = name.lower()
    existing = _REGISTRY.get(key)
    if existing is not None and existing is not dialect:
        raise ValueError(f"Dialect '{key}' is already registered")
    _REGISTRY[key] = dialect
    return dialect


def get(name: str) -> SQLDialect:
    key = (name or "").lower()
    if key not in _REGISTRY:
        names = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown dialect '{name}'. Available: {names}")
    return _REGISTRY[key]


def resolve(dialect: Union[str, SQLDialect]) -> SQLDialect:
    """Accept either a registered dialect name or a dialect object."""
    if isinstance(dialect, str):
        return get(dialect)
    return dialect


def available() -> Dict[str, SQLDialect]:
    return dict(_REGISTRY)
