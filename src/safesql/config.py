"""
Translator config loading.

Loads YAML/JSON translator settings and returns typed config objects, e.g.::

    dialect: googlesql
    reference_zone: America/Los_Angeles
    render_null: false
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .dialects import registry
from .dialects.base import DEFAULT_REFERENCE_ZONE
from .errors import ConfigError
from .translator import Translator


@dataclass(frozen=True)
class TranslatorConfig:
    """Settings shared by every translation made through one translator."""

    dialect: str = "standard"
    reference_zone: str = DEFAULT_REFERENCE_ZONE
    render_null: bool = False

    def __post_init__(self) -> None:
        try:
            registry.get(self.dialect)
        except KeyError as e:
            raise ConfigError.of(
                str(e.args[0]),
                details={"dialect": self.dialect, "available": sorted(registry.available())},
                remediation="Set 'dialect' to one of the available dialect names.",
            ) from e
        self.zone()
        if not isinstance(self.render_null, bool):
            raise ConfigError.of(
                "render_null must be a boolean",
                details={"render_null": repr(self.render_null)},
            )

    def zone(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.reference_zone)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
            raise ConfigError.of(
                f"Unknown reference zone: {self.reference_zone!r}",
                details={"reference_zone": repr(self.reference_zone), "error": repr(e)},
                remediation="Use an IANA zone id such as 'America/Los_Angeles' or 'UTC'.",
            ) from e

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> TranslatorConfig:
        return cls(
            dialect=str(d.get("dialect", "standard")),
            reference_zone=str(d.get("reference_zone", DEFAULT_REFERENCE_ZONE)),
            render_null=d.get("render_null", False),
        )


def load_translator_config(path: Union[str, Path]) -> TranslatorConfig:
    """
    Load a translator configuration from a YAML or JSON file.

    The file must contain a mapping; missing keys take the ``TranslatorConfig`` defaults.
    """
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    obj = yaml.safe_load(text)
    if obj is None:
        obj = {}
    if not isinstance(obj, dict):
        raise ConfigError.of(
            f"Config file must be a YAML/JSON object, got {type(obj).__name__}",
            details={"path": str(p), "type": type(obj).__name__},
            remediation="Wrap the settings in a mapping at the top level.",
        )
    return TranslatorConfig.from_dict(obj)


def translator_for(config: TranslatorConfig) -> Translator:
    dialect = registry.get(config.dialect)
    return Translator(dialect, dialect.unquoted_hook(config.zone()), render_null=config.render_null)
