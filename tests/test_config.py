from datetime import datetime, timezone
from pathlib import Path

import pytest

from safesql import ConfigError, NullArgument, TranslatorConfig, load_translator_config, translator_for


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "safesql.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_defaults():
    cfg = TranslatorConfig()
    assert cfg.dialect == "standard"
    assert cfg.reference_zone == "America/Los_Angeles"
    assert cfg.render_null is False


def test_load_yaml(tmp_path: Path):
    p = _write(tmp_path, "dialect: googlesql\nreference_zone: UTC\nrender_null: true\n")
    cfg = load_translator_config(p)
    assert cfg == TranslatorConfig(dialect="googlesql", reference_zone="UTC", render_null=True)

    tr = translator_for(cfg)
    q = tr.translate("SELECT {t}, {n}", datetime(2023, 1, 1, 8, 0, tzinfo=timezone.utc), None)
    assert q.sql == "SELECT TIMESTAMP('2023-01-01T08:00:00', 'UTC'), NULL"


def test_load_json(tmp_path: Path):
    p = _write(tmp_path, '{"dialect": "GoogleSQL"}')
    cfg = load_translator_config(str(p))
    assert cfg.dialect == "GoogleSQL"
    assert translator_for(cfg).dialect.name == "googlesql"


def test_empty_file_uses_defaults(tmp_path: Path):
    assert load_translator_config(_write(tmp_path, "")) == TranslatorConfig()


def test_null_policy_defaults_to_reject(tmp_path: Path):
    tr = translator_for(load_translator_config(_write(tmp_path, "dialect: standard\n")))
    with pytest.raises(NullArgument):
        tr.translate("SELECT {n}", None)


def test_top_level_must_be_mapping(tmp_path: Path):
    with pytest.raises(ConfigError, match="must be a YAML/JSON object"):
        load_translator_config(_write(tmp_path, "- a\n- b\n"))


def test_unknown_zone_rejected():
    with pytest.raises(ConfigError, match="Unknown reference zone") as exc:
        TranslatorConfig(reference_zone="Mars/Olympus_Mons")
    assert exc.value.problem.category == "config"
    assert exc.value.problem.remediation


def test_unknown_dialect_rejected():
    with pytest.raises(ConfigError, match="Unknown dialect") as exc:
        TranslatorConfig(dialect="oracle")
    assert "googlesql" in exc.value.problem.details["available"]


def test_render_null_must_be_bool(tmp_path: Path):
    with pytest.raises(ConfigError, match="render_null"):
        load_translator_config(_write(tmp_path, "render_null: 'yes'\n"))
