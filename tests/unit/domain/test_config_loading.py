from __future__ import annotations

"""
Unit tests for configuration defaults, persistence loading and validation.
"""

import json

import pytest

from codexreport.core.pipeline.validator import validate_config
from codexreport.domain import config as config_module
from codexreport.domain.config import get_default_config, load_config


def test_defaults_shape():
    cfg = get_default_config()

    assert cfg["output_path"] == ""
    assert cfg["expand_dirs"] is False
    assert cfg["respect_repoignore"] is True
    assert cfg["log_level"] == "WARNING"


def test_load_config_missing_file_returns_defaults(tmp_path):
    assert load_config(str(tmp_path / "none.json")) == get_default_config()


def test_load_config_merges_known_keys_only(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"expand_dirs": True, "theme": "dark"}), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg["expand_dirs"] is True
    assert "theme" not in cfg


def test_load_config_corrupt_file_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_load_config_non_dict_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_load_config_uses_user_data_dir(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"count_tokens": True}), encoding="utf-8")
    monkeypatch.setattr(config_module, "get_config_path", lambda: str(path))

    assert load_config()["count_tokens"] is True


def test_validate_coerces_loose_values():
    clean, warnings = validate_config({"expand_dirs": "yes", "count_tokens": 0, "log_level": "debug"})

    assert clean["expand_dirs"] is True
    assert clean["count_tokens"] is False
    assert clean["log_level"] == "DEBUG"
    assert len(warnings) == 2


def test_validate_resets_invalid_values():
    clean, warnings = validate_config({"output_path": 5, "log_level": "LOUD"})

    assert clean["output_path"] == ""
    assert clean["log_level"] == "WARNING"
    assert len(warnings) == 2


def test_validate_strict_raises():
    with pytest.raises(TypeError):
        validate_config({"expand_dirs": "maybe"}, strict=True)


def test_validate_non_dict_uses_defaults():
    clean, warnings = validate_config(None)

    assert clean == get_default_config()
    assert warnings
