from __future__ import annotations

import logging

import pytest

from instnoth.config import RunConfig, load_run_config
from instnoth.errors import ConfigError


def test_defaults_without_path():
    cfg = load_run_config(None)
    assert cfg.quick is False
    assert cfg.verbose is False
    assert cfg.skip_deps is False
    assert cfg.seed is None
    assert cfg.log_path is None
    assert cfg.log_level == logging.INFO


def test_load_yaml(tmp_path):
    p = tmp_path / "instnoth.yaml"
    p.write_text(
        "quick: true\nskip_deps: true\nseed: 42\nlogging:\n  path: logs/run.log\n  level: DEBUG\n",
        encoding="utf-8",
    )

    cfg = load_run_config(str(p))

    assert cfg.quick is True
    assert cfg.skip_deps is True
    assert cfg.seed == 42
    assert cfg.log_path == "logs/run.log"
    assert cfg.log_level == logging.DEBUG


def test_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yml"
    p.write_text("", encoding="utf-8")
    assert load_run_config(str(p)).raw == {}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_run_config(str(tmp_path / "nope.yaml"))


def test_wrong_suffix(tmp_path):
    p = tmp_path / "run.json"
    p.write_text("{}", encoding="utf-8")
    with pytest.raises(ConfigError, match="YAML"):
        load_run_config(str(p))


def test_invalid_yaml(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("quick: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid YAML"):
        load_run_config(str(p))


def test_bad_seed():
    with pytest.raises(ConfigError):
        RunConfig(raw={"seed": "abc"}).seed


def test_bad_log_level():
    with pytest.raises(ConfigError):
        RunConfig(raw={"logging": {"level": "loud"}}).log_level
