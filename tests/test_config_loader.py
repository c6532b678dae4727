"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wordscan.config_loader import CONFIG_FILENAME, AppConfig, build_config, load_config
from wordscan.errors import ConfigurationError
from wordscan.file_loader import DEFAULT_EXTENSIONS


def _write_config(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults_when_no_config_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config()
    assert cfg == AppConfig()
    assert cfg.loader.extensions == DEFAULT_EXTENSIONS
    assert cfg.loader.throttle_seconds == 0.05
    assert cfg.mask.char == "*"
    assert cfg.output.directory == Path("FilteredFiles")
    assert cfg.output.report == Path("Report.txt")
    assert cfg.output.layout == "flat"


def test_picks_up_config_in_working_directory(tmp_path, monkeypatch):
    _write_config(tmp_path / CONFIG_FILENAME, {"mask": {"char": "#"}})
    monkeypatch.chdir(tmp_path)
    assert load_config().mask.char == "#"


def test_explicit_config_path(tmp_path):
    path = _write_config(
        tmp_path / "custom.json",
        {
            "scan": {"extensions": [".md"], "max_file_size_bytes": 1024, "binary_detection": False,
                     "throttle_seconds": 0},
            "output": {"directory": "masked", "layout": "mirror", "report": "out/report.txt"},
        },
    )
    cfg = load_config(path)
    assert cfg.loader.extensions == frozenset({".md"})
    assert cfg.loader.max_file_size == 1024
    assert cfg.loader.binary_detection is False
    assert cfg.output.layout == "mirror"
    assert cfg.output.report == Path("out/report.txt")


def test_missing_explicit_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.json")


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


@pytest.mark.parametrize("raw", [
    [],
    {"scan": {"extensions": []}},
    {"scan": {"throttle_seconds": "fast"}},
    {"mask": {"char": "**"}},
    {"output": {"layout": "tree"}},
])
def test_invalid_values_raise_configuration_error(raw):
    with pytest.raises(ConfigurationError):
        build_config(raw)
