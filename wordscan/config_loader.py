"""
Configuration loader for WordScan.

Locates and parses wordscan.json, constructs all sub-configs,
and provides a single AppConfig object consumed by all modules.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from wordscan.errors import ConfigurationError
from wordscan.file_loader import LoaderConfig, build_loader_config
from wordscan.matcher import MaskConfig, build_mask_config
from wordscan.scanner import OutputConfig, build_output_config

CONFIG_FILENAME = "wordscan.json"


@dataclass
class AppConfig:
    """Top-level configuration object aggregating all sub-configs."""

    loader: LoaderConfig = field(default_factory=LoaderConfig)
    mask: MaskConfig = field(default_factory=MaskConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def default_config() -> AppConfig:
    return AppConfig()


def build_config(raw: dict) -> AppConfig:
    """Build an AppConfig from a parsed config dictionary."""
    if not isinstance(raw, dict):
        raise ConfigurationError("Config root must be a JSON object")
    try:
        return AppConfig(
            loader=build_loader_config(raw),
            mask=build_mask_config(raw.get("mask", {})),
            output=build_output_config(raw.get("output", {})),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid config value: {exc}") from exc


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    Load and parse a wordscan.json configuration file.

    Without an explicit path, wordscan.json in the working directory is used
    if present, otherwise the built-in defaults.
    """
    if config_path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if not candidate.is_file():
            return default_config()
        config_path = candidate

    if not config_path.is_file():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Malformed config {config_path}: {exc}") from exc

    return build_config(raw)
