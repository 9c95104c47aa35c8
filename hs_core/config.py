"""Configuration helpers shared across CLI, data and plotting layers."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .constants import (
    DEFAULT_CACHE_SETTINGS,
    DEFAULT_CONNECTIVITY_SETTINGS,
    DEFAULT_PLOT_TEXT,
    DEFAULT_RUNTIME_PATHS,
)

logger = logging.getLogger("hockeystick")


def _load_config_document(config_file: Path) -> dict:
    """Load the YAML config document, treating a missing file as empty."""
    config_file = Path(config_file)
    if not config_file.exists():
        logger.debug(f"Config file {config_file} not found; using defaults")
        return {}

    with open(config_file, 'r') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Invalid config document in {config_file}; expected mapping.")
    return config


def _get_section(config: dict, section: str, config_file: Path) -> dict:
    value = config.get(section, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Invalid {section} section in {config_file}; expected mapping.")
    return value


class CoreConfigService:
    """Stateful access wrapper for core config helpers."""

    def __init__(self, config_file: Path = Path("config.yaml")) -> None:
        self.config_file = config_file

    def load_runtime_paths(self) -> dict[str, str]:
        return load_runtime_paths(self.config_file)

    def load_cache_settings(self) -> dict[str, bool]:
        return load_cache_settings(self.config_file)

    def load_connectivity_settings(self) -> dict[str, str]:
        return load_connectivity_settings(self.config_file)

    def load_plot_text_config(self) -> dict[str, str]:
        return load_plot_text_config(self.config_file)

    def resolve_cache_root(self, cache_dir: Path | str | None = None) -> Path:
        return resolve_cache_root(self.config_file, cache_dir)


def load_runtime_paths(config_file: Path = Path("config.yaml")) -> dict[str, str]:
    """Load runtime path defaults from config YAML.

    Paths are read from top-level ``runtime_paths`` and merged with minimal
    defaults when keys are missing.
    """
    paths = DEFAULT_RUNTIME_PATHS.copy()
    config = _load_config_document(config_file)
    runtime_paths = _get_section(config, 'runtime_paths', config_file)

    for key in DEFAULT_RUNTIME_PATHS:
        if key in runtime_paths:
            value = runtime_paths[key]
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"runtime_paths.{key} must be a non-empty string")
            paths[key] = value.strip()

    return paths


def load_cache_settings(config_file: Path = Path("config.yaml")) -> dict[str, bool]:
    """Load cache read/write switches from the top-level ``cache`` section."""
    settings = DEFAULT_CACHE_SETTINGS.copy()
    config = _load_config_document(config_file)
    cache = _get_section(config, 'cache', config_file)

    for key in DEFAULT_CACHE_SETTINGS:
        if key in cache:
            if not isinstance(cache[key], bool):
                raise ValueError(f"cache.{key} must be boolean")
            settings[key] = cache[key]

    return settings


def load_connectivity_settings(config_file: Path = Path("config.yaml")) -> dict[str, str]:
    """Load connectivity probe settings from the top-level ``connectivity`` section."""
    settings = DEFAULT_CONNECTIVITY_SETTINGS.copy()
    config = _load_config_document(config_file)
    connectivity = _get_section(config, 'connectivity', config_file)

    if 'probe_url' in connectivity:
        probe_url = connectivity['probe_url']
        if not isinstance(probe_url, str) or not probe_url.startswith(('http://', 'https://')):
            raise ValueError("connectivity.probe_url must be an http(s) URL")
        settings['probe_url'] = probe_url

    return settings


def load_plot_text_config(config_file: Path = Path("config.yaml")) -> dict[str, str]:
    """Load plot text overrides, filling unspecified keys from defaults."""
    plot_text = DEFAULT_PLOT_TEXT.copy()
    config = _load_config_document(config_file)
    overrides = _get_section(config, 'plot_text', config_file)

    unknown_keys = sorted(set(overrides) - set(DEFAULT_PLOT_TEXT))
    if unknown_keys:
        raise ValueError(f"Unknown plot_text keys in {config_file}: {', '.join(unknown_keys)}")

    for key, value in overrides.items():
        if not isinstance(value, str):
            raise ValueError(f"plot_text.{key} must be a string")
        plot_text[key] = value

    return plot_text


def resolve_cache_root(
    config_file: Path = Path("config.yaml"),
    cache_dir: Path | str | None = None,
) -> Path:
    """Resolve the dataset cache directory.

    An explicit ``cache_dir`` wins over ``runtime_paths.cache_dir``. ``~`` is
    expanded so the same directory is used by every process of a user.
    """
    if cache_dir is None:
        cache_dir = load_runtime_paths(config_file)['cache_dir']
    return Path(cache_dir).expanduser()
