"""Core shared helpers for hockeystick packages."""

from .config import (
    CoreConfigService,
    load_cache_settings,
    load_connectivity_settings,
    load_plot_text_config,
    load_runtime_paths,
    resolve_cache_root,
)
from .constants import DEFAULT_PROBE_URL, NO_CONNECTIVITY_MESSAGE

__all__ = [
    "CoreConfigService",
    "DEFAULT_PROBE_URL",
    "NO_CONNECTIVITY_MESSAGE",
    "load_cache_settings",
    "load_connectivity_settings",
    "load_plot_text_config",
    "load_runtime_paths",
    "resolve_cache_root",
]
