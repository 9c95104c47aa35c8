"""Centralized logging configuration for hockeystick.

Reads logging configuration from config.yaml.
"""

import logging
import sys
from pathlib import Path

import yaml


DEFAULT_LOGGING_SETTINGS = {
    'log_file': 'hockeystick.log',
    'console_level': 'WARNING',
    'file_mode': 'w',
    'suppress_http_loggers': True,
    'suppress_root_logger': True,
    'third_party_log_level': 'WARNING',
}

_HTTP_LOGGER_NAMES = (
    'urllib3',
    'urllib3.connectionpool',
    'requests',
    'matplotlib',
    'matplotlib.font_manager',
    'PIL',
)

_http_suppression_enabled = False


def _set_http_logger_levels(show_debug: bool) -> None:
    """Apply logger levels for the HTTP and plotting stack."""
    target_level = logging.DEBUG if show_debug else logging.WARNING
    for logger_name in _HTTP_LOGGER_NAMES:
        ext_logger = logging.getLogger(logger_name)
        ext_logger.setLevel(target_level)


def sync_http_logger_visibility(console_is_debug: bool) -> None:
    """Let HTTP/plotting library debug output through only in verbose mode."""
    if not _http_suppression_enabled:
        return
    _set_http_logger_levels(console_is_debug)


def _load_logging_settings(config_path: Path) -> dict:
    """Load and validate logging settings from config.yaml."""
    config = {}
    if Path(config_path).exists():
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}

    logging_config = config.get('logging', {})
    if not isinstance(logging_config, dict):
        raise ValueError(f"Invalid logging section in {config_path}; expected mapping.")

    settings = DEFAULT_LOGGING_SETTINGS.copy()
    settings.update(logging_config)

    console_level = str(settings['console_level']).upper()
    if not hasattr(logging, console_level):
        raise ValueError(f"Invalid logging.console_level '{settings['console_level']}'")
    settings['console_level'] = console_level

    third_party_level = str(settings['third_party_log_level']).upper()
    if not hasattr(logging, third_party_level):
        raise ValueError(f"Invalid logging.third_party_log_level '{settings['third_party_log_level']}'")
    settings['third_party_log_level'] = third_party_level

    if settings['file_mode'] not in ('w', 'a'):
        raise ValueError("logging.file_mode must be 'w' or 'a'")
    if not isinstance(settings['suppress_http_loggers'], bool):
        raise ValueError("logging.suppress_http_loggers must be boolean")
    if not isinstance(settings['suppress_root_logger'], bool):
        raise ValueError("logging.suppress_root_logger must be boolean")
    if not isinstance(settings['log_file'], str) or not settings['log_file'].strip():
        raise ValueError("logging.log_file must be a non-empty string")

    return settings


def setup_logging(config_path: Path = Path("config.yaml")) -> logging.Logger:
    """
    Configure logging using settings from config.yaml.

    A missing config file means default settings.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Configured logger instance.
    """
    global _http_suppression_enabled

    settings = _load_logging_settings(config_path)
    log_file = settings['log_file']
    console_level = settings['console_level']

    # Create logger
    logger = logging.getLogger("hockeystick")
    logger.setLevel(logging.DEBUG)  # Capture everything

    # Avoid adding handlers multiple times if called repeatedly
    if logger.handlers:
        return logger

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    # File handler (DEBUG level - captures everything)
    file_handler = logging.FileHandler(log_file, mode=settings['file_mode'], encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    # Console handler (WARNING level by default - only warnings and errors)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, console_level))
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    third_party_level = getattr(logging, settings['third_party_log_level'])
    _http_suppression_enabled = bool(settings['suppress_http_loggers'])
    if _http_suppression_enabled:
        sync_http_logger_visibility(console_is_debug=(console_level == 'DEBUG'))

    if settings['suppress_root_logger']:
        root_logger = logging.getLogger()
        root_logger.setLevel(third_party_level)

    return logger


def get_logger(name: str = "hockeystick") -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default: "hockeystick").

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
