"""
CLI utilities for hockeystick.

Handles command-line argument parsing and cache reporting.
"""

from __future__ import annotations

import argparse
import difflib
import logging
from pathlib import Path

from hs_core.config import load_runtime_paths as core_load_runtime_paths
from hs_data.cache_store import CacheStore
from hs_data.sources import DATASETS

logger = logging.getLogger("hockeystick")

__version__ = "1.0.0"
DEFAULT_DATASET = "paleo"


class CLIError(ValueError):
    """User-facing CLI validation error with optional hint text."""

    def __init__(self, message: str, hint: str | None = None):
        self.message = message
        self.hint = hint
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class FriendlyArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises CLIError instead of exiting immediately."""

    def error(self, message: str) -> None:
        hint = None
        if "unrecognized arguments" in message:
            if "--no-cache" in message or "--use-cache" in message:
                hint = "Use --refresh to ignore cached data."
            elif "--cache_dir" in message:
                hint = "Use --cache-dir, not --cache_dir."
        usage = self.format_usage().strip()
        raise CLIError(f"Argument error: {message}\n{usage}", hint=hint)


def _suggest_values(value: str, options: list[str], max_suggestions: int = 5) -> str | None:
    """Return a short suggestion string from close matches."""
    matches = difflib.get_close_matches(value, options, n=max_suggestions, cutoff=0.5)
    if not matches:
        return None
    return ", ".join(matches)


def _resolve_runtime_path_defaults(argv: list[str] | None) -> tuple[Path, dict[str, str]]:
    """Resolve config path and runtime path defaults from CLI pre-parse."""
    config_probe = argparse.ArgumentParser(add_help=False)
    config_probe.add_argument("--config", type=Path, default=Path("config.yaml"))
    probe_args, _ = config_probe.parse_known_args(argv)
    config_path = probe_args.config

    try:
        runtime_paths = core_load_runtime_paths(config_path)
    except Exception as exc:
        raise CLIError(
            f"Failed to load runtime_paths from {config_path}: {exc}",
            "Fix config.yaml runtime_paths values or provide a valid --config path.",
        )

    return config_path, runtime_paths


def validate_dataset(dataset_id: str) -> str:
    """Check a dataset id against the registry."""
    if dataset_id in DATASETS:
        return dataset_id
    suggestion = _suggest_values(dataset_id, sorted(DATASETS))
    hint = f"Did you mean: {suggestion}?" if suggestion else f"Available: {', '.join(sorted(DATASETS))}"
    raise CLIError(f"Unknown dataset '{dataset_id}'.", hint)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments for hockeystick.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    config_path_default, runtime_paths = _resolve_runtime_path_defaults(argv)

    parser = FriendlyArgumentParser(
        prog="hockeystick",
        description="Download, cache and plot essential climate data.",
        epilog="""
Examples:
  %(prog)s                          # Vostok chart from cache if available
  %(prog)s --refresh --write-cache  # Re-download and update the cache
  %(prog)s --cache-details          # List cached datasets
  %(prog)s --clear-cache            # Remove all cached datasets
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    data_group = parser.add_argument_group("data selection")
    data_group.add_argument(
        "-d", "--dataset",
        type=str,
        default=None,
        help=f"Dataset to fetch (available: {', '.join(sorted(DATASETS))}). Default: {DEFAULT_DATASET}"
    )

    cache_group = parser.add_argument_group("cache options")
    cache_group.add_argument(
        "-r", "--refresh",
        action="store_true",
        help="Ignore cached data and download again"
    )
    cache_group.add_argument(
        "-w", "--write-cache",
        dest="write_cache",
        action="store_true",
        default=None,
        help="Write downloaded data to cache (default: cache.write_cache in config)"
    )
    cache_group.add_argument(
        "--cache-dir",
        type=Path,
        default=Path(runtime_paths["cache_dir"]),
        help=f"Dataset cache directory (default: {runtime_paths['cache_dir']})"
    )
    cache_group.add_argument(
        "--check-connection",
        action="store_true",
        help="Probe the configured connectivity URL and exit"
    )
    cache_group.add_argument(
        "--cache-details",
        action="store_true",
        help="List cached datasets and exit"
    )
    cache_group.add_argument(
        "--clear-cache",
        action="store_true",
        help="Delete cached data (the selected --dataset only if given explicitly) and exit"
    )

    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "--out-dir",
        type=Path,
        default=Path(runtime_paths["out_dir"]),
        help=f"Output directory for plots (default: {runtime_paths['out_dir']})"
    )
    output_group.add_argument(
        "--config",
        type=Path,
        default=config_path_default,
        help=f"Path to config YAML file (default: {config_path_default})"
    )
    output_group.add_argument(
        "-s", "--show",
        action="store_true",
        help="Show the chart interactively after generation"
    )
    output_group.add_argument(
        "--no-plot",
        dest="plot",
        action="store_false",
        help="Fetch data only; do not render a chart"
    )

    advanced_group = parser.add_argument_group("advanced options")
    advanced_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress console output except errors (log file unaffected)"
    )
    advanced_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose console output (DEBUG level, log file always at DEBUG)"
    )

    args = parser.parse_args(argv)
    if args.quiet and args.verbose:
        raise CLIError("--quiet and --verbose cannot be combined.")
    args.dataset_explicit = args.dataset is not None
    args.dataset = validate_dataset(DEFAULT_DATASET if args.dataset is None else args.dataset)
    args.cache_dir = args.cache_dir.expanduser()
    return args


def build_cache_details_report(cache_store: CacheStore) -> str:
    """Render cached dataset details as text."""
    details = cache_store.details()
    if details.empty:
        return f"No cached datasets in {cache_store.cache_root}"

    lines = [f"Cached datasets in {cache_store.cache_root}:"]
    for row in details.itertuples(index=False):
        modified = row.modified.strftime('%Y-%m-%d %H:%M:%S')
        lines.append(f"  {row.dataset_id:<12} {row.size_bytes:>10} bytes  updated {modified}")
    return "\n".join(lines)
