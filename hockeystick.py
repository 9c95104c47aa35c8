"""
hockeystick: essential climate data retrieval and visualization.

Main entry point. Fetches a dataset through the cache/fetch pipeline and
renders its chart.
"""

import logging
import sys

import matplotlib.pyplot as plt

from cli import CLIError, build_cache_details_report, parse_args
from hs_core.config import CoreConfigService
from hs_data.cache_store import CacheStore
from hs_data.connectivity import ConnectivityProbe
from hs_data.fetcher import DatasetFetcher
from hs_data.pipeline import DatasetPipeline
from hs_data.sources import get_dataset_spec
from hs_plot.visualizer import plot_paleo
from logging_config import get_logger, setup_logging, sync_http_logger_visibility

DATASET_RENDERERS = {
    'paleo': plot_paleo,
}


def _configure_console_logging(args, logger) -> None:
    """Apply console verbosity rules based on CLI flags."""
    hs_logger = logging.getLogger("hockeystick")
    if args.verbose:
        for handler in hs_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(logging.DEBUG)
        sync_http_logger_visibility(console_is_debug=True)
        logger.debug("Verbose mode enabled (console output at DEBUG level)")
    elif args.quiet:
        for handler in hs_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(logging.ERROR)


def _handle_info_commands(args, config_service: CoreConfigService, cache_store: CacheStore) -> int | None:
    """Run --check-connection, --cache-details or --clear-cache; return an exit code when handled."""
    if args.check_connection:
        probe_url = config_service.load_connectivity_settings()["probe_url"]
        result = ConnectivityProbe().check(probe_url)
        if result:
            print(f"Connected: {probe_url}")
            return 0
        print(f"Not connected: {probe_url} ({result.reason})")
        return 1

    if args.cache_details:
        print(build_cache_details_report(cache_store))
        return 0

    if args.clear_cache:
        removed = cache_store.delete(args.dataset if args.dataset_explicit else None)
        if removed:
            for path in removed:
                print(f"Removed {path}")
        else:
            print(f"Nothing to remove in {cache_store.cache_root}")
        return 0

    return None


def _run_pipeline(args, config_service: CoreConfigService, cache_store: CacheStore, logger) -> int:
    """Fetch the selected dataset and render it."""
    cache_settings = config_service.load_cache_settings()
    use_cache = cache_settings['use_cache'] and not args.refresh
    write_cache = cache_settings['write_cache'] if args.write_cache is None else args.write_cache

    pipeline = DatasetPipeline(
        get_dataset_spec(args.dataset),
        cache_store,
        fetcher=DatasetFetcher(),
    )
    df = pipeline.fetch(use_cache=use_cache, write_cache=write_cache)
    if df is None:
        return 1
    logger.info(f"Retrieved {len(df)} rows for '{args.dataset}'")

    renderer = DATASET_RENDERERS.get(args.dataset)
    if not args.plot or renderer is None:
        return 0

    out_file = args.out_dir / f"{args.dataset}.png"
    fig = renderer(
        df,
        show=args.show,
        out_file=out_file,
        plot_text=config_service.load_plot_text_config(),
    )
    plt.close(fig)
    print(f"Saved chart to {out_file}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for hockeystick.

    Parses command-line arguments, handles cache maintenance commands, then
    retrieves the selected dataset and plots it.
    """
    try:
        args = parse_args(argv)
    except CLIError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    setup_logging(args.config)
    logger = get_logger("hockeystick")
    _configure_console_logging(args, logger)

    config_service = CoreConfigService(args.config)
    cache_store = CacheStore(args.cache_dir)
    handled = _handle_info_commands(args, config_service, cache_store)
    if handled is not None:
        return handled

    return _run_pipeline(args, config_service, cache_store, logger)


if __name__ == "__main__":
    raise SystemExit(main())
