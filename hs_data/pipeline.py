"""Cache, probe, fetch and normalize pipeline for registered datasets.

Preferred API is class-based (`DatasetPipeline`); `fetch_dataset` and
`get_paleo` wire it up from configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import requests

from hs_core.config import load_cache_settings, resolve_cache_root
from hs_core.constants import NO_CONNECTIVITY_MESSAGE

from .cache_store import CacheStore
from .fetcher import DatasetFetcher
from .normalizer import DatasetNormalizer
from .sources import PALEO, DatasetSpec, get_dataset_spec

logger = logging.getLogger("hockeystick")


class DatasetPipeline:
    """Return a dataset from cache or fetch, normalize and optionally cache it."""

    def __init__(
        self,
        spec: DatasetSpec,
        cache_store: CacheStore,
        fetcher: DatasetFetcher | None = None,
        status_reporter: Callable[[str], None] | None = print,
    ) -> None:
        self.spec = spec
        self.cache_store = cache_store
        self.fetcher = DatasetFetcher() if fetcher is None else fetcher
        self.status_reporter = status_reporter
        self.normalizer = DatasetNormalizer(
            key_column=spec.key_column,
            value_columns=spec.value_columns,
            join_on=spec.join_on,
        )

    def _report(self, message: str) -> None:
        if self.status_reporter is not None:
            self.status_reporter(message)

    def fetch(self, use_cache: bool = True, write_cache: bool = False) -> pd.DataFrame | None:
        """
        Get the normalized table for this dataset.

        Args:
            use_cache: Return the cached table when one exists.
            write_cache: Store a freshly fetched table in the cache.

        Returns:
            Long-format DataFrame, or None when the remote archive is unreachable.
        """
        dataset_id = self.spec.dataset_id
        if use_cache:
            cached = self.cache_store.read(dataset_id)
            if cached is not None:
                return cached

        logger.info(f"Fetching '{dataset_id}' ({self.spec.title or 'untitled'}) from {len(self.spec.sources)} source(s)")
        tables = self.fetcher.fetch(self.spec.sources)
        if tables is None:
            logger.debug(f"No connectivity while fetching '{dataset_id}'")
            self._report(NO_CONNECTIVITY_MESSAGE)
            return None

        df = self.normalizer.normalize(tables)

        if write_cache:
            self.cache_store.write(dataset_id, df)
        return df


def fetch_dataset(
    dataset_id: str,
    use_cache: bool | None = None,
    write_cache: bool | None = None,
    cache_root: Path | str | None = None,
    config_path: Path = Path("config.yaml"),
    session: requests.Session | None = None,
    status_reporter: Callable[[str], None] | None = print,
) -> pd.DataFrame | None:
    """
    Fetch a registered dataset, filling unset options from config.yaml.

    Args:
        dataset_id: Registered dataset id (e.g. 'paleo').
        use_cache: Return cached data if available; None uses ``cache.use_cache``.
        write_cache: Write fetched data to cache; None uses ``cache.write_cache``.
        cache_root: Cache directory; None uses ``runtime_paths.cache_dir``.
        config_path: Config file consulted for unset options.
        session: Optional HTTP session shared by probe and download.
        status_reporter: Receives user-facing messages (default print).
    """
    spec = get_dataset_spec(dataset_id)
    cache_settings = load_cache_settings(config_path)
    if use_cache is None:
        use_cache = cache_settings['use_cache']
    if write_cache is None:
        write_cache = cache_settings['write_cache']

    pipeline = DatasetPipeline(
        spec,
        CacheStore(resolve_cache_root(config_path, cache_root)),
        fetcher=DatasetFetcher(session=session),
        status_reporter=status_reporter,
    )
    return pipeline.fetch(use_cache=use_cache, write_cache=write_cache)


def get_paleo(
    use_cache: bool = True,
    write_cache: bool | None = None,
    cache_root: Path | str | None = None,
    config_path: Path = Path("config.yaml"),
    session: requests.Session | None = None,
) -> pd.DataFrame | None:
    """
    Vostok ice core CO2 and temperature records.

    Returns a long-format DataFrame with columns ``age_ice`` (years before
    C.E.), ``name`` ('co2' in ppm or 'temp' in degrees C) and ``value``.

    Data are from Barnola et al. (2003), Historical Carbon Dioxide Record from
    the Vostok Ice Core, and Petit et al. (2000), Historical Isotopic
    Temperature Record from the Vostok Ice Core, distributed by the U.S. DOE
    ESS-DIVE archive.
    """
    return fetch_dataset(
        PALEO.dataset_id,
        use_cache=use_cache,
        write_cache=write_cache,
        cache_root=cache_root,
        config_path=config_path,
        session=session,
    )
