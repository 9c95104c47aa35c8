"""Read-through/write-through file cache for normalized dataset tables."""

from __future__ import annotations

import logging
import pickle
from pathlib import Path

import pandas as pd

logger = logging.getLogger("hockeystick")

CACHE_SUFFIX = '.cache'
CACHE_DETAIL_COLUMNS = ['dataset_id', 'path', 'size_bytes', 'modified']


class CacheStore:
    """Read/write façade for per-dataset cache files under one cache root."""

    def __init__(self, cache_root: Path | str) -> None:
        self._cache_root = Path(cache_root)

    @property
    def cache_root(self) -> Path:
        return self._cache_root

    @staticmethod
    def _validate_dataset_id(dataset_id: str) -> str:
        if not isinstance(dataset_id, str) or not dataset_id.strip():
            raise ValueError("dataset_id must be a non-empty string")
        if dataset_id in ('.', '..') or '/' in dataset_id or '\\' in dataset_id:
            raise ValueError(f"dataset_id '{dataset_id}' must be a plain name")
        return dataset_id

    def path_for(self, dataset_id: str) -> Path:
        """Build the cache file path for a dataset."""
        return self._cache_root / f"{self._validate_dataset_id(dataset_id)}{CACHE_SUFFIX}"

    def read(self, dataset_id: str) -> pd.DataFrame | None:
        """
        Read a cached table.

        Returns:
            The cached DataFrame, or None when no entry exists.
        """
        cache_file = self.path_for(dataset_id)
        if not cache_file.exists():
            logger.debug(f"No cache entry for '{dataset_id}' at {cache_file}")
            return None

        df = pd.read_pickle(cache_file)
        logger.info(f"Loaded '{dataset_id}' from cache {cache_file}")
        return df

    def write(self, dataset_id: str, df: pd.DataFrame) -> Path:
        """Write a table to the cache, replacing any existing entry."""
        cache_file = self.path_for(dataset_id)
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        df.to_pickle(cache_file, compression=None, protocol=pickle.HIGHEST_PROTOCOL)
        logger.info(f"Saved '{dataset_id}' to cache {cache_file}")
        return cache_file

    def entries(self) -> list[Path]:
        """List cache files sorted by dataset id."""
        if not self._cache_root.is_dir():
            return []
        return sorted(
            (p for p in self._cache_root.iterdir() if p.is_file() and p.suffix == CACHE_SUFFIX),
            key=lambda p: p.stem,
        )

    def details(self) -> pd.DataFrame:
        """Summarize cache entries with size and last update time."""
        rows = []
        for cache_file in self.entries():
            stat = cache_file.stat()
            rows.append({
                'dataset_id': cache_file.stem,
                'path': str(cache_file),
                'size_bytes': stat.st_size,
                'modified': pd.Timestamp(stat.st_mtime, unit='s'),
            })
        return pd.DataFrame(rows, columns=CACHE_DETAIL_COLUMNS)

    def delete(self, dataset_id: str | None = None) -> list[Path]:
        """
        Delete one cache entry, or every entry when ``dataset_id`` is None.

        Returns:
            Paths that were removed.
        """
        if dataset_id is None:
            targets = self.entries()
        else:
            cache_file = self.path_for(dataset_id)
            targets = [cache_file] if cache_file.exists() else []

        for cache_file in targets:
            cache_file.unlink()
            logger.info(f"Deleted cache entry {cache_file}")
        return targets
