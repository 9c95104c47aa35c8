"""Data-layer package for hockeystick (fetch, normalize and cache pipeline)."""

from .cache_store import CacheStore
from .connectivity import ConnectivityProbe, ConnectivityResult, is_connected
from .fetcher import DatasetFetcher, SchemaMismatchError, parse_raw_table
from .normalizer import DatasetNormalizer
from .pipeline import DatasetPipeline, fetch_dataset, get_paleo
from .sources import DATASETS, PALEO, DatasetSpec, SourceSpec, get_dataset_spec

__all__ = [
    "CacheStore",
    "ConnectivityProbe",
    "ConnectivityResult",
    "DATASETS",
    "DatasetFetcher",
    "DatasetNormalizer",
    "DatasetPipeline",
    "DatasetSpec",
    "PALEO",
    "SchemaMismatchError",
    "SourceSpec",
    "fetch_dataset",
    "get_dataset_spec",
    "get_paleo",
    "is_connected",
    "parse_raw_table",
]
