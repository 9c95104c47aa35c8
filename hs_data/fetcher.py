"""Download and positional parsing of remote whitespace-delimited tables."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pandas as pd
import requests

from .connectivity import ConnectivityProbe
from .sources import SourceSpec

logger = logging.getLogger("hockeystick")

DOWNLOAD_CHUNK_SIZE = 64 * 1024


class SchemaMismatchError(ValueError):
    """Parsed column count differs from the configured column names."""

    def __init__(self, url: str, expected: int, actual: int):
        self.url = url
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Schema mismatch for {url}: expected {expected} columns, parsed {actual}"
        )


def _widest_row(path: Path, skip_lines: int) -> int:
    """Largest whitespace-separated field count among the data rows."""
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        rows = f.read().splitlines()[skip_lines:]
    return max((len(row.split()) for row in rows), default=0)


def parse_raw_table(path: Path, source: SourceSpec) -> pd.DataFrame:
    """
    Parse a downloaded file into a DataFrame named by ``source.column_names``.

    Args:
        path: Local copy of the remote file.
        source: Descriptor giving skip count and column names.

    Returns:
        DataFrame with one column per configured name.

    Raises:
        SchemaMismatchError: If the column count differs from the configured names.
    """
    try:
        df = pd.read_csv(path, sep=r'\s+', header=None, skiprows=source.skip_lines)
    except pd.errors.ParserError as exc:
        # ragged rows: field count differs from the first data row
        raise SchemaMismatchError(source.url, source.expected_columns, _widest_row(path, source.skip_lines)) from exc
    if df.shape[1] != source.expected_columns:
        raise SchemaMismatchError(source.url, source.expected_columns, df.shape[1])
    df.columns = list(source.column_names)
    return df


class DatasetFetcher:
    """Probe, download and parse each remote source of a dataset in sequence."""

    def __init__(
        self,
        session: requests.Session | None = None,
        probe: ConnectivityProbe | None = None,
    ) -> None:
        self.session = requests.Session() if session is None else session
        self.probe = ConnectivityProbe(session=self.session) if probe is None else probe

    def download(self, url: str, dest: Path) -> Path:
        """Stream ``url`` into ``dest``; HTTP errors propagate."""
        with self.session.get(url, stream=True) as response:
            response.raise_for_status()
            with open(dest, 'wb') as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        logger.debug(f"Downloaded {url} to {dest}")
        return dest

    def fetch(self, sources: tuple[SourceSpec, ...] | list[SourceSpec]) -> list[pd.DataFrame] | None:
        """
        Fetch every source in order.

        Returns:
            One DataFrame per source, or None when a source is unreachable.
        """
        tables: list[pd.DataFrame] = []
        with tempfile.TemporaryDirectory(prefix="hockeystick_") as temp_dir:
            for index, source in enumerate(sources):
                result = self.probe.check(source.url)
                if not result:
                    logger.warning(f"Cannot reach {source.url}: {result.reason}")
                    return None

                dest = Path(temp_dir) / f"source_{index}.txt"
                self.download(source.url, dest)
                df = parse_raw_table(dest, source)
                logger.info(f"Parsed {len(df)} rows from {source.url}")
                tables.append(df)
        return tables
