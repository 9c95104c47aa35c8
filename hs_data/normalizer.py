"""Join raw tables and reshape them into long (key, series, value) form."""

from __future__ import annotations

import logging
from functools import reduce

import pandas as pd

logger = logging.getLogger("hockeystick")


class DatasetNormalizer:
    """Full outer join, column projection and wide-to-long reshape."""

    def __init__(
        self,
        key_column: str,
        value_columns: tuple[str, ...] | list[str],
        join_on: tuple[str, ...] | list[str] | None = None,
        series_column: str = 'name',
        value_column: str = 'value',
    ) -> None:
        self.key_column = key_column
        self.value_columns = list(value_columns)
        self.join_on = list(join_on) if join_on is not None else None
        self.series_column = series_column
        self.value_column = value_column

    def _join_pair(self, left: pd.DataFrame, right: pd.DataFrame) -> pd.DataFrame:
        if self.join_on is not None:
            on = self.join_on
        else:
            on = [column for column in left.columns if column in right.columns]
        if not on:
            raise ValueError("Cannot join tables without a shared column")
        logger.debug(f"Full join on {on}")
        return pd.merge(left, right, how='outer', on=on)

    def join(self, tables: list[pd.DataFrame]) -> pd.DataFrame:
        """Full outer join of all tables, left to right."""
        if not tables:
            raise ValueError("At least one table is required")
        return reduce(self._join_pair, tables)

    def project(self, df: pd.DataFrame) -> pd.DataFrame:
        """Keep the key column plus the value columns."""
        columns = [self.key_column, *self.value_columns]
        missing = [column for column in columns if column not in df.columns]
        if missing:
            raise KeyError(f"Missing columns after join: {', '.join(missing)}")
        return df[columns]

    def to_long(self, df: pd.DataFrame) -> pd.DataFrame:
        """Melt value columns into series/value rows and drop null values."""
        long_df = df.melt(
            id_vars=[self.key_column],
            value_vars=self.value_columns,
            var_name=self.series_column,
            value_name=self.value_column,
        )
        long_df = long_df.dropna(subset=[self.value_column]).reset_index(drop=True)
        long_df[self.value_column] = long_df[self.value_column].astype(float)
        return long_df

    def normalize(self, tables: list[pd.DataFrame]) -> pd.DataFrame:
        """Join, project and reshape raw tables into a long-format table."""
        long_df = self.to_long(self.project(self.join(tables)))
        logger.info(f"Normalized {len(tables)} table(s) into {len(long_df)} rows")
        return long_df
