"""Remote source descriptors and the dataset registry."""

from __future__ import annotations

from dataclasses import dataclass, field

ESS_DIVE_OBJECT_URL = "https://data.ess-dive.lbl.gov/catalog/d1/mn/v2/object"


@dataclass(frozen=True)
class SourceSpec:
    """
    One remote whitespace-delimited text file.

    Attributes:
        url: Download URL.
        skip_lines: Number of leading non-data lines.
        column_names: Names assigned positionally to the parsed columns.
    """

    url: str
    skip_lines: int
    column_names: tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'column_names', tuple(self.column_names))
        if not isinstance(self.skip_lines, int) or self.skip_lines < 0:
            raise ValueError(f"skip_lines must be a non-negative integer, got {self.skip_lines!r}")
        if not self.column_names:
            raise ValueError(f"No column names configured for {self.url}")
        if len(set(self.column_names)) != len(self.column_names):
            raise ValueError(f"Duplicate column names configured for {self.url}: {self.column_names}")

    @property
    def expected_columns(self) -> int:
        return len(self.column_names)


@dataclass(frozen=True)
class DatasetSpec:
    """
    Everything needed to fetch and normalize one dataset.

    Attributes:
        dataset_id: Short name, also used as the cache key.
        sources: Remote files, fetched in order.
        key_column: Column kept as the key of the long-format table.
        value_columns: Columns reshaped into (series label, value) rows.
        join_on: Join columns; None joins on every shared column.
        title: Human readable dataset title.
        references: Citation URLs for the data.
    """

    dataset_id: str
    sources: tuple[SourceSpec, ...]
    key_column: str
    value_columns: tuple[str, ...]
    join_on: tuple[str, ...] | None = None
    title: str = ""
    references: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'sources', tuple(self.sources))
        object.__setattr__(self, 'value_columns', tuple(self.value_columns))
        if self.join_on is not None:
            object.__setattr__(self, 'join_on', tuple(self.join_on))

        if not self.sources:
            raise ValueError(f"Dataset '{self.dataset_id}' has no sources")
        if not self.value_columns:
            raise ValueError(f"Dataset '{self.dataset_id}' has no value columns")

        available = {name for source in self.sources for name in source.column_names}
        required = [self.key_column, *self.value_columns, *(self.join_on or ())]
        missing = [name for name in required if name not in available]
        if missing:
            raise ValueError(
                f"Dataset '{self.dataset_id}' references columns not provided by any source: {', '.join(missing)}"
            )


PALEO = DatasetSpec(
    dataset_id='paleo',
    sources=(
        SourceSpec(
            url=f"{ESS_DIVE_OBJECT_URL}/ess-dive-457358fdc81d3a5-20180726T203952542",
            skip_lines=21,
            column_names=('depth', 'age_ice', 'age_air', 'co2'),
        ),
        SourceSpec(
            url=f"{ESS_DIVE_OBJECT_URL}/ess-dive-1e57f3f83864c10-20180717T104354142744",
            skip_lines=60,
            column_names=('depth', 'age_ice', 'deuterium', 'temp'),
        ),
    ),
    key_column='age_ice',
    value_columns=('co2', 'temp'),
    title='Vostok ice core CO2 and temperature',
    references=(
        'https://data.ess-dive.lbl.gov/datasets/doi:10.3334/CDIAC/ATG.009',
        'https://data.ess-dive.lbl.gov/datasets/doi:10.3334/CDIAC/CLI.006',
    ),
)

DATASETS = {
    PALEO.dataset_id: PALEO,
}


def get_dataset_spec(dataset_id: str) -> DatasetSpec:
    """Resolve a registered dataset descriptor by id."""
    try:
        return DATASETS[dataset_id]
    except KeyError as exc:
        allowed = ', '.join(sorted(DATASETS.keys()))
        raise ValueError(f"Unsupported dataset '{dataset_id}'. Allowed: {allowed}") from exc
