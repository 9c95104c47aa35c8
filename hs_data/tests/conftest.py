"""Shared fixtures for hs_data tests."""

import pytest

from hs_data.sources import DatasetSpec, SourceSpec

from .fakes import CO2_ROWS, CO2_URL, TEMP_ROWS, TEMP_URL, FakeSession, make_file


@pytest.fixture
def small_dataset():
    """Two-source dataset mirroring the paleo layout with short headers."""
    return DatasetSpec(
        dataset_id='vostok_test',
        sources=(
            SourceSpec(url=CO2_URL, skip_lines=3, column_names=('depth', 'age_ice', 'age_air', 'co2')),
            SourceSpec(url=TEMP_URL, skip_lines=5, column_names=('depth', 'age_ice', 'deuterium', 'temp')),
        ),
        key_column='age_ice',
        value_columns=('co2', 'temp'),
    )


@pytest.fixture
def vostok_payloads():
    return {
        CO2_URL: make_file(3, CO2_ROWS),
        TEMP_URL: make_file(5, TEMP_ROWS),
    }


@pytest.fixture
def online_session(vostok_payloads):
    return FakeSession(vostok_payloads)
