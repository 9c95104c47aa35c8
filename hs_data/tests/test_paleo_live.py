"""Live ESS-DIVE integration test.

Opt-in and skipped by default. To run it, set:
    HOCKEYSTICK_RUN_LIVE=1
"""

from __future__ import annotations

import os

import pytest

from hs_data.pipeline import get_paleo


RUN_LIVE = os.environ.get("HOCKEYSTICK_RUN_LIVE", "").strip() == "1"


@pytest.mark.slow
@pytest.mark.integration
@pytest.mark.skipif(not RUN_LIVE, reason="Set HOCKEYSTICK_RUN_LIVE=1 to run live archive tests")
def test_live_paleo_fetch(tmp_path):
    """Download the real Vostok files and validate the normalized structure."""
    df = get_paleo(use_cache=False, write_cache=True, cache_root=tmp_path, config_path=tmp_path / "none.yaml")

    assert df is not None
    assert list(df.columns) == ['age_ice', 'name', 'value']
    assert set(df['name']) == {'co2', 'temp'}
    assert df['age_ice'].max() > 400000
    assert (tmp_path / 'paleo.cache').exists()
