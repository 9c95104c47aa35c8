"""
Tests for the hockeystick entry point.
"""
import logging

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend for tests
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

import hockeystick  # noqa: E402
from hs_core.constants import NO_CONNECTIVITY_MESSAGE  # noqa: E402
from hs_data.cache_store import CacheStore  # noqa: E402
from hs_data.connectivity import ConnectivityResult  # noqa: E402
from hs_data.fetcher import DatasetFetcher  # noqa: E402
from hs_data.sources import PALEO  # noqa: E402
from hs_data.tests.fakes import CO2_ROWS, TEMP_ROWS, FakeSession, make_file  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_hockeystick_logger():
    logger = logging.getLogger("hockeystick")
    logger.handlers.clear()
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "logging:\n"
        f"  log_file: {tmp_path / 'hockeystick.log'}\n"
        "runtime_paths:\n"
        f"  cache_dir: {tmp_path / 'cache'}\n"
        f"  out_dir: {tmp_path / 'out'}\n"
    )
    return path


@pytest.fixture
def paleo_session():
    co2_url, temp_url = (source.url for source in PALEO.sources)
    return FakeSession({
        co2_url: make_file(21, CO2_ROWS),
        temp_url: make_file(60, TEMP_ROWS),
    })


@pytest.fixture
def use_session(monkeypatch):
    def _install(session):
        monkeypatch.setattr(hockeystick, 'DatasetFetcher', lambda: DatasetFetcher(session=session))
    return _install


def test_main_argument_error_returns_2(config_file, capsys):
    assert hockeystick.main(["--config", str(config_file), "--dataset", "nope"]) == 2
    assert "ERROR: Unknown dataset" in capsys.readouterr().err


def test_main_fetches_writes_cache_and_plots(tmp_path, config_file, paleo_session, use_session, capsys):
    use_session(paleo_session)

    assert hockeystick.main(["--config", str(config_file), "--write-cache"]) == 0
    assert (tmp_path / 'cache' / 'paleo.cache').exists()
    assert (tmp_path / 'out' / 'paleo.png').exists()
    assert "Saved chart to" in capsys.readouterr().out


def test_main_no_plot_and_cache_from_config(tmp_path, config_file, paleo_session, use_session):
    config_file.write_text(config_file.read_text() + "cache:\n  write_cache: true\n")
    use_session(paleo_session)

    assert hockeystick.main(["--config", str(config_file), "--no-plot"]) == 0
    assert (tmp_path / 'cache' / 'paleo.cache').exists()
    assert not (tmp_path / 'out').exists()


def test_main_uses_cache_unless_refresh(tmp_path, config_file, paleo_session, use_session):
    CacheStore(tmp_path / 'cache').write(
        'paleo', pd.DataFrame({'age_ice': [1], 'name': ['co2'], 'value': [280.0]})
    )
    use_session(paleo_session)

    assert hockeystick.main(["--config", str(config_file), "--no-plot"]) == 0
    assert paleo_session.calls == []

    assert hockeystick.main(["--config", str(config_file), "--no-plot", "--refresh"]) == 0
    assert len(paleo_session.calls) == 4


def test_main_offline_returns_1(config_file, use_session, capsys):
    use_session(FakeSession(unreachable={source.url for source in PALEO.sources}))

    assert hockeystick.main(["--config", str(config_file)]) == 1
    assert NO_CONNECTIVITY_MESSAGE in capsys.readouterr().out


def test_main_cache_details(tmp_path, config_file, capsys):
    CacheStore(tmp_path / 'cache').write(
        'paleo', pd.DataFrame({'age_ice': [1], 'name': ['co2'], 'value': [280.0]})
    )

    assert hockeystick.main(["--config", str(config_file), "--cache-details"]) == 0
    assert "paleo" in capsys.readouterr().out


def test_main_clear_cache(tmp_path, config_file, capsys):
    store = CacheStore(tmp_path / 'cache')
    store.write('paleo', pd.DataFrame({'age_ice': [1], 'name': ['co2'], 'value': [280.0]}))
    store.write('other', pd.DataFrame({'age_ice': [1], 'name': ['co2'], 'value': [280.0]}))

    assert hockeystick.main(["--config", str(config_file), "--clear-cache", "--dataset", "paleo"]) == 0
    assert store.read('paleo') is None
    assert store.read('other') is not None

    assert hockeystick.main(["--config", str(config_file), "--clear-cache"]) == 0
    assert store.entries() == []
    assert "Removed" in capsys.readouterr().out


def test_main_clear_cache_abbreviated_dataset_keeps_other_entries(tmp_path, config_file):
    store = CacheStore(tmp_path / 'cache')
    store.write('paleo', pd.DataFrame({'age_ice': [1], 'name': ['co2'], 'value': [280.0]}))
    store.write('other', pd.DataFrame({'age_ice': [1], 'name': ['co2'], 'value': [280.0]}))

    assert hockeystick.main(["--config", str(config_file), "--clear-cache", "--data", "paleo"]) == 0
    assert store.read('paleo') is None
    assert store.read('other') is not None


def test_main_check_connection(config_file, monkeypatch, capsys):
    class FakeProbe:
        def __init__(self, reachable):
            self.reachable = reachable

        def check(self, url):
            return ConnectivityResult(url=url, reachable=self.reachable, reason=None if self.reachable else "offline")

    monkeypatch.setattr(hockeystick, 'ConnectivityProbe', lambda: FakeProbe(True))
    assert hockeystick.main(["--config", str(config_file), "--check-connection"]) == 0
    assert "Connected: https://www.google.com" in capsys.readouterr().out

    monkeypatch.setattr(hockeystick, 'ConnectivityProbe', lambda: FakeProbe(False))
    assert hockeystick.main(["--config", str(config_file), "--check-connection"]) == 1
    assert "Not connected" in capsys.readouterr().out


def test_main_verbose_sets_console_debug(config_file, paleo_session, use_session):
    use_session(paleo_session)

    hockeystick.main(["--config", str(config_file), "--no-plot", "-v"])
    console = [
        h for h in logging.getLogger("hockeystick").handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ][0]
    assert console.level == logging.DEBUG
