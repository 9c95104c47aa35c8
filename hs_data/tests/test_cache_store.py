"""
Tests for the dataset cache store.
"""
import pickle

import pandas as pd
import pytest

from hs_data.cache_store import CACHE_DETAIL_COLUMNS, CacheStore


@pytest.fixture
def long_table():
    return pd.DataFrame({
        'age_ice': [5679, 6828, 0, 5679],
        'name': ['co2', 'co2', 'temp', 'temp'],
        'value': [284.7, 272.8, 0.0, -0.81],
    })


def test_write_then_read_roundtrip(tmp_path, long_table):
    store = CacheStore(tmp_path / "cache")
    store.write('paleo', long_table)

    loaded = store.read('paleo')
    pd.testing.assert_frame_equal(loaded, long_table)


def test_path_is_deterministic(tmp_path):
    store = CacheStore(tmp_path)
    assert store.path_for('paleo') == tmp_path / 'paleo.cache'
    assert CacheStore(tmp_path).path_for('paleo') == store.path_for('paleo')
    assert store.cache_root == tmp_path


def test_read_missing_entry_returns_none(tmp_path):
    assert CacheStore(tmp_path / "absent").read('paleo') is None


def test_write_creates_cache_root(tmp_path, long_table):
    root = tmp_path / "nested" / "cache"
    path = CacheStore(root).write('paleo', long_table)
    assert path == root / 'paleo.cache'
    assert path.exists()


def test_write_overwrites_existing_entry(tmp_path, long_table):
    store = CacheStore(tmp_path)
    store.write('paleo', long_table)
    replacement = long_table.iloc[:1].reset_index(drop=True)
    store.write('paleo', replacement)
    pd.testing.assert_frame_equal(store.read('paleo'), replacement)


def test_write_is_byte_stable(tmp_path, long_table):
    store = CacheStore(tmp_path)
    first = store.write('paleo', long_table).read_bytes()
    second = store.write('paleo', long_table.copy()).read_bytes()
    assert first == second


def test_corrupt_cache_file_raises(tmp_path):
    store = CacheStore(tmp_path)
    store.path_for('paleo').write_bytes(b"\xffthis is not a pickle")
    with pytest.raises(pickle.UnpicklingError):
        store.read('paleo')


@pytest.mark.parametrize("bad_id", ["", "  ", "../paleo", "a/b", "..", "a\\b"])
def test_invalid_dataset_id_rejected(tmp_path, bad_id):
    with pytest.raises(ValueError):
        CacheStore(tmp_path).path_for(bad_id)


def test_details_lists_cache_entries_only(tmp_path, long_table):
    store = CacheStore(tmp_path)
    store.write('paleo', long_table)
    store.write('carbon', long_table.iloc[:2])
    (tmp_path / 'notes.txt').write_text("not a cache entry")

    details = store.details()
    assert list(details.columns) == CACHE_DETAIL_COLUMNS
    assert list(details['dataset_id']) == ['carbon', 'paleo']
    assert (details['size_bytes'] > 0).all()
    assert isinstance(details['modified'].iloc[0], pd.Timestamp)


def test_details_empty_when_root_missing(tmp_path):
    details = CacheStore(tmp_path / "absent").details()
    assert details.empty
    assert list(details.columns) == CACHE_DETAIL_COLUMNS


def test_delete_single_entry(tmp_path, long_table):
    store = CacheStore(tmp_path)
    store.write('paleo', long_table)
    store.write('carbon', long_table)

    removed = store.delete('paleo')
    assert removed == [tmp_path / 'paleo.cache']
    assert store.read('paleo') is None
    assert store.read('carbon') is not None


def test_delete_all_entries_keeps_other_files(tmp_path, long_table):
    store = CacheStore(tmp_path)
    store.write('paleo', long_table)
    store.write('carbon', long_table)
    other = tmp_path / 'notes.txt'
    other.write_text("keep me")

    removed = store.delete()
    assert sorted(p.name for p in removed) == ['carbon.cache', 'paleo.cache']
    assert store.entries() == []
    assert other.exists()


def test_delete_missing_entry_is_noop(tmp_path):
    assert CacheStore(tmp_path).delete('paleo') == []
