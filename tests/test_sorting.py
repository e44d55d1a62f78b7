"""Tests for the cycling sort controller."""

import pytest

from biblizap.engine.columns import UnknownColumnError
from biblizap.engine.sorting import SortController, SortState
from biblizap.engine.store import RecordStore
from biblizap.models.record import Record


@pytest.fixture
def store(records):
    return RecordStore(records)


def test_state_cycle():
    assert SortState.NONE.next() is SortState.ASCENDING
    assert SortState.ASCENDING.next() is SortState.DESCENDING
    assert SortState.DESCENDING.next() is SortState.NONE


def test_three_clicks_return_to_default_order(store, records):
    sorter = SortController(store)

    assert sorter.click("year_published") is SortState.ASCENDING
    assert [r.year_published for r in store] == [2015, 2018, 2020, 2022]

    assert sorter.click("year_published") is SortState.DESCENDING
    assert [r.year_published for r in store] == [2022, 2020, 2018, 2015]

    assert sorter.click("year_published") is SortState.NONE
    assert list(store) == records
    assert sorter.active is None


def test_click_resets_other_columns(store):
    sorter = SortController(store)
    sorter.click("title")
    sorter.click("citations")

    assert sorter.state_of("title") is SortState.NONE
    assert sorter.state_of("citations") is SortState.ASCENDING
    assert sorter.active == ("citations", SortState.ASCENDING)
    assert [r.citations for r in store] == [10, 45, 120, 300]


def test_switching_column_starts_its_cycle_fresh(store):
    sorter = SortController(store)
    sorter.click("score")
    sorter.click("score")
    sorter.click("journal")
    assert sorter.click("score") is SortState.ASCENDING


def test_each_click_emits_once(store):
    calls = []
    store.subscribe(lambda: calls.append(1))
    sorter = SortController(store)
    for _ in range(3):
        sorter.click("doi")
    assert len(calls) == 3


def test_unknown_column(store):
    with pytest.raises(UnknownColumnError):
        SortController(store).click("nope")


def test_reset_clears_indicators_only(store):
    sorter = SortController(store)
    sorter.click("journal")
    order = list(store)
    sorter.reset()
    assert sorter.active is None
    assert list(store) == order


def test_three_clicks_restore_tied_scores_in_loaded_order():
    store = RecordStore()
    store.load([
        Record(doi="x", title="Alpha", score=5),
        Record(doi="y", title="Beta", score=5),
        Record(doi="z", title="Gamma", score=1),
    ])
    sorter = SortController(store)
    for _ in range(3):
        sorter.click("title")
    assert [r.doi for r in store] == ["x", "y", "z"]
