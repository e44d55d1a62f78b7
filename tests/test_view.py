"""Tests for the results view: UI events, invalidation and shared state."""

from datetime import datetime

import pytest

from biblizap.engine.filters import AbsentFieldPolicy
from biblizap.engine.paginator import PaginationError
from biblizap.engine.sorting import SortState
from biblizap.engine.view import ResultsView, create_view
from biblizap.exporters.service import Exporter, ExportFormat
from biblizap.models.record import Record

from conftest import make_record


@pytest.fixture
def view(records):
    view = ResultsView(exporter=Exporter(clock=lambda: datetime(2024, 5, 1, 12, 30)))
    view.load(records)
    return view


@pytest.fixture
def events(view):
    calls = []
    view.subscribe(lambda: calls.append(1))
    return calls


def many(n):
    return [make_record(doi=f"10.1/{i}", score=1000 - i) for i in range(n)]


class TestLoad:

    def test_load_resets_ui_state(self, view, records):
        view.global_filter_input("cancer")
        view.column_sort_click("title")
        view.selection_toggle("10.1/a", True)
        view.page_size_select(50)

        view.load(records)

        snap = view.snapshot()
        assert snap.global_filter == ""
        assert snap.column_filters == {}
        assert all(s is SortState.NONE for s in snap.sort_states.values())
        assert snap.selected == frozenset()
        assert snap.page_size == 10
        assert [r.doi for r in snap.rows] == ["10.1/a", "10.1/b", "10.1/c", "10.1/d"]

    def test_load_emits(self, view, events, records):
        view.load(records)
        assert events == [1]


class TestEvents:

    def test_every_mutation_invalidates(self, view, events):
        view.column_sort_click("score")
        view.column_filter_input("title", "c")
        view.global_filter_input("a")
        view.page_size_select(50)
        view.page_select(0)
        view.selection_toggle("10.1/a", True)
        assert len(events) == 6

    def test_unchanged_selection_does_not_invalidate(self, view, events):
        view.selection_toggle("10.1/a", True)
        view.selection_toggle("10.1/a", True)
        view.selection_toggle(None, True)
        assert len(events) == 1

    def test_filter_input_resets_page(self):
        view = ResultsView()
        view.load(many(30))
        view.page_select(2)
        view.column_filter_input("doi", "10.1")
        assert view.paginator.page_index == 0
        view.page_select(1)
        view.global_filter_input("10.1")
        assert view.paginator.page_index == 0

    def test_page_select_checks_visible_count(self):
        view = ResultsView()
        view.load(many(30))
        view.global_filter_input("10.1/1")
        with pytest.raises(PaginationError):
            view.page_select(1)

    def test_sort_is_shared_by_all_readers(self, view):
        view.column_sort_click("citations")
        assert [r.citations for r in view.visible()] == [10, 45, 120, 300]
        assert [r.citations for r in view.current_page()] == [10, 45, 120, 300]


class TestSnapshot:

    def test_fields(self, view):
        view.column_filter_input("title", "cancer")
        view.selection_toggle("10.1/c", True)
        snap = view.snapshot()

        assert snap.visible_count == 2
        assert snap.total_count == 4
        assert snap.summary == "Showing 1 to 2 of 2 entries"
        assert snap.column_filters == {"title": "cancer"}
        assert snap.selected_count == 1
        assert snap.page_sizes == (10, 50, 100, 500)

    def test_rows_are_the_current_page(self):
        view = ResultsView()
        view.load(many(25))
        view.page_select(1)
        snap = view.snapshot()
        assert snap.total_pages == 2
        assert len(snap.rows) == 15


class TestPolicy:

    def test_incomplete_record_visibility(self, records):
        view = ResultsView()
        view.load(records + [Record(doi="10.1/z", score=1)])
        assert view.snapshot().visible_count == 4

        view.set_policy(AbsentFieldPolicy.PASS)
        assert view.snapshot().visible_count == 5

    def test_policy_survives_load(self, records):
        view = ResultsView(policy=AbsentFieldPolicy.PASS)
        view.load(records)
        assert view.filters.policy is AbsentFieldPolicy.PASS


class TestExport:

    def test_nothing_selected_exports_all(self, view):
        result = view.export_click(ExportFormat.RIS)
        assert result.count == 4
        assert "-all-" in result.filename

    def test_one_selected_exports_one(self, view):
        view.selection_toggle("10.1/b", True)
        result = view.export_click(ExportFormat.RIS)
        assert "-selected-" in result.filename
        assert result.content.decode().count("TY  - JOUR") == 1
        assert "DO  - 10.1/b" in result.content.decode()

    def test_selection_survives_filtering(self, view):
        view.selection_toggle("10.1/d", True)
        view.global_filter_input("cancer")
        assert all(r.doi != "10.1/d" for r in view.visible())

        result = view.export_click(ExportFormat.BIBTEX)
        assert result.count == 1
        assert "10.1/d" in result.content.decode()

    def test_filters_do_not_narrow_export_all(self, view):
        view.global_filter_input("cancer")
        assert view.export_click(ExportFormat.XLSX).count == 4


def test_create_view_uses_settings(settings):
    settings.update(default_page_size=50, absent_field_policy=AbsentFieldPolicy.PASS, product_name="Zap")
    view = create_view(settings)
    assert view.paginator.page_size == 50
    assert view.filters.policy is AbsentFieldPolicy.PASS
    assert view.exporter.product_name == "Zap"
