"""Results view: one search result plus every piece of UI state around it.

The view owns the record store, the filters, the sort toggles, the
selection and the paginator. Presentation surfaces (the table and the card
list) never keep copies; they call :meth:`ResultsView.snapshot` whenever
the ``invalidated`` signal fires.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from biblizap.engine.columns import COLUMNS
from biblizap.engine.filters import AbsentFieldPolicy, FilterState
from biblizap.engine.paginator import PAGE_SIZES, WINDOW_RADIUS, PageItem, Paginator
from biblizap.engine.selection import SelectionTracker
from biblizap.engine.sorting import SortController, SortState
from biblizap.engine.store import Listener, RecordStore, Signal
from biblizap.exporters.service import Exporter, ExportFormat, ExportResult
from biblizap.models.record import Record

logger = logging.getLogger(__name__)


@dataclass
class ViewSnapshot:
    """Everything a surface needs to draw one render pass."""

    rows: list[Record]
    visible_count: int
    total_count: int
    page_index: int
    page_size: int
    page_sizes: tuple[int, ...]
    total_pages: int
    pages: list[PageItem]
    summary: str
    sort_states: dict[str, SortState]
    selected: frozenset[str]
    global_filter: str
    column_filters: dict[str, str] = field(default_factory=dict)

    @property
    def selected_count(self) -> int:
        return len(self.selected)


class ResultsView:
    """Owner of one result set and target of the UI events."""

    def __init__(
        self,
        page_size: int = PAGE_SIZES[0],
        page_sizes: Sequence[int] = PAGE_SIZES,
        radius: int = WINDOW_RADIUS,
        policy: AbsentFieldPolicy = AbsentFieldPolicy.EXCLUDE,
        exporter: Optional[Exporter] = None,
    ):
        self.store = RecordStore()
        self.filters = FilterState(policy=policy)
        self.sorter = SortController(self.store)
        self.selection = SelectionTracker()
        self.paginator = Paginator(page_size, page_sizes, radius)
        self.exporter = exporter or Exporter()
        self._default_page_size = page_size

        self.invalidated = Signal()
        self.store.subscribe(self.invalidated.emit)

    def subscribe(self, listener: Listener) -> None:
        self.invalidated.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self.invalidated.unsubscribe(listener)

    # ── Lifecycle ─────────────────────────────────────────────────────

    def load(self, records: Iterable[Record]) -> None:
        """Replace the result set and reset all UI state to defaults."""
        self.filters.reset()
        self.sorter.reset()
        self.selection.clear()
        self.paginator.set_page_size(self._default_page_size)
        self.store.load(records)

    # ── Derivations ───────────────────────────────────────────────────

    def visible(self) -> list[Record]:
        """Filtered records in current store order."""
        return self.filters.apply(self.store)

    def current_page(self) -> list[Record]:
        return self.paginator.page(self.visible())

    def export_records(self) -> list[Record]:
        return self.selection.resolve(self.store)

    def snapshot(self) -> ViewSnapshot:
        visible = self.visible()
        total = len(visible)
        return ViewSnapshot(
            rows=self.paginator.page(visible),
            visible_count=total,
            total_count=len(self.store),
            page_index=self.paginator.page_index,
            page_size=self.paginator.page_size,
            page_sizes=self.paginator.page_sizes,
            total_pages=self.paginator.total_pages(total),
            pages=self.paginator.window(total),
            summary=self.paginator.summary(total),
            sort_states={c.key: self.sorter.state_of(c.key) for c in COLUMNS if c.sortable},
            selected=self.selection.ids,
            global_filter=self.filters.pattern,
            column_filters=self.filters.columns.active(),
        )

    # ── UI events ─────────────────────────────────────────────────────

    def column_sort_click(self, column: str) -> SortState:
        return self.sorter.click(column)

    def column_filter_input(self, column: str, text: str) -> None:
        self.filters.columns.set(column, text)
        self.paginator.reset()
        self.invalidated.emit()

    def global_filter_input(self, text: str) -> None:
        self.filters.pattern = text
        self.paginator.reset()
        self.invalidated.emit()

    def page_size_select(self, value: int) -> None:
        self.paginator.set_page_size(value)
        self.invalidated.emit()

    def page_select(self, index: int) -> None:
        self.paginator.select_page(index, len(self.visible()))
        self.invalidated.emit()

    def selection_toggle(self, doi: Optional[str], checked: bool) -> None:
        if self.selection.toggle(doi, checked):
            self.invalidated.emit()

    def export_click(self, fmt: ExportFormat) -> ExportResult:
        """Serialize the selection (or everything, if nothing is selected).

        Raises:
            ExportError: If serialization fails.
        """
        records = self.export_records()
        return self.exporter.export(records, len(self.store), fmt)

    def set_policy(self, policy: AbsentFieldPolicy) -> None:
        self.filters.policy = policy
        logger.info("Absent-field policy set to %s", policy.value)
        self.paginator.reset()
        self.invalidated.emit()


def create_view(settings) -> ResultsView:
    """Build an empty view configured from :class:`biblizap.config.Settings`."""
    return ResultsView(
        page_size=settings.default_page_size,
        page_sizes=settings.page_sizes,
        radius=settings.window_radius,
        policy=settings.absent_field_policy,
        exporter=Exporter(settings.product_name),
    )
