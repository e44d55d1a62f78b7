"""Record store: the single mutable, ordered copy of a search result."""

import logging
from typing import Callable, Iterable, Iterator, Literal, Optional

from biblizap.engine.columns import SCORE, Column
from biblizap.models.record import Record

logger = logging.getLogger(__name__)

Direction = Literal["asc", "desc"]
Listener = Callable[[], None]


class Signal:
    """Minimal "view invalidated" notifier.

    Listeners are called synchronously, in subscription order, every time
    ``emit()`` runs.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self) -> None:
        for listener in list(self._listeners):
            listener()


class RecordStore:
    """Owns the canonical record order.

    The store is filled once per search result with :meth:`load` and is
    only reordered afterwards; records themselves never change.
    """

    def __init__(self, records: Optional[Iterable[Record]] = None):
        self._records: list[Record] = list(records) if records is not None else []
        # Order as loaded, restored when a column sort is cleared
        self._default: list[Record] = list(self._records)
        self.invalidated = Signal()

    # ── Read access ───────────────────────────────────────────────────

    @property
    def records(self) -> tuple[Record, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def find(self, doi: str) -> Optional[Record]:
        """Return the first record with *doi*, or None."""
        return next((r for r in self._records if r.doi == doi), None)

    # ── Mutations ─────────────────────────────────────────────────────

    def load(self, records: Iterable[Record]) -> None:
        """Replace the whole sequence and put it in default order.

        The search service delivers records sorted by descending score, in
        which case the stable sort leaves the input order untouched.
        """
        self._records = list(records)
        self._records.sort(key=SCORE.sort_key, reverse=True)
        self._default = list(self._records)
        logger.info("Loaded %d records", len(self._records))
        self.invalidated.emit()

    def reorder(self, column: Column, direction: Direction) -> None:
        """Stable in-place sort by *column*.

        Ties keep their current relative order. ``list.sort`` with
        ``reverse=True`` is stable as well, so descending sorts keep ties
        in their previous order too.
        """
        if direction not in ("asc", "desc"):
            raise ValueError(f"Unknown sort direction: {direction!r}")
        self._records.sort(key=column.sort_key, reverse=(direction == "desc"))
        logger.debug("Sorted %d records by %s (%s)", len(self._records), column.key, direction)
        self.invalidated.emit()

    def restore_default_order(self) -> None:
        """Put the records back in the order they were loaded in.

        That order is descending score with ties as the search service
        ranked them, so ties shuffled by a column sort are undone too.
        """
        self._records = list(self._default)
        logger.debug("Restored default order of %d records", len(self._records))
        self.invalidated.emit()

    # ── Subscription ──────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> None:
        self.invalidated.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self.invalidated.unsubscribe(listener)
