"""Per-column sort toggles driving the record store order."""

import logging
from enum import Enum
from typing import Optional

from biblizap.engine.columns import COLUMNS, get_column
from biblizap.engine.store import RecordStore

logger = logging.getLogger(__name__)


class SortState(str, Enum):
    NONE = "none"
    ASCENDING = "asc"
    DESCENDING = "desc"

    def next(self) -> "SortState":
        """Advance one step of the cycle none → asc → desc → none."""
        return _CYCLE[self]


_CYCLE = {
    SortState.NONE: SortState.ASCENDING,
    SortState.ASCENDING: SortState.DESCENDING,
    SortState.DESCENDING: SortState.NONE,
}


class SortController:
    """Cycling sort model.

    Each sortable column has one header control. A click advances that
    column's state and resets every other column to ``NONE``, so at most
    one column is ever marked. Entering ``ASCENDING`` or ``DESCENDING``
    reorders the store; returning to ``NONE`` restores the default
    descending-score order.
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self._states: dict[str, SortState] = {
            c.key: SortState.NONE for c in COLUMNS if c.sortable
        }

    def state_of(self, key: str) -> SortState:
        column = get_column(key)
        return self._states.get(column.key, SortState.NONE)

    @property
    def active(self) -> Optional[tuple[str, SortState]]:
        """The column currently sorting the store, if any."""
        for key, state in self._states.items():
            if state is not SortState.NONE:
                return key, state
        return None

    def click(self, key: str) -> SortState:
        """Handle one header click and return the column's new state."""
        column = get_column(key)
        if not column.sortable:
            raise ValueError(f"Column '{key}' is not sortable")

        new_state = self._states[column.key].next()
        for other in self._states:
            self._states[other] = SortState.NONE
        self._states[column.key] = new_state

        if new_state is SortState.NONE:
            self.store.restore_default_order()
        else:
            self.store.reorder(column, new_state.value)
        logger.debug("Sort %s -> %s", column.key, new_state.value)
        return new_state

    def reset(self) -> None:
        """Clear every indicator without touching the store order."""
        for key in self._states:
            self._states[key] = SortState.NONE
