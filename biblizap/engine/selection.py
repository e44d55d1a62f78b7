"""Selected-record tracking, keyed by DOI."""

from typing import Optional

from biblizap.engine.store import RecordStore
from biblizap.models.record import Record


class SelectionTracker:
    """Set of selected DOIs.

    Independent of what is currently visible: a record stays selected
    while it is filtered out, sorted elsewhere or on another page.
    """

    def __init__(self) -> None:
        self._ids: set[str] = set()

    def select(self, doi: str) -> None:
        self._ids.add(doi)

    def deselect(self, doi: str) -> None:
        self._ids.discard(doi)

    def toggle(self, doi: Optional[str], checked: bool) -> bool:
        """Apply a checkbox change. Records without a DOI are ignored.

        Returns:
            True if the selection changed
        """
        if not doi:
            return False
        before = doi in self._ids
        if checked:
            self.select(doi)
        else:
            self.deselect(doi)
        return before != checked

    def is_selected(self, doi: Optional[str]) -> bool:
        return doi is not None and doi in self._ids

    def count(self) -> int:
        return len(self._ids)

    def clear(self) -> None:
        self._ids.clear()

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._ids)

    def resolve(self, store: RecordStore) -> list[Record]:
        """Return the records an export should contain.

        With nothing selected, that is every record in the store, filters
        ignored. Otherwise it is every store record whose DOI is selected,
        looked up in the full store so filtered-out records still count.
        """
        if not self._ids:
            return list(store)
        return [r for r in store if r.doi is not None and r.doi in self._ids]
