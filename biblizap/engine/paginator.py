"""Page slicing and the page-button window shown under the results."""

from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

PAGE_SIZES: tuple[int, ...] = (10, 50, 100, 500)
WINDOW_RADIUS = 2
ELLIPSIS = "…"


class PaginationError(IndexError):
    """A page index outside ``0 <= index < max(1, total_pages)``.

    Raised for programming errors: the UI only offers valid pages.
    """


@dataclass(frozen=True)
class PageItem:
    """One entry of the page navigation: a page button or an ellipsis."""

    index: Optional[int]
    active: bool = False

    @property
    def is_ellipsis(self) -> bool:
        return self.index is None

    @property
    def label(self) -> str:
        return ELLIPSIS if self.index is None else str(self.index + 1)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class Paginator:
    """Page size and current page of one results view.

    ``total_pages`` is ``floor(N / page_size)``. The records past the last
    full page are not given a page of their own; they are appended to the
    last counted page instead, so every visible record stays reachable.
    """

    def __init__(
        self,
        page_size: int = PAGE_SIZES[0],
        page_sizes: Sequence[int] = PAGE_SIZES,
        radius: int = WINDOW_RADIUS,
    ):
        self.page_sizes = tuple(page_sizes)
        if page_size not in self.page_sizes:
            raise ValueError(f"Page size must be one of {self.page_sizes}, got {page_size}")
        self.page_size = page_size
        self.radius = radius
        self.page_index = 0

    # ── Arithmetic ────────────────────────────────────────────────────

    def total_pages(self, total: int) -> int:
        return total // self.page_size

    def page_count(self, total: int) -> int:
        """Number of selectable pages (at least one, even when empty)."""
        return max(1, self.total_pages(total))

    def last_index(self, total: int) -> int:
        return self.page_count(total) - 1

    def bounds(self, total: int, index: Optional[int] = None) -> tuple[int, int]:
        """Return ``(start, stop)`` of page *index* (default: current page)."""
        if index is None:
            index = self.page_index
        start = _clamp(index * self.page_size, 0, total)
        stop = _clamp(index * self.page_size + self.page_size, 0, total)
        if index == self.last_index(total):
            stop = total
        return start, stop

    def page(self, items: Sequence[T]) -> list[T]:
        """Slice the current page out of the visible *items*."""
        start, stop = self.bounds(len(items))
        return list(items[start:stop])

    # ── Events ────────────────────────────────────────────────────────

    def select_page(self, index: int, total: int) -> None:
        """Move to page *index*.

        Raises:
            PaginationError: If *index* is not a selectable page.
        """
        if not 0 <= index < self.page_count(total):
            raise PaginationError(
                f"Page {index} out of range (0..{self.page_count(total) - 1})"
            )
        self.page_index = index

    def set_page_size(self, size: int) -> None:
        """Change the page size and go back to the first page."""
        if size not in self.page_sizes:
            raise ValueError(f"Page size must be one of {self.page_sizes}, got {size}")
        self.page_size = size
        self.page_index = 0

    def reset(self) -> None:
        self.page_index = 0

    # ── Navigation window ─────────────────────────────────────────────

    def window_bounds(self, total: int) -> tuple[int, int]:
        """Return ``[low, high)`` of the contiguous window around the page.

        The low bound is recomputed from the clamped high bound so the
        window stays ``2 * radius + 1`` pages wide near the last page too.
        """
        pages = self.total_pages(total)
        width = 2 * self.radius + 1
        low = _clamp(self.page_index - self.radius, 0, pages)
        high = _clamp(low + width, 0, pages)
        low = _clamp(high - width, 0, pages)
        return low, high

    def window(self, total: int) -> list[PageItem]:
        """Build the page navigation items.

        First page, an ellipsis if pages are hidden after it, the window,
        an ellipsis if pages are hidden before the last page, last page.
        """
        low, high = self.window_bounds(total)
        last = self.last_index(total)
        current = self.page_index

        items = [PageItem(0, current == 0)]
        if low > 1:
            items.append(PageItem(None))
        for index in range(low, high):
            if index not in (0, last):
                items.append(PageItem(index, current == index))
        if last - (high - 1) > 1:
            items.append(PageItem(None))
        if last != 0:
            items.append(PageItem(last, current == last))
        return items

    def summary(self, total: int) -> str:
        start, stop = self.bounds(total)
        first = start + 1 if total else 0
        return f"Showing {first} to {stop} of {total} entries"
