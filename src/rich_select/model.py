"""Filtered, paginated list state for one selector run."""

from __future__ import annotations

import math
from collections.abc import Sequence

DEFAULT_ITEMS_PER_PAGE = 10


def filter_items(items: Sequence[str], text: str) -> list[str]:
    """Items containing ``text`` case-insensitively, in original order."""
    if not text:
        return list(items)
    needle = text.lower()
    return [item for item in items if needle in item.lower()]


class ListModel:
    """Owns the item set, the filtered subset and the page/cursor position.

    ``cursor`` is relative to the current page. Invariants after every
    operation:

    - ``0 <= page * items_per_page <= len(filtered_items)``
    - ``0 <= cursor < page_size()`` whenever the page is non-empty
    """

    def __init__(self, items: Sequence[str], items_per_page: int = DEFAULT_ITEMS_PER_PAGE):
        if items_per_page < 1:
            raise ValueError("items_per_page must be at least 1")
        self.items: tuple[str, ...] = tuple(items)
        self.items_per_page = items_per_page
        self.filter_text = ""
        self.filtered_items: list[str] = list(self.items)
        self.page = 0
        self.cursor = 0

    # -- derived values -------------------------------------------------

    @property
    def page_start(self) -> int:
        return self.page * self.items_per_page

    def page_count(self) -> int:
        return math.ceil(len(self.filtered_items) / self.items_per_page)

    def page_size(self) -> int:
        """Number of rows on the current page."""
        return max(0, min(self.items_per_page, len(self.filtered_items) - self.page_start))

    def visible_items(self) -> list[str]:
        return self.filtered_items[self.page_start : self.page_start + self.page_size()]

    @property
    def absolute_index(self) -> int:
        return self.page_start + self.cursor

    def current_item(self) -> str | None:
        """The highlighted item, or None when the page is empty."""
        if self.page_size() == 0:
            return None
        return self.filtered_items[self.absolute_index]

    # -- mutations ------------------------------------------------------

    def set_filter(self, text: str) -> None:
        """Apply a new filter and return to the top of the results."""
        self.filter_text = text
        self.filtered_items = filter_items(self.items, text)
        self.page = 0
        self.cursor = 0

    def reset(self) -> None:
        self.set_filter("")

    def select_index(self, index: int) -> None:
        """Position page and cursor on an absolute filtered index."""
        if not 0 <= index < len(self.filtered_items):
            return
        self.page, self.cursor = divmod(index, self.items_per_page)

    def select_item(self, item: str) -> bool:
        """Highlight the first filtered occurrence of ``item``."""
        try:
            index = self.filtered_items.index(item)
        except ValueError:
            return False
        self.select_index(index)
        return True

    def move_up(self) -> bool:
        """Move up one row, retreating a page at the top. Returns True if moved."""
        if self.cursor > 0:
            self.cursor -= 1
            return True
        if self.page > 0:
            self.page -= 1
            self.cursor = self.page_size() - 1
            return True
        return False

    def move_down(self) -> bool:
        """Move down one row, advancing a page at the bottom. Returns True if moved."""
        if self.cursor < self.page_size() - 1:
            self.cursor += 1
            return True
        if (self.page + 1) * self.items_per_page < len(self.filtered_items):
            self.page += 1
            self.cursor = 0
            return True
        return False

    def page_up(self) -> bool:
        if self.page == 0:
            return False
        self.page -= 1
        self.cursor = 0
        return True

    def page_down(self) -> bool:
        if (self.page + 1) * self.items_per_page >= len(self.filtered_items):
            return False
        self.page += 1
        self.cursor = 0
        return True

    def __repr__(self) -> str:
        return (
            f"ListModel(items={len(self.items)}, filtered={len(self.filtered_items)}, "
            f"page={self.page}, cursor={self.cursor}, filter={self.filter_text!r})"
        )
