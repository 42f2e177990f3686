"""Sorting and paging helpers for the back-office list views.

Both the product and the order management screens filter in memory, sort
on a named key and then cut a fixed-size page out of the result.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from protean.exceptions import ValidationError

DEFAULT_PAGE_SIZE = 10


@dataclass
class Page:
    """One window of a sorted, filtered list."""

    items: list = field(default_factory=list)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0

    @property
    def page_count(self) -> int:
        if self.total == 0:
            return 1
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def contains_text(needle: str | None, *haystacks: str | None) -> bool:
    """Case-insensitive substring match against any of the haystacks.

    An empty needle matches everything.
    """
    if not needle:
        return True
    term = needle.strip().lower()
    return any(term in (value or "").lower() for value in haystacks)


def sort_by(
    items: Iterable[Any],
    key_funcs: dict[str, Callable[[Any], Any]],
    key: str,
    descending: bool = False,
) -> list:
    """Stable sort on one of the named keys.

    Ties keep their incoming order in both directions.
    """
    if key not in key_funcs:
        raise ValidationError({"sort": [f"Unknown sort key '{key}'. Expected one of: {', '.join(key_funcs)}"]})

    return sorted(items, key=key_funcs[key], reverse=descending)


def paginate(items: Sequence[Any], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Cut a 1-based page out of ``items``.

    Pages past the end clamp to the last page and pages below 1 clamp to 1.
    """
    if page_size < 1:
        raise ValidationError({"page_size": ["Page size must be at least 1"]})

    total = len(items)
    window = Page(page=1, page_size=page_size, total=total)
    current = min(max(page, 1), window.page_count)
    start = (current - 1) * page_size

    window.page = current
    window.items = list(items[start : start + page_size])
    return window
