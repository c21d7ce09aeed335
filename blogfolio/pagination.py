"""Ordering and fixed-size paging over content records."""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil
from typing import TYPE_CHECKING, Generic, Iterable, Iterator, Sequence, TypeVar

if TYPE_CHECKING:
    from .content.models import ContentRecord

RecordT = TypeVar("RecordT", bound="ContentRecord")

BLOG_BASE_PATH = "/blog"


@dataclass(frozen=True, slots=True)
class Page(Generic[RecordT]):
    """One window over a sorted collection."""

    items: tuple[RecordT, ...]
    page: int
    page_count: int
    page_size: int
    total_items: int

    @property
    def has_newer(self) -> bool:
        return 1 < self.page <= self.page_count

    @property
    def has_older(self) -> bool:
        return self.page < self.page_count

    @property
    def newer_page(self) -> int | None:
        return self.page - 1 if self.has_newer else None

    @property
    def older_page(self) -> int | None:
        return self.page + 1 if self.has_older else None


def sort_by_date_descending(records: Iterable[RecordT]) -> list[RecordT]:
    """Newest first; records sharing a date keep their input order."""
    # sorted() is stable, and reverse=True preserves the order of equal keys.
    return sorted(records, key=lambda record: record.date, reverse=True)


def page_count(total_items: int, page_size: int) -> int:
    _check_page_size(page_size)
    if total_items <= 0:
        return 0
    return ceil(total_items / page_size)


def paginate(records: Sequence[RecordT], page_size: int, page_number: int) -> Page[RecordT]:
    """Return page ``page_number`` (1-based); pages past the end are empty."""
    _check_page_size(page_size)
    if page_number < 1:
        raise ValueError("page_number must be 1 or greater")

    start = (page_number - 1) * page_size
    return Page(
        items=tuple(records[start : start + page_size]),
        page=page_number,
        page_count=page_count(len(records), page_size),
        page_size=page_size,
        total_items=len(records),
    )


def iter_pages(records: Sequence[RecordT], page_size: int) -> Iterator[Page[RecordT]]:
    """Yield every in-range page, first to last."""
    for number in range(1, page_count(len(records), page_size) + 1):
        yield paginate(records, page_size, number)


def page_path(page_number: int, base: str = BLOG_BASE_PATH) -> str:
    """Public path of a blog index page: the base for page 1, ``base/page/N`` after."""
    if page_number < 1:
        raise ValueError("page_number must be 1 or greater")
    base = base.rstrip("/") or "/"
    if page_number == 1:
        return base
    prefix = "" if base == "/" else base
    return f"{prefix}/page/{page_number}"


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError("page_size must be positive")
