"""Paging and sorting policy shared by every listing endpoint.

Listings are requested with a ``page`` index, a ``size`` and zero or more
``sort`` orders. Missing or malformed values never fail a request: they fall
back to the defaults below, and sizes above :data:`MAX_PAGE_SIZE` are capped.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

PAGE_PARAMETER = "page"
SIZE_PARAMETER = "size"
SORT_PARAMETER = "sort"

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
# OFFSET and LIMIT are bound as signed 64-bit integers.
MAX_OFFSET = 2**63 - 1
DEFAULT_SORT_PROPERTY = "created_at"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        """Return the direction named by ``value``; anything unknown is ascending."""

        if value is not None and value.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


DEFAULT_SORT_DIRECTION = SortDirection.DESC


@dataclass(frozen=True)
class SortOrder:
    property: str
    direction: SortDirection = SortDirection.ASC

    def __str__(self) -> str:
        return f"{self.property},{self.direction.value}"


DEFAULT_SORT: tuple[SortOrder, ...] = (
    SortOrder(DEFAULT_SORT_PROPERTY, DEFAULT_SORT_DIRECTION),
)


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index, page size and sort orders of a listing."""

    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    sort: tuple[SortOrder, ...] = DEFAULT_SORT

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be negative")
        if self.size < 1:
            raise ValueError("Page size must be at least one")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """A slice of a listing plus the totals needed to navigate it."""

    content: list[T]
    request: PageRequest
    total_elements: int
    sort: tuple[SortOrder, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.sort:
            self.sort = self.request.sort

    @property
    def page(self) -> int:
        return self.request.page

    @property
    def size(self) -> int:
        return self.request.size

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.request.size)

    @property
    def first(self) -> bool:
        return self.request.page == 0

    @property
    def last(self) -> bool:
        return self.request.page + 1 >= self.total_pages

    def map(self, func) -> "Page":
        return Page(
            content=[func(item) for item in self.content],
            request=self.request,
            total_elements=self.total_elements,
            sort=self.sort,
        )


def _parse_int(value: str | int | None) -> int | None:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


def max_page_index(size: int) -> int:
    """Return the last page index whose rows stay addressable by the database."""

    return (MAX_OFFSET - size) // size


def parse_sort(
    values: Iterable[str] | None,
    default: Sequence[SortOrder] = DEFAULT_SORT,
) -> tuple[SortOrder, ...]:
    """Parse ``property[,direction]`` sort expressions.

    Blank expressions are ignored; when nothing usable remains ``default`` is
    returned.
    """

    orders: list[SortOrder] = []
    for raw in values or ():
        parts = [part.strip() for part in raw.split(",")]
        if not parts or not parts[0]:
            continue
        direction = SortDirection.parse(parts[1] if len(parts) > 1 else None)
        orders.append(SortOrder(parts[0], direction))
    return tuple(orders) if orders else tuple(default)


def resolve_page_request(
    page: str | int | None = None,
    size: str | int | None = None,
    sort: Iterable[str] | None = None,
    *,
    default_sort: Sequence[SortOrder] = DEFAULT_SORT,
) -> PageRequest:
    """Build a :class:`PageRequest` from raw request parameters."""

    page_index = _parse_int(page)
    if page_index is None or page_index < 0:
        page_index = DEFAULT_PAGE

    page_size = _parse_int(size)
    if page_size is None or page_size < 1:
        page_size = DEFAULT_PAGE_SIZE
    page_size = min(page_size, MAX_PAGE_SIZE)
    page_index = min(page_index, max_page_index(page_size))

    return PageRequest(
        page=page_index,
        size=page_size,
        sort=parse_sort(sort, default_sort),
    )


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SORT",
    "DEFAULT_SORT_DIRECTION",
    "DEFAULT_SORT_PROPERTY",
    "MAX_OFFSET",
    "MAX_PAGE_SIZE",
    "PAGE_PARAMETER",
    "SIZE_PARAMETER",
    "SORT_PARAMETER",
    "Page",
    "PageRequest",
    "SortDirection",
    "SortOrder",
    "max_page_index",
    "parse_sort",
    "resolve_page_request",
]
