"""Generic envelope for paginated listings."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from kickstart.domain.pagination import Page

T = TypeVar("T")


class PageRead(BaseModel, Generic[T]):
    """A page of results plus navigation metadata."""

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool
    sort: list[str]


def to_page_read(page: Page[Any], converter: Callable[[Any], T]) -> PageRead[T]:
    return PageRead(
        content=[converter(item) for item in page.content],
        page=page.page,
        size=page.size,
        total_elements=page.total_elements,
        total_pages=page.total_pages,
        first=page.first,
        last=page.last,
        sort=[str(order) for order in page.sort],
    )


__all__ = ["PageRead", "to_page_read"]
