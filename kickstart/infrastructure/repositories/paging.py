"""Apply :class:`PageRequest` objects to SQLAlchemy queries."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from sqlalchemy.orm import Query

from kickstart.domain.pagination import Page, PageRequest, SortDirection

T = TypeVar("T")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_property(name: str) -> str:
    """Return ``name`` in snake_case so ``createdAt`` and ``created_at`` match."""

    return _CAMEL_BOUNDARY.sub("_", name.strip()).lower()


def paginate(
    query: Query,
    page_request: PageRequest,
    sortable: Mapping[str, Any],
    to_entity: Callable[[Any], T],
    *,
    tiebreaker: Any | None = None,
) -> Page[T]:
    """Count, order and slice ``query`` according to ``page_request``.

    ``sortable`` maps public property names to the columns they order by.
    A property outside that mapping raises ``ValueError``.
    """

    clauses = []
    for order in page_request.sort:
        column = sortable.get(normalize_property(order.property))
        if column is None:
            msg = f"Cannot sort by unknown property '{order.property}'"
            raise ValueError(msg)
        clauses.append(
            column.desc() if order.direction is SortDirection.DESC else column.asc()
        )
    if tiebreaker is not None:
        # Rows with equal sort keys keep a stable order across pages.
        descending = bool(page_request.sort) and _last_is_desc(page_request)
        clauses.append(tiebreaker.desc() if descending else tiebreaker.asc())

    total = query.order_by(None).count()
    models = (
        query.order_by(*clauses)
        .offset(page_request.offset)
        .limit(page_request.size)
        .all()
    )
    return Page(
        content=[to_entity(model) for model in models],
        request=page_request,
        total_elements=total,
    )


def _last_is_desc(page_request: PageRequest) -> bool:
    return page_request.sort[-1].direction is SortDirection.DESC


__all__ = ["normalize_property", "paginate"]
