"""FastAPI dependency utilities."""

from collections.abc import Callable, Sequence

from fastapi import Header, Query

from kickstart.config import get_settings
from kickstart.domain.pagination import (
    DEFAULT_SORT,
    PAGE_PARAMETER,
    SIZE_PARAMETER,
    SORT_PARAMETER,
    PageRequest,
    SortOrder,
    resolve_page_request,
)


def get_current_auditor(
    x_user_id: int | None = Header(
        default=None, description="Id of the user performing the request"
    ),
) -> int | None:
    """Return the id recorded as ``created_by``/``updated_by`` for this request."""

    if x_user_id is not None:
        return x_user_id
    return get_settings().default_auditor_id


def page_request_dependency(
    default_sort: Sequence[SortOrder] = DEFAULT_SORT,
) -> Callable[..., PageRequest]:
    """Build a dependency resolving ``page``/``size``/``sort`` query parameters.

    Parameters are accepted as raw strings so malformed values fall back to
    the defaults instead of failing validation.
    """

    def dependency(
        page: str | None = Query(default=None, alias=PAGE_PARAMETER),
        size: str | None = Query(default=None, alias=SIZE_PARAMETER),
        sort: list[str] | None = Query(
            default=None,
            alias=SORT_PARAMETER,
            description="property[,asc|desc]; may be repeated",
        ),
    ) -> PageRequest:
        return resolve_page_request(page, size, sort, default_sort=default_sort)

    return dependency


get_page_request = page_request_dependency()

__all__ = ["get_current_auditor", "get_page_request", "page_request_dependency"]
