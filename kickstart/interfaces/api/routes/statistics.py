"""Routes exposing the daily activity rollups."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kickstart.application.use_cases.statistics import (
    generate_daily_statistics as generate_daily_statistics_uc,
    get_daily_statistics as get_daily_statistics_uc,
    list_daily_statistics as list_daily_statistics_uc,
    list_daily_statistics_between as list_daily_statistics_between_uc,
    sum_user_registrations as sum_user_registrations_uc,
)
from kickstart.domain.entities import DailyStatistics
from kickstart.domain.pagination import PageRequest, SortDirection, SortOrder
from kickstart.infrastructure.database import get_db
from kickstart.interfaces.api.dependencies import (
    get_current_auditor,
    page_request_dependency,
)
from kickstart.interfaces.api.routes_helpers import http_error_from
from kickstart.interfaces.api.schemas import (
    DailyStatisticsRead,
    PageRead,
    RegistrationTotalRead,
    to_page_read,
)

router = APIRouter(prefix="/statistics", tags=["statistics"])

# Rollups have no created_at; the newest day comes first.
get_statistics_page_request = page_request_dependency(
    (SortOrder("date", SortDirection.DESC),)
)


def _to_read_model(statistics: DailyStatistics) -> DailyStatisticsRead:
    return DailyStatisticsRead.model_validate(statistics)


@router.get("/daily", response_model=PageRead[DailyStatisticsRead])
def list_daily_statistics(
    page_request: PageRequest = Depends(get_statistics_page_request),
    db: Session = Depends(get_db),
) -> PageRead[DailyStatisticsRead]:
    try:
        page = list_daily_statistics_uc(db, page_request)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return to_page_read(page, _to_read_model)


@router.get("/daily/range", response_model=list[DailyStatisticsRead])
def list_daily_statistics_between(
    start: date, end: date, db: Session = Depends(get_db)
) -> list[DailyStatisticsRead]:
    """Return the rollups between ``start`` and ``end`` inclusive."""

    try:
        rows = list_daily_statistics_between_uc(db, start, end)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [_to_read_model(row) for row in rows]


@router.get("/daily/{day}", response_model=DailyStatisticsRead)
def read_daily_statistics(day: date, db: Session = Depends(get_db)) -> DailyStatisticsRead:
    try:
        statistics = get_daily_statistics_uc(db, day)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(statistics)


@router.post("/daily/{day}/generate", response_model=DailyStatisticsRead)
def generate_daily_statistics(
    day: date,
    db: Session = Depends(get_db),
    auditor_id: int | None = Depends(get_current_auditor),
) -> DailyStatisticsRead:
    """Compute (or recompute) the rollup for ``day``."""

    statistics = generate_daily_statistics_uc(db, day, triggered_by=auditor_id)
    return _to_read_model(statistics)


@router.get("/registrations", response_model=RegistrationTotalRead)
def sum_user_registrations(
    start: date, end: date, db: Session = Depends(get_db)
) -> RegistrationTotalRead:
    try:
        total = sum_user_registrations_uc(db, start, end)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return RegistrationTotalRead(start=start, end=end, user_registrations=total)


__all__ = ["router"]
