from fastapi import FastAPI

from .audit_logs import router as audit_logs_router
from .emails import router as emails_router
from .statistics import router as statistics_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(users_router)
    app.include_router(emails_router)
    app.include_router(statistics_router)
    app.include_router(audit_logs_router)
