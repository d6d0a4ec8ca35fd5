"""Helpers shared by the API routers."""

from fastapi import HTTPException, status

from kickstart.application.use_cases.errors import EntityNotFoundError


def http_error_from(exc: ValueError) -> HTTPException:
    """Translate a use case error into the matching HTTP error."""

    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


__all__ = ["http_error_from"]
