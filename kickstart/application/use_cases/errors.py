"""Exceptions raised by use cases."""


class EntityNotFoundError(ValueError):
    """Raised when the requested record does not exist."""


__all__ = ["EntityNotFoundError"]
