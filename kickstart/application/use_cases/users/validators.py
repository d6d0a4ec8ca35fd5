"""Common validation helpers for user use cases."""

import re

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,50}$")


def normalize_username(username: str) -> str:
    """Return a trimmed username or raise ``ValueError``."""

    normalized = username.strip()
    if not _USERNAME_PATTERN.match(normalized):
        raise ValueError(
            "Username must be 3-50 characters of letters, digits, '.', '_' or '-'"
        )
    return normalized


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed with a lower-cased domain."""

    normalized = email.strip()
    if normalized.count("@") != 1:
        raise ValueError("Email address is not valid")
    local_part, domain = normalized.split("@", 1)
    if not local_part or not domain:
        raise ValueError("Email address is not valid")
    return f"{local_part}@{domain.lower()}"


def normalize_name(value: str, field: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"{field} must not be blank")
    return normalized
