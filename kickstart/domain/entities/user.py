"""Domain entity representing a user."""

from dataclasses import dataclass

from .auditable import AuditableEntity


@dataclass
class User(AuditableEntity):
    """Core attributes describing an application user."""

    id: int | None
    username: str
    email: str
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name} (@{self.username})"
