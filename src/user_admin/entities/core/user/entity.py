"""User domain entity."""

from typing import Any

from pydantic import Field

from src.user_admin.entities.core._base import Entity


class User(Entity):
    """User entity representing a person managed through the admin pages.

    A plain data holder: no field carries uniqueness or format constraints.
    """

    name: str = Field(default="", description="User's display name")
    email: str | None = Field(default=None, description="User's email address")
    phone: str | None = Field(default=None, description="User's phone number")
    address: str | None = Field(default=None, description="User's address")

    def __eq__(self, other: Any) -> bool:
        """Compare users by identity and business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
            and self.phone == other.phone
            and self.address == other.address
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.email,
            self.phone,
            self.address,
        ))
