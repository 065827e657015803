"""User database table model."""

from src.user_admin.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    One row per User; the primary key is generated by the database unless an
    explicit id is supplied on insert.
    """

    __tablename__ = "users"

    name: str = ""
    email: str | None = None
    phone: str | None = None
    address: str | None = None
