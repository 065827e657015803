"""User repository for data access operations."""

from sqlalchemy import text
from sqlmodel import Session, select

from .entity import User
from .table import UserTable

# Columns copied from the entity on insert and update. Identity and
# timestamps are owned by the table.
_USER_FIELDS = {"name", "email", "phone", "address"}

# Moves the serial sequence past the highest id so generated ids never collide
# with rows inserted under an explicit id.
_SYNC_ID_SEQUENCE = text(
    "SELECT setval(pg_get_serial_sequence(:table, 'id'), "
    "(SELECT MAX(id) FROM users))"
)


class UserRepository:
    """Data-access layer for users.

    Operations flush but never commit; transaction boundaries belong to the
    caller.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[User]:
        """Return every persisted user ordered by id."""
        statement = select(UserTable).order_by(UserTable.id)
        rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def get(self, user_id: int) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def save(self, user: User) -> User:
        """Insert or update a user keyed by the presence of its id.

        A user without id gets a fresh one from the database. A user whose id
        matches a row overwrites that row; an id with no row is inserted as is
        and, on PostgreSQL, the id sequence is moved past it.
        """
        values = user.model_dump(include=_USER_FIELDS)
        row = self._session.get(UserTable, user.id) if user.id is not None else None

        if row is None:
            row = UserTable(id=user.id, **values)
            self._session.add(row)
            self._session.flush()
            if user.id is not None:
                self._sync_id_sequence()
        else:
            row.sqlmodel_update(values)
            self._session.add(row)
            self._session.flush()

        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def _sync_id_sequence(self) -> None:
        if self._session.get_bind().dialect.name != "postgresql":
            return
        self._session.connection().execute(
            _SYNC_ID_SEQUENCE, {"table": UserTable.__tablename__}
        )

    def delete(self, user_id: int) -> bool:
        """Delete a user by id. Returns False when no row had that id."""
        row = self._session.get(UserTable, user_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
