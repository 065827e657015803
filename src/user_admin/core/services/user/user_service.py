from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlmodel import Session

from src.user_admin.entities.core.user import User, UserRepository


class UserService:
    """Application service over the user repository.

    Reads go straight to the repository. Each mutating call runs in its own
    transaction: it commits when the repository call succeeds and rolls back
    otherwise, so a failed save or delete leaves no partial change behind.
    """

    def __init__(self, db_session: Session):
        self._db_session = db_session
        self._user_repo = UserRepository(db_session)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self._db_session.commit()
        except Exception:
            self._db_session.rollback()
            raise

    def get_all_users(self) -> list[User]:
        users = self._user_repo.list_all()
        logger.debug("Loaded {} users", len(users))
        return users

    def get_user_by_id(self, user_id: int) -> User | None:
        return self._user_repo.get(user_id)

    def save_user(self, user: User) -> User:
        """Create the user when it has no id, otherwise overwrite that id."""
        with self._transaction():
            saved = self._user_repo.save(user)
        logger.info("Saved user {}", saved.id)
        return saved

    def delete_user(self, user_id: int) -> None:
        """Delete a user; a missing id is not an error."""
        with self._transaction():
            deleted = self._user_repo.delete(user_id)
        if deleted:
            logger.info("Deleted user {}", user_id)
        else:
            logger.info("No user {} to delete", user_id)
