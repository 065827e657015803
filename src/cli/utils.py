"""Shared utilities for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from sqlmodel import Session

console = Console()


@contextmanager
def database_session() -> Iterator[Session]:
    """Open a session against the configured database.

    Missing tables are created only when `database.create_tables` is enabled,
    matching application startup; otherwise run `init-db` first.
    """
    from src.user_admin.core.services import DbManageService, DbSessionService
    from src.user_admin.runtime.context import get_config

    database_service = DbSessionService()
    if get_config().database.create_tables:
        DbManageService(database_service.engine).create_all()
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()
        database_service.dispose()
