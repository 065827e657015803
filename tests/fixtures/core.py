from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.user_admin.core.services import DbSessionService
from src.user_admin.entities.core.user import User, UserRepository


@pytest.fixture
def engine() -> Generator[Engine]:
    """Create a fresh in-memory database per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.user_admin.entities.core.user import UserTable  # noqa: F401

    SQLModel.metadata.create_all(engine)

    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    """Create a database session for testing."""
    with Session(engine, expire_on_commit=False) as session:
        try:
            yield session
        finally:
            session.rollback()


@pytest.fixture
def database_service(engine: Engine) -> DbSessionService:
    return DbSessionService(engine=engine)


@pytest.fixture
def client(database_service: DbSessionService) -> Generator[TestClient]:
    """Test client bound to the in-memory database.

    Used as a context manager so the lifespan startup/shutdown runs.
    """
    from src.user_admin.api.http.app import create_app

    app = create_app(database_service=database_service)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def stored_users(engine: Engine) -> Callable[[], list[User]]:
    """Read back the stored users through a fresh session."""

    def _read() -> list[User]:
        with Session(engine) as fresh_session:
            return UserRepository(fresh_session).list_all()

    return _read


@pytest.fixture
def seed_user(engine: Engine) -> Callable[..., User]:
    """Persist a user through a fresh session and return the stored state."""

    def _seed(**fields) -> User:
        with Session(engine) as fresh_session:
            user = UserRepository(fresh_session).save(User(**fields))
            fresh_session.commit()
            return user

    return _seed
