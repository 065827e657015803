"""Shared pytest configuration."""

from tests.fixtures.core import (  # noqa: F401
    client,
    database_service,
    engine,
    seed_user,
    session,
    stored_users,
)
