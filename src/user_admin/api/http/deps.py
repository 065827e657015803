"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates
from sqlmodel import Session
from starlette.datastructures import FormData

from src.user_admin.api.http.app_data import ApplicationDependencies
from src.user_admin.core.services import DbSessionService, UserService
from src.user_admin.runtime.context import get_config

_PACKAGED_TEMPLATES = Path(__file__).parent / "templates"


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a request-scoped database session and close it afterwards."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_user_service(session: Session = Depends(get_db_session)) -> UserService:
    """Get a user service bound to the request session."""
    return UserService(session)


async def get_form_data(request: Request) -> FormData:
    """Read the submitted form body."""
    return await request.form()


@lru_cache
def _load_templates(directory: str) -> Jinja2Templates:
    return Jinja2Templates(directory=directory)


def get_templates() -> Jinja2Templates:
    """Get the Jinja2 environment for the configured template directory."""
    directory = get_config().templates.directory or str(_PACKAGED_TEMPLATES)
    return _load_templates(directory)
