"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.user_admin.api.http.app_data import ApplicationDependencies
from src.user_admin.api.http.deps import get_templates
from src.user_admin.api.http.routers.health import router as health_router
from src.user_admin.api.http.routers.users import router as users_router
from src.user_admin.api.utils.app_startup import configure_logging
from src.user_admin.core.exceptions import InvalidUserIdError
from src.user_admin.core.services import DbManageService, DbSessionService
from src.user_admin.runtime.context import get_config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return response


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    client_ip = request.client.host if request.client else "unknown"

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


async def invalid_user_id_handler(request: Request, exc: InvalidUserIdError):
    logger.warning("Rejected request for unknown user {}", exc.user_id)
    return get_templates().TemplateResponse(
        request,
        "error.html",
        {"message": str(exc)},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def startup(app: FastAPI, database_service: DbSessionService | None = None) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    if database_service is None:
        database_service = DbSessionService()

    if config.database.create_tables:
        DbManageService(database_service.engine).create_all()

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
    )


def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    app_dependencies.database_service.dispose()


def create_app(database_service: DbSessionService | None = None) -> FastAPI:
    """Build the application.

    Args:
        database_service: Optional pre-built database service. When omitted
            one is created from configuration at startup.
    """
    config = get_config()
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        startup(app, database_service)
        try:
            yield
        finally:
            shutdown(app)

    app = FastAPI(
        title=config.app.title,
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.middleware("http")(log_requests)
    app.add_exception_handler(InvalidUserIdError, invalid_user_id_handler)

    app.include_router(health_router)
    app.include_router(users_router)

    @app.get("/", include_in_schema=False)
    def index() -> RedirectResponse:
        return RedirectResponse(url="/users", status_code=status.HTTP_302_FOUND)

    return app


app = create_app()

# expose the factory and lifecycle hooks for tests
__all__ = ["app", "create_app", "startup", "shutdown"]


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        log_config=None,
    )
