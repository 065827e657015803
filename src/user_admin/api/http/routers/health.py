from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.user_admin.api.http.deps import get_database_service
from src.user_admin.core.services import DbSessionService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health() -> dict[str, str]:
    """Liveness check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
def readiness(
    database_service: DbSessionService = Depends(get_database_service),
) -> JSONResponse:
    """Readiness check endpoint; verifies the database answers."""
    database_ok = database_service.health_check()
    body = {
        "status": "ready" if database_ok else "not_ready",
        "checks": {"database": "ok" if database_ok else "unavailable"},
    }
    return JSONResponse(status_code=200 if database_ok else 503, content=body)
