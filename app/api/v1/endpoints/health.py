"""Health check endpoints. Used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from app.core.config import get_settings
from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.persistence.database import get_session_factory
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok and the running version for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unavailable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when the SQL database answers; 503 otherwise."""
    try:
        factory = get_session_factory()
        async with factory() as session:
            await session.execute(text("SELECT 1"))
    except SqlNotConfiguredException as e:
        message = e.message
    except DBAPIError:
        message = "Database unreachable"
    else:
        return ReadinessResponse()
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(message=message).model_dump(),
    )
