"""Health probe schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness: the process is up and serving."""

    status: str = Field(default="ok", description="Service status")
    version: str | None = Field(default=None, description="Application version")


class ReadinessResponse(BaseModel):
    """Readiness: the SQL database answered SELECT 1."""

    status: str = Field(default="ok", description="Readiness status")


class ReadinessErrorResponse(BaseModel):
    """Readiness failure (503): database not configured or unreachable."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Why the database check failed")
