"""
Health check endpoints.

Provides liveness and readiness checks with database connectivity checks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tcgbackend.db.database import get_session

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str
    message: str


class ReadyResponse(BaseModel):
    """Readiness response."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness check.

    Returns ok if the service is running. Does not check dependencies.
    """
    return HealthResponse(status="ok", message="TCG Backend Server is running")


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={503: {"model": ReadyResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ReadyResponse:
    """
    Readiness check.

    Checks database connectivity. Returns 503 if the database is unavailable.
    """
    try:
        await session.execute(text("SELECT 1"))
        return ReadyResponse(status="ready", database="connected")
    except Exception:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadyResponse(status="not ready", database="disconnected")
