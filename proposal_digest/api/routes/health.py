"""Health check endpoint for monitoring API availability."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from proposal_digest import __version__
from proposal_digest.config import Settings, get_settings

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: healthy, or degraded when no backend credential is set
        timestamp: Current server timestamp
        version: API version
        llm_configured: Whether OPENAI_API_KEY is present
    """

    status: str
    timestamp: datetime
    version: str
    llm_configured: bool = False


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Health check endpoint.

    Analysis still answers without a credential (with placeholders), so a
    missing key only degrades the status.
    """
    return HealthResponse(
        status="healthy" if settings.llm_configured else "degraded",
        timestamp=datetime.now(UTC),
        version=__version__,
        llm_configured=settings.llm_configured,
    )


@router.get("/", response_model=dict[str, str])
async def root() -> dict[str, str]:
    """Basic API information and documentation links."""
    return {
        "name": "Proposal Digest API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health",
    }
