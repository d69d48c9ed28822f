"""
Notes AI Proxy - Health & Info Routes
=====================================

What:  GET / (server info) and GET /api/health (readiness of the AI service).
Why:   The frontend calls /api/health before enabling its AI buttons; uptime
       checks hit /.
How:   Neither route touches the network. "Configured" only means a
       non-placeholder GROQ_API_KEY is present; the key is not tested
       against Groq.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app import __version__
from app.config import Settings, get_settings
from app.schemas.ai import HealthResponse, ServerInfoResponse

router = APIRouter(tags=["Health"])


def _iso_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get(
    "/",
    response_model=ServerInfoResponse,
    summary="Server info",
)
async def server_info() -> ServerInfoResponse:
    return ServerInfoResponse(
        message="Shareable Notes AI Proxy Server ✅",
        version=__version__,
        status="running",
        timestamp=_iso_timestamp(),
    )


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="AI service health check",
    description="Reports whether the Groq API key is configured. Always HTTP 200.",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    configured = settings.api_key_configured
    return HealthResponse(
        status="ok",
        api_key_configured=configured,
        message="AI service ready" if configured else "API key not configured",
    )
