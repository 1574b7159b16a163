from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from src.config import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    browser: str
    environment: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@router.get("/health", response_model=HealthResponse)
async def get_health(request: Request) -> HealthResponse:
    session = getattr(request.app.state, "browser_session", None)
    browser_state = "idle"
    if session is None:
        browser_state = "unavailable"
    elif session.is_started:
        browser_state = "up"

    return HealthResponse(
        status="ok" if session is not None else "degraded",
        browser=browser_state,
        environment=settings.app_env,
    )
