"""
Health check endpoint, mounted at the application root (``/health``).
"""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from taskmaster_api.app.core.store import utcnow


router = APIRouter()


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime


@router.get("/health", response_model=HealthStatus)
async def health() -> HealthStatus:
    return HealthStatus(status="OK", timestamp=utcnow())
