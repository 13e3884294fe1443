"""
Health check endpoint. Minimal, stable, no content rendering.
"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from pathlib import Path
import os
from docs_site.public.schemas import HealthResponse
from docs_site.public.settings import DocsSettings
from docs_site.public.routes.deps import get_settings

router = APIRouter()

build_commit = os.getenv("BUILD_COMMIT") or "unknown"


@router.get("/health")
async def health_check(settings: DocsSettings = Depends(get_settings)) -> HealthResponse:
    """
    Simple health check. Returns service status, version, commit.
    """
    return HealthResponse(
        status="ok",
        service="satlayer-docs",
        version=settings.api_version,
        commit=build_commit,
        timestamp=datetime.now(timezone.utc),
        content_dir_exists=Path(settings.content_dir).is_dir(),
    )
