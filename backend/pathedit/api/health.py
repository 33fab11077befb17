"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from pathedit.config import Settings
from pathedit.dependencies import Workspace, get_settings, get_workspace
from pathedit.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    settings: Settings = Depends(get_settings),
    workspace: Workspace = Depends(get_workspace),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        env=settings.pathedit_env,
        paths=len(workspace.root),
    )
