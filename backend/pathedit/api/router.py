"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from pathedit.api import health, paths, session, tools

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(tools.router)
api_router.include_router(paths.router)
api_router.include_router(session.router)
