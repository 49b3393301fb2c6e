"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from beadrope.api import documents, health, layout, printing, projects, report

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(documents.router)
api_router.include_router(layout.router)
api_router.include_router(report.router)
api_router.include_router(printing.router)
api_router.include_router(projects.router)
