"""Health endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, status

from ...config import settings
from ...services.routing.constraints import PlannerConstraints

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Liveness probe; touches nothing beyond the process."""
    return {"status": "ok"}


@router.get("/health/planner", status_code=status.HTTP_200_OK)
def health_planner() -> dict:
    """Limits and weights new planning runs will use."""
    return {
        "service": settings.app_name,
        "seeded": settings.random_seed is not None,
        "constraints": asdict(PlannerConstraints()),
    }
