"""Route planning endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import RoutePlanRequest, RoutePlanResponse
from ...services.routing.service import generate_schedule

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/route-planner", tags=["route-planner"])


@router.post("/plan", response_model=RoutePlanResponse, status_code=status.HTTP_200_OK)
def plan(payload: RoutePlanRequest) -> RoutePlanResponse:
    try:
        return generate_schedule(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error generating route plan: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {exc}",
        ) from exc
