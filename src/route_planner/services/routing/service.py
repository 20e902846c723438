"""Route planning orchestration service."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from ...config import settings
from ...models.domain import RouteSegment
from ...persistence.filesystem import FileStorage
from ...schemas.routing import (
    DailyRouteModel,
    RoutePlanRequest,
    RoutePlanResponse,
    VisitRecordModel,
)
from ..outputs.routing_formatter import (
    schedule_result_to_csv,
    schedule_result_to_json,
    schedule_to_days,
    schedule_to_records,
)
from .catalog import SegmentGraph, collect_outlets, find_attribute_conflicts
from .constraints import PlannerConstraints
from .constructor import DailyRouteConstructor
from .events import LoggingObserver, PlannerObserver
from .models import DailyRoute, ScheduleResult
from .optimizer import optimize_schedule
from .scoring import StartPointSelector
from .tracker import VisitTracker

logger = logging.getLogger(__name__)


def _build_segments(payload: RoutePlanRequest) -> list[RouteSegment]:
    return [
        RouteSegment(
            source_id=segment.source_id,
            dest_id=segment.dest_id,
            travel_time=segment.travel_time,
            distance=segment.distance,
            travel_cost=segment.travel_cost,
            source_priority=segment.source_priority,
            dest_priority=segment.dest_priority,
            source_visit_minutes=segment.source_visit_minutes,
            dest_visit_minutes=segment.dest_visit_minutes,
            source_frequency=segment.source_frequency,
            dest_frequency=segment.dest_frequency,
            source_frequency_priority=segment.source_frequency_priority,
            dest_frequency_priority=segment.dest_frequency_priority,
        )
        for segment in payload.segments
    ]


def _default_rng() -> random.Random:
    return random.Random(settings.random_seed) if settings.random_seed is not None else random.Random()


def plan_schedule(
    segments: Sequence[RouteSegment],
    *,
    total_days: int,
    working_hours_per_day: float,
    max_visits_per_day: int,
    fixed_start_point_id: int | None = None,
    constraints: PlannerConstraints | None = None,
    rng: random.Random | None = None,
    observer: PlannerObserver | None = None,
) -> ScheduleResult:
    """Build the day-by-day schedule for one request.

    Every call owns its catalog, tracker, random source and observer, so
    concurrent calls share no state.

    Raises:
        ValueError: if no outlets can be derived from ``segments`` or the
            fixed start outlet is not among them.
    """
    constraints = constraints or PlannerConstraints()
    rng = rng or _default_rng()
    observer = observer or LoggingObserver()

    outlets = collect_outlets(segments, default_visit_seconds=constraints.default_visit_seconds)
    if not outlets:
        raise ValueError("No outlets could be collected from the provided segments.")
    if fixed_start_point_id is not None and fixed_start_point_id not in outlets:
        raise ValueError(f"Fixed start outlet {fixed_start_point_id} is not present among outlets.")

    conflicts = find_attribute_conflicts(segments, default_visit_seconds=constraints.default_visit_seconds)
    if conflicts:
        logger.warning(
            f"{len(conflicts)} outlet(s) carry conflicting attributes across segments; "
            f"first occurrence kept: {sorted(conflicts)[:10]}"
        )

    graph = SegmentGraph(segments)
    tracker = VisitTracker(outlets, total_days, rng=rng)
    selector = StartPointSelector(
        outlets,
        graph,
        tracker,
        fixed_start_id=fixed_start_point_id,
        fallback=constraints.start_fallback,
    )
    constructor = DailyRouteConstructor(
        outlets,
        graph,
        tracker,
        selector,
        working_hours_per_day=working_hours_per_day,
        max_visits_per_day=max_visits_per_day,
        constraints=constraints,
        observer=observer,
        rng=rng,
    )

    days: list[DailyRoute] = []
    for day in range(1, total_days + 1):
        route = constructor.build_day(day)
        if route is not None:
            days.append(route)

    days = optimize_schedule(
        days,
        graph,
        fixed_start=fixed_start_point_id is not None,
        constraints=constraints,
        rng=rng,
        observer=observer,
    )

    events = list(getattr(observer, "events", []))
    metadata = {
        "status": "complete" if days else "empty",
        "total_days": total_days,
        "days_planned": len(days),
        "outlets": len(outlets),
        "segments": len(segments),
        "use_fixed_start_point": fixed_start_point_id is not None,
        "attribute_conflicts": len(conflicts),
        "visit_counts": {str(outlet_id): count for outlet_id, count in tracker.counts().items()},
        "events": [event.as_dict() for event in events],
    }
    logger.info(
        f"Planned {len(days)}/{total_days} day(s) over {len(outlets)} outlets "
        f"({sum(len(route.points) for route in days)} visits, {len(events)} event(s))"
    )
    return ScheduleResult(days=days, outlets=outlets, events=events, metadata=metadata)


def generate_schedule(payload: RoutePlanRequest) -> RoutePlanResponse:
    segments = _build_segments(payload)
    result = plan_schedule(
        segments,
        total_days=payload.total_days,
        working_hours_per_day=payload.working_hours_per_day,
        max_visits_per_day=payload.max_visits_per_day,
        fixed_start_point_id=payload.fixed_start_point_id if payload.use_fixed_start_point else None,
    )

    if payload.run_label:
        result.metadata["run_label"] = payload.run_label

    if payload.persist:
        try:
            run_dir = FileStorage().save_route_plan(
                schedule_result_to_json(result),
                schedule_result_to_csv(result),
                label=payload.run_label,
            )
            result.metadata["output_dir"] = str(run_dir)
        except OSError as exc:
            logger.warning(f"Failed to persist route plan outputs: {exc}")

    return RoutePlanResponse(
        metadata=result.metadata,
        schedule=[DailyRouteModel(**day) for day in schedule_to_days(result.days, result.outlets)],
        records=[VisitRecordModel(**record) for record in schedule_to_records(result.days, result.outlets)],
    )


async def generate_schedule_async(payload: RoutePlanRequest) -> RoutePlanResponse:
    """Coroutine wrapper for async hosts; the computation itself never awaits."""
    return generate_schedule(payload)
