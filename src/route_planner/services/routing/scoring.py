"""Heuristic scores used to pick a day's start outlet and its next hops."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, Mapping

from ...models.domain import Outlet, RouteSegment
from .catalog import SegmentGraph
from .constraints import PlannerConstraints
from .tracker import VisitTracker

logger = logging.getLogger(__name__)

CONNECTION_WEIGHT = 1000
PRIORITY_BASE = 100
PRIORITY_WEIGHT = 100
URGENCY_WEIGHT = 200
FREQUENCY_WEIGHT = 50
FREQUENCY_PRIORITY_START_WEIGHT = 300


@dataclass(slots=True)
class StartCandidate:
    outlet_id: int
    score: float
    out_degree: int
    mean_distance: float
    priority: int
    urgency: int

    @property
    def has_connections(self) -> bool:
        return self.out_degree > 0


def score_start_candidate(
    outlet: Outlet,
    graph: SegmentGraph,
    tracker: VisitTracker,
    day: int,
) -> StartCandidate:
    out_degree = graph.out_degree(outlet.outlet_id)
    mean_distance = graph.mean_outgoing_distance(outlet.outlet_id)
    urgency = max(0, tracker.required_visits(outlet.outlet_id, day) - tracker.visit_count(outlet.outlet_id))
    # mean_distance is inf for outlets without edges, which zeroes the connection term.
    score = (
        CONNECTION_WEIGHT * out_degree / max(1.0, mean_distance)
        + (PRIORITY_BASE - outlet.priority) * PRIORITY_WEIGHT
        + urgency * URGENCY_WEIGHT
        + outlet.frequency * FREQUENCY_WEIGHT
        + outlet.frequency_priority * FREQUENCY_PRIORITY_START_WEIGHT
    )
    return StartCandidate(
        outlet_id=outlet.outlet_id,
        score=score,
        out_degree=out_degree,
        mean_distance=mean_distance,
        priority=outlet.priority,
        urgency=urgency,
    )


def rank_start_candidates(
    outlets: Mapping[int, Outlet],
    graph: SegmentGraph,
    tracker: VisitTracker,
    day: int,
    excluded: Collection[int] = (),
) -> list[StartCandidate]:
    """Score every visitable, non-excluded outlet, best first."""
    candidates = [
        score_start_candidate(outlet, graph, tracker, day)
        for outlet_id, outlet in outlets.items()
        if outlet_id not in excluded and tracker.can_visit(outlet_id, day)
    ]
    candidates.sort(key=lambda item: (not item.has_connections, -item.score, item.mean_distance))
    return candidates


class StartPointSelector:
    """Chooses where each day's route begins."""

    def __init__(
        self,
        outlets: Mapping[int, Outlet],
        graph: SegmentGraph,
        tracker: VisitTracker,
        *,
        fixed_start_id: int | None = None,
        fallback: str = "first",
    ) -> None:
        self.outlets = outlets
        self.graph = graph
        self.tracker = tracker
        self.fixed_start_id = fixed_start_id
        self.fallback = fallback

    @property
    def is_fixed(self) -> bool:
        return self.fixed_start_id is not None

    def select(self, day: int, excluded: Collection[int] = ()) -> int | None:
        if self.fixed_start_id is not None:
            return self.fixed_start_id
        return self.select_dynamic(day, excluded)

    def select_dynamic(self, day: int, excluded: Collection[int] = ()) -> int | None:
        ranked = rank_start_candidates(self.outlets, self.graph, self.tracker, day, excluded)
        if not ranked:
            return self._fallback_outlet()

        for candidate in ranked[:3]:
            logger.debug(
                f"Day {day} start candidate {candidate.outlet_id}: score={candidate.score:.0f}, "
                f"connections={candidate.out_degree}, avg_dist={candidate.mean_distance:.1f}km, "
                f"priority={candidate.priority}, urgency={candidate.urgency}"
            )
        return ranked[0].outlet_id

    def _fallback_outlet(self) -> int | None:
        if self.fallback == "least_visited":
            return self.tracker.least_visited(self.outlets.keys())
        return next(iter(self.outlets), None)


def segment_weight(
    segment: RouteSegment,
    outlets: Mapping[int, Outlet],
    tracker: VisitTracker,
    day: int,
    constraints: PlannerConstraints,
) -> float:
    """Weight of travelling along ``segment``; lower is more attractive."""
    dest = outlets[segment.dest_id]
    weight = segment.travel_cost

    if dest.priority >= 1:
        weight += constraints.priority_weight_penalty * dest.priority

    # Behind-schedule outlets pull the route towards them.
    required = tracker.required_visits(dest.outlet_id, day)
    actual = tracker.visit_count(dest.outlet_id)
    if actual < required:
        weight -= (required - actual) * constraints.visit_deficit_weight
    # Quota met: only a frequency priority keeps the outlet attractive.
    if actual >= dest.frequency:
        weight -= dest.frequency_priority * constraints.frequency_priority_weight

    return weight
