"""Greedy construction of one day's route.

Each day starts from the selected outlet and repeatedly follows the outgoing
segment whose destination has the fewest recorded visits, breaking ties on
:func:`segment_weight`. A day is rebuilt until its stop sequence differs
from every route accepted earlier in the run, or the attempt cap is hit.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Mapping

from ...models.domain import Outlet
from .catalog import SegmentGraph
from .constraints import PlannerConstraints
from .events import INFEASIBLE_DAY, RETRY_EXHAUSTED, LoggingObserver, PlannerEvent, PlannerObserver
from .models import DailyRoute, RoutePoint
from .scoring import StartPointSelector, segment_weight
from .tracker import VisitTracker

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RouteAttempt:
    route: DailyRoute
    elapsed: float = 0.0
    abandoned: bool = False


class DailyRouteConstructor:
    def __init__(
        self,
        outlets: Mapping[int, Outlet],
        graph: SegmentGraph,
        tracker: VisitTracker,
        selector: StartPointSelector,
        *,
        working_hours_per_day: float,
        max_visits_per_day: int,
        constraints: PlannerConstraints | None = None,
        observer: PlannerObserver | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.outlets = outlets
        self.graph = graph
        self.tracker = tracker
        self.selector = selector
        self.daily_budget = working_hours_per_day * 3600
        self.max_visits_per_day = max_visits_per_day
        self.constraints = constraints or PlannerConstraints()
        self.observer = observer or LoggingObserver()
        self.rng = rng or random.Random()
        self.history: set[str] = set()

    def build_day(self, day: int) -> DailyRoute | None:
        """Build, record and return the route for ``day``; ``None`` when it has fewer than two stops."""
        start = self.selector.select(day)
        attempt = RouteAttempt(route=DailyRoute(day_number=day), abandoned=True)
        accepted = False

        for attempt_number in range(1, self.constraints.max_route_attempts + 1):
            attempt = self._attempt(day, start, attempt_number)
            if attempt.abandoned:
                break
            signature = attempt.route.signature()
            if len(attempt.route.points) >= 2 and signature not in self.history:
                self.history.add(signature)
                accepted = True
                break

        if not accepted and not attempt.abandoned:
            self._emit(
                RETRY_EXHAUSTED,
                day,
                f"No new route after {self.constraints.max_route_attempts} attempts, keeping the last one",
                signature=attempt.route.signature(),
            )

        route = attempt.route
        # A pinned start is the depot of the day, not a fresh visit.
        skip = 1 if self.selector.is_fixed else 0
        for point in route.points[skip:]:
            self.tracker.record_visit(point.outlet_id)

        if len(route.points) >= 2:
            route.total_time = attempt.elapsed
            logger.debug(f"Day {day}: {len(route.points)} stops, {route.total_time:.0f}s [{route.signature()}]")
            return route

        if attempt.abandoned:
            self._emit(INFEASIBLE_DAY, day, "No suitable start outlet", start=start)
        else:
            self._emit(
                INFEASIBLE_DAY,
                day,
                f"Route has {len(route.points)} stop(s), day skipped",
                signature=route.signature(),
            )
        return None

    def _attempt(self, day: int, start: int | None, attempt_number: int) -> RouteAttempt:
        attempt = RouteAttempt(route=DailyRoute(day_number=day))
        tried: set[int] = set()

        # Resolve the start: it must have somewhere to go and still be due today.
        current = start
        if current is None:
            attempt.abandoned = True
            return attempt

        if not self.graph.has_outgoing(current):
            tried.add(current)
            current = self._alternative_start(day, tried)
            if current is None:
                attempt.abandoned = True
                return attempt

        if not self.tracker.can_visit(current, day):
            tried.add(current)
            current = self._alternative_start(day, tried)
            if current is None:
                attempt.abandoned = True
                return attempt

        # Seed the day with the start, then extend greedily until it is full.
        points = attempt.route.points
        visited = {current}
        visit_time = self.outlets[current].visit_duration
        points.append(RoutePoint(outlet_id=current, visit_time=visit_time, travel_time=0.0))
        attempt.elapsed = visit_time

        while attempt.elapsed < self.daily_budget and len(points) < self.max_visits_per_day:
            # The distance cap does not apply to the first hop out of the start.
            candidates = [
                segment
                for segment in self.graph.outgoing(current)
                if segment.dest_id not in visited
                and self.tracker.can_visit(segment.dest_id, day)
                and (len(points) <= 1 or segment.distance <= self.constraints.max_distance_limit_km)
            ]
            if not candidates:
                logger.debug(f"Day {day}: no reachable outlet left after {current}")
                break

            # Fewest visits first, then the lightest segment. Retries shuffle so exact ties fall differently.
            if attempt_number > 1:
                self.rng.shuffle(candidates)
            best = min(
                candidates,
                key=lambda segment: (
                    self.tracker.visit_count(segment.dest_id),
                    segment_weight(segment, self.outlets, self.tracker, day, self.constraints),
                ),
            )

            # Overrunning the budget is allowed only within the tolerance.
            visit_time = self.outlets[best.dest_id].visit_duration
            step_time = best.travel_time + visit_time
            if attempt.elapsed + step_time > self.daily_budget + self.constraints.time_tolerance_seconds:
                break

            points.append(RoutePoint(outlet_id=best.dest_id, visit_time=visit_time, travel_time=best.travel_time))
            visited.add(best.dest_id)
            attempt.elapsed += step_time
            current = best.dest_id

        return attempt

    def _alternative_start(self, day: int, tried: set[int]) -> int | None:
        candidate = self.selector.select_dynamic(day, excluded=tried)
        if candidate is None or candidate in tried:
            return None
        return candidate

    def _emit(self, kind: str, day: int, message: str, **details) -> None:
        self.observer.on_event(PlannerEvent(kind=kind, day=day, message=message, details=details))
