"""Intra-day reordering of stops to reduce total route time.

Candidate orderings are produced lazily and evaluated until either the
candidate budget or the wall-clock budget runs out, so the search can stop
at any point and still return the best ordering seen. Small days get an
exhaustive permutation search, large days a sample of heuristic orderings.
"""

from __future__ import annotations

import itertools
import logging
import random
import time
from typing import Callable, Iterator, Sequence

from .catalog import SegmentGraph
from .constraints import PlannerConstraints
from .events import DAY_TIMEOUT, LoggingObserver, PlannerEvent, PlannerObserver
from .models import DailyRoute, RoutePoint

logger = logging.getLogger(__name__)


def exhaustive_orderings(points: Sequence[RoutePoint], limit: int) -> Iterator[list[RoutePoint]]:
    """Permutations by recursive swapping, starting with the given order."""
    items = list(points)

    def permute(start: int) -> Iterator[list[RoutePoint]]:
        if start >= len(items):
            yield list(items)
            return
        for index in range(start, len(items)):
            items[start], items[index] = items[index], items[start]
            yield from permute(start + 1)
            items[start], items[index] = items[index], items[start]

    return itertools.islice(permute(0), limit)


def heuristic_orderings(
    points: Sequence[RoutePoint],
    limit: int,
    max_shuffles: int,
    rng: random.Random,
) -> Iterator[list[RoutePoint]]:
    """Original order, reversed order, then random shuffles not produced before."""
    seen: set[tuple[int, ...]] = set()
    produced = 0

    for order in (list(points), list(reversed(points))):
        if produced >= limit:
            return
        key = tuple(point.outlet_id for point in order)
        if key in seen:
            continue
        seen.add(key)
        produced += 1
        yield order

    for _ in range(min(max(limit - 2, 0), max_shuffles)):
        shuffled = list(points)
        rng.shuffle(shuffled)
        key = tuple(point.outlet_id for point in shuffled)
        if key in seen:
            continue
        seen.add(key)
        yield shuffled


def evaluate_path(
    path: Sequence[RoutePoint],
    graph: SegmentGraph,
    day_number: int,
    max_distance_km: float,
) -> DailyRoute | None:
    """Rebuild a day along ``path``; ``None`` if an edge is missing or a later hop is too long."""
    if not path:
        return None

    first = path[0]
    points = [RoutePoint(outlet_id=first.outlet_id, visit_time=first.visit_time, travel_time=0.0)]
    total_time = first.visit_time
    total_cost = 0.0

    for index in range(1, len(path)):
        previous, current = path[index - 1], path[index]
        segment = graph.edge(previous.outlet_id, current.outlet_id)
        if segment is None:
            return None
        if index > 1 and segment.distance > max_distance_km:
            return None
        points.append(
            RoutePoint(outlet_id=current.outlet_id, visit_time=current.visit_time, travel_time=segment.travel_time)
        )
        total_time += segment.travel_time + current.visit_time
        total_cost += segment.travel_cost

    return DailyRoute(day_number=day_number, points=points, total_time=total_time, total_cost=total_cost)


def candidate_orderings(
    points: Sequence[RoutePoint],
    constraints: PlannerConstraints,
    rng: random.Random,
) -> Iterator[list[RoutePoint]]:
    if len(points) <= constraints.optimizer_exhaustive_limit:
        return exhaustive_orderings(points, constraints.optimizer_max_permutations)
    return heuristic_orderings(
        points,
        constraints.optimizer_max_permutations,
        constraints.optimizer_max_shuffles,
        rng,
    )


def optimize_day(
    route: DailyRoute,
    graph: SegmentGraph,
    *,
    fixed_start: bool,
    constraints: PlannerConstraints | None = None,
    rng: random.Random | None = None,
    observer: PlannerObserver | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> DailyRoute:
    """Return the fastest valid ordering of ``route``, never slower than ``route`` itself.

    Re-pricing uses the first edge per pair, which can be slower than the
    parallel edge the day was built on, so ``route.total_time`` is the bar.
    Candidates equal to it still replace ``route`` and carry the day's cost.
    """
    if len(route.points) <= 2:
        return route

    constraints = constraints or PlannerConstraints()
    rng = rng or random.Random()
    observer = observer or LoggingObserver()

    pinned = route.points[0] if fixed_start else None
    movable = route.points[1:] if fixed_start else list(route.points)

    best: DailyRoute | None = None
    evaluated = 0
    deadline = clock() + constraints.optimizer_time_limit_seconds

    for order in candidate_orderings(movable, constraints, rng):
        if clock() > deadline:
            observer.on_event(
                PlannerEvent(
                    kind=DAY_TIMEOUT,
                    day=route.day_number,
                    message=f"Optimization stopped after {evaluated} candidate(s)",
                    details={"evaluated": evaluated},
                )
            )
            break
        evaluated += 1
        path = [pinned, *order] if pinned is not None else order
        candidate = evaluate_path(path, graph, route.day_number, constraints.max_distance_limit_km)
        if candidate is None or candidate.total_time > route.total_time:
            continue
        if best is None or candidate.total_time < best.total_time:
            best = candidate

    if best is None:
        logger.debug(f"Day {route.day_number}: no reordering at or below the built time among {evaluated} candidate(s)")
        return route

    logger.debug(
        f"Day {route.day_number}: best of {evaluated} candidate(s) takes {best.total_time:.0f}s "
        f"(was {route.total_time:.0f}s)"
    )
    return best


def optimize_schedule(
    schedule: Sequence[DailyRoute],
    graph: SegmentGraph,
    *,
    fixed_start: bool,
    constraints: PlannerConstraints | None = None,
    rng: random.Random | None = None,
    observer: PlannerObserver | None = None,
) -> list[DailyRoute]:
    return [
        optimize_day(
            route,
            graph,
            fixed_start=fixed_start,
            constraints=constraints,
            rng=rng,
            observer=observer,
        )
        for route in schedule
    ]
