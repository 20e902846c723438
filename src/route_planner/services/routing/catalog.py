"""Outlet catalog and graph index derived from the segment list.

Outlet attributes arrive duplicated on every segment touching the outlet.
The catalog keeps the first values seen for each id and never reconciles
later ones; callers are expected to send consistent attributes.
:func:`find_attribute_conflicts` reports where they did not.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from ...config import settings
from ...models.domain import Outlet, RouteSegment


def _visit_seconds(minutes: float, default_seconds: float) -> float:
    return minutes * 60 if minutes > 0 else default_seconds


def _endpoints(segment: RouteSegment, default_seconds: float) -> tuple[Outlet, Outlet]:
    source = Outlet(
        outlet_id=segment.source_id,
        priority=segment.source_priority,
        frequency=segment.source_frequency,
        frequency_priority=segment.source_frequency_priority,
        visit_duration=_visit_seconds(segment.source_visit_minutes, default_seconds),
    )
    dest = Outlet(
        outlet_id=segment.dest_id,
        priority=segment.dest_priority,
        frequency=segment.dest_frequency,
        frequency_priority=segment.dest_frequency_priority,
        visit_duration=_visit_seconds(segment.dest_visit_minutes, default_seconds),
    )
    return source, dest


def collect_outlets(
    segments: Iterable[RouteSegment],
    *,
    default_visit_seconds: float | None = None,
) -> dict[int, Outlet]:
    """Build the outlet catalog in order of first appearance."""
    default_seconds = default_visit_seconds if default_visit_seconds is not None else settings.default_visit_seconds
    outlets: dict[int, Outlet] = {}
    for segment in segments:
        for outlet in _endpoints(segment, default_seconds):
            if outlet.outlet_id not in outlets:
                outlets[outlet.outlet_id] = outlet
    return outlets


def find_attribute_conflicts(
    segments: Iterable[RouteSegment],
    *,
    default_visit_seconds: float | None = None,
) -> dict[int, list[Outlet]]:
    """Return, per outlet id, the attribute variants that lost to the first registration."""
    default_seconds = default_visit_seconds if default_visit_seconds is not None else settings.default_visit_seconds
    first_seen: dict[int, Outlet] = {}
    conflicts: dict[int, list[Outlet]] = {}
    for segment in segments:
        for outlet in _endpoints(segment, default_seconds):
            registered = first_seen.setdefault(outlet.outlet_id, outlet)
            if outlet != registered and outlet not in conflicts.get(outlet.outlet_id, []):
                conflicts.setdefault(outlet.outlet_id, []).append(outlet)
    return conflicts


class SegmentGraph:
    """Read-only index over the directed segments."""

    def __init__(self, segments: Sequence[RouteSegment]) -> None:
        self.segments = list(segments)
        self._outgoing: dict[int, list[RouteSegment]] = {}
        self._edges: dict[tuple[int, int], RouteSegment] = {}
        for segment in self.segments:
            self._outgoing.setdefault(segment.source_id, []).append(segment)
            # First matching edge wins for pair lookups.
            self._edges.setdefault((segment.source_id, segment.dest_id), segment)

    def outgoing(self, outlet_id: int) -> list[RouteSegment]:
        return self._outgoing.get(outlet_id, [])

    def has_outgoing(self, outlet_id: int) -> bool:
        return bool(self._outgoing.get(outlet_id))

    def out_degree(self, outlet_id: int) -> int:
        return len(self.outgoing(outlet_id))

    def mean_outgoing_distance(self, outlet_id: int) -> float:
        edges = self.outgoing(outlet_id)
        if not edges:
            return math.inf
        return sum(edge.distance for edge in edges) / len(edges)

    def edge(self, source_id: int, dest_id: int) -> RouteSegment | None:
        return self._edges.get((source_id, dest_id))
