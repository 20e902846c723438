"""Domain models for outlets and the travel segments between them."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Outlet:
    """A visitable location. Lower ``priority`` numbers are more important."""

    outlet_id: int
    priority: int
    frequency: int
    frequency_priority: int
    visit_duration: float


@dataclass(slots=True, frozen=True)
class RouteSegment:
    """Directed edge from ``source_id`` to ``dest_id``.

    Outlet attributes travel on every edge that touches the outlet; visit
    durations are in minutes here and converted to seconds by the catalog.
    """

    source_id: int
    dest_id: int
    travel_time: float
    distance: float
    travel_cost: float
    source_priority: int = 0
    dest_priority: int = 0
    source_visit_minutes: float = 0.0
    dest_visit_minutes: float = 0.0
    source_frequency: int = 0
    dest_frequency: int = 0
    source_frequency_priority: int = 0
    dest_frequency_priority: int = 0
