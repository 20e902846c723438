"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Outlet
from .events import PlannerEvent


@dataclass(slots=True)
class RoutePoint:
    outlet_id: int
    visit_time: float
    travel_time: float = 0.0


@dataclass(slots=True)
class DailyRoute:
    day_number: int
    points: List[RoutePoint] = field(default_factory=list)
    total_time: float = 0.0
    total_cost: float = 0.0

    @property
    def outlet_ids(self) -> list[int]:
        return [point.outlet_id for point in self.points]

    def signature(self) -> str:
        return ",".join(str(outlet_id) for outlet_id in self.outlet_ids)


@dataclass(slots=True)
class ScheduleResult:
    days: List[DailyRoute]
    outlets: dict[int, Outlet]
    events: List[PlannerEvent]
    metadata: dict
