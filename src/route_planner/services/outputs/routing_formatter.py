"""Serializers for route planning outputs."""

from __future__ import annotations

import csv
import io
from typing import Mapping, Sequence

from ...models.domain import Outlet
from ..routing.models import DailyRoute, ScheduleResult

RECORD_FIELDS = [
    "day_number",
    "route_point_number",
    "outlet_id",
    "priority",
    "frequency",
    "frequency_priority",
    "visit_time",
    "travel_time",
    "total_route_time",
    "total_route_cost",
]


def _point_rows(route: DailyRoute, outlets: Mapping[int, Outlet]) -> list[dict]:
    rows = []
    for position, point in enumerate(route.points, start=1):
        outlet = outlets[point.outlet_id]
        rows.append(
            {
                "route_point_number": position,
                "outlet_id": point.outlet_id,
                "priority": outlet.priority,
                "frequency": outlet.frequency,
                "frequency_priority": outlet.frequency_priority,
                "visit_time": point.visit_time,
                "travel_time": point.travel_time,
            }
        )
    return rows


def schedule_to_records(days: Sequence[DailyRoute], outlets: Mapping[int, Outlet]) -> list[dict]:
    """Flatten the schedule into one record per visit, day totals repeated on each."""
    records: list[dict] = []
    for route in days:
        for row in _point_rows(route, outlets):
            records.append(
                {
                    "day_number": route.day_number,
                    **row,
                    "total_route_time": route.total_time,
                    "total_route_cost": route.total_cost,
                }
            )
    return records


def schedule_to_days(days: Sequence[DailyRoute], outlets: Mapping[int, Outlet]) -> list[dict]:
    return [
        {
            "day_number": route.day_number,
            "total_time": route.total_time,
            "total_cost": route.total_cost,
            "stop_count": len(route.points),
            "points": _point_rows(route, outlets),
        }
        for route in days
    ]


def schedule_result_to_json(result: ScheduleResult) -> dict:
    return {
        "metadata": result.metadata,
        "schedule": schedule_to_days(result.days, result.outlets),
    }


def schedule_result_to_csv(result: ScheduleResult) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=RECORD_FIELDS)
    writer.writeheader()
    for record in schedule_to_records(result.days, result.outlets):
        writer.writerow(record)
    return buffer.getvalue()
