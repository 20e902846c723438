"""Route planning request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class RouteSegmentInput(BaseModel):
    """One directed segment; legacy camelCase names are accepted as well."""

    model_config = ConfigDict(populate_by_name=True)

    source_id: int = Field(..., validation_alias=AliasChoices("source_id", "idOutlet1"))
    dest_id: int = Field(..., validation_alias=AliasChoices("dest_id", "idOutlet2"))
    travel_time: float = Field(..., ge=0, validation_alias=AliasChoices("travel_time", "time"))
    distance: float = Field(..., ge=0, validation_alias=AliasChoices("distance", "length"))
    travel_cost: float = Field(0.0, validation_alias=AliasChoices("travel_cost", "cost"))
    source_priority: int = Field(0, validation_alias=AliasChoices("source_priority", "priority1"))
    dest_priority: int = Field(0, validation_alias=AliasChoices("dest_priority", "priority2"))
    source_visit_minutes: float = Field(
        0.0,
        ge=0,
        validation_alias=AliasChoices("source_visit_minutes", "timeVisit1"),
        description="Visit duration in minutes; 0 means the configured default.",
    )
    dest_visit_minutes: float = Field(0.0, ge=0, validation_alias=AliasChoices("dest_visit_minutes", "timeVisit2"))
    source_frequency: int = Field(0, ge=0, validation_alias=AliasChoices("source_frequency", "frequency1"))
    dest_frequency: int = Field(0, ge=0, validation_alias=AliasChoices("dest_frequency", "frequency2"))
    source_frequency_priority: int = Field(
        0, validation_alias=AliasChoices("source_frequency_priority", "frequencyPriority1")
    )
    dest_frequency_priority: int = Field(
        0, validation_alias=AliasChoices("dest_frequency_priority", "frequencyPriority2")
    )


class RoutePlanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_days: int = Field(..., ge=1, validation_alias=AliasChoices("total_days", "totalDays"))
    working_hours_per_day: float = Field(
        ..., gt=0, validation_alias=AliasChoices("working_hours_per_day", "workingHoursPerDay")
    )
    use_fixed_start_point: bool = Field(
        False, validation_alias=AliasChoices("use_fixed_start_point", "useFixedStartPoint")
    )
    fixed_start_point_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("fixed_start_point_id", "fixedStartPointId")
    )
    max_visits_per_day: int = Field(
        ...,
        ge=1,
        validation_alias=AliasChoices("max_visits_per_day", "maxVisitsPerDay", "maxCountVisists"),
    )
    segments: List[RouteSegmentInput] = Field(..., min_length=1)
    persist: bool = Field(default=False, description="Write summary.json and schedule.csv for this run.")
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")

    @model_validator(mode="after")
    def _check_fixed_start(self) -> "RoutePlanRequest":
        if self.use_fixed_start_point and (self.fixed_start_point_id is None or self.fixed_start_point_id <= 0):
            raise ValueError("fixed_start_point_id must be a positive id when use_fixed_start_point is true.")
        return self


class VisitRecordModel(BaseModel):
    day_number: int
    route_point_number: int
    outlet_id: int
    priority: int
    frequency: int
    frequency_priority: int
    visit_time: float
    travel_time: float
    total_route_time: float
    total_route_cost: float


class RoutePointModel(BaseModel):
    route_point_number: int
    outlet_id: int
    priority: int
    frequency: int
    frequency_priority: int
    visit_time: float
    travel_time: float


class DailyRouteModel(BaseModel):
    day_number: int
    total_time: float
    total_cost: float
    stop_count: int
    points: List[RoutePointModel]


class RoutePlanResponse(BaseModel):
    metadata: dict
    schedule: List[DailyRouteModel]
    records: List[VisitRecordModel]
