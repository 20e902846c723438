"""Tunable limits and weights for a planning run."""

from __future__ import annotations

from dataclasses import dataclass

from ...config import settings


@dataclass(slots=True)
class PlannerConstraints:
    default_visit_seconds: float = settings.default_visit_seconds
    priority_weight_penalty: float = settings.priority_weight_penalty
    frequency_priority_weight: float = settings.frequency_priority_weight
    visit_deficit_weight: float = settings.visit_deficit_weight
    time_tolerance_seconds: float = settings.time_tolerance_seconds
    max_distance_limit_km: float = settings.max_distance_limit_km
    max_route_attempts: int = settings.max_route_attempts
    optimizer_time_limit_seconds: float = settings.optimizer_time_limit_seconds
    optimizer_max_permutations: int = settings.optimizer_max_permutations
    optimizer_max_shuffles: int = settings.optimizer_max_shuffles
    optimizer_exhaustive_limit: int = settings.optimizer_exhaustive_limit
    start_fallback: str = settings.start_fallback
