"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="RPL_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Outlet Route Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for persisted run artifacts.")
    log_level: str = Field(default="INFO", description="Level applied to the route_planner logger.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    default_visit_seconds: float = Field(
        default=1800.0,
        gt=0,
        description="Visit duration used when a segment declares 0 minutes for an outlet.",
    )
    priority_weight_penalty: float = Field(default=300.0, ge=0.0)
    frequency_priority_weight: float = Field(default=200.0, ge=0.0)
    visit_deficit_weight: float = Field(default=500.0, ge=0.0)
    time_tolerance_seconds: float = Field(
        default=600.0,
        ge=0.0,
        description="How far a day may run past the working-hours budget when adding a stop.",
    )
    max_distance_limit_km: float = Field(
        default=100.0,
        gt=0.0,
        description="Longest allowed hop between stops, except the first hop of a day.",
    )
    max_route_attempts: int = Field(default=50, ge=1)
    optimizer_time_limit_seconds: float = Field(default=1.0, ge=0.0)
    optimizer_max_permutations: int = Field(default=1000, ge=1)
    optimizer_max_shuffles: int = Field(default=100, ge=0)
    optimizer_exhaustive_limit: int = Field(
        default=10,
        ge=1,
        description="Days with at most this many reorderable stops get an exhaustive permutation search.",
    )
    start_fallback: Literal["first", "least_visited"] = Field(
        default="first",
        description="Start outlet used when no outlet passes the visit quota.",
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for shuffles and tie-breaks. Leave unset for randomized schedules.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
