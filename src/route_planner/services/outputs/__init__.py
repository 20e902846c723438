"""Output serializers."""

from .routing_formatter import (
    RECORD_FIELDS,
    schedule_result_to_csv,
    schedule_result_to_json,
    schedule_to_days,
    schedule_to_records,
)

__all__ = [
    "RECORD_FIELDS",
    "schedule_to_records",
    "schedule_to_days",
    "schedule_result_to_json",
    "schedule_result_to_csv",
]
