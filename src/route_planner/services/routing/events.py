"""Diagnostic events reported by the planning engine.

The engine never prints. It hands :class:`PlannerEvent` objects to an
observer, which decides where they go. :class:`LoggingObserver` writes them
to the module logger and keeps them so the service can return them in the
response metadata.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Protocol

logger = logging.getLogger(__name__)

DAY_TIMEOUT = "day_timeout"
INFEASIBLE_DAY = "infeasible_day"
RETRY_EXHAUSTED = "retry_exhausted"


@dataclass(slots=True)
class PlannerEvent:
    kind: str
    day: int
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "day": self.day, "message": self.message, "details": dict(self.details)}


class PlannerObserver(Protocol):
    def on_event(self, event: PlannerEvent) -> None: ...


class LoggingObserver:
    """Logs every event at WARNING level and remembers it."""

    def __init__(self) -> None:
        self.events: List[PlannerEvent] = []

    def on_event(self, event: PlannerEvent) -> None:
        self.events.append(event)
        logger.warning(f"[day {event.day}] {event.kind}: {event.message}")

    def of_kind(self, kind: str) -> list[PlannerEvent]:
        return [event for event in self.events if event.kind == kind]
