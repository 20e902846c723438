"""Visit quota tracking across the planning horizon."""

from __future__ import annotations

import random
from typing import Iterable, Mapping

from ...models.domain import Outlet


class VisitTracker:
    """Counts visits per outlet and paces them against a pro-rated quota.

    An outlet with frequency ``f`` over ``total_days`` days is due
    ``ceil(f * day / total_days)`` visits by ``day``. Outlets with a positive
    frequency priority are always visitable.
    """

    def __init__(
        self,
        outlets: Mapping[int, Outlet],
        total_days: int,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if total_days < 1:
            raise ValueError("total_days must be >= 1")
        self._outlets = outlets
        self.total_days = total_days
        self._rng = rng or random.Random()
        self._counts: dict[int, int] = {outlet_id: 0 for outlet_id in outlets}

    def required_visits(self, outlet_id: int, day: int) -> int:
        frequency = self._outlets[outlet_id].frequency
        return -(-frequency * day // self.total_days)

    def visit_count(self, outlet_id: int) -> int:
        return self._counts.get(outlet_id, 0)

    def can_visit(self, outlet_id: int, day: int) -> bool:
        outlet = self._outlets[outlet_id]
        if outlet.frequency_priority > 0:
            return True
        return self.visit_count(outlet_id) < self.required_visits(outlet_id, day)

    def record_visit(self, outlet_id: int) -> None:
        self._counts[outlet_id] = self._counts.get(outlet_id, 0) + 1

    def least_visited(self, outlet_ids: Iterable[int]) -> int | None:
        candidates = list(outlet_ids)
        if not candidates:
            return None
        fewest = min(self.visit_count(outlet_id) for outlet_id in candidates)
        tied = [outlet_id for outlet_id in candidates if self.visit_count(outlet_id) == fewest]
        return self._rng.choice(tied)

    def counts(self) -> dict[int, int]:
        return dict(self._counts)
