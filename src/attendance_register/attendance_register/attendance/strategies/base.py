from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from ..model import AttendanceEvent


class ReconcilePolicy(ABC):
    """Strategy Pattern: how sparse events for one month become per-day statuses."""

    @abstractmethod
    def reconcile(self, *, year: int, month: int, events: Iterable[AttendanceEvent]) -> Sequence:
        raise NotImplementedError
