from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..model import AttendanceRecord


@dataclass(frozen=True)
class DayContribution:
    """Counter increments produced by a single calendar day."""

    present: int = 0
    absent: int = 0
    late: int = 0
    holiday: int = 0
    leave: int = 0
    working: int = 0

    def __add__(self, other: "DayContribution") -> "DayContribution":
        return DayContribution(
            present=self.present + other.present,
            absent=self.absent + other.absent,
            late=self.late + other.late,
            holiday=self.holiday + other.holiday,
            leave=self.leave + other.leave,
            working=self.working + other.working,
        )


NO_CONTRIBUTION = DayContribution()


class DayClassifier(ABC):
    """Strategy Pattern: how one kind of calendar day feeds the monthly counters."""

    @abstractmethod
    def contribute(self, record: Optional[AttendanceRecord]) -> DayContribution:
        raise NotImplementedError
