from __future__ import annotations

from typing import Optional

from ..model import AttendanceRecord
from .base import DayClassifier, DayContribution


class LeaveClassifier(DayClassifier):
    """Leave day: counts toward the working-day denominator too."""

    def contribute(self, record: Optional[AttendanceRecord]) -> DayContribution:
        return DayContribution(leave=1, working=1)
