from __future__ import annotations

from typing import Optional

from ..model import AttendanceRecord
from .base import DayClassifier, DayContribution


class HolidayClassifier(DayClassifier):
    """Holiday: counted as a holiday only, whatever the user recorded."""

    def contribute(self, record: Optional[AttendanceRecord]) -> DayContribution:
        return DayContribution(holiday=1)
