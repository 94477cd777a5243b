from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import DayClassifier, DayContribution


class WorkingDayClassifier(DayClassifier):
    """Explicitly marked working day.

    A missing record is an implicit absence. A present record adds a second
    working day on top of the base one; summaries already stored depend on it.
    """

    def contribute(self, record: Optional[AttendanceRecord]) -> DayContribution:
        base = DayContribution(working=1)
        if record is None:
            return base + DayContribution(absent=1)
        if record.status == AttendanceStatus.PRESENT:
            return base + DayContribution(present=1, working=1)
        if record.status == AttendanceStatus.ABSENT:
            return base + DayContribution(absent=1)
        if record.status == AttendanceStatus.LATE:
            return base + DayContribution(late=1)
        return base
