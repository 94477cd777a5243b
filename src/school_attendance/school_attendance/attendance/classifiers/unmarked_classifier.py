from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import NO_CONTRIBUTION, DayClassifier, DayContribution


class UnmarkedDayClassifier(DayClassifier):
    """No calendar override: only an actual record counts.

    Only a present record adds to the working-day denominator.
    """

    def contribute(self, record: Optional[AttendanceRecord]) -> DayContribution:
        if record is None:
            return NO_CONTRIBUTION
        if record.status == AttendanceStatus.PRESENT:
            return DayContribution(present=1, working=1)
        if record.status == AttendanceStatus.ABSENT:
            return DayContribution(absent=1)
        if record.status == AttendanceStatus.LATE:
            return DayContribution(late=1)
        return NO_CONTRIBUTION
