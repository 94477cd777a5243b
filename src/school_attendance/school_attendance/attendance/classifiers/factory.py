from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...core.enums import DayType
from .base import DayClassifier
from .holiday_classifier import HolidayClassifier
from .leave_classifier import LeaveClassifier
from .unmarked_classifier import UnmarkedDayClassifier
from .working_classifier import WorkingDayClassifier


@dataclass
class DayClassifierFactory:
    """Factory Pattern: choose the classifier for a day's calendar override."""

    _by_type: dict = field(
        default_factory=lambda: {
            DayType.HOLIDAY: HolidayClassifier(),
            DayType.LEAVE: LeaveClassifier(),
            DayType.WORKING: WorkingDayClassifier(),
        }
    )
    _unmarked: DayClassifier = field(default_factory=UnmarkedDayClassifier)

    def for_day(self, day_type: Optional[DayType]) -> DayClassifier:
        if day_type is None:
            return self._unmarked
        return self._by_type[day_type]
