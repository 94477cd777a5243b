from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import DayType, HolidayType
from .model import DayOverride


class DayOverrideRepository(Protocol):
    def get_by_date(self, override_date: date) -> Optional[DayOverride]:
        raise NotImplementedError

    def create(
        self,
        *,
        override_date: date,
        day_type: DayType,
        holiday_type: HolidayType,
        description: Optional[str],
        created_by: int,
    ) -> int:
        """Insert a new override. Raises ValidationError if the date is taken."""

        raise NotImplementedError

    def update(
        self,
        *,
        override_date: date,
        day_type: DayType,
        holiday_type: HolidayType,
        description: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete(self, override_date: date) -> bool:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date) -> Sequence[DayOverride]:
        """Overrides with start <= date <= end, ordered by date."""

        raise NotImplementedError
