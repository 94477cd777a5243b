from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..core.enums import DayType, HolidayType


@dataclass(frozen=True)
class DayOverride:
    """Calendar-wide classification of a date (not per user)."""

    override_id: int
    override_date: date
    day_type: DayType
    holiday_type: HolidayType = HolidayType.BOTH
    description: Optional[str] = None
    created_by: Optional[int] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.override_id,
            "date": format_iso_date(self.override_date),
            "dayType": self.day_type.value,
            "holidayType": self.holiday_type.value,
            "description": self.description,
            "createdBy": self.created_by,
        }
