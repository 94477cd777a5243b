from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import format_iso_date, month_bounds
from ..common.validators import require_date, require_enum, require_month, require_year
from ..core.enums import DayType, HolidayType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DayOverride
from .repository import DayOverrideRepository

logger = logging.getLogger(__name__)


class DayCalendarService:
    """Management of calendar-wide day overrides (holiday / leave / working).

    Stored monthly summaries are not touched here; they pick up calendar
    changes on their next write or explicit recompute.
    """

    def __init__(self, day_overrides: DayOverrideRepository):
        self._day_overrides = day_overrides

    @staticmethod
    def _require_management(current_role: Role, action: str) -> None:
        if current_role != Role.MANAGEMENT:
            raise AuthorizationError(f"Access denied. Only management can {action}.")

    def add(
        self,
        *,
        current_role: Role,
        current_user_id: int,
        override_date,
        day_type,
        holiday_type=None,
        description: Optional[str] = None,
    ) -> DayOverride:
        self._require_management(current_role, "manage days")
        override_date = require_date(override_date)
        day_type = require_enum(DayType, day_type, "dayType")
        holiday_type = require_enum(HolidayType, holiday_type or HolidayType.BOTH.value, "holidayType")

        if self._day_overrides.get_by_date(override_date):
            raise ValidationError("This date is already marked.")

        self._day_overrides.create(
            override_date=override_date,
            day_type=day_type,
            holiday_type=holiday_type,
            description=description.strip() if description else None,
            created_by=int(current_user_id),
        )
        logger.info("day override added date=%s type=%s by=%s", override_date, day_type.value, current_user_id)
        return self._day_overrides.get_by_date(override_date)

    def remove(self, *, current_role: Role, override_date) -> None:
        self._require_management(current_role, "remove days")
        override_date = require_date(override_date)
        if not self._day_overrides.delete(override_date):
            raise NotFoundError("Day management record not found.")
        logger.info("day override removed date=%s", override_date)

    def update(
        self,
        *,
        current_role: Role,
        override_date,
        day_type,
        holiday_type=None,
        description: Optional[str] = None,
    ) -> DayOverride:
        self._require_management(current_role, "update days")
        override_date = require_date(override_date)
        day_type = require_enum(DayType, day_type, "dayType")

        existing = self._day_overrides.get_by_date(override_date)
        if not existing:
            raise NotFoundError("Day management record not found.")
        holiday_type = (
            require_enum(HolidayType, holiday_type, "holidayType") if holiday_type else existing.holiday_type
        )

        self._day_overrides.update(
            override_date=override_date,
            day_type=day_type,
            holiday_type=holiday_type,
            description=description.strip() if description else None,
        )
        logger.info("day override updated date=%s type=%s", override_date, day_type.value)
        return self._day_overrides.get_by_date(override_date)

    def list_for_month(self, *, current_role: Role, month, year) -> Sequence[DayOverride]:
        self._require_management(current_role, "view day management")
        start, end = month_bounds(require_month(month), require_year(year))
        return self._day_overrides.list_range(start=start, end=end)

    def marked_days_map(self, *, month, year) -> dict[str, str]:
        """``{"YYYY-MM-DD": day_type}`` for calendar display."""
        start, end = month_bounds(require_month(month), require_year(year))
        return {
            format_iso_date(o.override_date): o.day_type.value
            for o in self._day_overrides.list_range(start=start, end=end)
        }
