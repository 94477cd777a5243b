from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..core.enums import AttendanceStatus, DayPortion


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance on one calendar day."""

    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    remarks: Optional[str] = None
    day_portion: Optional[DayPortion] = None

    def to_dict(self) -> dict:
        return {
            "date": format_iso_date(self.work_date),
            "status": self.status.value,
            "checkInTime": self.check_in_time,
            "checkOutTime": self.check_out_time,
            "remarks": self.remarks,
            "dayType": self.day_portion.value if self.day_portion else None,
        }


@dataclass(frozen=True)
class SummaryCounters:
    """Derived monthly counters. ``percentage`` is in [0, 100]."""

    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    late_days: int = 0
    holiday_days: int = 0
    leave_days: int = 0
    working_days: int = 0
    percentage: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "lateDays": self.late_days,
            "holidayDays": self.holiday_days,
            "leaveDays": self.leave_days,
            "workingDays": self.working_days,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class MonthlySummary:
    """Aggregate for one user in one calendar month.

    Records are kept sorted by date and unique per date; use ``with_record``
    to upsert.
    """

    user_id: int
    month: int
    year: int
    records: tuple[AttendanceRecord, ...] = ()
    counters: SummaryCounters = field(default_factory=SummaryCounters)
    summary_id: Optional[int] = None

    @classmethod
    def empty(cls, user_id: int, month: int, year: int) -> "MonthlySummary":
        return cls(user_id=user_id, month=month, year=year)

    def record_for(self, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.records:
            if r.work_date == work_date:
                return r
        return None

    def records_by_date(self) -> dict[date, AttendanceRecord]:
        return {r.work_date: r for r in self.records}

    def with_record(self, record: AttendanceRecord) -> "MonthlySummary":
        if (record.work_date.year, record.work_date.month) != (self.year, self.month):
            raise ValueError(f"{record.work_date} is outside {self.month}/{self.year}")
        by_date = self.records_by_date()
        by_date[record.work_date] = record
        return replace(self, records=tuple(by_date[d] for d in sorted(by_date)))

    def with_counters(self, counters: SummaryCounters) -> "MonthlySummary":
        return replace(self, counters=counters)

    def to_dict(self) -> dict:
        out = {
            "userId": self.user_id,
            "month": self.month,
            "year": self.year,
            "records": [r.to_dict() for r in self.records],
        }
        out.update(self.counters.to_dict())
        return out
