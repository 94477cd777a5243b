"""Monthly attendance summary computation.

Pure functions: no I/O. Callers load a user's records for the month and the
calendar overrides for the same month, then persist the result.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ..common.datetime_utils import days_in_month
from ..core.enums import DayType
from .classifiers.base import NO_CONTRIBUTION, DayContribution
from .classifiers.factory import DayClassifierFactory
from .model import AttendanceRecord, SummaryCounters

_DEFAULT_FACTORY = DayClassifierFactory()


@dataclass(frozen=True)
class DayOutcome:
    """Classification of one calendar day for one user."""

    day: date
    day_type: Optional[DayType]
    record: Optional[AttendanceRecord]
    contribution: DayContribution


def classify_days(
    *,
    month: int,
    year: int,
    records: Mapping[date, AttendanceRecord],
    overrides: Mapping[date, DayType],
    factory: Optional[DayClassifierFactory] = None,
) -> list[DayOutcome]:
    factory = factory or _DEFAULT_FACTORY
    outcomes: list[DayOutcome] = []
    for day_num in range(1, days_in_month(month, year) + 1):
        day = date(year, month, day_num)
        day_type = overrides.get(day)
        record = records.get(day)
        contribution = factory.for_day(day_type).contribute(record)
        outcomes.append(DayOutcome(day=day, day_type=day_type, record=record, contribution=contribution))
    return outcomes


def attendance_percentage(*, present_days: int, late_days: int, working_days: int) -> float:
    if working_days <= 0:
        return 0.0
    pct = (present_days + late_days) / working_days * 100
    # stored as DECIMAL(6, 2)
    return round(min(max(pct, 0.0), 100.0), 2)


def compute_summary(
    *,
    month: int,
    year: int,
    records: Mapping[date, AttendanceRecord],
    overrides: Mapping[date, DayType],
    factory: Optional[DayClassifierFactory] = None,
) -> SummaryCounters:
    """Aggregate a month of day outcomes into counters.

    ``total_days`` is the calendar length of the month regardless of records.
    Overrides and records outside the month are ignored.
    """
    outcomes = classify_days(month=month, year=year, records=records, overrides=overrides, factory=factory)

    total = NO_CONTRIBUTION
    for outcome in outcomes:
        total = total + outcome.contribution

    return SummaryCounters(
        total_days=days_in_month(month, year),
        present_days=total.present,
        absent_days=total.absent,
        late_days=total.late,
        holiday_days=total.holiday,
        leave_days=total.leave,
        working_days=total.working,
        percentage=attendance_percentage(
            present_days=total.present,
            late_days=total.late,
            working_days=total.working,
        ),
    )
