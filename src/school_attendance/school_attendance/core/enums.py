from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access checks."""

    STUDENT = "student"
    STAFF = "staff"
    MANAGEMENT = "management"


class AttendanceStatus(str, Enum):
    """Per-user, per-day attendance status stored on a record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class DayType(str, Enum):
    """Calendar-wide day classification. No override means unmarked."""

    HOLIDAY = "holiday"
    LEAVE = "leave"
    WORKING = "working"


class HolidayType(str, Enum):
    STUDENTS = "students"
    STAFF = "staff"
    BOTH = "both"


class DayPortion(str, Enum):
    """Set by the scanner: first scan is a half day, a later scan completes it."""

    HALF_DAY = "half-day"
    FULL_DAY = "full-day"


class BulkStatusCode(int, Enum):
    """Numeric codes accepted by bulk marking."""

    WORKING = 0
    PRESENT = 1
    ABSENT = 2
