from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.school_attendance.school_attendance.attendance.model import MonthlySummary
from src.school_attendance.school_attendance.container import build_services
from src.school_attendance.school_attendance.core.enums import DayType, HolidayType, Role
from src.school_attendance.school_attendance.core.exceptions import ValidationError
from src.school_attendance.school_attendance.day_calendar.model import DayOverride
from src.school_attendance.school_attendance.users.model import User


@dataclass
class InMemoryUsers:
    users_by_id: dict[int, User]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(int(user_id))

    def get_by_userid(self, userid: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.userid == userid), None)

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.employee_id == employee_id), None)


@dataclass
class InMemoryAttendance:
    """Summary store; ``read_delay`` widens the read-modify-write window for race tests."""

    summaries: dict[tuple[int, int, int], MonthlySummary] = field(default_factory=dict)
    failing_users: set[int] = field(default_factory=set)
    read_delay: float = 0.0
    _next_id: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get_summary(self, *, user_id: int, month: int, year: int) -> Optional[MonthlySummary]:
        found = self.summaries.get((int(user_id), month, year))
        if self.read_delay:
            time.sleep(self.read_delay)
        return found

    def update_summary(self, *, user_id: int, month: int, year: int, mutate) -> MonthlySummary:
        if int(user_id) in self.failing_users:
            raise RuntimeError("store unavailable")
        current = self.get_summary(user_id=user_id, month=month, year=year)
        if current is None:
            with self._lock:
                self._next_id += 1
                current = replace(MonthlySummary.empty(int(user_id), month, year), summary_id=self._next_id)
        summary = mutate(current)
        self.summaries[(summary.user_id, summary.month, summary.year)] = summary
        return summary


@dataclass
class InMemoryDayOverrides:
    by_date: dict[date, DayOverride] = field(default_factory=dict)
    _next_id: int = 0

    def get_by_date(self, override_date: date) -> Optional[DayOverride]:
        return self.by_date.get(override_date)

    def create(self, *, override_date, day_type, holiday_type, description, created_by) -> int:
        if override_date in self.by_date:
            raise ValidationError("This date is already marked.")
        self._next_id += 1
        self.by_date[override_date] = DayOverride(
            override_id=self._next_id,
            override_date=override_date,
            day_type=day_type,
            holiday_type=holiday_type,
            description=description,
            created_by=created_by,
        )
        return self._next_id

    def update(self, *, override_date, day_type, holiday_type, description) -> bool:
        existing = self.by_date.get(override_date)
        if not existing:
            return False
        self.by_date[override_date] = replace(
            existing, day_type=day_type, holiday_type=holiday_type, description=description
        )
        return True

    def delete(self, override_date: date) -> bool:
        return self.by_date.pop(override_date, None) is not None

    def list_range(self, *, start: date, end: date):
        return [self.by_date[d] for d in sorted(self.by_date) if start <= d <= end]

    def mark(self, override_date: date, day_type: DayType) -> None:
        self.create(
            override_date=override_date,
            day_type=day_type,
            holiday_type=HolidayType.BOTH,
            description=None,
            created_by=3,
        )


STUDENT = User(user_id=1, userid="60432", name="Asha Menon", role=Role.STUDENT)
STAFF = User(user_id=2, userid="70110", name="Priya Das", role=Role.STAFF, employee_id="MAPH-T-7")
MANAGER = User(user_id=3, userid="90001", name="Office Admin", role=Role.MANAGEMENT)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 12, 8, 30, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers({u.user_id: u for u in (STUDENT, STAFF, MANAGER)})


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def overrides_repo() -> InMemoryDayOverrides:
    return InMemoryDayOverrides()


@pytest.fixture
def container(users_repo, attendance_repo, overrides_repo):
    return build_services(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        day_overrides_repo=overrides_repo,
    )


@pytest.fixture
def service(container):
    return container.attendance_service


@pytest.fixture
def calendar_service(container):
    return container.day_calendar_service
