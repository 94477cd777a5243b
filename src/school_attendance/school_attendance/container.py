from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.locks import KeyedLock
from .core.constants import BARCODE_PREFIX, SCAN_CHECK_IN_TIME, SCAN_CHECK_OUT_TIME
from .database.connection import DBConfig, DatabaseConnection
from .day_calendar.mysql_day_override_repository import MySQLDayOverrideRepository
from .day_calendar.repository import DayOverrideRepository
from .day_calendar.service import DayCalendarService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    day_overrides_repo: DayOverrideRepository

    attendance_service: AttendanceService
    day_calendar_service: DayCalendarService


def build_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    day_overrides_repo: DayOverrideRepository,
    barcode_prefix: str = BARCODE_PREFIX,
    scan_check_in_time: str = SCAN_CHECK_IN_TIME,
    scan_check_out_time: str = SCAN_CHECK_OUT_TIME,
) -> Container:
    attendance_service = AttendanceService(
        attendance_repo,
        day_overrides_repo,
        users_repo,
        locks=KeyedLock(),
        barcode_prefix=barcode_prefix,
        scan_check_in_time=scan_check_in_time,
        scan_check_out_time=scan_check_out_time,
    )
    day_calendar_service = DayCalendarService(day_overrides_repo)

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        day_overrides_repo=day_overrides_repo,
        attendance_service=attendance_service,
        day_calendar_service=day_calendar_service,
    )


def build_container(*, db_config: dict, **scan_settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        day_overrides_repo=MySQLDayOverrideRepository(conn),
        **scan_settings,
    )
