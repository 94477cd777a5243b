from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import format_iso_date, month_bounds, now_local
from ..common.locks import KeyedLock
from ..common.validators import require_date, require_enum, require_month, require_year
from ..core.constants import BARCODE_PREFIX, BULK_REMARKS_TEMPLATE, SCAN_CHECK_IN_TIME, SCAN_CHECK_OUT_TIME
from ..core.enums import AttendanceStatus, BulkStatusCode, DayPortion, DayType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..day_calendar.repository import DayOverrideRepository
from ..users.model import User
from ..users.repository import UserRepository
from .classifiers.factory import DayClassifierFactory
from .engine import compute_summary
from .model import AttendanceRecord, MonthlySummary, SummaryCounters
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_BULK_STATUS_MAP = {
    BulkStatusCode.PRESENT: AttendanceStatus.PRESENT,
    BulkStatusCode.ABSENT: AttendanceStatus.ABSENT,
}


@dataclass(frozen=True)
class ScanResult:
    user: User
    action: str
    summary: MonthlySummary

    @property
    def message(self) -> str:
        if self.action == "check-in":
            return f"Check-in recorded for user {self.user.name}."
        return f"Checkout time recorded for user {self.user.name}."


@dataclass
class BulkMarkResult:
    successful: list[dict] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"successful": self.successful, "errors": self.errors}


class AttendanceService:
    """Use cases around a user's monthly attendance summary.

    Every write goes through ``_write``: the (user, month, year) key is locked
    in-process and the repository loads, mutates, recomputes and saves the
    summary in one row-locked transaction.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        day_overrides: DayOverrideRepository,
        users: UserRepository,
        *,
        classifier_factory: DayClassifierFactory | None = None,
        locks: KeyedLock | None = None,
        barcode_prefix: str = BARCODE_PREFIX,
        scan_check_in_time: str = SCAN_CHECK_IN_TIME,
        scan_check_out_time: str = SCAN_CHECK_OUT_TIME,
    ):
        self._attendance = attendance
        self._day_overrides = day_overrides
        self._users = users
        self._factory = classifier_factory or DayClassifierFactory()
        self._locks = locks or KeyedLock()
        self._barcode_prefix = barcode_prefix
        self._scan_check_in_time = scan_check_in_time
        self._scan_check_out_time = scan_check_out_time

    # ----- summary computation -----

    def _overrides_for(self, month: int, year: int) -> dict[date, DayType]:
        start, end = month_bounds(month, year)
        return {o.override_date: o.day_type for o in self._day_overrides.list_range(start=start, end=end)}

    def _recomputed(self, summary: MonthlySummary) -> MonthlySummary:
        counters = compute_summary(
            month=summary.month,
            year=summary.year,
            records=summary.records_by_date(),
            overrides=self._overrides_for(summary.month, summary.year),
            factory=self._factory,
        )
        return summary.with_counters(counters)

    def _write(
        self,
        user_id: int,
        month: int,
        year: int,
        mutate: Callable[[MonthlySummary], MonthlySummary],
    ) -> MonthlySummary:
        with self._locks.hold((int(user_id), month, year)):
            return self._attendance.update_summary(
                user_id=user_id,
                month=month,
                year=year,
                mutate=lambda s: self._recomputed(mutate(s)),
            )

    def recompute_summary(self, user_id: int, month: int, year: int) -> MonthlySummary:
        """Re-derive counters from the stored records and the current calendar."""
        summary = self._write(user_id, month, year, lambda s: s)
        logger.info(
            "recomputed attendance user=%s %02d/%d working=%d pct=%.1f",
            user_id, month, year, summary.counters.working_days, summary.counters.percentage,
        )
        return summary

    # ----- writes -----

    def mark_attendance(
        self,
        user_id: int,
        *,
        work_date,
        status,
        check_in_time: Optional[str] = None,
        check_out_time: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> MonthlySummary:
        work_date = require_date(work_date)
        status = require_enum(AttendanceStatus, status, "status")

        def apply_mark(summary: MonthlySummary) -> MonthlySummary:
            fields = dict(status=status, check_in_time=check_in_time, check_out_time=check_out_time, remarks=remarks)
            existing = summary.record_for(work_date)
            if existing is not None:
                # day_portion belongs to the scanner and survives a manual re-mark
                return summary.with_record(replace(existing, **fields))
            return summary.with_record(AttendanceRecord(work_date=work_date, **fields))

        summary = self._write(user_id, work_date.month, work_date.year, apply_mark)
        logger.info("marked attendance user=%s date=%s status=%s", user_id, work_date, status.value)
        return summary

    def resolve_barcode(self, barcode: Optional[str]) -> User:
        if not barcode or not str(barcode).strip():
            raise ValidationError("Barcode not provided")
        barcode = str(barcode).strip()
        if not barcode.startswith(self._barcode_prefix):
            raise ValidationError(f"Invalid barcode format. Must start with {self._barcode_prefix}.")
        userid = barcode[len(self._barcode_prefix):]
        if not userid:
            raise ValidationError("Invalid barcode format. User ID missing.")

        user = self._users.get_by_userid(userid) or self._users.get_by_employee_id(barcode)
        if not user:
            raise NotFoundError("User not found")
        return user

    def scan_mark_attendance(self, *, barcode: Optional[str], now: datetime | None = None) -> ScanResult:
        user = self.resolve_barcode(barcode)
        return self._scan(user, now=now)

    def scan_mark_attendance_for_user(self, user_id: int, *, now: datetime | None = None) -> ScanResult:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return self._scan(user, now=now)

    def _scan(self, user: User, *, now: datetime | None) -> ScanResult:
        today = (now or now_local()).date()
        action = {}

        def apply_scan(summary: MonthlySummary) -> MonthlySummary:
            existing = summary.record_for(today)
            if existing is None:
                action["name"] = "check-in"
                return summary.with_record(
                    AttendanceRecord(
                        work_date=today,
                        status=AttendanceStatus.PRESENT,
                        check_in_time=self._scan_check_in_time,
                        day_portion=DayPortion.HALF_DAY,
                    )
                )
            action["name"] = "check-out"
            return summary.with_record(
                replace(existing, day_portion=DayPortion.FULL_DAY, check_out_time=self._scan_check_out_time)
            )

        summary = self._write(user.user_id, today.month, today.year, apply_scan)
        logger.info("scan %s user=%s date=%s", action["name"], user.user_id, today)
        return ScanResult(user=user, action=action["name"], summary=summary)

    def mark_attendance_for_all_users(
        self,
        *,
        current_role: Role,
        work_date,
        entries: Sequence[dict],
        today: date | None = None,
    ) -> BulkMarkResult:
        """Mark many users for one date; each entry succeeds or fails on its own."""
        if current_role != Role.MANAGEMENT:
            raise AuthorizationError("Access denied. Only management can mark attendance for all users.")
        work_date = require_date(work_date)
        if not isinstance(entries, (list, tuple)):
            raise ValidationError("Invalid attendance data format")

        remarks = BULK_REMARKS_TEMPLATE.format(today=format_iso_date(today or now_local().date()))
        result = BulkMarkResult()

        for entry in entries:
            user_id = entry.get("userId") if isinstance(entry, dict) else None
            code = entry.get("status") if isinstance(entry, dict) else None
            try:
                status = self._bulk_status(user_id, code)
                user_id = int(user_id)
                if not self._users.get_by_id(user_id):
                    raise NotFoundError("User not found")

                def apply_bulk(summary: MonthlySummary, status=status) -> MonthlySummary:
                    existing = summary.record_for(work_date)
                    if existing is not None:
                        return summary.with_record(replace(existing, status=status))
                    return summary.with_record(AttendanceRecord(work_date=work_date, status=status, remarks=remarks))

                self._write(user_id, work_date.month, work_date.year, apply_bulk)
                result.successful.append({"userId": user_id, "status": status.value, "success": True})
            except (ValidationError, NotFoundError) as e:
                result.errors.append({"userId": user_id, "error": str(e)})
            except Exception as e:
                logger.warning("bulk mark failed user=%s date=%s", user_id, work_date, exc_info=True)
                result.errors.append({"userId": user_id, "error": str(e)})

        logger.info(
            "bulk marked date=%s ok=%d failed=%d", work_date, len(result.successful), len(result.errors)
        )
        return result

    @staticmethod
    def _bulk_status(user_id, code) -> AttendanceStatus:
        if user_id in (None, "") or code is None:
            raise ValidationError("Missing userId or status")
        if isinstance(user_id, bool):
            raise ValidationError("Invalid userId")
        try:
            int(user_id)
        except (TypeError, ValueError):
            raise ValidationError("Invalid userId")
        if isinstance(code, bool) or not isinstance(code, int) or code not in {c.value for c in BulkStatusCode}:
            raise ValidationError("Invalid status. Must be 0 (working), 1 (present), or 2 (absent)")
        if code == BulkStatusCode.WORKING:
            raise ValidationError("Status 0 (working) is a calendar day type; mark the date in day management")
        return _BULK_STATUS_MAP[BulkStatusCode(code)]

    # ----- reads -----

    def get_attendance(
        self,
        user_id: int,
        *,
        month=None,
        year=None,
        today: date | None = None,
    ) -> MonthlySummary:
        """Stored summary for the month, or a zeroed one when nothing was recorded."""
        today = today or now_local().date()
        month = require_month(month) if month not in (None, "") else today.month
        year = require_year(year) if year not in (None, "") else today.year

        summary = self._attendance.get_summary(user_id=user_id, month=month, year=year)
        if summary is None:
            return MonthlySummary.empty(user_id, month, year)
        return summary

    def get_attendance_stats(self, user_id: int, *, today: date | None = None) -> SummaryCounters:
        return self.get_attendance(user_id, today=today).counters
