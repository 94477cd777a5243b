from __future__ import annotations

import threading
from datetime import date, datetime

import pytest

from src.school_attendance.school_attendance.core.enums import AttendanceStatus, DayPortion, DayType, Role
from src.school_attendance.school_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_mark_attendance_creates_summary_and_recomputes(service, attendance_repo, overrides_repo):
    overrides_repo.mark(date(2024, 3, 4), DayType.WORKING)

    summary = service.mark_attendance(1, work_date="2024-03-04", status="present", check_in_time="08:55")

    assert summary.summary_id is not None
    assert summary.counters.total_days == 31
    assert summary.counters.present_days == 1
    assert summary.counters.working_days == 2
    assert attendance_repo.summaries[(1, 3, 2024)] == summary


def test_mark_attendance_twice_keeps_one_record(service):
    service.mark_attendance(1, work_date="2024-03-04", status="present")
    summary = service.mark_attendance(1, work_date="2024-03-04T10:15:00Z", status="late", remarks="bus")

    assert len(summary.records) == 1
    assert summary.records[0].status == AttendanceStatus.LATE
    assert summary.records[0].remarks == "bus"
    assert summary.counters.late_days == 1
    assert summary.counters.present_days == 0


def test_mark_attendance_rejects_bad_input(service):
    with pytest.raises(ValidationError):
        service.mark_attendance(1, work_date="2024-02-30", status="present")
    with pytest.raises(ValidationError):
        service.mark_attendance(1, work_date="2024-03-01", status="working")
    with pytest.raises(ValidationError):
        service.mark_attendance(1, work_date=None, status="present")


def test_recompute_picks_up_calendar_changes(service, overrides_repo):
    service.mark_attendance(1, work_date="2024-03-04", status="present")
    overrides_repo.mark(date(2024, 3, 4), DayType.HOLIDAY)

    # stored summary is stale until the next write or an explicit recompute
    assert service.get_attendance(1, month=3, year=2024).counters.present_days == 1

    summary = service.recompute_summary(1, 3, 2024)
    assert summary.counters.present_days == 0
    assert summary.counters.holiday_days == 1


def test_first_scan_checks_in_half_day(service, fixed_now):
    result = service.scan_mark_attendance(barcode="MAPH60432", now=fixed_now)

    assert result.action == "check-in"
    assert result.user.user_id == 1
    assert "Asha Menon" in result.message
    (record,) = result.summary.records
    assert record.work_date == date(2024, 3, 12)
    assert record.status == AttendanceStatus.PRESENT
    assert record.day_portion == DayPortion.HALF_DAY
    assert record.check_in_time == "09:00"
    assert record.check_out_time is None


def test_later_scans_complete_the_day_idempotently(service, fixed_now):
    service.scan_mark_attendance(barcode="MAPH60432", now=fixed_now)
    second = service.scan_mark_attendance(barcode="MAPH60432", now=fixed_now.replace(hour=15))
    third = service.scan_mark_attendance(barcode="MAPH60432", now=fixed_now.replace(hour=17))

    assert second.action == "check-out"
    assert third.action == "check-out"
    assert second.summary.records == third.summary.records
    (record,) = third.summary.records
    assert record.day_portion == DayPortion.FULL_DAY
    assert record.check_in_time == "09:00"
    assert record.check_out_time == "16:00"
    assert third.summary.counters == second.summary.counters


def test_scan_keeps_status_of_existing_record(service, fixed_now):
    service.mark_attendance(1, work_date="2024-03-12", status="late", check_in_time="09:40")

    result = service.scan_mark_attendance_for_user(1, now=fixed_now)

    assert result.action == "check-out"
    (record,) = result.summary.records
    assert record.status == AttendanceStatus.LATE
    assert record.check_in_time == "09:40"


def test_scan_falls_back_to_employee_id(service, fixed_now):
    result = service.scan_mark_attendance(barcode="MAPH-T-7", now=fixed_now)
    assert result.user.user_id == 2


@pytest.mark.parametrize(
    "barcode,exc,message",
    [
        (None, ValidationError, "Barcode not provided"),
        ("   ", ValidationError, "Barcode not provided"),
        ("XYZ60432", ValidationError, "Invalid barcode format. Must start with MAPH."),
        ("MAPH", ValidationError, "Invalid barcode format. User ID missing."),
        ("MAPH99999", NotFoundError, "User not found"),
    ],
)
def test_scan_barcode_errors(service, fixed_now, barcode, exc, message):
    with pytest.raises(exc) as e:
        service.scan_mark_attendance(barcode=barcode, now=fixed_now)
    assert str(e.value) == message


def test_scan_for_unknown_user(service, fixed_now):
    with pytest.raises(NotFoundError):
        service.scan_mark_attendance_for_user(42, now=fixed_now)


def test_concurrent_first_scans_produce_one_record(service, attendance_repo, fixed_now):
    attendance_repo.read_delay = 0.02
    barrier = threading.Barrier(2)
    actions = []

    def scan():
        barrier.wait()
        actions.append(service.scan_mark_attendance(barcode="MAPH60432", now=fixed_now).action)

    threads = [threading.Thread(target=scan) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    stored = attendance_repo.summaries[(1, 3, 2024)]
    assert len(stored.records) == 1
    assert sorted(actions) == ["check-in", "check-out"]
    assert stored.records[0].day_portion == DayPortion.FULL_DAY


def test_bulk_marking_collects_partial_failures(service, attendance_repo):
    attendance_repo.failing_users.add(2)

    result = service.mark_attendance_for_all_users(
        current_role=Role.MANAGEMENT,
        work_date="2024-03-11",
        entries=[
            {"userId": 1, "status": 1},
            {"userId": 2, "status": 2},
            {"userId": 3, "status": 0},
            {"userId": 3, "status": 7},
            {"userId": 3},
            {"userId": 77, "status": 1},
            {"userId": 3, "status": 2},
        ],
        today=date(2024, 3, 12),
    )

    assert result.successful == [
        {"userId": 1, "status": "present", "success": True},
        {"userId": 3, "status": "absent", "success": True},
    ]
    errors = {(e["userId"], e["error"]) for e in result.errors}
    assert (2, "store unavailable") in errors
    assert (3, "Missing userId or status") in errors
    assert (3, "Invalid status. Must be 0 (working), 1 (present), or 2 (absent)") in errors
    assert (77, "User not found") in errors
    assert len(result.errors) == 5

    record = attendance_repo.summaries[(1, 3, 2024)].records[0]
    assert record.status == AttendanceStatus.PRESENT
    assert record.remarks == "Marked by management on 2024-03-12"


def test_bulk_marking_updates_existing_record_status_only(service, attendance_repo):
    service.mark_attendance(1, work_date="2024-03-11", status="late", remarks="traffic")

    service.mark_attendance_for_all_users(
        current_role=Role.MANAGEMENT,
        work_date="2024-03-11",
        entries=[{"userId": "1", "status": 2}],
    )

    (record,) = attendance_repo.summaries[(1, 3, 2024)].records
    assert record.status == AttendanceStatus.ABSENT
    assert record.remarks == "traffic"


def test_bulk_marking_requires_management(service):
    with pytest.raises(AuthorizationError):
        service.mark_attendance_for_all_users(current_role=Role.STAFF, work_date="2024-03-11", entries=[])


def test_bulk_marking_requires_list(service):
    with pytest.raises(ValidationError):
        service.mark_attendance_for_all_users(
            current_role=Role.MANAGEMENT, work_date="2024-03-11", entries={"userId": 1, "status": 1}
        )


def test_reads_return_zeroed_summary_when_nothing_recorded(service):
    summary = service.get_attendance(1, today=date(2024, 3, 12))

    assert (summary.month, summary.year) == (3, 2024)
    assert summary.records == ()
    assert summary.counters.total_days == 0
    assert summary.counters.percentage == 0

    stats = service.get_attendance_stats(1, today=date(2024, 3, 12))
    assert stats.to_dict()["workingDays"] == 0


def test_get_attendance_validates_month_and_year(service):
    with pytest.raises(ValidationError):
        service.get_attendance(1, month="13", year="2024")
    with pytest.raises(ValidationError):
        service.get_attendance(1, month="3", year="24")


def test_stats_read_current_month(service):
    today = datetime.now().date()
    service.mark_attendance(1, work_date=today, status="present")

    assert service.get_attendance_stats(1).present_days == 1


def test_remark_after_scans_keeps_day_portion(service, fixed_now):
    service.scan_mark_attendance(barcode="MAPH60432", now=fixed_now)
    service.scan_mark_attendance(barcode="MAPH60432", now=fixed_now.replace(hour=16))

    summary = service.mark_attendance(1, work_date="2024-03-12", status="late", remarks="gate log")

    (record,) = summary.records
    assert record.status == AttendanceStatus.LATE
    assert record.remarks == "gate log"
    assert record.day_portion == DayPortion.FULL_DAY
    assert record.check_in_time is None


def test_mark_with_datetime_matches_existing_record(service):
    service.mark_attendance(1, work_date=date(2024, 3, 4), status="present")
    summary = service.mark_attendance(1, work_date=datetime(2024, 3, 4, 14, 5), status="absent")

    (record,) = summary.records
    assert record.work_date == date(2024, 3, 4)
    assert type(record.work_date) is date
    assert record.status == AttendanceStatus.ABSENT


def test_write_response_matches_later_read(service, overrides_repo):
    for n in (4, 5, 6):
        overrides_repo.mark(date(2024, 3, n), DayType.WORKING)
    service.mark_attendance(1, work_date="2024-03-04", status="late")
    written = service.mark_attendance(1, work_date="2024-03-05", status="late")

    assert written.counters.percentage == 66.67
    assert service.get_attendance(1, month=3, year=2024).counters == written.counters


def test_bulk_marking_rejects_boolean_user_id(service, attendance_repo):
    result = service.mark_attendance_for_all_users(
        current_role=Role.MANAGEMENT,
        work_date="2024-03-11",
        entries=[{"userId": True, "status": 1}],
    )

    assert result.successful == []
    assert result.errors == [{"userId": True, "error": "Invalid userId"}]
    assert (1, 3, 2024) not in attendance_repo.summaries
