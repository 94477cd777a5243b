from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus, DayPortion
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, MonthlySummary, SummaryCounters
from .repository import AttendanceRepository, SummaryMutation


def _load(cur, *, user_id: int, month: int, year: int, for_update: bool = False) -> Optional[MonthlySummary]:
    cur.execute(
        f"""
        SELECT summary_id, user_id, month, year,
               total_days, present_days, absent_days, late_days,
               holiday_days, leave_days, working_days, percentage
        FROM attendance_summaries
        WHERE user_id=%s AND month=%s AND year=%s
        {"FOR UPDATE" if for_update else ""}
        """,
        (int(user_id), int(month), int(year)),
    )
    s = fetchone(cur)
    if not s:
        return None

    cur.execute(
        """
        SELECT work_date, status, check_in_time, check_out_time, remarks, day_portion
        FROM attendance_records
        WHERE summary_id=%s
        ORDER BY work_date ASC
        """,
        (int(s["summary_id"]),),
    )
    rows = fetchall(cur)

    return MonthlySummary(
        summary_id=int(s["summary_id"]),
        user_id=int(s["user_id"]),
        month=int(s["month"]),
        year=int(s["year"]),
        records=tuple(
            AttendanceRecord(
                work_date=r["work_date"],
                status=AttendanceStatus(r["status"]),
                check_in_time=r.get("check_in_time"),
                check_out_time=r.get("check_out_time"),
                remarks=r.get("remarks"),
                day_portion=DayPortion(r["day_portion"]) if r.get("day_portion") else None,
            )
            for r in rows
        ),
        counters=SummaryCounters(
            total_days=int(s["total_days"]),
            present_days=int(s["present_days"]),
            absent_days=int(s["absent_days"]),
            late_days=int(s["late_days"]),
            holiday_days=int(s["holiday_days"]),
            leave_days=int(s["leave_days"]),
            working_days=int(s["working_days"]),
            percentage=float(s["percentage"]),
        ),
    )


def _save(cur, summary: MonthlySummary) -> None:
    c = summary.counters
    cur.execute(
        """
        UPDATE attendance_summaries
        SET total_days=%s, present_days=%s, absent_days=%s, late_days=%s,
            holiday_days=%s, leave_days=%s, working_days=%s, percentage=%s
        WHERE summary_id=%s
        """,
        (
            c.total_days, c.present_days, c.absent_days, c.late_days,
            c.holiday_days, c.leave_days, c.working_days, float(c.percentage),
            int(summary.summary_id),
        ),
    )

    for r in summary.records:
        cur.execute(
            """
            INSERT INTO attendance_records(
                summary_id, user_id, work_date, status,
                check_in_time, check_out_time, remarks, day_portion
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
            ON DUPLICATE KEY UPDATE
                status=VALUES(status),
                check_in_time=VALUES(check_in_time),
                check_out_time=VALUES(check_out_time),
                remarks=VALUES(remarks),
                day_portion=VALUES(day_portion)
            """,
            (
                int(summary.summary_id),
                int(summary.user_id),
                r.work_date,
                r.status.value,
                r.check_in_time,
                r.check_out_time,
                r.remarks,
                r.day_portion.value if r.day_portion else None,
            ),
        )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_summary(self, *, user_id: int, month: int, year: int) -> Optional[MonthlySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _load(cur, user_id=user_id, month=month, year=year)

    def update_summary(self, *, user_id: int, month: int, year: int, mutate: SummaryMutation) -> MonthlySummary:
        with db_cursor(self._conn_factory) as (_, cur):
            # Make sure the row exists, then lock it; other writers for this month block until commit.
            cur.execute(
                """
                INSERT INTO attendance_summaries(user_id, month, year)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE summary_id=summary_id
                """,
                (int(user_id), int(month), int(year)),
            )
            current = _load(cur, user_id=user_id, month=month, year=year, for_update=True)
            summary = mutate(current)
            _save(cur, summary)
            return summary
