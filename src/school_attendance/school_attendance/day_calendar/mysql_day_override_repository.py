from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import DayType, HolidayType
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DayOverride
from .repository import DayOverrideRepository

_COLUMNS = "override_id, override_date, day_type, holiday_type, description, created_by, updated_at"


def _to_model(r: dict) -> DayOverride:
    return DayOverride(
        override_id=int(r["override_id"]),
        override_date=r["override_date"],
        day_type=DayType(r["day_type"]),
        holiday_type=HolidayType(r.get("holiday_type") or HolidayType.BOTH.value),
        description=r.get("description"),
        created_by=r.get("created_by"),
        updated_at=r.get("updated_at"),
    )


class MySQLDayOverrideRepository(DayOverrideRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_date(self, override_date: date) -> Optional[DayOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM day_overrides WHERE override_date=%s", (override_date,))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def create(
        self,
        *,
        override_date: date,
        day_type: DayType,
        holiday_type: HolidayType,
        description: Optional[str],
        created_by: int,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO day_overrides(override_date, day_type, holiday_type, description, created_by)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (override_date, day_type.value, holiday_type.value, description, int(created_by)),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError:
            raise ValidationError("This date is already marked.")

    def update(
        self,
        *,
        override_date: date,
        day_type: DayType,
        holiday_type: HolidayType,
        description: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE day_overrides
                SET day_type=%s, holiday_type=%s, description=%s
                WHERE override_date=%s
                """,
                (day_type.value, holiday_type.value, description, override_date),
            )
            # rowcount is 0 when the values are unchanged; fall back to an existence check.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM day_overrides WHERE override_date=%s", (override_date,))
            return fetchone(cur) is not None

    def delete(self, override_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM day_overrides WHERE override_date=%s", (override_date,))
            return cur.rowcount > 0

    def list_range(self, *, start: date, end: date) -> Sequence[DayOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM day_overrides
                WHERE override_date BETWEEN %s AND %s
                ORDER BY override_date ASC
                """,
                (start, end),
            )
            return [_to_model(r) for r in fetchall(cur)]
