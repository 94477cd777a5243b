from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, userid, name, role, employee_id
                FROM users
                WHERE {column}=%s
                """,
                (value,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(
                user_id=int(row["user_id"]),
                userid=row["userid"],
                name=row["name"],
                role=Role(row["role"]),
                employee_id=row.get("employee_id"),
            )

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_userid(self, userid: str) -> Optional[User]:
        return self._get_one("userid", userid)

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return self._get_one("employee_id", employee_id)
