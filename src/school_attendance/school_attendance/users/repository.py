from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Read-only view of users. Account management belongs to the auth service."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_userid(self, userid: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        raise NotImplementedError
