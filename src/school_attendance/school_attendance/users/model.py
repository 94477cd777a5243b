from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import BARCODE_PREFIX
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a student, staff member or manager.

    ``userid`` is the school code printed on ID cards; ``employee_id`` is the
    optional ``MAPH``-prefixed scanner code.
    """

    user_id: int
    userid: str
    name: str
    role: Role
    employee_id: Optional[str] = None

    @property
    def barcode(self) -> str:
        return self.employee_id or f"{BARCODE_PREFIX}{self.userid}"
