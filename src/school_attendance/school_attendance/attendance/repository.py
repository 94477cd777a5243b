from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import MonthlySummary

SummaryMutation = Callable[[MonthlySummary], MonthlySummary]


class AttendanceRepository(Protocol):
    """Store for monthly summaries and the records they own.

    Implementations must keep (user_id, month, year) and (user_id, work_date)
    unique.
    """

    def get_summary(self, *, user_id: int, month: int, year: int) -> Optional[MonthlySummary]:
        raise NotImplementedError

    def update_summary(self, *, user_id: int, month: int, year: int, mutate: SummaryMutation) -> MonthlySummary:
        """Load (or create) the summary, apply ``mutate`` and save the result.

        Load and save happen in one transaction holding the summary row lock,
        so concurrent writers for the same month see each other's records.
        Returns the saved summary with ``summary_id`` set.
        """

        raise NotImplementedError
