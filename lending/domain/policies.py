"""
Policy interfaces for the lending core.

The Library service depends on these contracts only, so loan periods and fine
rates can be swapped without touching the circulation rules.
"""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Optional


def _as_int(value, name: str) -> int:
    """Coerce a configured whole number; anything else is an invalid argument."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a whole number, got {value!r}") from None


class LoanPolicy(ABC):
    """Policy interface for due date calculation."""

    @abstractmethod
    def calculate_due_date(self, loan_date: date) -> date:
        """Return the due date of a loan starting on ``loan_date``."""
        pass


class FinePolicy(ABC):
    """Policy interface for overdue fines."""

    @abstractmethod
    def calculate_fine(self, due_date: date, return_date: date) -> int:
        """Return the fine, in pence, for returning on ``return_date``. Never negative."""
        pass


class StandardLoanPolicy(LoanPolicy):
    """Due date is the loan date plus a fixed number of days."""

    def __init__(self, loan_days: int):
        loan_days = _as_int(loan_days, "loan_days")
        if loan_days < 0:
            raise ValueError("loan_days must be zero or positive")
        self.loan_days = loan_days

    def calculate_due_date(self, loan_date: Optional[date]) -> date:
        if loan_date is None:
            raise ValueError("loan_date cannot be None")
        return loan_date + timedelta(days=self.loan_days)

    def __repr__(self) -> str:
        return f"StandardLoanPolicy(loan_days={self.loan_days})"


class StandardFinePolicy(FinePolicy):
    """Fixed daily charge for each whole day past the due date."""

    def __init__(self, pence_per_day: int):
        pence_per_day = _as_int(pence_per_day, "pence_per_day")
        if pence_per_day <= 0:
            raise ValueError("pence_per_day must be positive")
        self.pence_per_day = pence_per_day

    def calculate_fine(self, due_date: Optional[date], return_date: Optional[date]) -> int:
        if due_date is None or return_date is None:
            raise ValueError("due_date and return_date are required")
        days_late = max(0, (return_date - due_date).days)
        return days_late * self.pence_per_day

    def __repr__(self) -> str:
        return f"StandardFinePolicy(pence_per_day={self.pence_per_day})"
