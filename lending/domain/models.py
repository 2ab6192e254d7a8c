"""
Domain models for the lending core.

These models represent the catalogue, members and circulation records
independent of how they are imported or displayed. They hold state only;
the Library service decides when that state may change.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from .exceptions import LibraryValidationError


def new_id() -> str:
    """Fresh opaque identifier for an entity."""
    return str(uuid.uuid4())


class AvailabilityStatus(Enum):
    """Shelf status of a media item."""
    AVAILABLE = "available"
    ON_LOAN = "on_loan"
    RESERVED = "reserved"  # Held for a reservation, not lendable to others


class LoanStatus(Enum):
    """Loan status enumeration."""
    OUTSTANDING = "outstanding"
    RETURNED = "returned"


class ReservationStatus(Enum):
    """Reservation status enumeration."""
    ACTIVE = "active"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


@dataclass
class MediaItem:
    """Common state of every lendable item in the catalogue."""
    media_id: str = field(default_factory=new_id)
    title: str = ""
    year: int = 0
    categories: List[str] = field(default_factory=list)
    status: AvailabilityStatus = AvailabilityStatus.AVAILABLE

    media_type = "item"

    @property
    def is_available(self) -> bool:
        return self.status == AvailabilityStatus.AVAILABLE


@dataclass
class Book(MediaItem):
    """Book in the catalogue; the only variant searchable by author."""
    author: str = ""

    media_type = "book"


@dataclass
class Dvd(MediaItem):
    """DVD in the catalogue."""
    duration: int = 0  # Minutes
    rating: str = ""

    media_type = "dvd"


@dataclass
class Magazine(MediaItem):
    """Magazine issue in the catalogue."""
    publisher: str = ""

    media_type = "magazine"


@dataclass
class Member:
    """Library member domain model."""
    member_id: str = field(default_factory=new_id)
    name: str = ""
    email: str = ""
    active: bool = True

    def deactivate(self) -> None:
        self.active = False

    def activate(self) -> None:
        self.active = True


@dataclass
class Loan:
    """A single borrowing of one media item by one member."""
    member_id: str
    media_id: str
    loan_date: date
    due_date: date
    loan_id: str = field(default_factory=new_id)
    return_date: Optional[date] = None
    fine_accrued: int = 0  # Smallest currency unit (pence)
    status: LoanStatus = LoanStatus.OUTSTANDING

    @property
    def is_outstanding(self) -> bool:
        return self.status == LoanStatus.OUTSTANDING

    def is_overdue(self, as_of: date) -> bool:
        """Return True if the loan is still out and its due date is before ``as_of``."""
        return self.is_outstanding and self.due_date < as_of

    def mark_returned(self, return_date: date) -> None:
        if not self.is_outstanding:
            raise LibraryValidationError(f"Loan {self.loan_id} is already returned")
        self.return_date = return_date
        self.status = LoanStatus.RETURNED


@dataclass
class Reservation:
    """A member's place in the queue for one media item."""
    member_id: str
    media_id: str
    reservation_date: date
    reservation_id: str = field(default_factory=new_id)
    status: ReservationStatus = ReservationStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ReservationStatus.ACTIVE

    def fulfil(self) -> None:
        if not self.is_active:
            raise LibraryValidationError(
                f"Only active reservations can be fulfilled (status: {self.status.value})"
            )
        self.status = ReservationStatus.FULFILLED

    def cancel(self) -> None:
        if not self.is_active:
            raise LibraryValidationError(
                f"Only active reservations can be cancelled (status: {self.status.value})"
            )
        self.status = ReservationStatus.CANCELLED
