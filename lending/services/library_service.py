"""
Library Service

Aggregate root for the lending core. Owns the catalogue, members, loans and
reservation queues, and is the only place their state is allowed to change.
"""

import logging
from collections import deque
from datetime import date
from typing import Deque, Dict, List, Optional

from ..domain.exceptions import (
    ItemNotFoundError,
    LibraryValidationError,
    MemberNotFoundError,
    ReservationNotFoundError,
)
from ..domain.models import (
    AvailabilityStatus,
    Loan,
    MediaItem,
    Member,
    Reservation,
)
from ..domain.policies import FinePolicy, LoanPolicy
from ..utils.clock import Clock, make_clock
from ..utils.library_search import (
    media_matches_keyword,
    member_matches_keyword,
    name_sort_key,
    title_sort_key,
)

logger = logging.getLogger(__name__)


class Library:
    """Coordinates loans, returns and reservations over the owned collections.

    Every operation validates completely before it mutates anything, so a
    raised ``LibraryValidationError`` always leaves the library unchanged.
    One instance is meant to serve one session; it does no locking.
    """

    def __init__(self, loan_policy: LoanPolicy, fine_policy: FinePolicy,
                 clock: Optional[Clock] = None, require_registered_item: bool = False):
        if loan_policy is None or fine_policy is None:
            raise ValueError("Policies cannot be None")
        self.loan_policy = loan_policy
        self.fine_policy = fine_policy
        self.clock: Clock = clock or make_clock()
        self.require_registered_item = require_registered_item

        self._items: Dict[str, MediaItem] = {}
        self._members: Dict[str, Member] = {}
        self._loans: Dict[str, Loan] = {}
        self._reservations_by_media: Dict[str, Deque[Reservation]] = {}
        # media_id -> member_id collecting a fulfilled reservation
        self._holds: Dict[str, str] = {}

    # ------------------------------------------------------------------ items

    def add_item(self, item: MediaItem) -> None:
        """Register an item, replacing any item that already has its id."""
        if item is None:
            raise ValueError("Item cannot be None")
        if item.media_id in self._items:
            logger.warning(f"Replacing existing item {item.media_id}")
        self._items[item.media_id] = item
        logger.debug(f"Added {item.media_type} {item.media_id}: {item.title!r}")

    def remove_item(self, media_id: str) -> None:
        item = self.get_item(media_id)
        if not item.is_available:
            raise LibraryValidationError("Cannot remove: item is not available")
        if self._has_active_reservation(media_id):
            raise LibraryValidationError("Cannot remove: item has active reservation")
        del self._items[media_id]
        self._holds.pop(media_id, None)
        logger.info(f"Removed item {media_id}")

    def get_item(self, media_id: str) -> MediaItem:
        item = self._items.get(media_id)
        if item is None:
            raise ItemNotFoundError(media_id)
        return item

    # ---------------------------------------------------------------- members

    def add_member(self, member: Member) -> None:
        """Register a member, replacing any member that already has its id."""
        if member is None:
            raise ValueError("Member cannot be None")
        if member.member_id in self._members:
            logger.warning(f"Replacing existing member {member.member_id}")
        self._members[member.member_id] = member

    def remove_member(self, member_id: str) -> None:
        self.get_member(member_id)
        if self._member_has_overdue_loans(member_id):
            raise LibraryValidationError("Cannot remove: member has overdue loans")
        del self._members[member_id]
        for media_id in [m for m, holder in self._holds.items() if holder == member_id]:
            self.release_hold(media_id)
        logger.info(f"Removed member {member_id}")

    def get_member(self, member_id: str) -> Member:
        member = self._members.get(member_id)
        if member is None:
            raise MemberNotFoundError(member_id)
        return member

    # ------------------------------------------------------------------ loans

    def loan_item(self, member_id: str, media_id: str) -> Loan:
        """Lend an item to a member.

        Checks, in order: member is active, member has no overdue loan, item
        has no open loan and is available (or is being held for this member).
        """
        member = self.get_member(member_id)
        item = self.get_item(media_id)

        if not member.active:
            raise LibraryValidationError("Cannot loan item while inactive member")
        if self._member_has_overdue_loans(member_id):
            raise LibraryValidationError("Cannot loan item with overdue loans")
        if not self._is_lendable_to(item, member_id):
            raise LibraryValidationError("Item is not currently available")

        loan_date = self.clock()
        due_date = self.loan_policy.calculate_due_date(loan_date)

        loan = Loan(member_id=member.member_id, media_id=item.media_id,
                    loan_date=loan_date, due_date=due_date)
        self._loans[loan.loan_id] = loan
        item.status = AvailabilityStatus.ON_LOAN
        self._holds.pop(media_id, None)

        logger.info(f"Loan {loan.loan_id}: item {media_id} to member {member_id}, due {due_date.isoformat()}")
        return loan

    def return_item(self, media_id: str) -> Loan:
        """Close the open loan on an item and charge any fine.

        The item is left RESERVED when someone is queued for it or a fulfilled
        reservation is waiting to be collected; fulfilling the queue is a
        separate call.
        """
        loan = self._find_open_loan(media_id)

        return_date = self.clock()
        fine = self.fine_policy.calculate_fine(loan.due_date, return_date)

        loan.fine_accrued = fine
        loan.mark_returned(return_date)

        item = self._items.get(media_id)
        if item is not None:
            self._settle_status(item)

        if fine:
            logger.info(f"Loan {loan.loan_id} returned late, fine {fine}")
        else:
            logger.info(f"Loan {loan.loan_id} returned")
        return loan

    def list_loans(self, member_id: Optional[str] = None) -> List[Loan]:
        loans = list(self._loans.values())
        if member_id is not None:
            loans = [loan for loan in loans if loan.member_id == member_id]
        return loans

    def overdue_loans(self) -> List[Loan]:
        today = self.clock()
        return [loan for loan in self._loans.values() if loan.is_overdue(today)]

    # ----------------------------------------------------------- reservations

    def place_reservation(self, member_id: str, media_id: str) -> Reservation:
        """Queue a member for an item. The queue is first come, first served."""
        member = self.get_member(member_id)
        if not member.active:
            raise LibraryValidationError("Inactive members cannot reserve items.")
        if media_id not in self._items:
            if self.require_registered_item:
                raise ItemNotFoundError(media_id)
            logger.info(f"Reservation placed on unregistered media id {media_id}")

        queue = self._reservations_by_media.setdefault(media_id, deque())
        reservation = Reservation(member_id=member_id, media_id=media_id,
                                  reservation_date=self.clock())
        queue.append(reservation)
        logger.info(f"Reservation {reservation.reservation_id}: member {member_id} "
                    f"queued for {media_id} at position {len(queue)}")
        return reservation

    def fulfil_reservation(self, media_id: str) -> bool:
        """Fulfil the oldest active reservation on an item.

        Returns False, changing nothing, when nobody is waiting.
        """
        item = self._items.get(media_id)
        if item is None:
            raise ItemNotFoundError(media_id)

        reservation = self._next_active_reservation(media_id)
        if reservation is None:
            return False

        reservation.fulfil()
        item.status = AvailabilityStatus.RESERVED
        self._holds[media_id] = reservation.member_id
        logger.info(f"Reservation {reservation.reservation_id} fulfilled; "
                    f"item {media_id} held for member {reservation.member_id}")
        return True

    def cancel_reservation(self, reservation_id: str) -> Reservation:
        reservation = self._find_reservation(reservation_id)
        if not reservation.is_active:
            raise LibraryValidationError(
                f"Only active reservations can be cancelled (status: {reservation.status.value})"
            )
        reservation.cancel()

        media_id = reservation.media_id
        item = self._items.get(media_id)
        if item is not None and item.status == AvailabilityStatus.RESERVED:
            self._settle_status(item)
        logger.info(f"Reservation {reservation_id} cancelled")
        return reservation

    def release_hold(self, media_id: str) -> bool:
        """Give up the pickup hold on an item whose reservation was never collected.

        The item goes to the next active reservation (RESERVED) or back on the
        shelf. Returns False when the item had no hold.
        """
        holder = self._holds.pop(media_id, None)
        if holder is None:
            return False
        item = self._items.get(media_id)
        if item is not None:
            self._settle_status(item)
        logger.info(f"Hold on item {media_id} for member {holder} released")
        return True

    def list_reservations(self, media_id: str) -> List[Reservation]:
        return list(self._reservations_by_media.get(media_id, ()))

    # -------------------------------------------------------- lookups/listing

    def list_items(self) -> List[MediaItem]:
        return list(self._items.values())

    def list_members(self) -> List[Member]:
        return list(self._members.values())

    def search_media(self, keyword: Optional[str] = None) -> List[MediaItem]:
        results = [item for item in self._items.values() if media_matches_keyword(item, keyword)]
        results.sort(key=title_sort_key)
        return results

    def search_members(self, keyword: Optional[str] = None) -> List[Member]:
        results = [m for m in self._members.values() if member_matches_keyword(m, keyword)]
        results.sort(key=name_sort_key)
        return results

    # -------------------------------------------------------------- internals

    def _has_active_reservation(self, media_id: str) -> bool:
        return self._next_active_reservation(media_id) is not None

    def _next_active_reservation(self, media_id: str) -> Optional[Reservation]:
        for reservation in self._reservations_by_media.get(media_id, ()):
            if reservation.is_active:
                return reservation
        return None

    def _open_loan(self, media_id: str) -> Optional[Loan]:
        for loan in self._loans.values():
            if loan.media_id == media_id and loan.is_outstanding:
                return loan
        return None

    def _find_open_loan(self, media_id: str) -> Loan:
        loan = self._open_loan(media_id)
        if loan is not None:
            return loan
        raise LibraryValidationError(f"No open loan found for media id: {media_id}")

    def _find_reservation(self, reservation_id: str) -> Reservation:
        for queue in self._reservations_by_media.values():
            for reservation in queue:
                if reservation.reservation_id == reservation_id:
                    return reservation
        raise ReservationNotFoundError(reservation_id)

    def _member_has_overdue_loans(self, member_id: str) -> bool:
        today: date = self.clock()
        return any(
            loan.member_id == member_id and loan.is_overdue(today)
            for loan in self._loans.values()
        )

    def _settle_status(self, item: MediaItem) -> None:
        """Derive the shelf status from open loans, holds and the reservation queue."""
        media_id = item.media_id
        if self._open_loan(media_id) is not None:
            item.status = AvailabilityStatus.ON_LOAN
        elif media_id in self._holds or self._has_active_reservation(media_id):
            item.status = AvailabilityStatus.RESERVED
        else:
            item.status = AvailabilityStatus.AVAILABLE

    def _is_lendable_to(self, item: MediaItem, member_id: str) -> bool:
        if self._open_loan(item.media_id) is not None:
            return False
        if item.is_available:
            return True
        return (item.status == AvailabilityStatus.RESERVED
                and self._holds.get(item.media_id) == member_id)
