"""Issue, return, reserve and reservation fulfilment.

Each public action runs as one transaction on the shared session: the loan
row, the copy counters and the reservation status change together or not at
all. The service keeps no state of its own between actions.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from flask import current_app

from campus_library.clock import as_utc_naive
from campus_library.errors import (
    BookAvailable,
    BorrowLimitReached,
    InventoryInconsistency,
    LoanNotFound,
    NoCopiesAvailable,
    AlreadyReturned,
)
from campus_library.services.outcomes import FulfillmentOutcome, IssueOutcome, ReturnOutcome
from campus_library.services.transaction import atomic


def overdue_days(due_date: datetime, when: datetime) -> int:
    """Whole calendar days late; returning on the due date itself is not late."""
    return max(0, (when.date() - due_date.date()).days)


class CirculationService:
    def __init__(self, session, catalog, membership, ledger, reservations,
                 fine_per_day: int, notifier=None):
        self.session = session
        self.catalog = catalog
        self.membership = membership
        self.ledger = ledger
        self.reservations = reservations
        self.fine_per_day = fine_per_day
        self.notifier = notifier

    def fine_for(self, due_date: datetime, when: datetime) -> int:
        return overdue_days(due_date, when) * self.fine_per_day

    # ---- issue
    def issue_book(self, member_id: str, book_id: str, now: datetime) -> IssueOutcome:
        now = as_utc_naive(now)
        with atomic(self.session):
            member = self.membership.find_member(member_id)
            book = self.catalog.find(book_id)
            if book.available_copies < 1:
                raise NoCopiesAvailable()

            policy = self.membership.borrow_policy(member.category)
            if self.ledger.count_open_loans(member.id) >= policy.limit:
                raise BorrowLimitReached(policy.limit)

            outcome = self._allocate(member.id, book.id, policy.loan_days, now)

        current_app.logger.info(
            f"[circulation] issued txn={outcome.txn_id} member={member_id} book={book_id} "
            f"due={outcome.due_date.date()}"
        )
        return outcome

    def _allocate(self, member_id: str, book_id: str, loan_days: int, now: datetime) -> IssueOutcome:
        due = now + timedelta(days=loan_days)
        txn_id = self.ledger.create_loan(member_id, book_id, now, due)
        # A lost race on the last copy raises here and rolls back the loan row.
        self.catalog.decrement_available(book_id)
        return IssueOutcome(txn_id=txn_id, member_id=member_id, book_id=book_id,
                            issue_date=now, due_date=due)

    # ---- return
    def return_book(self, txn_id: str, now: datetime, member_id: str | None = None) -> ReturnOutcome:
        """Close a loan, charge the fine and hand the copy to the next reservation.

        ``member_id`` restricts the return to that member's own loans; staff
        callers leave it out.
        """
        now = as_utc_naive(now)
        with atomic(self.session):
            loan = self.ledger.find_loan(txn_id)
            if member_id is not None and loan.member_id != member_id:
                raise LoanNotFound("No matching borrowed transaction")
            if not loan.is_open:
                raise AlreadyReturned()

            book_id = loan.book_id
            days = overdue_days(loan.due_date, now)
            fine = days * self.fine_per_day

            self.ledger.close_loan(txn_id, now, fine)
            self.catalog.increment_available(book_id)
            fulfillment = self._fulfil_next(book_id, now)

        current_app.logger.info(f"[circulation] returned txn={txn_id} book={book_id} fine={fine}")
        if fulfillment:
            current_app.logger.info(
                f"[circulation] reservation res={fulfillment.res_id} fulfilled: "
                f"issued to {fulfillment.member_id} txn={fulfillment.txn_id}"
            )
            if self.notifier:
                self._notify(fulfillment, book_id, now)

        return ReturnOutcome(txn_id=txn_id, book_id=book_id, return_date=now,
                             overdue_days=days, fine=fine, fulfillment=fulfillment)

    def _notify(self, fulfillment, book_id: str, now: datetime) -> None:
        # The return is already committed; a failed notice must not undo it.
        try:
            self.notifier.reservation_fulfilled(fulfillment, book_id, now)
        except Exception as e:
            self.session.rollback()
            current_app.logger.warning(
                f"[circulation] notice for txn={fulfillment.txn_id} not recorded: {e}"
            )

    def _fulfil_next(self, book_id: str, now: datetime):
        head = self.reservations.peek_head(book_id)
        if head is None:
            return None

        res_id, holder = head.res_id, head.member_id
        self.reservations.mark_fulfilled(res_id)

        # The reservation is the authorisation: no availability or limit check.
        policy = self.membership.borrow_policy(self.membership.category_of(holder))
        try:
            issued = self._allocate(holder, book_id, policy.loan_days, now)
        except NoCopiesAvailable:
            current_app.logger.error(f"[circulation] returned copy of book={book_id} vanished before res={res_id}")
            raise InventoryInconsistency(f"Copy counters are inconsistent for book {book_id}")

        return FulfillmentOutcome(res_id=res_id, member_id=holder,
                                  txn_id=issued.txn_id, due_date=issued.due_date)

    # ---- reservations
    def reserve_book(self, member_id: str, book_id: str, now: datetime):
        now = as_utc_naive(now)
        with atomic(self.session):
            book = self.catalog.find(book_id)
            if book.available_copies > 0:
                raise BookAvailable()
            self.membership.find_member(member_id)
            reservation = self.reservations.enqueue(book.id, member_id, now)
            res_id = reservation.res_id

        current_app.logger.info(f"[circulation] reserved res={res_id} member={member_id} book={book_id}")
        return reservation

    def cancel_reservation(self, res_id: int, member_id: str | None = None):
        with atomic(self.session):
            reservation = self.reservations.cancel(res_id, member_id)
        current_app.logger.info(f"[circulation] reservation res={res_id} cancelled")
        return reservation

    # ---- catalogue withdrawal
    def withdraw_book(self, book_id: str) -> int:
        """Remove a title with no copies on loan; waiting reservations are cancelled."""
        with atomic(self.session):
            self.catalog.remove(book_id)
            cancelled = self.reservations.cancel_for_book(book_id)
        current_app.logger.info(f"[catalog] book removed id={book_id} cancelled_reservations={cancelled}")
        return cancelled
