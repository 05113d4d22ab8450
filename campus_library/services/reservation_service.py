from datetime import datetime

from campus_library.errors import AlreadyReserved, ReservationClosed, ReservationNotFound
from campus_library.models.reservation import (
    Reservation,
    STATUS_CANCELLED,
    STATUS_FULFILLED,
    STATUS_WAITING,
)
from campus_library.repositories.reservation_repo import ReservationRepo


class ReservationService:
    """Per-book FIFO wait-lists, ordered by res_date then res_id."""

    def __init__(self, session):
        self.session = session
        self.reservations = ReservationRepo(session)

    def enqueue(self, book_id: str, member_id: str, reserved_at: datetime) -> Reservation:
        if self.reservations.find_waiting(book_id, member_id):
            raise AlreadyReserved()
        return self.reservations.create(Reservation(
            book_id=book_id,
            member_id=member_id,
            res_date=reserved_at,
            status=STATUS_WAITING,
        ))

    def peek_head(self, book_id: str):
        return self.reservations.head_waiting(book_id)

    def mark_fulfilled(self, res_id: int) -> None:
        if not self.reservations.move(res_id, STATUS_WAITING, STATUS_FULFILLED):
            raise ReservationClosed()

    def find(self, res_id: int) -> Reservation:
        reservation = self.reservations.get(res_id)
        if not reservation:
            raise ReservationNotFound()
        return reservation

    def cancel(self, res_id: int, member_id: str | None = None) -> Reservation:
        reservation = self.find(res_id)
        if member_id is not None and reservation.member_id != member_id:
            raise ReservationNotFound()
        if not self.reservations.move(res_id, STATUS_WAITING, STATUS_CANCELLED):
            raise ReservationClosed()
        return reservation

    def cancel_for_book(self, book_id: str) -> int:
        return self.reservations.cancel_waiting_for_book(book_id)

    def waiting_for_book(self, book_id: str):
        return self.reservations.list_waiting(book_id)

    def for_member(self, member_id: str):
        return self.reservations.list_by_member(member_id)
