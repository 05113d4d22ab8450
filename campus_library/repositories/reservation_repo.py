from sqlalchemy import select, update

from campus_library.models.reservation import Reservation, STATUS_WAITING, STATUS_CANCELLED


class ReservationRepo:
    def __init__(self, session):
        self.session = session

    def get(self, res_id: int):
        return self.session.get(Reservation, res_id)

    def create(self, reservation: Reservation):
        self.session.add(reservation)
        self.session.flush()
        return reservation

    def _waiting(self, book_id: str):
        return (
            select(Reservation)
            .where(Reservation.book_id == book_id, Reservation.status == STATUS_WAITING)
            .order_by(Reservation.res_date, Reservation.res_id)
        )

    def head_waiting(self, book_id: str):
        return self.session.scalars(self._waiting(book_id).limit(1)).first()

    def list_waiting(self, book_id: str):
        return self.session.scalars(self._waiting(book_id)).all()

    def find_waiting(self, book_id: str, member_id: str):
        stmt = self._waiting(book_id).where(Reservation.member_id == member_id)
        return self.session.scalars(stmt).first()

    def list_by_member(self, member_id: str):
        stmt = select(Reservation).where(Reservation.member_id == member_id).order_by(Reservation.res_id.desc())
        return self.session.scalars(stmt).all()

    def move(self, res_id: int, from_status: str, to_status: str) -> bool:
        result = self.session.execute(
            update(Reservation)
            .where(Reservation.res_id == res_id, Reservation.status == from_status)
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )
        row = self.session.get(Reservation, res_id)
        if row is not None:
            self.session.expire(row, ["status"])
        return result.rowcount == 1

    def cancel_waiting_for_book(self, book_id: str) -> int:
        result = self.session.execute(
            update(Reservation)
            .where(Reservation.book_id == book_id, Reservation.status == STATUS_WAITING)
            .values(status=STATUS_CANCELLED)
            .execution_options(synchronize_session=False)
        )
        for row in self.session.scalars(select(Reservation).where(Reservation.book_id == book_id)):
            self.session.expire(row, ["status"])
        return result.rowcount
