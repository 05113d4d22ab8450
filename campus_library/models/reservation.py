from campus_library.extensions import db

STATUS_WAITING = "waiting"
STATUS_FULFILLED = "fulfilled"
STATUS_CANCELLED = "cancelled"


class Reservation(db.Model):
    __tablename__ = "reservations"

    res_id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    book_id = db.Column(db.String(32), nullable=False, index=True)
    member_id = db.Column(db.String(32), db.ForeignKey("users.id"), nullable=False, index=True)

    res_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_WAITING)  # waiting/fulfilled/cancelled

    def to_dict(self):
        return {
            "res_id": self.res_id,
            "book_id": self.book_id,
            "member_id": self.member_id,
            "res_date": self.res_date.isoformat(),
            "status": self.status,
        }
