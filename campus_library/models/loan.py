from campus_library.extensions import db

STATUS_BORROWED = "borrowed"
STATUS_RETURNED = "returned"


class Loan(db.Model):
    __tablename__ = "transactions"

    txn_id = db.Column(db.String(64), primary_key=True)

    member_id = db.Column(db.String(32), db.ForeignKey("users.id"), nullable=False, index=True)
    # no foreign key: ledger rows outlive removed titles
    book_id = db.Column(db.String(32), nullable=False, index=True)

    issue_date = db.Column(db.DateTime, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    return_date = db.Column(db.DateTime, nullable=True)

    fine = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default=STATUS_BORROWED, index=True)

    @property
    def is_open(self) -> bool:
        return self.status == STATUS_BORROWED

    def to_dict(self):
        return {
            "txn_id": self.txn_id,
            "member_id": self.member_id,
            "book_id": self.book_id,
            "issue_date": self.issue_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "return_date": self.return_date.isoformat() if self.return_date else None,
            "fine": self.fine,
            "status": self.status,
        }
