from datetime import datetime
from campus_library.extensions import db

class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("available_copies >= 0", name="ck_books_available_non_negative"),
        db.CheckConstraint("available_copies <= total_copies", name="ck_books_available_le_total"),
    )

    id = db.Column(db.String(32), primary_key=True)
    isbn = db.Column(db.String(32), nullable=True, index=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=True, index=True)
    publisher = db.Column(db.String(200), nullable=True)
    year = db.Column(db.Integer, nullable=True)
    rack = db.Column(db.String(32), nullable=True)

    total_copies = db.Column(db.Integer, nullable=False, default=1)
    available_copies = db.Column(db.Integer, nullable=False, default=1)
    borrowed_count = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @property
    def on_loan(self) -> int:
        return self.total_copies - self.available_copies

    def to_dict(self):
        return {
            "id": self.id,
            "isbn": self.isbn,
            "title": self.title,
            "author": self.author,
            "publisher": self.publisher,
            "year": self.year,
            "rack": self.rack,
            "total_copies": self.total_copies,
            "available_copies": self.available_copies,
            "borrowed_count": self.borrowed_count,
        }
