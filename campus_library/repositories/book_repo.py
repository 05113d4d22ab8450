from sqlalchemy import delete, func, or_, select, update

from campus_library.models.book import Book


class BookRepo:
    """Data access for ``books``. Never commits; the calling service owns the transaction."""

    def __init__(self, session):
        self.session = session

    def get(self, book_id: str):
        return self.session.get(Book, book_id)

    def list_all(self):
        return self.session.scalars(select(Book).order_by(Book.id)).all()

    def search(self, text: str):
        term = (text or "").strip().lower()
        stmt = select(Book).order_by(Book.id)
        if term:
            stmt = stmt.where(or_(
                func.lower(Book.title).contains(term, autoescape=True),
                func.lower(Book.author).contains(term, autoescape=True),
                func.lower(Book.isbn).contains(term, autoescape=True),
            ))
        return self.session.scalars(stmt).all()

    def top_borrowed(self, limit: int = 10):
        stmt = select(Book).order_by(Book.borrowed_count.desc(), Book.id).limit(limit)
        return self.session.scalars(stmt).all()

    def add(self, book: Book):
        self.session.add(book)
        self.session.flush()
        return book

    def refresh(self, book_id: str):
        return self.session.get(Book, book_id, populate_existing=True)

    def delete_if_idle(self, book_id: str) -> bool:
        """Delete the row only while every copy is on the shelf."""
        result = self.session.execute(
            delete(Book)
            .where(Book.id == book_id, Book.available_copies == Book.total_copies)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        book = self.session.identity_map.get(self.session.identity_key(Book, book_id))
        if book is not None:
            self.session.expunge(book)
        return True

    def resize(self, book_id: str, new_total: int) -> bool:
        """Set total_copies and shift available_copies by the same amount.

        Refused when fewer than the copies on loan would remain.
        """
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.total_copies - Book.available_copies <= new_total)
            .values(
                total_copies=new_total,
                available_copies=Book.available_copies + (new_total - Book.total_copies),
            )
            .execution_options(synchronize_session=False)
        )
        self._expire_counters(book_id)
        return result.rowcount == 1

    def take_copy(self, book_id: str) -> bool:
        """available -1 / borrowed_count +1, only while a copy is left."""
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies > 0)
            .values(
                available_copies=Book.available_copies - 1,
                borrowed_count=Book.borrowed_count + 1,
            )
            .execution_options(synchronize_session=False)
        )
        self._expire_counters(book_id)
        return result.rowcount == 1

    def put_back_copy(self, book_id: str) -> bool:
        """available +1, only while it stays within total_copies."""
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies < Book.total_copies)
            .values(available_copies=Book.available_copies + 1)
            .execution_options(synchronize_session=False)
        )
        self._expire_counters(book_id)
        return result.rowcount == 1

    def _expire_counters(self, book_id: str):
        book = self.session.get(Book, book_id)
        if book is not None:
            self.session.expire(book, ["total_copies", "available_copies", "borrowed_count"])
