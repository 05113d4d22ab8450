from flask import current_app

from campus_library.errors import (
    BookExists,
    BookNotFound,
    CopiesOutstanding,
    InvalidInput,
    InventoryInconsistency,
    NoCopiesAvailable,
)
from campus_library.models.book import Book
from campus_library.repositories.book_repo import BookRepo
from campus_library.services.transaction import atomic

EDITABLE_FIELDS = ("title", "author", "isbn", "publisher", "year", "rack")


class CatalogService:
    def __init__(self, session):
        self.session = session
        self.books = BookRepo(session)

    def find(self, book_id: str) -> Book:
        book = self.books.get(book_id)
        if not book:
            raise BookNotFound()
        return book

    def list_books(self):
        return self.books.list_all()

    def search(self, query: str):
        return self.books.search(query)

    def decrement_available(self, book_id: str) -> None:
        if not self.books.take_copy(book_id):
            raise NoCopiesAvailable()

    def increment_available(self, book_id: str) -> None:
        # Callers only put back a copy that was on loan, so this must succeed.
        if not self.books.put_back_copy(book_id):
            current_app.logger.error(f"[catalog] available_copies would exceed total_copies for book={book_id}")
            raise InventoryInconsistency(f"Copy counters are inconsistent for book {book_id}")

    def remove(self, book_id: str) -> None:
        if self.books.delete_if_idle(book_id):
            return
        if self.books.refresh(book_id) is None:
            raise BookNotFound()
        raise CopiesOutstanding("Cannot remove: some copies are borrowed")

    def add_book(self, data: dict) -> Book:
        book_id = (data.get("id") or "").strip()
        title = (data.get("title") or "").strip()
        if not book_id or not title:
            raise InvalidInput("id and title are required")

        copies = _copies(data.get("total_copies", 1))
        with atomic(self.session):
            if self.books.get(book_id):
                raise BookExists()
            book = Book(
                id=book_id,
                title=title,
                total_copies=copies,
                available_copies=copies,
                borrowed_count=0,
            )
            _apply_fields(book, data, skip=("title",))
            self.books.add(book)

        current_app.logger.info(f"[catalog] book added id={book_id} copies={copies}")
        return book

    def update_book(self, book_id: str, data: dict) -> Book:
        with atomic(self.session):
            book = self.find(book_id)
            _apply_fields(book, data)

            if data.get("total_copies") is not None:
                new_total = _copies(data["total_copies"])
                if not self.books.resize(book.id, new_total):
                    book = self.books.refresh(book.id)
                    if book is None:
                        raise BookNotFound()
                    raise CopiesOutstanding(
                        f"Cannot shrink to {new_total} copies: {book.on_loan} on loan"
                    )
            self.session.flush()

        return book


def _copies(value) -> int:
    try:
        copies = int(value)
    except (TypeError, ValueError):
        raise InvalidInput("total_copies must be an integer")
    if copies < 0:
        raise InvalidInput("total_copies must not be negative")
    return copies


def _apply_fields(book: Book, data: dict, skip=()):
    for key in EDITABLE_FIELDS:
        if key in skip or key not in data or data[key] is None:
            continue
        value = data[key]
        if key == "year":
            try:
                value = int(value) if str(value).strip() else None
            except ValueError:
                raise InvalidInput("year must be an integer")
        elif isinstance(value, str):
            value = value.strip() or None
        if key == "title" and not value:
            continue
        setattr(book, key, value)
