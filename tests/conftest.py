from datetime import datetime

import pytest

from campus_library import create_app
from campus_library.clock import FixedClock
from campus_library.config import TestConfig
from campus_library.extensions import db
from campus_library.library import Library
from campus_library.models.book import Book
from campus_library.models.loan import Loan, STATUS_BORROWED

DAY_ONE = datetime(2024, 1, 1, 9, 0, 0)


@pytest.fixture
def clock():
    return FixedClock(DAY_ONE)


@pytest.fixture
def app(clock):
    app = create_app(TestConfig, clock=clock)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def library(app):
    return Library(db.session, app.config)


@pytest.fixture
def add_member(library):
    def _add(member_id, category="student", email=None, password="secret"):
        return library.auth.register(member_id, f"Member {member_id}", password,
                                     role="member", category=category, email=email)
    return _add


@pytest.fixture
def add_book(library):
    def _add(book_id, copies=1, title=None):
        return library.catalog.add_book({"id": book_id, "title": title or f"Title {book_id}",
                                         "total_copies": copies})
    return _add


def assert_copy_invariant():
    for book in db.session.query(Book).all():
        open_loans = db.session.query(Loan).filter_by(book_id=book.id, status=STATUS_BORROWED).count()
        assert 0 <= book.available_copies <= book.total_copies
        assert book.available_copies + open_loans == book.total_copies, book.id
