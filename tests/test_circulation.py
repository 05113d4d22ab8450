from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from campus_library.errors import (
    AlreadyReserved,
    AlreadyReturned,
    BookAvailable,
    BookNotFound,
    BorrowLimitReached,
    InventoryInconsistency,
    LoanNotFound,
    MemberNotFound,
    NoCopiesAvailable,
)
from campus_library.extensions import db
from campus_library.library import Library
from campus_library.models.loan import Loan
from campus_library.models.reservation import STATUS_FULFILLED, STATUS_WAITING
from tests.conftest import DAY_ONE, assert_copy_invariant


def test_issue_sets_due_date_from_category(library, add_member, add_book):
    add_member("m001", "student")
    add_member("f001", "faculty")
    add_member("s001", "staff")
    add_book("b001", copies=3)

    student = library.circulation.issue_book("m001", "b001", DAY_ONE)
    faculty = library.circulation.issue_book("f001", "b001", DAY_ONE)
    staff = library.circulation.issue_book("s001", "b001", DAY_ONE)

    assert student.due_date == DAY_ONE + timedelta(days=14)
    assert faculty.due_date == DAY_ONE + timedelta(days=30)
    assert staff.due_date == DAY_ONE + timedelta(days=21)

    book = library.catalog.find("b001")
    assert book.available_copies == 0
    assert book.borrowed_count == 3
    assert_copy_invariant()


def test_issue_unknown_member_or_book(library, add_member, add_book):
    add_member("m001")
    add_book("b001")
    library.auth.register("staff1", "Librarian", "pw", role="staff")

    with pytest.raises(MemberNotFound):
        library.circulation.issue_book("nobody", "b001", DAY_ONE)
    with pytest.raises(MemberNotFound):
        library.circulation.issue_book("staff1", "b001", DAY_ONE)
    with pytest.raises(BookNotFound):
        library.circulation.issue_book("m001", "nope", DAY_ONE)


def test_issue_without_copies_does_not_mutate(library, add_member, add_book):
    add_member("m001")
    add_member("m002")
    add_book("b003", copies=1)
    library.circulation.issue_book("m001", "b003", DAY_ONE)

    with pytest.raises(NoCopiesAvailable):
        library.circulation.issue_book("m002", "b003", DAY_ONE)

    book = library.catalog.find("b003")
    assert book.available_copies == 0
    assert book.borrowed_count == 1
    assert library.ledger.count_open_loans("m002") == 0
    assert_copy_invariant()


def test_lost_race_for_last_copy_rolls_back_loan(library, add_member, add_book, monkeypatch):
    add_member("m001")
    add_member("m002")
    add_book("b003", copies=1)
    library.circulation.issue_book("m001", "b003", DAY_ONE)

    # m002 saw the copy before m001 took it
    stale = SimpleNamespace(id="b003", available_copies=1, total_copies=1)
    monkeypatch.setattr(library.catalog, "find", lambda book_id: stale)

    with pytest.raises(NoCopiesAvailable):
        library.circulation.issue_book("m002", "b003", DAY_ONE)

    assert library.ledger.count_open_loans("m002") == 0
    assert db.session.query(Loan).count() == 1
    assert_copy_invariant()


def test_student_borrow_limit(library, add_member, add_book):
    add_member("m001", "student")
    for i in range(6):
        add_book(f"b{i}")
    for i in range(5):
        library.circulation.issue_book("m001", f"b{i}", DAY_ONE)

    with pytest.raises(BorrowLimitReached) as exc:
        library.circulation.issue_book("m001", "b5", DAY_ONE)

    assert exc.value.limit == 5
    assert library.catalog.find("b5").available_copies == 1


def test_return_on_time_has_no_fine(library, add_member, add_book):
    add_member("m001")
    add_book("b001")
    issued = library.circulation.issue_book("m001", "b001", DAY_ONE)

    late_evening_due_day = issued.due_date.replace(hour=23)
    outcome = library.circulation.return_book(issued.txn_id, late_evening_due_day)

    assert outcome.overdue_days == 0
    assert outcome.fine == 0
    assert outcome.fulfillment is None
    assert library.catalog.find("b001").available_copies == 1


def test_fine_counts_whole_days_late(library, add_member, add_book, app):
    add_member("m001")
    add_book("b001")
    issued = library.circulation.issue_book("m001", "b001", datetime(2023, 12, 27, 15, 30))
    assert issued.due_date.date().isoformat() == "2024-01-10"

    outcome = library.circulation.return_book(issued.txn_id, datetime(2024, 1, 13, 8, 0))

    assert outcome.overdue_days == 3
    assert outcome.fine == 3 * app.config["FINE_PER_DAY"]
    loan = library.ledger.find_loan(issued.txn_id)
    assert loan.status == "returned"
    assert loan.fine == outcome.fine
    assert loan.return_date == datetime(2024, 1, 13, 8, 0)


def test_second_return_is_refused_and_fine_charged_once(library, add_member, add_book):
    add_member("m001")
    add_book("b001")
    issued = library.circulation.issue_book("m001", "b001", DAY_ONE)
    first = library.circulation.return_book(issued.txn_id, DAY_ONE + timedelta(days=16))

    with pytest.raises(AlreadyReturned):
        library.circulation.return_book(issued.txn_id, DAY_ONE + timedelta(days=30))

    loan = library.ledger.find_loan(issued.txn_id)
    assert loan.fine == first.fine == 4
    assert library.catalog.find("b001").available_copies == 1
    assert_copy_invariant()


def test_return_unknown_loan(library):
    with pytest.raises(LoanNotFound):
        library.circulation.return_book("TX-missing", DAY_ONE)


def test_member_cannot_return_someone_elses_loan(library, add_member, add_book):
    add_member("m001")
    add_member("m002")
    add_book("b001")
    issued = library.circulation.issue_book("m001", "b001", DAY_ONE)

    with pytest.raises(LoanNotFound):
        library.circulation.return_book(issued.txn_id, DAY_ONE, member_id="m002")

    assert library.ledger.find_loan(issued.txn_id).status == "borrowed"
    outcome = library.circulation.return_book(issued.txn_id, DAY_ONE, member_id="m001")
    assert outcome.fine == 0


def test_reserve_requires_checked_out_title(library, add_member, add_book):
    add_member("m001")
    add_book("b001")

    with pytest.raises(BookAvailable):
        library.circulation.reserve_book("m001", "b001", DAY_ONE)
    with pytest.raises(BookNotFound):
        library.circulation.reserve_book("m001", "nope", DAY_ONE)


def test_reserve_twice_for_same_title(library, add_member, add_book):
    add_member("m001")
    add_member("m002")
    add_book("b001")
    library.circulation.issue_book("m001", "b001", DAY_ONE)
    library.circulation.reserve_book("m002", "b001", DAY_ONE)

    with pytest.raises(AlreadyReserved):
        library.circulation.reserve_book("m002", "b001", DAY_ONE)
    with pytest.raises(MemberNotFound):
        library.circulation.reserve_book("ghost", "b001", DAY_ONE)


def test_reservations_are_served_first_in_first_out(library, add_member, add_book):
    for member_id in ("m001", "m002", "m003"):
        add_member(member_id)
    add_book("b001")
    issued = library.circulation.issue_book("m001", "b001", DAY_ONE)

    # inserted out of time order; res_date decides
    r2 = library.circulation.reserve_book("m003", "b001", DAY_ONE.replace(hour=10, minute=5))
    r1 = library.circulation.reserve_book("m002", "b001", DAY_ONE.replace(hour=10, minute=0))

    outcome = library.circulation.return_book(issued.txn_id, DAY_ONE + timedelta(days=2))

    assert outcome.fulfillment.res_id == r1.res_id
    assert outcome.fulfillment.member_id == "m002"
    assert library.reservations.find(r1.res_id).status == STATUS_FULFILLED
    assert library.reservations.find(r2.res_id).status == STATUS_WAITING


def test_same_instant_reservations_fall_back_to_insertion_order(library, add_member, add_book):
    for member_id in ("m001", "m002", "m003"):
        add_member(member_id)
    add_book("b001")
    issued = library.circulation.issue_book("m001", "b001", DAY_ONE)
    first = library.circulation.reserve_book("m002", "b001", DAY_ONE)
    library.circulation.reserve_book("m003", "b001", DAY_ONE)

    assert library.reservations.peek_head("b001").res_id == first.res_id
    outcome = library.circulation.return_book(issued.txn_id, DAY_ONE)
    assert outcome.fulfillment.member_id == "m002"


def test_full_circulation_scenario(library, add_member, add_book, app):
    add_member("m001", "student")
    add_member("m002", "student")
    add_book("b003", copies=1)
    day_d = DAY_ONE

    issued = library.circulation.issue_book("m001", "b003", day_d)
    assert library.catalog.find("b003").available_copies == 0
    assert issued.due_date.date() == (day_d + timedelta(days=14)).date()

    with pytest.raises(NoCopiesAvailable):
        library.circulation.issue_book("m002", "b003", day_d)
    library.circulation.reserve_book("m002", "b003", day_d)

    return_day = day_d + timedelta(days=20)
    outcome = library.circulation.return_book(issued.txn_id, return_day)

    assert outcome.fine == 6 * app.config["FINE_PER_DAY"]
    assert outcome.fulfillment is not None
    assert outcome.fulfillment.member_id == "m002"
    assert outcome.fulfillment.due_date.date() == (return_day + timedelta(days=14)).date()

    new_loan = library.ledger.find_loan(outcome.fulfillment.txn_id)
    assert new_loan.member_id == "m002"
    assert new_loan.status == "borrowed"

    book = library.catalog.find("b003")
    assert book.available_copies == 0
    assert book.borrowed_count == 2
    assert_copy_invariant()


def test_fulfilment_skips_borrow_limit(app, add_member, add_book):
    policies = {"student": (14, 1), "faculty": (30, 10), "staff": (21, 7)}
    library = Library(db.session, {**app.config, "BORROW_POLICIES": policies})
    add_member("m001")
    add_member("m002")
    add_book("b001")
    add_book("b002")
    add_book("b003")

    held = library.circulation.issue_book("m001", "b001", DAY_ONE)
    library.circulation.issue_book("m002", "b002", DAY_ONE)
    with pytest.raises(BorrowLimitReached):
        library.circulation.issue_book("m002", "b003", DAY_ONE)
    library.circulation.reserve_book("m002", "b001", DAY_ONE)

    outcome = library.circulation.return_book(held.txn_id, DAY_ONE + timedelta(days=1))

    assert outcome.fulfillment.member_id == "m002"
    assert library.ledger.count_open_loans("m002") == 2


def test_fulfilment_uses_holder_category(library, add_member, add_book):
    add_member("m001", "student")
    add_member("f001", "faculty")
    add_book("b001")
    held = library.circulation.issue_book("m001", "b001", DAY_ONE)
    library.circulation.reserve_book("f001", "b001", DAY_ONE)

    outcome = library.circulation.return_book(held.txn_id, DAY_ONE)

    assert outcome.fulfillment.due_date == DAY_ONE + timedelta(days=30)


def test_counter_overflow_aborts_return(library, add_member, add_book):
    add_member("m001")
    add_book("b001", copies=1)
    # a loan row whose copy was never taken off the shelf
    txn_id = library.ledger.create_loan("m001", "b001", DAY_ONE, DAY_ONE + timedelta(days=14))
    db.session.commit()

    with pytest.raises(InventoryInconsistency):
        library.circulation.return_book(txn_id, DAY_ONE)

    loan = library.ledger.find_loan(txn_id)
    assert loan.status == "borrowed"
    assert loan.return_date is None
    assert library.catalog.find("b001").available_copies == 1

    # the engine stays usable afterwards
    add_book("b002")
    assert library.circulation.issue_book("m001", "b002", DAY_ONE).txn_id


def test_cancelled_reservation_is_skipped(library, add_member, add_book):
    for member_id in ("m001", "m002", "m003"):
        add_member(member_id)
    add_book("b001")
    held = library.circulation.issue_book("m001", "b001", DAY_ONE)
    first = library.circulation.reserve_book("m002", "b001", DAY_ONE)
    library.circulation.reserve_book("m003", "b001", DAY_ONE + timedelta(minutes=1))

    library.circulation.cancel_reservation(first.res_id, member_id="m002")
    outcome = library.circulation.return_book(held.txn_id, DAY_ONE + timedelta(days=1))

    assert outcome.fulfillment.member_id == "m003"
