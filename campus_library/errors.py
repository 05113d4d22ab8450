"""Named failure conditions raised by the catalog, membership, ledger,
reservation and circulation services.

Every expected condition is a ``LibraryError`` subclass carrying a stable
``code`` and the HTTP status the API answers with. ``InventoryInconsistency``
is the odd one out: it marks a broken copy counter, not a user mistake.
"""


class LibraryError(Exception):
    code = "library_error"
    http_status = 400
    message = "Library error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    def to_dict(self):
        return {"success": False, "code": self.code, "message": str(self)}


# NotFound
class NotFound(LibraryError):
    code = "not_found"
    http_status = 404
    message = "Not found"


class MemberNotFound(NotFound):
    code = "member_not_found"
    message = "Member not found"


class UserNotFound(NotFound):
    code = "user_not_found"
    message = "User not found"


class BookNotFound(NotFound):
    code = "book_not_found"
    message = "Book not found"


class LoanNotFound(NotFound):
    code = "loan_not_found"
    message = "Transaction not found"


class ReservationNotFound(NotFound):
    code = "reservation_not_found"
    message = "Reservation not found"


# StateConflict
class StateConflict(LibraryError):
    code = "state_conflict"
    http_status = 409
    message = "Conflicting state"


class AlreadyReturned(StateConflict):
    code = "already_returned"
    message = "Already returned"


class CopiesOutstanding(StateConflict):
    code = "copies_outstanding"
    message = "Some copies are borrowed"


class BookAvailable(StateConflict):
    code = "book_available"
    message = "Book is available now; borrow instead"


class BookExists(StateConflict):
    code = "book_exists"
    message = "Book id already exists"


class UserExists(StateConflict):
    code = "user_exists"
    message = "User id already exists"


class AlreadyReserved(StateConflict):
    code = "already_reserved"
    message = "Member already waits for this book"


class ReservationClosed(StateConflict):
    code = "reservation_closed"
    message = "Reservation is no longer waiting"


# PolicyViolation
class PolicyViolation(LibraryError):
    code = "policy_violation"
    http_status = 409
    message = "Not allowed by circulation policy"


class NoCopiesAvailable(PolicyViolation):
    code = "no_copies_available"
    message = "No copies available. Consider reserving"


class BorrowLimitReached(PolicyViolation):
    code = "borrow_limit_reached"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Borrow limit reached ({limit})")

    def to_dict(self):
        payload = super().to_dict()
        payload["limit"] = self.limit
        return payload


# Input / auth
class InvalidInput(LibraryError):
    code = "invalid_input"
    http_status = 400
    message = "Invalid input"


class InvalidCategory(InvalidInput):
    code = "invalid_category"
    message = "Category must be student, faculty or staff"


class InvalidCredentials(LibraryError):
    code = "invalid_credentials"
    http_status = 401
    message = "Invalid credentials"


# Internal consistency
class InventoryInconsistency(LibraryError):
    code = "system_inconsistency"
    http_status = 500
    message = "Copy counters are inconsistent"
