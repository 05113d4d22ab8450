from campus_library.models.book import Book
from campus_library.models.user import User
from campus_library.models.loan import Loan
from campus_library.models.reservation import Reservation
from campus_library.models.notification_log import NotificationLog

__all__ = ["Book", "User", "Loan", "Reservation", "NotificationLog"]
