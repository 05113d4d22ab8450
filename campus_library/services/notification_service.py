# campus_library/services/notification_service.py
from __future__ import annotations

from datetime import datetime

from flask import current_app
from flask_mail import Message

from campus_library.extensions import mail
from campus_library.models.notification_log import NotificationLog
from campus_library.repositories.notification_repo import NotificationRepo
from campus_library.repositories.user_repo import UserRepo
from campus_library.repositories.book_repo import BookRepo


class NotificationService:
    """Tells a reservation holder that a returned copy is now on loan to them.

    Runs after the return has committed; a failed mail is logged, never raised.
    """

    def __init__(self, session):
        self.session = session
        self.logs = NotificationRepo(session)
        self.users = UserRepo(session)
        self.books = BookRepo(session)

    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        try:
            mail.send(Message(subject=subject, recipients=[to_email], body=body))
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[notification] mail not sent to {to_email}: {e}")
            return False, str(e)

    def reservation_fulfilled(self, fulfillment, book_id: str, now: datetime) -> NotificationLog:
        user = self.users.get_by_id(fulfillment.member_id)
        book = self.books.get(book_id)

        to_email = user.email if user else None
        name = user.name if user else fulfillment.member_id
        title = book.title if book else book_id

        body = (
            f"Hello {name},\n\n"
            f"A copy of '{title}' you reserved has been returned and issued to you.\n"
            f"Transaction: {fulfillment.txn_id}\n"
            f"Due date: {fulfillment.due_date.date().isoformat()}\n"
        )

        if not to_email:
            ok, err = False, "missing_email"
        else:
            ok, err = self.send_email(to_email, "Library: your reservation is ready", body)

        return self.logs.log(NotificationLog(
            txn_id=fulfillment.txn_id,
            type="reservation_fulfilled",
            email=to_email,
            message=body,
            success=ok,
            error_message=err,
            sent_at=now,
        ))
