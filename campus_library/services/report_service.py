from datetime import datetime

from campus_library.clock import as_utc_naive
from campus_library.repositories.book_repo import BookRepo
from campus_library.repositories.loan_repo import LoanRepo
from campus_library.services.circulation_service import overdue_days
from campus_library.services.outcomes import OverdueEntry


class ReportService:
    def __init__(self, session, fine_per_day: int):
        self.books = BookRepo(session)
        self.loans = LoanRepo(session)
        self.fine_per_day = fine_per_day

    def overdue(self, now: datetime):
        """Open loans past their due day with the fine accrued so far."""
        now = as_utc_naive(now)
        rows = []
        for loan in self.loans.list_open():
            days = overdue_days(loan.due_date, now)
            if days <= 0:
                continue
            rows.append(OverdueEntry(
                txn_id=loan.txn_id,
                member_id=loan.member_id,
                book_id=loan.book_id,
                due_date=loan.due_date,
                overdue_days=days,
                fine=days * self.fine_per_day,
            ))
        return rows

    def top_borrowed(self, limit: int = 10):
        return self.books.top_borrowed(limit)

    def borrowed(self):
        return self.loans.list_open()

    def member_transactions(self, member_id: str):
        return self.loans.list_by_member(member_id)
