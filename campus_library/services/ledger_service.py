from datetime import datetime

from campus_library.errors import AlreadyReturned, LoanNotFound
from campus_library.models.loan import Loan, STATUS_BORROWED
from campus_library.repositories.loan_repo import LoanRepo
from campus_library.utils.ids import new_txn_id


class LedgerService:
    """Loan records: the issue/return/fine audit trail. Rows are never deleted."""

    def __init__(self, session, id_factory=new_txn_id):
        self.session = session
        self.loans = LoanRepo(session)
        self.id_factory = id_factory

    def count_open_loans(self, member_id: str) -> int:
        return self.loans.count_open_by_member(member_id)

    def create_loan(self, member_id: str, book_id: str, issued_at: datetime, due_at: datetime) -> str:
        loan = self.loans.create(Loan(
            txn_id=self.id_factory(),
            member_id=member_id,
            book_id=book_id,
            issue_date=issued_at,
            due_date=due_at,
            return_date=None,
            fine=0,
            status=STATUS_BORROWED,
        ))
        return loan.txn_id

    def find_loan(self, txn_id: str) -> Loan:
        loan = self.loans.get(txn_id)
        if not loan:
            raise LoanNotFound()
        return loan

    def close_loan(self, txn_id: str, returned_at: datetime, fine: int) -> None:
        if not self.loans.close(txn_id, returned_at, fine):
            self.find_loan(txn_id)
            raise AlreadyReturned()
