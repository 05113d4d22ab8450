from datetime import datetime

from sqlalchemy import func, select, update

from campus_library.models.loan import Loan, STATUS_BORROWED, STATUS_RETURNED


class LoanRepo:
    def __init__(self, session):
        self.session = session

    def get(self, txn_id: str):
        return self.session.get(Loan, txn_id)

    def create(self, loan: Loan):
        self.session.add(loan)
        self.session.flush()
        return loan

    def count_open_by_member(self, member_id: str) -> int:
        stmt = select(func.count()).select_from(Loan).where(
            Loan.member_id == member_id,
            Loan.status == STATUS_BORROWED,
        )
        return self.session.scalar(stmt) or 0

    def close(self, txn_id: str, returned_at: datetime, fine: int) -> bool:
        """borrowed -> returned; False when the loan was not open any more."""
        result = self.session.execute(
            update(Loan)
            .where(Loan.txn_id == txn_id, Loan.status == STATUS_BORROWED)
            .values(return_date=returned_at, fine=fine, status=STATUS_RETURNED)
            .execution_options(synchronize_session=False)
        )
        loan = self.session.get(Loan, txn_id)
        if loan is not None:
            self.session.expire(loan, ["return_date", "fine", "status"])
        return result.rowcount == 1

    def list_open(self):
        stmt = select(Loan).where(Loan.status == STATUS_BORROWED).order_by(Loan.due_date, Loan.txn_id)
        return self.session.scalars(stmt).all()

    def list_by_member(self, member_id: str):
        stmt = select(Loan).where(Loan.member_id == member_id).order_by(Loan.issue_date.desc(), Loan.txn_id.desc())
        return self.session.scalars(stmt).all()
