from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class IssueOutcome:
    txn_id: str
    member_id: str
    book_id: str
    issue_date: datetime
    due_date: datetime

    def to_dict(self):
        return {
            "txn_id": self.txn_id,
            "member_id": self.member_id,
            "book_id": self.book_id,
            "issue_date": self.issue_date.isoformat(),
            "due_date": self.due_date.date().isoformat(),
        }


@dataclass(frozen=True)
class FulfillmentOutcome:
    res_id: int
    member_id: str
    txn_id: str
    due_date: datetime

    def to_dict(self):
        return {
            "res_id": self.res_id,
            "member_id": self.member_id,
            "txn_id": self.txn_id,
            "due_date": self.due_date.date().isoformat(),
        }


@dataclass(frozen=True)
class ReturnOutcome:
    txn_id: str
    book_id: str
    return_date: datetime
    overdue_days: int
    fine: int
    fulfillment: Optional[FulfillmentOutcome] = None

    def to_dict(self):
        return {
            "txn_id": self.txn_id,
            "book_id": self.book_id,
            "return_date": self.return_date.isoformat(),
            "overdue_days": self.overdue_days,
            "fine": self.fine,
            "fulfillment": self.fulfillment.to_dict() if self.fulfillment else None,
        }


@dataclass(frozen=True)
class OverdueEntry:
    txn_id: str
    member_id: str
    book_id: str
    due_date: datetime
    overdue_days: int
    fine: int

    def to_dict(self):
        return {
            "txn_id": self.txn_id,
            "member_id": self.member_id,
            "book_id": self.book_id,
            "due_date": self.due_date.date().isoformat(),
            "overdue_days": self.overdue_days,
            "fine": self.fine,
        }
