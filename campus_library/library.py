"""Wires repositories and services around one session.

``Library.current()`` builds the set for the running Flask app from
``db.session`` and ``app.config``; tests may build one directly.
"""
from flask import current_app

from campus_library.extensions import db
from campus_library.services.auth_service import AuthService
from campus_library.services.catalog_service import CatalogService
from campus_library.services.circulation_service import CirculationService
from campus_library.services.ledger_service import LedgerService
from campus_library.services.membership_service import MembershipService
from campus_library.services.notification_service import NotificationService
from campus_library.services.report_service import ReportService
from campus_library.services.reservation_service import ReservationService
from campus_library.utils.ids import new_txn_id


class Library:
    def __init__(self, session, config, id_factory=new_txn_id, notify: bool = True):
        self.session = session

        self.catalog = CatalogService(session)
        self.membership = MembershipService(session, config["BORROW_POLICIES"])
        self.ledger = LedgerService(session, id_factory=id_factory)
        self.reservations = ReservationService(session)

        self.circulation = CirculationService(
            session,
            self.catalog,
            self.membership,
            self.ledger,
            self.reservations,
            fine_per_day=config["FINE_PER_DAY"],
            notifier=NotificationService(session) if notify else None,
        )
        self.reports = ReportService(session, config["FINE_PER_DAY"])
        self.auth = AuthService(self.membership)

    @classmethod
    def current(cls):
        return cls(db.session, current_app.config)
