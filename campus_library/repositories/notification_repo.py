from sqlalchemy import select

from campus_library.models.notification_log import NotificationLog


class NotificationRepo:
    def __init__(self, session):
        self.session = session

    def log(self, entry: NotificationLog, commit: bool = True):
        self.session.add(entry)
        if commit:
            self.session.commit()
        return entry

    def list_for_txn(self, txn_id: str):
        stmt = select(NotificationLog).filter_by(txn_id=txn_id).order_by(NotificationLog.id)
        return self.session.scalars(stmt).all()
