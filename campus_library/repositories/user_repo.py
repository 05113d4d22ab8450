from sqlalchemy import func, select

from campus_library.models.user import User


class UserRepo:
    def __init__(self, session):
        self.session = session

    def get_by_id(self, user_id: str):
        return self.session.get(User, user_id)

    def list_all(self):
        return self.session.scalars(select(User).order_by(User.role, User.id)).all()

    def list_by_role(self, role: str):
        return self.session.scalars(select(User).filter_by(role=role).order_by(User.id)).all()

    def count(self) -> int:
        return self.session.scalar(select(func.count()).select_from(User)) or 0

    def create(self, user: User):
        self.session.add(user)
        self.session.flush()
        return user
