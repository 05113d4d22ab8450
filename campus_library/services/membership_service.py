from collections import namedtuple

from flask import current_app

from campus_library.errors import InvalidCategory, InvalidInput, MemberNotFound, UserExists, UserNotFound
from campus_library.models.user import CATEGORIES, ROLES, User
from campus_library.repositories.user_repo import UserRepo
from campus_library.services.transaction import atomic

BorrowPolicy = namedtuple("BorrowPolicy", ["loan_days", "limit"])

DEFAULT_CATEGORY = "student"


class MembershipService:
    def __init__(self, session, policies: dict):
        self.session = session
        self.users = UserRepo(session)
        self.policies = {k: BorrowPolicy(*v) for k, v in policies.items()}

    def find_user(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFound()
        return user

    def find_member(self, member_id: str) -> User:
        user = self.users.get_by_id(member_id)
        if not user or user.role != "member":
            raise MemberNotFound()
        return user

    def category_of(self, member_id: str):
        user = self.users.get_by_id(member_id)
        return user.category if user else None

    def borrow_policy(self, category) -> BorrowPolicy:
        return self.policies.get(category) or self.policies[DEFAULT_CATEGORY]

    def list_users(self):
        return self.users.list_all()

    def list_members(self):
        return self.users.list_by_role("member")

    def add_user(self, user_id: str, name: str, role: str, password_hash: str,
                 category: str | None = None, email: str | None = None) -> User:
        user_id = (user_id or "").strip()
        name = (name or "").strip()
        if not user_id or not name:
            raise InvalidInput("id and name are required")
        if role not in ROLES:
            raise InvalidInput(f"Unknown role: {role}")

        if role == "member":
            category = (category or "").strip().lower()
            if category not in CATEGORIES:
                raise InvalidCategory()
        else:
            category = None

        with atomic(self.session):
            if self.users.get_by_id(user_id):
                raise UserExists()
            user = self.users.create(User(
                id=user_id,
                name=name,
                email=(email or "").strip() or None,
                password_hash=password_hash,
                role=role,
                category=category,
            ))

        current_app.logger.info(f"[membership] {role} added id={user_id}")
        return user
