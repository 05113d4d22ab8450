from collections import namedtuple

from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token

from campus_library.errors import InvalidCredentials

Identity = namedtuple("Identity", ["user_id", "name", "role", "category"])


class AuthService:
    """Credential check in front of the library services.

    Only this class handles raw passwords; everything behind it works with
    the returned ``Identity``.
    """

    def __init__(self, membership):
        self.membership = membership

    def register(self, user_id: str, name: str, password: str, role: str = "member",
                 category: str | None = None, email: str | None = None):
        return self.membership.add_user(
            user_id=user_id,
            name=name,
            role=role,
            password_hash=generate_password_hash(password or ""),
            category=category,
            email=email,
        )

    def authenticate(self, user_id: str, password: str) -> Identity:
        user = self.membership.users.get_by_id((user_id or "").strip())
        if not user or not check_password_hash(user.password_hash, password or ""):
            raise InvalidCredentials()
        return Identity(user.id, user.name, user.role, user.category)

    def login(self, user_id: str, password: str):
        identity = self.authenticate(user_id, password)
        token = create_access_token(
            identity=identity.user_id,
            additional_claims={"role": identity.role, "name": identity.name, "category": identity.category},
        )
        return token, identity
