from datetime import datetime
from campus_library.extensions import db

ROLES = ("admin", "staff", "member")
CATEGORIES = ("student", "faculty", "staff")


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(32), primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(20), nullable=False, default="member")  # admin/staff/member
    category = db.Column(db.String(20), nullable=True)  # student/faculty/staff, members only

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "category": self.category,
        }
