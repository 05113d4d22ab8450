from campus_library.extensions import db
from campus_library.models.book import Book
from campus_library.repositories.user_repo import UserRepo
from campus_library.services.auth_service import AuthService
from campus_library.services.membership_service import MembershipService

DEFAULT_USERS = [
    # id, name, password, role, category
    ("admin1", "Library Admin", "admin1", "admin", None),
    ("staff1", "Librarian", "staff1", "staff", None),
    ("m001", "Alice Student", "m001", "member", "student"),
]

DEFAULT_BOOKS = [
    dict(id="b001", isbn="9780131103627", title="The C Programming Language", author="Kernighan & Ritchie",
         publisher="Prentice Hall", year=1978, rack="R1-01", total_copies=3),
    dict(id="b002", isbn="9780132350884", title="Clean Code", author="Robert C. Martin",
         publisher="Prentice Hall", year=2008, rack="R2-03", total_copies=2),
    dict(id="b003", isbn="9780262033848", title="Introduction to Algorithms", author="Cormen et al.",
         publisher="MIT Press", year=2009, rack="R3-05", total_copies=1),
]


def seed_default_data(app):
    """Default accounts and sample books, only into an empty users table."""
    session = db.session
    if UserRepo(session).count() > 0:
        return False

    auth = AuthService(MembershipService(session, app.config["BORROW_POLICIES"]))
    for user_id, name, password, role, category in DEFAULT_USERS:
        auth.register(user_id, name, password, role=role, category=category)

    for data in DEFAULT_BOOKS:
        if session.get(Book, data["id"]) is None:
            session.add(Book(available_copies=data["total_copies"], borrowed_count=0, **data))
    session.commit()

    app.logger.info("[bootstrap] default users and sample books seeded.")
    return True


def ensure_schema(app):
    with app.app_context():
        try:
            db.create_all()
            if app.config.get("SEED_DEFAULT_DATA"):
                seed_default_data(app)
        except Exception as ex:
            db.session.rollback()
            app.logger.exception(f"[bootstrap] schema setup failed: {ex}")
            raise
