import os


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///library.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-super-secret")

    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = _env_int("MAIL_PORT", 25)
    MAIL_USE_TLS = os.getenv("MAIL_USE_TLS", "0") == "1"
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "noreply@library.local")

    # Circulation rules: whole currency units per late day, and
    # category -> (loan duration in days, concurrent borrow limit).
    FINE_PER_DAY = _env_int("FINE_PER_DAY", 2)
    BORROW_POLICIES = {
        "student": (_env_int("LOAN_DAYS_STUDENT", 14), _env_int("BORROW_LIMIT_STUDENT", 5)),
        "faculty": (_env_int("LOAN_DAYS_FACULTY", 30), _env_int("BORROW_LIMIT_FACULTY", 10)),
        "staff": (_env_int("LOAN_DAYS_STAFF", 21), _env_int("BORROW_LIMIT_STAFF", 7)),
    }

    AUTO_BOOTSTRAP = os.getenv("AUTO_BOOTSTRAP", "1") == "1"
    SEED_DEFAULT_DATA = os.getenv("SEED_DEFAULT_DATA", "1") == "1"


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    MAIL_SUPPRESS_SEND = True
    FINE_PER_DAY = 2
    BORROW_POLICIES = {
        "student": (14, 5),
        "faculty": (30, 10),
        "staff": (21, 7),
    }
    AUTO_BOOTSTRAP = False
    SEED_DEFAULT_DATA = False
