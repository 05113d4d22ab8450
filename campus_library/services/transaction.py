from contextlib import contextmanager


@contextmanager
def atomic(session):
    """One commit for the whole block; any exception rolls everything back."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
