"""Current-instant sources.

Stored times are naive UTC datetimes, the same shape ``datetime.utcnow``
produces, so every clock here returns that shape.
"""
from datetime import datetime, timedelta, timezone

from flask import current_app

EXTENSION_KEY = "library_clock"


def as_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class FixedClock:
    """A clock that only moves when told to; used by tests and replays."""

    def __init__(self, instant: datetime):
        self.instant = as_utc_naive(instant)

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime) -> None:
        self.instant = as_utc_naive(instant)

    def advance(self, **delta) -> datetime:
        self.instant = self.instant + timedelta(**delta)
        return self.instant


def init_clock(app, clock=None):
    app.extensions[EXTENSION_KEY] = clock or SystemClock()


def get_clock():
    return current_app.extensions[EXTENSION_KEY]
