# app/core/clock.py
"""
Injectable source of "now".

Everything that needs the current date (bill statuses, the bill payment
workflow, dashboard periods, month rollover) receives a Clock instead of
calling datetime.now() directly, so tests can pin the date.
"""
from datetime import date, datetime


class Clock:
    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()


class FixedClock(Clock):
    """A clock frozen at a given moment."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


system_clock = Clock()


def get_clock() -> Clock:
    return system_clock
