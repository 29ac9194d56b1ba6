"""Hotel calendar: timestamps are stored in UTC, so "today" is the UTC date"""

from datetime import date, datetime


def utc_today() -> date:
    return datetime.utcnow().date()
