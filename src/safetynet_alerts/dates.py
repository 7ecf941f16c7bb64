"""
dates.py
---------
Age rule shared by every alert view, and the clock those views read.
"""

from datetime import date, datetime

BIRTHDATE_FORMAT = "%m/%d/%Y"

ADULT_AGE = 18


def today():
    """The reference day used when a caller does not inject one."""
    return datetime.now().date()


def as_date(now):
    """Accept a date or a datetime as the reference instant."""
    if isinstance(now, datetime):
        return now.date()
    return now


def calculate_age(birthdate, now):
    """Whole years between birthdate and now; None when birthdate is unknown."""
    if birthdate is None:
        return None
    now = as_date(now)
    if birthdate > now:
        # counted toward zero, like the elapsed years of a past birthdate
        return -calculate_age(now, birthdate)
    years = now.year - birthdate.year
    if (now.month, now.day) < (birthdate.month, birthdate.day):
        years -= 1
    return years


def is_adult(age):
    """An unknown age counts as adult."""
    return age is None or age >= ADULT_AGE


def parse_birthdate(value):
    """Parse a MM/dd/yyyy string (None stays None)."""
    if value is None:
        return None
    if isinstance(value, date):
        return value
    return datetime.strptime(value, BIRTHDATE_FORMAT).date()


def format_birthdate(value):
    if value is None:
        return None
    return value.strftime(BIRTHDATE_FORMAT)
