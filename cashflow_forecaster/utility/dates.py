""" Calendar-date helpers shared by the document layer and the engine.

All dates in this package are `datetime.date` values. There is no
time-of-day or timezone component anywhere, so two dates are compared
as calendar days.
"""

import datetime
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

ISO_FORMAT = '%Y-%m-%d'

def parse_date(value):
    """ Converts `value` to a `datetime.date`.

    Arguments:
        value (date, datetime, str): A date, or an ISO 8601 string such
            as `'2026-01-30'`. Any time component of a `datetime` or of
            an ISO timestamp is discarded.

    Raises:
        ValueError: `value` is a str that isn't an ISO 8601 date.
        TypeError: `value` is not a date or str.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return isoparse(value.strip()).date()
    raise TypeError('expected an ISO date string, got ' + type(value).__name__)

def format_date(value):
    """ Formats a date as `YYYY-MM-DD` (or returns None for None). """
    if value is None:
        return None
    return value.strftime(ISO_FORMAT)

def days_between(start, end):
    """ The signed number of calendar days from `start` to `end`. """
    return (end - start).days

def inclusive_day_count(start, end):
    """ The number of days in `[start, end]`; zero or less if reversed. """
    return days_between(start, end) + 1

def date_range(start, end):
    """ Yields each date from `start` to `end`, inclusive. """
    for offset in range(max(inclusive_day_count(start, end), 0)):
        yield start + datetime.timedelta(days=offset)

def add_months(start, months):
    """ Returns the date `months` calendar months after `start`.

    Days that don't exist in the target month are clamped to its last
    day (e.g. Jan 31 + 1 month is Feb 28 or 29), which is what
    `relativedelta` does.
    """
    return start + relativedelta(months=months)
