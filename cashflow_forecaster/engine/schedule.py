""" Recurrence rules: does a stream produce a transaction on a date?

This is the date math at the bottom of the forecasting engine. Each
frequency is a registered method on `Recurrence`, keyed by the value a
stream document uses for its `frequency` field.
"""

from cashflow_forecaster.model.stream import (
    FREQUENCY_ONE_TIME, FREQUENCY_WEEKLY, FREQUENCY_BIWEEKLY,
    FREQUENCY_SEMIMONTHLY, FREQUENCY_MONTHLY)
from cashflow_forecaster.utility.dates import date_range, days_between
from cashflow_forecaster.utility.register import (
    MethodRegister, registered_method_named)

# Rename registered_method_named for readability when subclassing.
recurrence_method = registered_method_named

DEFAULT_DAY_OF_MONTH = 1
SEMIMONTHLY_DAYS = (1, 15)

class Recurrence(MethodRegister):
    """ Decides whether streams fire on given dates.

    Every rule is a pure function of the stream and the date. A stream
    never fires outside `[start_date, end_date]`, and a stream whose
    frequency has no registered rule never fires at all.

    Subclasses can support additional frequencies by decorating a
    method with `recurrence_method(key)`.
    """

    def fires(self, stream, date):
        """ Returns True if `stream` produces a transaction on `date`.

        Arguments:
            stream (CashFlowStream): The stream to test.
            date (datetime.date): A calendar date.
        """
        if date < stream.start_date:
            return False
        if stream.end_date is not None and date > stream.end_date:
            return False
        if not self.is_registered(stream.frequency):
            return False
        return self.call_registered_method(stream.frequency, stream, date)

    def occurrences(self, stream, start, end):
        """ Yields each date in `[start, end]` on which `stream` fires. """
        for date in date_range(start, end):
            if self.fires(stream, date):
                yield date

    @recurrence_method(FREQUENCY_ONE_TIME)
    def one_time(self, stream, date):
        return date == stream.start_date

    @recurrence_method(FREQUENCY_MONTHLY)
    def monthly(self, stream, date):
        """ Fires on `day_of_month` in every month that has that day.

        A stream on the 29th-31st does not fire at all in shorter
        months; it is not moved to the month's last day.
        """
        day_of_month = stream.day_of_month
        if day_of_month is None:
            day_of_month = DEFAULT_DAY_OF_MONTH
        return date.day == day_of_month

    @recurrence_method(FREQUENCY_BIWEEKLY)
    def biweekly(self, stream, date):
        """ Fires every 14 days, counting from the anchor date.

        Biweekly pay ignores months entirely, which is what produces
        the occasional three-paycheck month.
        """
        return self._every_n_days(stream, date, 14)

    @recurrence_method(FREQUENCY_WEEKLY)
    def weekly(self, stream, date):
        return self._every_n_days(stream, date, 7)

    @recurrence_method(FREQUENCY_SEMIMONTHLY)
    def semimonthly(self, stream, date):
        """ Fires on the 1st and 15th, whatever the anchor date. """
        return date.day in SEMIMONTHLY_DAYS

    @staticmethod
    def _every_n_days(stream, date, period):
        anchor = stream.anchor_date
        if anchor is None:
            anchor = stream.start_date
        days = days_between(anchor, date)
        return days >= 0 and days % period == 0

# The rules are stateless, so one instance serves every caller.
RECURRENCE = Recurrence()

def fires(stream, date):
    """ Returns True if `stream` produces a transaction on `date`. """
    return RECURRENCE.fires(stream, date)

def occurrences(stream, start, end):
    """ Returns the dates in `[start, end]` on which `stream` fires. """
    return list(RECURRENCE.occurrences(stream, start, end))
