""" The day-by-day balance simulator.

`simulate` takes a `Plan` and walks its date range one day at a time,
applying every stream that fires to the running checking and savings
balances. It returns one `DailySnapshot` per day and a set of
`ForecastMetrics` that answer the fragility questions: how low does
checking go, and when? How many days are spent under the safety
buffer? Where do the balances end up?

All amounts are `Decimal`. Transaction amounts are rounded to cents
when emitted and balances are rounded to cents after every change, so
the sum of all transactions always reconciles exactly with the change
in balances, however long the forecast.
"""

import logging
from collections import namedtuple
from cashflow_forecaster.engine.overlay import effective_streams
from cashflow_forecaster.engine.schedule import RECURRENCE
from cashflow_forecaster.model.stream import (
    ACCOUNT_CHECKING, ACCOUNT_SAVINGS, STREAM_TYPE_INCOME)
from cashflow_forecaster.money import ZERO, round_cents
from cashflow_forecaster.utility.dates import (
    date_range, format_date, inclusive_day_count)

logger = logging.getLogger(__name__)

class Transaction(namedtuple('Transaction', 'stream_id name amount account')):
    """ A single movement of money on a given day.

    Attributes:
        stream_id (str): The stream that produced this transaction.
        name (str): The stream's display name.
        amount (Decimal): Positive for money in, negative for money out.
        account (str): The account affected.
    """

    __slots__ = ()

    def to_dict(self):
        return {
            'streamId': self.stream_id,
            'name': self.name,
            'amount': self.amount,
            'account': self.account,
        }

class DailySnapshot(namedtuple(
        'DailySnapshot', 'date checking savings transactions')):
    """ Ending balances and the transactions of one day.

    Attributes:
        date (datetime.date): The day.
        checking (Decimal): The checking balance at the end of the day.
        savings (Decimal): The savings balance at the end of the day.
        transactions (tuple[Transaction]): What happened that day.
    """

    __slots__ = ()

    def to_dict(self):
        return {
            'date': format_date(self.date),
            'checking': self.checking,
            'savings': self.savings,
            'transactions': [
                transaction.to_dict() for transaction in self.transactions],
        }

class ForecastMetrics(namedtuple('ForecastMetrics', (
        'min_checking min_checking_date max_checking '
        'days_checking_below_buffer days_checking_below_zero '
        'ending_checking ending_savings total_income total_expenses'))):
    """ Summary statistics of a forecast.

    Attributes:
        min_checking (Decimal): The lowest end-of-day checking balance.
        min_checking_date (datetime.date | None): The first day on
            which `min_checking` occurred (None for an empty forecast).
        max_checking (Decimal): The highest end-of-day checking balance.
        days_checking_below_buffer (int): Days ending with checking
            strictly below the plan's safety buffer.
        days_checking_below_zero (int): Days ending with checking
            strictly below zero.
        ending_checking (Decimal): Checking at the end of the last day.
        ending_savings (Decimal): Savings at the end of the last day.
        total_income (Decimal): The sum of all positive transactions.
        total_expenses (Decimal): The sum of all negative transactions,
            as a positive number.
    """

    __slots__ = ()

    @classmethod
    def zero(cls):
        """ The metrics of a forecast that covers no days. """
        return cls(
            min_checking=ZERO, min_checking_date=None, max_checking=ZERO,
            days_checking_below_buffer=0, days_checking_below_zero=0,
            ending_checking=ZERO, ending_savings=ZERO,
            total_income=ZERO, total_expenses=ZERO)

    def to_dict(self):
        return {
            'minChecking': self.min_checking,
            'minCheckingDate': format_date(self.min_checking_date),
            'maxChecking': self.max_checking,
            'daysCheckingBelowBuffer': self.days_checking_below_buffer,
            'daysCheckingBelowZero': self.days_checking_below_zero,
            'endingChecking': self.ending_checking,
            'endingSavings': self.ending_savings,
            'totalIncome': self.total_income,
            'totalExpenses': self.total_expenses,
        }

class ForecastResult(namedtuple('ForecastResult', 'daily metrics')):
    """ The output of `simulate`.

    Attributes:
        daily (tuple[DailySnapshot]): One snapshot per day, in order.
        metrics (ForecastMetrics): Summary statistics of `daily`.
    """

    __slots__ = ()

    def to_dict(self):
        return {
            'daily': [snapshot.to_dict() for snapshot in self.daily],
            'metrics': self.metrics.to_dict(),
        }

def transactions_for_stream(stream):
    """ Returns the transactions a stream produces each time it fires.

    * Income: a positive amount to the stream's account.
    * Expense: a negative amount from the stream's account.
    * Transfer: a negative amount from the stream's account and a
      positive amount to its destination, which net to zero.
    """
    amount = round_cents(stream.amount)
    if stream.is_transfer:
        return [
            Transaction(stream.id, stream.name, -amount, stream.account),
            Transaction(
                stream.id, stream.name, amount, stream.destination_account),
        ]
    if stream.type != STREAM_TYPE_INCOME:
        amount = -amount
    return [Transaction(stream.id, stream.name, amount, stream.account)]

def transactions_on(streams, date, recurrence=RECURRENCE):
    """ Returns the transactions `streams` produce on `date`, in order. """
    transactions = []
    for stream in streams:
        if recurrence.fires(stream, date):
            transactions.extend(transactions_for_stream(stream))
    return transactions

def _balance_key(account):
    # Only checking and savings are tracked; anything that isn't
    # checking is booked against savings.
    if account == ACCOUNT_CHECKING:
        return ACCOUNT_CHECKING
    return ACCOUNT_SAVINGS

def simulate(plan, recurrence=RECURRENCE):
    """ Runs a daily cash flow forecast of `plan`.

    Arguments:
        plan (Plan): The plan to forecast. Not modified.
        recurrence (Recurrence): The recurrence rules. Optional.

    Returns:
        ForecastResult: One snapshot per day of
        `[plan.start_date, plan.end_date]`, and summary metrics. A plan
        whose end date precedes its start date yields no snapshots and
        zero-valued metrics.
    """
    total_days = inclusive_day_count(plan.start_date, plan.end_date)
    if total_days <= 0:
        logger.debug('Plan %s covers no days; nothing to simulate', plan.id)
        return ForecastResult((), ForecastMetrics.zero())

    streams = effective_streams(plan)
    balances = {
        ACCOUNT_CHECKING: round_cents(plan.checking_balance),
        ACCOUNT_SAVINGS: round_cents(plan.savings_balance),
    }
    daily = []
    for date in date_range(plan.start_date, plan.end_date):
        transactions = transactions_on(streams, date, recurrence)
        for transaction in transactions:
            key = _balance_key(transaction.account)
            balances[key] = round_cents(balances[key] + transaction.amount)
        daily.append(DailySnapshot(
            date, balances[ACCOUNT_CHECKING], balances[ACCOUNT_SAVINGS],
            tuple(transactions)))

    logger.debug(
        'Simulated plan %s: %d days, %d of %d streams active',
        plan.id, total_days, len(streams), len(plan.streams))
    return ForecastResult(
        tuple(daily), compute_metrics(daily, plan.safety_buffer))

def compute_metrics(daily, safety_buffer):
    """ Computes `ForecastMetrics` from daily snapshots in one pass.

    Ties for the lowest checking balance keep the earliest date.

    Arguments:
        daily (Sequence[DailySnapshot]): Snapshots in date order.
        safety_buffer (Decimal): The comfort floor for checking.
    """
    if not daily:
        return ForecastMetrics.zero()

    min_checking = daily[0].checking
    min_checking_date = daily[0].date
    max_checking = daily[0].checking
    days_below_buffer = 0
    days_below_zero = 0
    total_income = ZERO
    total_expenses = ZERO

    for snapshot in daily:
        if snapshot.checking < min_checking:
            min_checking = snapshot.checking
            min_checking_date = snapshot.date
        if snapshot.checking > max_checking:
            max_checking = snapshot.checking
        if snapshot.checking < safety_buffer:
            days_below_buffer += 1
        if snapshot.checking < 0:
            days_below_zero += 1
        for transaction in snapshot.transactions:
            if transaction.amount > 0:
                total_income += transaction.amount
            else:
                total_expenses += abs(transaction.amount)

    last = daily[-1]
    return ForecastMetrics(
        min_checking=round_cents(min_checking),
        min_checking_date=min_checking_date,
        max_checking=round_cents(max_checking),
        days_checking_below_buffer=days_below_buffer,
        days_checking_below_zero=days_below_zero,
        ending_checking=round_cents(last.checking),
        ending_savings=round_cents(last.savings),
        total_income=round_cents(total_income),
        total_expenses=round_cents(total_expenses))
