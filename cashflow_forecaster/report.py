""" Renders forecasts as plain-text reports for the command line.

Money is displayed with `Money.format`, in the currency and locale
given by `Settings`. Comparisons are labelled "better" or "worse"
according to each delta's sign convention (see `engine.compare`).
"""

from cashflow_forecaster.money import (
    Money, DEFAULT_CURRENCY, DEFAULT_LOCALE)
from cashflow_forecaster.utility.dates import format_date

INDENT = '  '
LABEL_WIDTH = 20

class MoneyFormatter(object):
    """ Formats `Decimal` amounts for display.

    Arguments:
        currency (str): Three-letter currency code. Optional.
        locale (str): A locale identifier, like 'en_US'. Optional.
    """

    def __init__(self, currency=DEFAULT_CURRENCY, locale=DEFAULT_LOCALE):
        self.currency = currency
        self.locale = locale

    @classmethod
    def from_settings(cls, settings):
        """ Builds a formatter from a `Settings` object. """
        return cls(settings.currency, settings.locale)

    def __call__(self, amount):
        return Money(amount, self.currency).format(self.locale)

    def signed(self, amount):
        """ Like calling the formatter, but with a '+' for gains. """
        text = self(amount)
        if amount > 0:
            return '+' + text
        return text

def _line(label, value):
    return INDENT + (label + ':').ljust(LABEL_WIDTH) + value

def _verdict(delta, improved):
    if not delta:
        return 'no change'
    return 'better' if improved else 'worse'

def render_metrics(metrics, money=None):
    """ Returns the lines describing a set of `ForecastMetrics`. """
    if money is None:
        money = MoneyFormatter()
    low = money(metrics.min_checking)
    if metrics.min_checking_date is not None:
        low += ' on ' + format_date(metrics.min_checking_date)
    return [
        _line('Lowest checking', low),
        _line('Highest checking', money(metrics.max_checking)),
        _line(
            'Days below buffer', str(metrics.days_checking_below_buffer)),
        _line('Days below zero', str(metrics.days_checking_below_zero)),
        _line('Ending checking', money(metrics.ending_checking)),
        _line('Ending savings', money(metrics.ending_savings)),
        _line('Total income', money(metrics.total_income)),
        _line('Total expenses', money(metrics.total_expenses)),
    ]

def render_comparison(comparison, money=None):
    """ Returns the lines describing a `ComparisonMetrics`.

    Each line shows the decision's value, then the change from the
    baseline and whether that change is an improvement.
    """
    if money is None:
        money = MoneyFormatter()
    decision = comparison.decision
    return [
        _line('Lowest checking', '{} ({}, {})'.format(
            money(decision.min_checking),
            money.signed(comparison.min_checking_delta),
            _verdict(
                comparison.min_checking_delta,
                comparison.min_checking_improved))),
        _line('Days below buffer', '{} ({:+d}, {})'.format(
            decision.days_checking_below_buffer,
            comparison.buffer_days_delta,
            _verdict(
                comparison.buffer_days_delta,
                comparison.buffer_days_improved))),
        _line('Ending checking', '{} ({}, {})'.format(
            money(decision.ending_checking),
            money.signed(comparison.ending_balance_delta),
            _verdict(
                comparison.ending_balance_delta,
                comparison.ending_balance_improved))),
    ]

def render_daily(daily, money=None):
    """ Returns one line per day, plus one per transaction on that day. """
    if money is None:
        money = MoneyFormatter()
    lines = []
    for snapshot in daily:
        lines.append(
            INDENT + format_date(snapshot.date) +
            '  checking ' + money(snapshot.checking) +
            '  savings ' + money(snapshot.savings))
        for transaction in snapshot.transactions:
            lines.append(
                INDENT * 3 + money.signed(transaction.amount) + ' ' +
                transaction.account + ': ' + transaction.name)
    return lines

def render_run(run, settings=None, daily=False):
    """ Renders a `ForecastRun` as a text report.

    Arguments:
        run (ForecastRun): The output of `Forecaster.run`.
        settings (Settings): Provides the currency and locale.
            Optional.
        daily (bool): If True, each forecast is followed by its daily
            balances and transactions. Optional.

    Returns:
        str: The report, ending in a newline.
    """
    if settings is None:
        money = MoneyFormatter()
    else:
        money = MoneyFormatter.from_settings(settings)
    plan = run.plan
    lines = [
        'Plan: {} ({}), {} to {}'.format(
            plan.name, plan.id,
            format_date(plan.start_date), format_date(plan.end_date)),
        _line('Safety buffer', money(plan.safety_buffer)),
    ]
    lines.extend(render_metrics(run.baseline.metrics, money))
    if daily:
        lines.extend(render_daily(run.baseline.daily, money))
    for outcome in run.outcomes:
        lines.append('')
        lines.append('Decision: {} ({})'.format(
            outcome.decision.name, outcome.decision.id))
        lines.extend(render_comparison(outcome.comparison, money))
        if daily:
            lines.extend(render_daily(outcome.result.daily, money))
    return '\n'.join(lines) + '\n'
