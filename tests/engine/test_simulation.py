""" Tests the day-by-day simulator in the engine.simulation module. """

import unittest
import datetime
from decimal import Decimal
from cashflow_forecaster.engine.simulation import (
    ForecastMetrics, Transaction, compute_metrics, simulate,
    transactions_for_stream)
from cashflow_forecaster.model import CashFlowStream, Plan

def make_plan(streams=(), start='2026-01-01', end='2026-01-28', **kwargs):
    kwargs.setdefault('checking_balance', 0)
    kwargs.setdefault('savings_balance', 0)
    return Plan('plan', 'Plan', start, end, streams=streams, **kwargs)

def paycheck(amount=1000, anchor='2026-01-01', **kwargs):
    return CashFlowStream(
        'pay', 'Paycheck', amount, 'income', 'biweekly', '2026-01-01',
        anchor_date=anchor, **kwargs)

def one_time(stream_id, amount, type_, date, **kwargs):
    return CashFlowStream(
        stream_id, stream_id.title(), amount, type_, 'one-time', date,
        **kwargs)

class TestScenarios(unittest.TestCase):
    """ Worked examples of whole forecasts. """

    def test_biweekly_income(self):
        """ $1000 biweekly anchored on the start date, from $0.

        The anchor is an occurrence, so the first paycheck lands on the
        first day and the second fourteen days later.
        """
        result = simulate(make_plan([paycheck()]))
        self.assertEqual(len(result.daily), 28)
        for index, snapshot in enumerate(result.daily):
            expected = Decimal(1000) if index < 14 else Decimal(2000)
            with self.subTest(day=index):
                self.assertEqual(snapshot.checking, expected)

    def test_biweekly_income_first_pay_later(self):
        """ Anchored on day 14: $0 through day 13, then $1000. """
        result = simulate(make_plan([paycheck(anchor='2026-01-15')]))
        balances = [snapshot.checking for snapshot in result.daily]
        self.assertEqual(balances[:14], [Decimal(0)] * 14)
        self.assertEqual(balances[14:], [Decimal(1000)] * 14)

    def test_single_day(self):
        """ A plan that starts and ends on the same day. """
        plan = make_plan(
            [one_time('bonus', 250, 'income', '2026-01-01')],
            end='2026-01-01', checking_balance=100)
        result = simulate(plan)
        self.assertEqual(len(result.daily), 1)
        metrics = result.metrics
        self.assertEqual(metrics.min_checking, Decimal('350.00'))
        self.assertEqual(metrics.max_checking, Decimal('350.00'))
        self.assertEqual(metrics.ending_checking, Decimal('350.00'))
        self.assertEqual(metrics.min_checking_date, datetime.date(2026, 1, 1))

    def test_days_below_buffer(self):
        """ Checking dips under a $3000 buffer for exactly 12 days. """
        plan = make_plan(
            [one_time('repair', 1000, 'expense', '2026-01-11'),
             one_time('refund', 1000, 'income', '2026-01-23')],
            end='2026-03-31', checking_balance=3500, safety_buffer=3000)
        result = simulate(plan)
        self.assertEqual(len(result.daily), 90)
        self.assertEqual(result.metrics.days_checking_below_buffer, 12)
        self.assertEqual(result.metrics.days_checking_below_zero, 0)
        self.assertEqual(result.metrics.min_checking, Decimal('2500.00'))
        self.assertEqual(
            result.metrics.min_checking_date, datetime.date(2026, 1, 11))

    def test_large_amount(self):
        """ Amounts beyond 28 significant digits still simulate. """
        plan = make_plan(
            [one_time('windfall', '1e27', 'income', '2026-01-02')],
            end='2026-01-03')
        result = simulate(plan)
        self.assertEqual(result.metrics.ending_checking, Decimal('1e27'))
        self.assertEqual(result.metrics.total_income, Decimal('1e27'))

    def test_empty_range(self):
        """ An end date before the start date simulates nothing. """
        plan = make_plan([paycheck()], start='2026-02-01', end='2026-01-31')
        result = simulate(plan)
        self.assertEqual(result.daily, ())
        self.assertEqual(result.metrics, ForecastMetrics.zero())
        self.assertIsNone(result.metrics.min_checking_date)

class TestTransactions(unittest.TestCase):
    """ Tests the transactions streams produce. """

    def test_income(self):
        self.assertEqual(
            transactions_for_stream(paycheck()),
            [Transaction('pay', 'Paycheck', Decimal('1000.00'), 'checking')])

    def test_expense(self):
        stream = one_time('rent', 1500, 'expense', '2026-01-01')
        self.assertEqual(
            transactions_for_stream(stream)[0].amount, Decimal('-1500.00'))

    def test_amount_rounded(self):
        stream = one_time('coffee', '33.335', 'expense', '2026-01-01')
        self.assertEqual(
            transactions_for_stream(stream)[0].amount, Decimal('-33.34'))

    def test_transfer(self):
        """ Transfers move money between accounts and net to zero. """
        stream = CashFlowStream(
            'save', 'Savings', 400, 'transfer', 'one-time', '2026-01-01',
            target_account='savings')
        transactions = transactions_for_stream(stream)
        self.assertEqual(
            [(t.account, t.amount) for t in transactions],
            [('checking', Decimal('-400.00')), ('savings', Decimal('400.00'))])
        self.assertEqual(sum(t.amount for t in transactions), 0)

    def test_transfer_default_target(self):
        stream = one_time('save', 400, 'transfer', '2026-01-01')
        result = simulate(make_plan([stream], checking_balance=1000))
        self.assertEqual(result.daily[0].checking, Decimal('600.00'))
        self.assertEqual(result.daily[0].savings, Decimal('400.00'))

    def test_transfer_from_savings(self):
        stream = one_time(
            'topup', 250, 'transfer', '2026-01-01', account='savings',
            target_account='checking')
        result = simulate(make_plan([stream], savings_balance=1000))
        self.assertEqual(result.daily[0].checking, Decimal('250.00'))
        self.assertEqual(result.daily[0].savings, Decimal('750.00'))

    def test_other_account_booked_to_savings(self):
        """ Only checking is tracked separately from savings. """
        stream = one_time(
            'dividend', 80, 'income', '2026-01-01', account='brokerage')
        result = simulate(make_plan([stream]))
        self.assertEqual(result.daily[0].checking, Decimal('0.00'))
        self.assertEqual(result.daily[0].savings, Decimal('80.00'))
        self.assertEqual(
            result.daily[0].transactions[0].account, 'brokerage')

    def test_stream_order(self):
        """ Transactions on a day follow the plan's stream order. """
        streams = [
            one_time('b', 1, 'expense', '2026-01-01'),
            one_time('a', 2, 'income', '2026-01-01')]
        result = simulate(make_plan(streams))
        self.assertEqual(
            [t.stream_id for t in result.daily[0].transactions], ['b', 'a'])

class TestOverlays(unittest.TestCase):
    """ Tests disabled streams and amount overrides. """

    def setUp(self):
        self.rent = CashFlowStream(
            'rent', 'Rent', 1500, 'expense', 'monthly', '2026-01-01',
            day_of_month=1)
        self.streams = [paycheck(), self.rent]

    def test_disabled(self):
        plan = make_plan(self.streams, disabled_stream_ids=['rent'])
        result = simulate(plan)
        self.assertEqual(result.metrics.total_expenses, Decimal('0.00'))
        self.assertEqual(result.metrics.ending_checking, Decimal('2000.00'))

    def test_override(self):
        plan = make_plan(
            self.streams, stream_overrides={'rent': {'amount': 1200}})
        result = simulate(plan)
        self.assertEqual(result.daily[0].checking, Decimal('-200.00'))
        # The stored stream is untouched:
        self.assertEqual(self.rent.amount, Decimal(1500))
        self.assertEqual(plan.streams[1].amount, Decimal(1500))

    def test_unusable_overrides(self):
        """ Overrides without a positive amount are ignored. """
        for override in (
                {}, {'amount': None}, {'amount': 0}, {'amount': -5},
                {'amount': 'lots'}, {'amount': True}, {'amount': [5]},
                {'amount': float('nan')}, 'cheap'):
            plan = make_plan(
                self.streams, stream_overrides={'rent': override})
            with self.subTest(override=override):
                result = simulate(plan)
                self.assertEqual(
                    result.daily[0].checking, Decimal('-500.00'))

    def test_override_unknown_stream(self):
        plan = make_plan(
            self.streams, stream_overrides={'daycare': {'amount': 900}})
        self.assertEqual(
            simulate(plan).daily[0].checking, Decimal('-500.00'))

class TestProperties(unittest.TestCase):
    """ Tests properties that hold for every forecast. """

    def setUp(self):
        self.plan = make_plan(
            [paycheck(Decimal('2317.15')),
             CashFlowStream(
                 'rent', 'Rent', Decimal('1499.99'), 'expense', 'monthly',
                 '2026-01-01', day_of_month=3),
             CashFlowStream(
                 'groceries', 'Groceries', Decimal('123.456'), 'expense',
                 'weekly', '2026-01-02'),
             CashFlowStream(
                 'save', 'Save', Decimal('400.10'), 'transfer', 'semimonthly',
                 '2026-01-01')],
            end='2026-12-31', checking_balance=Decimal('1000.005'),
            savings_balance=Decimal('10006.3'), safety_buffer=3000)

    def test_idempotent(self):
        self.assertEqual(simulate(self.plan), simulate(self.plan))

    def test_conservation(self):
        """ Starting balances plus every transaction give the ending ones. """
        result = simulate(self.plan)
        checking = Decimal('1000.01')
        savings = Decimal('10006.30')
        for snapshot in result.daily:
            for transaction in snapshot.transactions:
                if transaction.account == 'checking':
                    checking += transaction.amount
                else:
                    savings += transaction.amount
            self.assertEqual(snapshot.checking, checking)
            self.assertEqual(snapshot.savings, savings)
        self.assertEqual(result.metrics.ending_checking, checking)
        self.assertEqual(result.metrics.ending_savings, savings)

    def test_totals(self):
        result = simulate(self.plan)
        amounts = [
            transaction.amount
            for snapshot in result.daily
            for transaction in snapshot.transactions]
        self.assertEqual(
            result.metrics.total_income,
            sum(amount for amount in amounts if amount > 0))
        self.assertEqual(
            result.metrics.total_expenses,
            -sum(amount for amount in amounts if amount < 0))

    def test_cents(self):
        """ Every balance is a whole number of cents. """
        for snapshot in simulate(self.plan).daily:
            self.assertEqual(snapshot.checking, snapshot.checking.quantize(
                Decimal('0.01')))

    def test_plan_not_modified(self):
        before = self.plan.to_dict()
        simulate(self.plan)
        self.assertEqual(self.plan.to_dict(), before)

class TestComputeMetrics(unittest.TestCase):
    """ Tests `compute_metrics` directly. """

    def test_ties_keep_first(self):
        plan = make_plan(
            [one_time('a', 100, 'expense', '2026-01-02'),
             one_time('b', 100, 'income', '2026-01-03'),
             one_time('c', 100, 'expense', '2026-01-04')],
            end='2026-01-05')
        result = simulate(plan)
        self.assertEqual(result.metrics.min_checking, Decimal('-100.00'))
        self.assertEqual(
            result.metrics.min_checking_date, datetime.date(2026, 1, 2))
        self.assertEqual(result.metrics.days_checking_below_zero, 3)
        self.assertEqual(result.metrics.max_checking, Decimal('0.00'))

    def test_no_days(self):
        self.assertEqual(compute_metrics([], Decimal(0)), ForecastMetrics.zero())

if __name__ == '__main__':
    unittest.TextTestRunner().run(
        unittest.TestLoader().loadTestsFromName(__name__))
