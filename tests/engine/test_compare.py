""" Tests comparing forecasts in the engine.compare module. """

import unittest
import datetime
from decimal import Decimal
from cashflow_forecaster.engine.compare import compare
from cashflow_forecaster.engine.simulation import ForecastMetrics

def metrics(min_checking, buffer_days, ending_checking):
    return ForecastMetrics(
        min_checking=Decimal(min_checking),
        min_checking_date=datetime.date(2026, 1, 15),
        max_checking=Decimal('9000.00'),
        days_checking_below_buffer=buffer_days,
        days_checking_below_zero=0,
        ending_checking=Decimal(ending_checking),
        ending_savings=Decimal('10000.00'),
        total_income=Decimal('0.00'),
        total_expenses=Decimal('0.00'))

class TestCompare(unittest.TestCase):
    """ Tests `compare` and the sign of each delta. """

    def setUp(self):
        self.baseline = metrics('1200.00', 4, '5000.00')

    def test_deltas(self):
        """ Every delta is decision minus baseline. """
        decision = metrics('-300.50', 10, '4100.25')
        comparison = compare(self.baseline, decision)
        self.assertEqual(comparison.min_checking_delta, Decimal('-1500.50'))
        self.assertEqual(comparison.buffer_days_delta, 6)
        self.assertEqual(comparison.ending_balance_delta, Decimal('-899.75'))
        self.assertIs(comparison.baseline, self.baseline)
        self.assertIs(comparison.decision, decision)

    def test_worse_decision(self):
        """ Lower low point, more buffer days, less at the end. """
        comparison = compare(self.baseline, metrics('-300.50', 10, '4100.25'))
        self.assertFalse(comparison.min_checking_improved)
        self.assertFalse(comparison.buffer_days_improved)
        self.assertFalse(comparison.ending_balance_improved)

    def test_better_decision(self):
        """ A positive buffer-day delta is worse; the others are better. """
        comparison = compare(self.baseline, metrics('2000.00', 1, '7000.00'))
        self.assertGreater(comparison.min_checking_delta, 0)
        self.assertLess(comparison.buffer_days_delta, 0)
        self.assertGreater(comparison.ending_balance_delta, 0)
        self.assertTrue(comparison.min_checking_improved)
        self.assertTrue(comparison.buffer_days_improved)
        self.assertTrue(comparison.ending_balance_improved)

    def test_same(self):
        comparison = compare(self.baseline, self.baseline)
        self.assertEqual(comparison.min_checking_delta, Decimal('0.00'))
        self.assertEqual(comparison.buffer_days_delta, 0)
        self.assertFalse(comparison.min_checking_improved)
        self.assertFalse(comparison.buffer_days_improved)

    def test_rounded(self):
        comparison = compare(
            self.baseline, metrics('1200.005', 4, '5000.00'))
        self.assertEqual(comparison.min_checking_delta, Decimal('0.01'))

    def test_to_dict(self):
        document = compare(
            self.baseline, metrics('1000.00', 5, '5000.00')).to_dict()
        self.assertEqual(document['minCheckingDelta'], Decimal('-200.00'))
        self.assertEqual(document['bufferDaysDelta'], 1)
        self.assertEqual(document['endingBalanceDelta'], Decimal('0.00'))
        self.assertEqual(
            document['baseline']['minCheckingDate'], '2026-01-15')
        self.assertEqual(
            document['decision']['daysCheckingBelowBuffer'], 5)

if __name__ == '__main__':
    unittest.TextTestRunner().run(
        unittest.TestLoader().loadTestsFromName(__name__))
