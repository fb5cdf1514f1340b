""" Compares a decision's forecast against its baseline's.

The deltas are always `decision - baseline`, which makes their sign
conventions differ:

* `min_checking_delta`: positive means the decision has a higher low
  point (better).
* `buffer_days_delta`: positive means the decision spends more days
  under the safety buffer (worse).
* `ending_balance_delta`: positive means the decision ends with more
  money in checking (better).
"""

from collections import namedtuple
from cashflow_forecaster.money import round_cents

class ComparisonMetrics(namedtuple('ComparisonMetrics', (
        'baseline decision min_checking_delta buffer_days_delta '
        'ending_balance_delta'))):
    """ The metrics of two forecasts and the signed differences.

    Attributes:
        baseline (ForecastMetrics): The baseline's metrics.
        decision (ForecastMetrics): The decision's metrics.
        min_checking_delta (Decimal): See module docs.
        buffer_days_delta (int): See module docs.
        ending_balance_delta (Decimal): See module docs.
    """

    __slots__ = ()

    @property
    def min_checking_improved(self):
        return self.min_checking_delta > 0

    @property
    def buffer_days_improved(self):
        # Fewer days under the buffer is the improvement here.
        return self.buffer_days_delta < 0

    @property
    def ending_balance_improved(self):
        return self.ending_balance_delta > 0

    def to_dict(self):
        return {
            'baseline': self.baseline.to_dict(),
            'decision': self.decision.to_dict(),
            'minCheckingDelta': self.min_checking_delta,
            'bufferDaysDelta': self.buffer_days_delta,
            'endingBalanceDelta': self.ending_balance_delta,
        }

def compare(baseline, decision):
    """ Computes the deltas between two sets of `ForecastMetrics`.

    Arguments:
        baseline (ForecastMetrics): Metrics of the baseline forecast.
        decision (ForecastMetrics): Metrics of the decision forecast.

    Returns:
        ComparisonMetrics: Both metric sets and their deltas.
    """
    return ComparisonMetrics(
        baseline=baseline,
        decision=decision,
        min_checking_delta=round_cents(
            decision.min_checking - baseline.min_checking),
        buffer_days_delta=(
            decision.days_checking_below_buffer -
            baseline.days_checking_below_buffer),
        ending_balance_delta=round_cents(
            decision.ending_checking - baseline.ending_checking))
