''' This module provides a class for running a baseline and its decisions. '''

import logging
from collections import namedtuple
from cashflow_forecaster.engine.compare import compare
from cashflow_forecaster.engine.overlay import apply_decision
from cashflow_forecaster.engine.simulation import simulate

logger = logging.getLogger(__name__)

class DecisionOutcome(namedtuple(
        'DecisionOutcome', 'decision plan result comparison')):
    """ The forecast of one decision, compared against its baseline.

    Attributes:
        decision (Decision): The decision that was applied.
        plan (Plan): The plan produced by applying `decision`.
        result (ForecastResult): The forecast of `plan`.
        comparison (ComparisonMetrics): `result` against the baseline.
    """

    __slots__ = ()

    def to_dict(self):
        return {
            'decisionId': self.decision.id,
            'name': self.decision.name,
            'result': self.result.to_dict(),
            'comparison': self.comparison.to_dict(),
        }

class ForecastRun(namedtuple('ForecastRun', 'plan baseline outcomes')):
    """ Everything produced by `Forecaster.run`.

    Attributes:
        plan (Plan): The baseline plan.
        baseline (ForecastResult): The forecast of `plan`.
        outcomes (tuple[DecisionOutcome]): One per decision that was
            run, in the order the decisions were given.
    """

    __slots__ = ()

    def to_dict(self, daily=True):
        """ Converts to a JSON-ready dict.

        Arguments:
            daily (bool): If False, daily snapshots are left out and
                only metrics are included. Optional.
        """
        baseline = self.baseline.to_dict()
        outcomes = [outcome.to_dict() for outcome in self.outcomes]
        if not daily:
            del baseline['daily']
            for outcome in outcomes:
                del outcome['result']['daily']
        return {
            'planId': self.plan.id,
            'baseline': baseline,
            'decisions': outcomes,
        }

class Forecaster(object):
    """ Forecasts a baseline plan and compares decisions against it.

    This runs the whole engine: the baseline is simulated once, then
    each enabled decision is applied to the baseline, simulated, and
    compared. Neither the baseline nor the decisions are modified, so
    `run` can be called again after either is edited.

    Decisions are skipped if they are disabled or if they were made
    against a different baseline (i.e. their `baseline_id` doesn't
    match the baseline's `id`).

    Arguments:
        baseline (Plan): The plan to compare against.
        decisions (Iterable[Decision]): Decisions to evaluate.
            Optional.

    Attributes:
        baseline (Plan): The plan to compare against.
        decisions (list[Decision]): Decisions to evaluate.
    """

    def __init__(self, baseline, decisions=()):
        self.baseline = baseline
        self.decisions = list(decisions)

    def run(self):
        """ Forecasts the baseline and every applicable decision.

        Returns:
            ForecastRun: The baseline forecast and one `DecisionOutcome`
            per decision that wasn't skipped.
        """
        baseline_result = simulate(self.baseline)
        outcomes = []
        for decision in self.decisions:
            if not self._applies(decision):
                continue
            outcomes.append(self.evaluate(decision, baseline_result))
        return ForecastRun(self.baseline, baseline_result, tuple(outcomes))

    def evaluate(self, decision, baseline_result=None):
        """ Applies and forecasts a single decision.

        This doesn't check whether `decision` is enabled or belongs to
        this baseline; `run` does that.

        Arguments:
            decision (Decision): The decision to evaluate.
            baseline_result (ForecastResult): The baseline's forecast,
                if already known. Optional.

        Returns:
            DecisionOutcome: The decision's forecast and comparison.
        """
        if baseline_result is None:
            baseline_result = simulate(self.baseline)
        plan = apply_decision(self.baseline, decision)
        result = simulate(plan)
        comparison = compare(baseline_result.metrics, result.metrics)
        logger.debug(
            'Decision %s: min checking %s, buffer days %d, ending %s',
            decision.id, comparison.min_checking_delta,
            comparison.buffer_days_delta, comparison.ending_balance_delta)
        return DecisionOutcome(decision, plan, result, comparison)

    def _applies(self, decision):
        if not decision.enabled:
            logger.debug('Skipping disabled decision %s', decision.id)
            return False
        if decision.baseline_id != self.baseline.id:
            logger.warning(
                'Skipping decision %s: made against baseline %s, not %s',
                decision.id, decision.baseline_id, self.baseline.id)
            return False
        return True
