""" The forecasting engine.

Four pure components, leaf-first:

* `schedule`: does a stream fire on a date?
* `simulation`: day-by-day balances and summary metrics for a plan.
* `overlay`: view overlays, and decisions applied to baselines.
* `compare`: signed deltas between two sets of metrics.

None of them keep state between calls or modify their inputs, so a
caller can re-run them on every edit.
"""

# See cashflow_forecaster.__init__.py for version, author, and licensing info.

__all__ = ['schedule', 'simulation', 'overlay', 'compare']

from cashflow_forecaster.engine.schedule import (
    Recurrence, RECURRENCE, fires, occurrences, recurrence_method)
from cashflow_forecaster.engine.overlay import (
    StreamOverlay, resolve_effective_stream, effective_streams,
    DecisionResolver, apply_decision, operation_method)
from cashflow_forecaster.engine.simulation import (
    Transaction, DailySnapshot, ForecastMetrics, ForecastResult,
    simulate, compute_metrics, transactions_on, transactions_for_stream)
from cashflow_forecaster.engine.compare import ComparisonMetrics, compare
