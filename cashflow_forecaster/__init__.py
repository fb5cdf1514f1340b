""" A package for forecasting daily cash flow and comparing decisions. """

__all__ = [
    'engine', 'model', 'utility', 'forecaster', 'money', 'report',
    'settings'
]

__version__ = '0.1.0'
__author__ = 'Christopher Scott'
__copyright__ = 'Copyright (C) 2019 Christopher Scott'
__license__ = 'All rights reserved'

from cashflow_forecaster.money import Money, round_cents, to_decimal
from cashflow_forecaster.model import (
    CashFlowStream, Account, Plan, Decision, StreamModification,
    DocumentError, load_plan, load_decisions)
from cashflow_forecaster.engine import (
    StreamOverlay, ForecastResult, ForecastMetrics, DailySnapshot,
    Transaction, ComparisonMetrics, simulate, apply_decision, compare,
    fires, resolve_effective_stream)
from cashflow_forecaster.settings import Settings
from cashflow_forecaster.forecaster import (
    Forecaster, ForecastRun, DecisionOutcome)
