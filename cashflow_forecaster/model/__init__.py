""" A package for the documents exchanged with the forecasting engine.

These are the inputs the engine reads (streams, plans, decisions) in
typed form, with conversion from and to the JSON documents used by the
persistence layer.
"""

# See cashflow_forecaster.__init__.py for version, author, and licensing info.

__all__ = ['document', 'stream', 'account', 'plan', 'decision', 'loader']

from cashflow_forecaster.model.document import DocumentError
from cashflow_forecaster.model.stream import (
    CashFlowStream,
    STREAM_TYPE_INCOME, STREAM_TYPE_EXPENSE, STREAM_TYPE_TRANSFER,
    STREAM_TYPES,
    FREQUENCY_ONE_TIME, FREQUENCY_WEEKLY, FREQUENCY_BIWEEKLY,
    FREQUENCY_SEMIMONTHLY, FREQUENCY_MONTHLY, FREQUENCIES,
    ACCOUNT_CHECKING, ACCOUNT_SAVINGS, TRACKED_ACCOUNTS,
    DEFAULT_TARGET_ACCOUNT, CATEGORY_FIXED, CATEGORY_VARIABLE)
from cashflow_forecaster.model.account import Account, ACCOUNT_TYPES
from cashflow_forecaster.model.plan import Plan
from cashflow_forecaster.model.decision import (
    Decision, StreamModification, DecisionOperation, BalanceAdjustment,
    OPERATION_REMOVE, OPERATION_MODIFY, OPERATION_ADD,
    OPERATION_ADJUST_BALANCE)
from cashflow_forecaster.model.loader import load_plan, load_decisions
