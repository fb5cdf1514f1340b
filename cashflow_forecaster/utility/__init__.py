""" A package with self-contained helpers used across the application.

These provide: calendar-date handling, reading JSON with
high-precision numbers, key-based method dispatch, loan amortization
and safe evaluation of typed-in arithmetic.
"""

# See cashflow_forecaster.__init__.py for version, author, and licensing info.

__all__ = ['dates', 'value_reader', 'register', 'loan', 'calc']

from cashflow_forecaster.utility.dates import (
    parse_date, format_date, days_between, inclusive_day_count,
    date_range, add_months)
from cashflow_forecaster.utility.value_reader import (
    ValueReader, ValueReaderAttribute, HighPrecisionJSONEncoder,
    load_json, resolve_data_path)
from cashflow_forecaster.utility.register import (
    MethodRegister, registered_method, registered_method_named)
from cashflow_forecaster.utility.loan import monthly_payment, loan_stream
from cashflow_forecaster.utility.calc import (
    ExpressionError, evaluate_expression, parse_expression)
