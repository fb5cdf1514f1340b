""" Loan payment helpers for building decisions that take on debt. """

from decimal import Decimal
from cashflow_forecaster.money import ZERO, round_cents, to_decimal

MONTHS_PER_YEAR = 12

def monthly_payment(principal, annual_rate_percent, term_months):
    """ Returns the fixed monthly payment that amortizes a loan.

    Uses the standard annuity formula
    `P * r * (1 + r)**n / ((1 + r)**n - 1)` where `r` is the monthly
    rate and `n` the number of payments.

    Arguments:
        principal (Decimal | int | float | str): The amount borrowed.
        annual_rate_percent (Decimal | int | float | str): The nominal
            annual rate in percent (e.g. `6.5` for 6.5%).
        term_months (int): The number of monthly payments.

    Returns:
        Decimal: The payment, rounded to cents. Zero if there is
        nothing to repay or no term to repay it over.
    """
    principal = to_decimal(principal)
    annual_rate_percent = to_decimal(annual_rate_percent)
    term_months = int(term_months)
    if term_months <= 0 or principal <= 0:
        return ZERO
    if annual_rate_percent == 0:
        return round_cents(principal / term_months)

    monthly_rate = annual_rate_percent / Decimal(100) / MONTHS_PER_YEAR
    factor = (1 + monthly_rate) ** term_months
    return round_cents(principal * monthly_rate * factor / (factor - 1))

def loan_stream(
        stream_id, name, principal, annual_rate_percent, term_months,
        start_date, *, day_of_month=1, account='checking', category='fixed'):
    """ Builds a monthly expense stream paying off a loan.

    The stream ends once `term_months` payments have been made.

    Arguments:
        stream_id (str): The new stream's id.
        name (str): A display name, e.g. `'Home Equity Loan'`.
        principal, annual_rate_percent, term_months: As for
            `monthly_payment`.
        start_date (date | str): The first date on which a payment
            may fall.
        day_of_month (int): The day payments are made. Optional.
        account (str): The account payments come from. Optional.
        category (str): UI grouping for the stream. Optional.

    Returns:
        CashFlowStream: A monthly expense for the loan payment.

    Raises:
        ValueError: `term_months` is not positive, or `day_of_month`
            is not a day that every month has.
    """
    # Imported here to keep `utility` free of model imports at load time.
    # pylint: disable=import-outside-toplevel
    from cashflow_forecaster.model.stream import CashFlowStream
    from cashflow_forecaster.utility.dates import add_months, parse_date

    term_months = int(term_months)
    if term_months <= 0:
        raise ValueError('loan_stream: term_months must be positive.')
    if not 1 <= day_of_month <= 28:
        # Later days are skipped in short months, so payments would be lost.
        raise ValueError('loan_stream: day_of_month must be from 1 to 28.')
    start_date = parse_date(start_date)
    first_payment = start_date.replace(day=day_of_month)
    if first_payment < start_date:
        first_payment = add_months(first_payment, 1)
    # The last payment falls term_months - 1 months after the first:
    end_date = add_months(first_payment, term_months - 1)

    return CashFlowStream(
        id=stream_id, name=name,
        amount=monthly_payment(principal, annual_rate_percent, term_months),
        type='expense', frequency='monthly', account=account,
        start_date=start_date, end_date=end_date,
        day_of_month=day_of_month, category=category)
