""" Provides the `Account` class for accounts a user tracks. """

from cashflow_forecaster.money import to_decimal
from cashflow_forecaster.model.document import (
    DocumentError, as_decimal, as_str, drop_none,
    optional_field, required_field)

ACCOUNT_TYPES = ('checking', 'savings', 'credit-card', 'loan', 'investment')

class Account(object):
    """ A financial account listed alongside a plan.

    Examples:
        * Checking: "Chase Checking", $5,000 balance
        * Credit card: "Visa", $3,200 balance, 22.9% APR, $85 minimum
        * Loan: "Car Loan", $18,000 balance, 4.5% APR, $650 payment

    The simulator only tracks the plan's checking and savings balances;
    accounts are carried through plans and decisions untouched.

    Arguments:
        id (str): An opaque identifier.
        name (str): A display name.
        account_type (str): One of `ACCOUNT_TYPES`.
        balance (Decimal | int | float | str): The current balance.
        interest_rate (Decimal | int | float | str): Annual rate, in
            percent. Optional.
        minimum_payment (Decimal | int | float | str): Optional.
        credit_limit (Decimal | int | float | str): Optional.
    """

    # pylint: disable=redefined-builtin,too-many-arguments
    def __init__(
            self, id, name, account_type, balance, *,
            interest_rate=None, minimum_payment=None, credit_limit=None):
        self.id = id
        self.name = name
        self.account_type = account_type
        self.balance = to_decimal(balance)
        self.interest_rate = _optional_decimal(interest_rate)
        self.minimum_payment = _optional_decimal(minimum_payment)
        self.credit_limit = _optional_decimal(credit_limit)

    @classmethod
    def from_dict(cls, data, path='account'):
        """ Builds an account from an `Account` document.

        Raises:
            DocumentError: A field is missing or malformed.
        """
        account_type = required_field(data, 'accountType', path, as_str)
        if account_type not in ACCOUNT_TYPES:
            raise DocumentError(
                path + '.accountType: expected one of ' +
                ', '.join(ACCOUNT_TYPES))
        return cls(
            id=required_field(data, 'id', path, as_str),
            name=required_field(data, 'name', path, as_str),
            account_type=account_type,
            balance=required_field(data, 'balance', path, as_decimal),
            interest_rate=optional_field(
                data, 'interestRate', path, as_decimal),
            minimum_payment=optional_field(
                data, 'minimumPayment', path, as_decimal),
            credit_limit=optional_field(data, 'creditLimit', path, as_decimal))

    def to_dict(self):
        return drop_none({
            'id': self.id,
            'name': self.name,
            'accountType': self.account_type,
            'balance': self.balance,
            'interestRate': self.interest_rate,
            'minimumPayment': self.minimum_payment,
            'creditLimit': self.credit_limit,
        })

    def __eq__(self, other):
        if not isinstance(other, Account):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (
            'Account(' + repr(self.id) + ', ' + repr(self.name) + ', ' +
            self.account_type + ', ' + str(self.balance) + ')')

def _optional_decimal(value):
    return to_decimal(value) if value is not None else None
