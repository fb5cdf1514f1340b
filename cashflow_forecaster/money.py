""" Cent-precision money arithmetic and display.

The engine works in plain `Decimal` amounts (major units, e.g.
`Decimal('1234.50')`) and rounds to cents after every mutation, so that
thousands of daily additions never drift. Display goes through a
`Money` class extending the `py-moneyed` `Money` class.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from moneyed import Money as PyMoney
from moneyed.l10n import format_money

CENT = Decimal('0.01')
ZERO = Decimal('0.00')

DEFAULT_CURRENCY = 'USD'
DEFAULT_LOCALE = 'en_US'

def to_decimal(value):
    """ Converts a document-supplied number to `Decimal`.

    Floats are converted via their shortest `repr`, so `0.1` becomes
    `Decimal('0.1')` rather than its exact binary expansion.

    Raises:
        TypeError: `value` is a bool or not a number/numeric str.
        ValueError: `value` is a str that isn't a finite number, or a
            non-finite float.
    """
    # bool is an int subclass, but `True` is never a sensible amount:
    if isinstance(value, bool):
        raise TypeError('expected a number, got bool')
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as error:
            raise ValueError('not a number: ' + repr(value)) from error
    else:
        raise TypeError('expected a number, got ' + type(value).__name__)
    if not result.is_finite():
        raise ValueError('not a finite number: ' + repr(value))
    return result

def round_cents(value):
    """ Rounds `value` to cents, with ties rounded away from zero.

    `ROUND_HALF_UP` in the `decimal` module rounds ties away from zero
    for both signs, so `-0.005` becomes `-0.01`.

    Amounts of any magnitude can be rounded; the working precision is
    raised as needed to keep every digit up to cents.
    """
    value = to_decimal(value)
    with localcontext() as context:
        # Integer digits plus two for cents:
        context.prec = max(context.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)

class Money(PyMoney):
    """ Extends py-moneyed with cent rounding and comparison with 0. """

    # pylint: disable=too-few-public-methods

    default_currency = DEFAULT_CURRENCY

    def __init__(self, amount=ZERO, currency=None):
        """ Initializes with the application-level default currency.

        Also allows for initializing from another Money object.
        """
        if isinstance(amount, Money):
            super().__init__(amount.amount, amount.currency)
        else:
            if currency is None:
                currency = self.default_currency
            super().__init__(to_decimal(amount), currency)

    def __round__(self, ndigits=2):
        """ Rounds to `ndigits` (cents by default), ties away from zero. """
        exponent = Decimal(1).scaleb(-ndigits)
        return Money(
            self.amount.quantize(exponent, rounding=ROUND_HALF_UP),
            self.currency)

    def __hash__(self):
        return hash((self.amount, self.currency))

    def __eq__(self, other):
        """ Extends == to allow comparison with plain numbers like 0.

        Comparing with a Money value in another currency is still
        False rather than a comparison of face values.
        """
        if isinstance(other, PyMoney):
            return super().__eq__(other)
        return self.amount == other

    def __lt__(self, other):
        if not isinstance(other, PyMoney) and other == 0:
            return self.amount < 0
        return super().__lt__(other)

    def __gt__(self, other):
        if not isinstance(other, PyMoney) and other == 0:
            return self.amount > 0
        return super().__gt__(other)

    def format(self, locale=DEFAULT_LOCALE):
        """ Formats as a localized currency string, e.g. `'$1,234.50'`. """
        return format_money(round(self), locale=locale)
