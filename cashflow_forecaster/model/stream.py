""" Provides the `CashFlowStream` class and its vocabulary. """

import logging
from cashflow_forecaster.money import to_decimal
from cashflow_forecaster.utility.dates import format_date, parse_date
from cashflow_forecaster.model.document import (
    DocumentError, as_date, as_decimal, as_int, as_str,
    drop_none, optional_field, required_field)

logger = logging.getLogger(__name__)

STREAM_TYPE_INCOME = 'income'
STREAM_TYPE_EXPENSE = 'expense'
STREAM_TYPE_TRANSFER = 'transfer'
STREAM_TYPES = (STREAM_TYPE_INCOME, STREAM_TYPE_EXPENSE, STREAM_TYPE_TRANSFER)

FREQUENCY_ONE_TIME = 'one-time'
FREQUENCY_WEEKLY = 'weekly'
FREQUENCY_BIWEEKLY = 'biweekly'
FREQUENCY_SEMIMONTHLY = 'semimonthly'
FREQUENCY_MONTHLY = 'monthly'
FREQUENCIES = (
    FREQUENCY_ONE_TIME, FREQUENCY_WEEKLY, FREQUENCY_BIWEEKLY,
    FREQUENCY_SEMIMONTHLY, FREQUENCY_MONTHLY)

ACCOUNT_CHECKING = 'checking'
ACCOUNT_SAVINGS = 'savings'
TRACKED_ACCOUNTS = (ACCOUNT_CHECKING, ACCOUNT_SAVINGS)
DEFAULT_TARGET_ACCOUNT = ACCOUNT_SAVINGS

CATEGORY_FIXED = 'fixed'
CATEGORY_VARIABLE = 'variable'

# Maps document field names to attribute names, in document order.
FIELDS = {
    'id': 'id',
    'name': 'name',
    'amount': 'amount',
    'type': 'type',
    'frequency': 'frequency',
    'account': 'account',
    'targetAccount': 'target_account',
    'startDate': 'start_date',
    'endDate': 'end_date',
    'dayOfMonth': 'day_of_month',
    'anchorDate': 'anchor_date',
    'category': 'category',
}
_OPTIONAL_FIELDS = frozenset((
    'targetAccount', 'endDate', 'dayOfMonth', 'anchorDate', 'category'))
_CONVERTERS = {
    'id': as_str,
    'name': as_str,
    'amount': as_decimal,
    'type': as_str,
    'frequency': as_str,
    'account': as_str,
    'targetAccount': as_str,
    'startDate': as_date,
    'endDate': as_date,
    'dayOfMonth': as_int,
    'anchorDate': as_date,
    'category': as_str,
}

class CashFlowStream(object):
    """ A recurring or one-time movement of money.

    Examples:
        * Income: "Paycheck", $4,350 biweekly into checking
        * Expense: "Mortgage", $2,700 monthly from checking on the 16th
        * Transfer: "Savings contribution", $400 biweekly from checking
          to savings
        * One-time expense: "Car repair", $2,000 on a specific date

    `amount` is always a non-negative magnitude; whether money comes in
    or goes out is determined by `type`. Streams are never mutated by
    the engine; use `replace` to derive a modified copy.

    Arguments:
        id (str): An opaque identifier.
        name (str): A display name.
        amount (Decimal | int | float | str): The magnitude of each
            occurrence, in major currency units.
        type (str): One of `STREAM_TYPES`.
        frequency (str): One of `FREQUENCIES`. Other values are
            accepted, but such a stream never fires.
        start_date (date | str): The first date the stream may fire.
        account (str): The account the stream hits (the source account
            for transfers). Optional; defaults to checking.
        target_account (str): For transfers, the account money moves
            to. Optional; transfers default to savings.
        end_date (date | str): The last date the stream may fire.
            Optional.
        day_of_month (int): For monthly streams, the day they fire on.
            Optional; monthly streams default to the 1st.
        anchor_date (date | str): For weekly and biweekly streams, a
            known occurrence to count from. Optional; defaults to
            `start_date`.
        category (str): `'fixed'` or `'variable'`, for display only.
            Optional.

    Raises:
        ValueError: `amount` is negative.
    """

    # pylint: disable=redefined-builtin,too-many-arguments
    # `id` and `type` are the document's names for these fields.
    def __init__(
            self, id, name, amount, type, frequency, start_date, *,
            account=ACCOUNT_CHECKING, target_account=None, end_date=None,
            day_of_month=None, anchor_date=None, category=None):
        self.id = id
        self.name = name
        self.amount = to_decimal(amount)
        if self.amount < 0:
            raise ValueError(
                'CashFlowStream: amount must be non-negative; '
                'direction is given by type.')
        self.type = type
        self.frequency = frequency
        self.account = account
        self.target_account = target_account
        self.start_date = parse_date(start_date)
        self.end_date = parse_date(end_date) if end_date is not None else None
        self.day_of_month = day_of_month
        self.anchor_date = (
            parse_date(anchor_date) if anchor_date is not None else None)
        self.category = category

    @property
    def is_transfer(self):
        return self.type == STREAM_TYPE_TRANSFER

    @property
    def destination_account(self):
        """ Where a transfer's money goes (savings if unspecified). """
        if self.target_account is None:
            return DEFAULT_TARGET_ACCOUNT
        return self.target_account

    def attributes(self):
        """ Returns `{attribute: value}` pairs for every field. """
        return {attr: getattr(self, attr) for attr in FIELDS.values()}

    def replace(self, **changes):
        """ Returns a copy of this stream with `changes` applied.

        Arguments:
            changes: `attribute=value` pairs, using attribute names
                (e.g. `end_date`, not `endDate`).

        Raises:
            TypeError: A key in `changes` isn't a stream attribute.
        """
        attributes = self.attributes()
        unknown = set(changes) - set(attributes)
        if unknown:
            raise TypeError(
                'CashFlowStream.replace: unknown fields ' +
                ', '.join(sorted(unknown)))
        attributes.update(changes)
        return CashFlowStream(**attributes)

    @classmethod
    def from_dict(cls, data, path='stream'):
        """ Builds a stream from a `CashFlowStream` document.

        Raises:
            DocumentError: A field is missing or has the wrong type, or
                `type` is not one of `STREAM_TYPES`.
        """
        kwargs = {}
        for key, attr in FIELDS.items():
            convert = _CONVERTERS[key]
            if key in _OPTIONAL_FIELDS:
                kwargs[attr] = optional_field(data, key, path, convert)
            elif key == 'account':
                # The UI always writes `account`, but older documents
                # may rely on the checking default:
                value = optional_field(data, key, path, convert)
                kwargs[attr] = ACCOUNT_CHECKING if value is None else value
            else:
                kwargs[attr] = required_field(data, key, path, convert)
        _check_stream_fields(kwargs, path)
        return cls(**kwargs)

    @classmethod
    def parse_changes(cls, data, path='changes'):
        """ Converts a partial stream document to `replace` kwargs.

        `id` can't be changed and is dropped, as are keys that aren't
        stream fields. Optional fields may be set to null to clear them.

        Raises:
            DocumentError: A value has the wrong type, or a required
                field is set to null.
        """
        changes = {}
        for key, value in data.items():
            if key not in FIELDS or key == 'id':
                logger.debug('%s: ignoring unsupported change %r', path, key)
                continue
            field_path = path + '.' + key
            if value is None:
                if key not in _OPTIONAL_FIELDS:
                    raise DocumentError(field_path + ': cannot be null')
                changes[FIELDS[key]] = None
            else:
                changes[FIELDS[key]] = _CONVERTERS[key](value, field_path)
        _check_stream_fields(changes, path)
        return changes

    def to_dict(self):
        """ Returns this stream as a `CashFlowStream` document. """
        document = {}
        for key, attr in FIELDS.items():
            value = getattr(self, attr)
            if key in ('startDate', 'endDate', 'anchorDate'):
                value = format_date(value)
            document[key] = value
        return drop_none(document)

    def __eq__(self, other):
        if not isinstance(other, CashFlowStream):
            return NotImplemented
        return self.attributes() == other.attributes()

    def __repr__(self):
        return (
            'CashFlowStream(' + repr(self.id) + ', ' + repr(self.name) +
            ', ' + str(self.amount) + ', ' + self.type + ', ' +
            str(self.frequency) + ')')

def _check_stream_fields(kwargs, path):
    """ Validates the values that the constructor would reject. """
    if 'amount' in kwargs and kwargs['amount'] < 0:
        raise DocumentError(path + '.amount: must be non-negative')
    if 'type' in kwargs and kwargs['type'] not in STREAM_TYPES:
        raise DocumentError(
            path + '.type: expected one of ' + ', '.join(STREAM_TYPES))
