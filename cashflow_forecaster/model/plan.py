""" Provides the `Plan` class: everything needed to run a forecast. """

import copy
from cashflow_forecaster.money import ZERO, to_decimal
from cashflow_forecaster.utility.dates import add_months, format_date, parse_date
from cashflow_forecaster.model.document import (
    DocumentError, as_date, as_decimal, as_str, expect_dict, expect_list,
    optional, optional_field, parse_list, required_field)
from cashflow_forecaster.model.stream import CashFlowStream
from cashflow_forecaster.model.account import Account

class Plan(object):
    """ Starting balances, cash flow streams and a date range.

    A plan is either a baseline (the user's current situation) or the
    result of applying a `Decision` to a baseline. Either way it can be
    passed straight to `simulate`.

    Plans may carry two *view overlays*, which the simulator applies
    without touching the stored streams: a set of disabled stream ids,
    and per-stream amount overrides.

    Arguments:
        id (str): An opaque identifier.
        name (str): A display name.
        start_date (date | str): The first day of the forecast.
        end_date (date | str): The last day of the forecast (inclusive).
        checking_balance (Decimal | int | float | str): The checking
            balance before anything happens on `start_date`.
        savings_balance (Decimal | int | float | str): The savings
            balance before anything happens on `start_date`.
        safety_buffer (Decimal | int | float | str): The lowest checking
            balance the user is comfortable with. Optional; defaults
            to 0.
        streams (Iterable[CashFlowStream]): Optional.
        accounts (Iterable[Account]): Optional.
        disabled_stream_ids (Iterable[str]): Streams to leave out of
            the simulation. Optional.
        stream_overrides (dict[str, dict[str, Any]]): `{stream_id:
            {'amount': value}}` pairs. Values are kept as given; the
            simulator ignores overrides it can't use. Optional.

    Attributes:
        streams (list[CashFlowStream]): The plan's streams, in order.
        accounts (list[Account]): The accounts listed with the plan.
        disabled_stream_ids (frozenset[str]): See above.
        stream_overrides (dict[str, dict[str, Any]]): See above.
    """

    # pylint: disable=redefined-builtin,too-many-arguments
    # pylint: disable=too-many-instance-attributes
    def __init__(
            self, id, name, start_date, end_date,
            checking_balance=ZERO, savings_balance=ZERO, safety_buffer=ZERO,
            streams=(), accounts=(), *,
            disabled_stream_ids=(), stream_overrides=None):
        self.id = id
        self.name = name
        self.start_date = parse_date(start_date)
        self.end_date = parse_date(end_date)
        self.checking_balance = to_decimal(checking_balance)
        self.savings_balance = to_decimal(savings_balance)
        self.safety_buffer = to_decimal(safety_buffer)
        self.streams = list(streams)
        self.accounts = list(accounts)
        self.disabled_stream_ids = frozenset(disabled_stream_ids)
        self.stream_overrides = dict(stream_overrides or {})

    def stream(self, stream_id):
        """ Returns the stream with id `stream_id`, or None. """
        for stream in self.streams:
            if stream.id == stream_id:
                return stream
        return None

    def copy(self):
        """ Returns a plan sharing no mutable state with this one. """
        return copy.deepcopy(self)

    @classmethod
    def from_dict(cls, data, path='plan', *, default_months=None):
        """ Builds a plan from a `Plan` document.

        Arguments:
            data (dict[str, Any]): The document.
            path (str): Where the document is, for error messages.
            default_months (int): If provided, a document without an
                `endDate` runs for this many months from its
                `startDate`. Optional.

        Raises:
            DocumentError: A field is missing or malformed.
        """
        start_date = required_field(data, 'startDate', path, as_date)
        end_date = optional_field(data, 'endDate', path, as_date)
        if end_date is None:
            if default_months is None:
                raise DocumentError(path + '.endDate: missing required field')
            end_date = add_months(start_date, default_months)

        disabled = expect_list(
            optional(data, 'disabledStreamIds', []),
            path + '.disabledStreamIds')
        overrides = expect_dict(
            optional(data, 'streamOverrides', {}), path + '.streamOverrides')
        for stream_id, override in overrides.items():
            expect_dict(override, path + '.streamOverrides.' + stream_id)

        return cls(
            id=required_field(data, 'id', path, as_str),
            name=required_field(data, 'name', path, as_str),
            start_date=start_date,
            end_date=end_date,
            checking_balance=required_field(
                data, 'checkingBalance', path, as_decimal),
            savings_balance=required_field(
                data, 'savingsBalance', path, as_decimal),
            safety_buffer=optional_field(
                data, 'safetyBuffer', path, as_decimal) or ZERO,
            streams=parse_list(data, 'streams', path, CashFlowStream.from_dict),
            accounts=parse_list(data, 'accounts', path, Account.from_dict),
            disabled_stream_ids=disabled,
            stream_overrides={
                stream_id: dict(override)
                for stream_id, override in overrides.items()})

    def to_dict(self):
        """ Returns this plan as a `Plan` document. """
        document = {
            'id': self.id,
            'name': self.name,
            'startDate': format_date(self.start_date),
            'endDate': format_date(self.end_date),
            'checkingBalance': self.checking_balance,
            'savingsBalance': self.savings_balance,
            'safetyBuffer': self.safety_buffer,
            'streams': [stream.to_dict() for stream in self.streams],
            'accounts': [account.to_dict() for account in self.accounts],
        }
        if self.disabled_stream_ids:
            document['disabledStreamIds'] = sorted(self.disabled_stream_ids)
        if self.stream_overrides:
            document['streamOverrides'] = {
                stream_id: dict(override)
                for stream_id, override in self.stream_overrides.items()}
        return document

    def __eq__(self, other):
        if not isinstance(other, Plan):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (
            'Plan(' + repr(self.id) + ', ' + repr(self.name) + ', ' +
            format_date(self.start_date) + '..' +
            format_date(self.end_date) + ', ' +
            str(len(self.streams)) + ' streams)')
