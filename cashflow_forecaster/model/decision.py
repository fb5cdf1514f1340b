""" Provides the `Decision` class: a hypothetical change to a baseline.

A decision doesn't store a full copy of the baseline; it stores only
what changes. For example, a "Home Addition" decision might:

* add a $1,500/month home equity loan payment,
* remove daycare ($1,500/month) because the kid starts school, and
* lower the starting checking balance by $10,000 for upfront costs.

`Decision.operations` expresses these changes as a flat sequence of
tagged operations, which `cashflow_forecaster.engine.overlay` folds
over a copy of the baseline.
"""

import datetime
from collections import namedtuple
from cashflow_forecaster.money import to_decimal
from cashflow_forecaster.utility.dates import format_date
from cashflow_forecaster.model.document import (
    as_bool, as_decimal, as_str, drop_none, expect_dict, expect_list,
    optional, optional_field, parse_list, require, required_field)
from cashflow_forecaster.model.stream import CashFlowStream, FIELDS

OPERATION_REMOVE = 'remove'
OPERATION_MODIFY = 'modify'
OPERATION_ADD = 'add'
OPERATION_ADJUST_BALANCE = 'adjust-balance'

# `kind` is one of the OPERATION_* keys; `payload` depends on the kind:
#   remove: a stream id
#   modify: a `StreamModification`
#   add: a `CashFlowStream`
#   adjust-balance: a `BalanceAdjustment`
DecisionOperation = namedtuple('DecisionOperation', 'kind payload')
BalanceAdjustment = namedtuple('BalanceAdjustment', 'checking savings')

_ATTRIBUTE_FIELDS = {attr: key for key, attr in FIELDS.items()}

class StreamModification(namedtuple('StreamModification', 'stream_id changes')):
    """ A partial change to one baseline stream.

    Attributes:
        stream_id (str): The baseline stream to change.
        changes (dict[str, Any]): `{attribute: value}` pairs, as
            accepted by `CashFlowStream.replace`. Fields not named here
            keep their baseline values.
    """

    __slots__ = ()

    @classmethod
    def from_dict(cls, data, path='modification'):
        changes = expect_dict(require(data, 'changes', path), path + '.changes')
        return cls(
            stream_id=required_field(data, 'streamId', path, as_str),
            changes=CashFlowStream.parse_changes(changes, path + '.changes'))

    def to_dict(self):
        changes = {}
        for attr, value in self.changes.items():
            if isinstance(value, datetime.date):
                value = format_date(value)
            changes[_ATTRIBUTE_FIELDS[attr]] = value
        return {'streamId': self.stream_id, 'changes': changes}

class Decision(object):
    """ A named set of modifications to a baseline plan.

    Arguments:
        id (str): An opaque identifier.
        name (str): A display name.
        baseline_id (str): The id of the baseline `Plan` this modifies.
        add_streams (Iterable[CashFlowStream]): New streams. Optional.
        remove_stream_ids (Iterable[str]): Baseline streams to drop.
            Optional.
        modify_streams (Iterable[StreamModification]): Changes to
            baseline streams. Optional.
        checking_balance_adjustment (Decimal | int | float | str): Added
            to the starting checking balance (e.g. `-10000` for an
            upfront cost). Optional.
        savings_balance_adjustment (Decimal | int | float | str): Added
            to the starting savings balance. Optional.
        enabled (bool): Whether the decision is currently being
            compared. Inactive decisions are kept, but not run.
            Optional; defaults to True.
    """

    # pylint: disable=redefined-builtin,too-many-arguments
    def __init__(
            self, id, name, baseline_id, add_streams=(),
            remove_stream_ids=(), modify_streams=(), *,
            checking_balance_adjustment=None, savings_balance_adjustment=None,
            enabled=True):
        self.id = id
        self.name = name
        self.baseline_id = baseline_id
        self.add_streams = list(add_streams)
        self.remove_stream_ids = list(remove_stream_ids)
        self.modify_streams = [
            StreamModification(stream_id, dict(changes))
            for stream_id, changes in modify_streams]
        self.checking_balance_adjustment = _optional_decimal(
            checking_balance_adjustment)
        self.savings_balance_adjustment = _optional_decimal(
            savings_balance_adjustment)
        self.enabled = enabled

    def operations(self):
        """ Returns this decision as a list of `DecisionOperation`s.

        Operations are ordered so that folding them over a baseline
        removes streams first, then patches the survivors, then appends
        new streams, and finally adjusts starting balances.
        """
        operations = [
            DecisionOperation(OPERATION_REMOVE, stream_id)
            for stream_id in self.remove_stream_ids]
        operations.extend(
            DecisionOperation(OPERATION_MODIFY, modification)
            for modification in self.modify_streams)
        operations.extend(
            DecisionOperation(OPERATION_ADD, stream)
            for stream in self.add_streams)
        if (
                self.checking_balance_adjustment is not None or
                self.savings_balance_adjustment is not None):
            operations.append(DecisionOperation(
                OPERATION_ADJUST_BALANCE,
                BalanceAdjustment(
                    to_decimal(self.checking_balance_adjustment or 0),
                    to_decimal(self.savings_balance_adjustment or 0))))
        return operations

    @classmethod
    def from_dict(cls, data, path='decision'):
        """ Builds a decision from a `Decision` document.

        Raises:
            DocumentError: A field is missing or malformed.
        """
        remove_ids = expect_list(
            optional(data, 'removeStreamIds', []), path + '.removeStreamIds')
        enabled = optional_field(data, 'enabled', path, as_bool)
        return cls(
            id=required_field(data, 'id', path, as_str),
            name=required_field(data, 'name', path, as_str),
            baseline_id=required_field(data, 'baselineId', path, as_str),
            add_streams=parse_list(
                data, 'addStreams', path, CashFlowStream.from_dict),
            remove_stream_ids=[
                as_str(stream_id, path + '.removeStreamIds[' + str(i) + ']')
                for i, stream_id in enumerate(remove_ids)],
            modify_streams=parse_list(
                data, 'modifyStreams', path, StreamModification.from_dict),
            checking_balance_adjustment=optional_field(
                data, 'checkingBalanceAdjustment', path, as_decimal),
            savings_balance_adjustment=optional_field(
                data, 'savingsBalanceAdjustment', path, as_decimal),
            enabled=enabled is not False)

    def to_dict(self):
        """ Returns this decision as a `Decision` document. """
        return drop_none({
            'id': self.id,
            'name': self.name,
            'baselineId': self.baseline_id,
            'addStreams': [stream.to_dict() for stream in self.add_streams],
            'removeStreamIds': list(self.remove_stream_ids),
            'modifyStreams': [
                modification.to_dict()
                for modification in self.modify_streams],
            'checkingBalanceAdjustment': self.checking_balance_adjustment,
            'savingsBalanceAdjustment': self.savings_balance_adjustment,
            'enabled': self.enabled,
        })

    def __eq__(self, other):
        if not isinstance(other, Decision):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (
            'Decision(' + repr(self.id) + ', ' + repr(self.name) +
            ', baseline=' + repr(self.baseline_id) + ')')

def _optional_decimal(value):
    return to_decimal(value) if value is not None else None
