""" Non-destructive overlays: view overlays and decisions.

Two kinds of change are layered over stored plans here, and neither
ever writes back into the objects it was given:

* A `StreamOverlay` (a plan's disabled-stream set and amount
  overrides) is applied stream by stream at simulation time by
  `resolve_effective_stream`.
* A `Decision` is applied to a baseline by `apply_decision`, which
  folds the decision's operations over a private copy of the baseline
  and returns a new, independently simulatable `Plan`.
"""

import copy
import logging
from collections import namedtuple
from decimal import Decimal
from cashflow_forecaster.model.decision import (
    OPERATION_REMOVE, OPERATION_MODIFY, OPERATION_ADD,
    OPERATION_ADJUST_BALANCE)
from cashflow_forecaster.model.plan import Plan
from cashflow_forecaster.model.stream import FIELDS
from cashflow_forecaster.money import to_decimal
from cashflow_forecaster.utility.register import (
    MethodRegister, registered_method_named)

logger = logging.getLogger(__name__)

# Rename registered_method_named for readability when subclassing.
operation_method = registered_method_named

# Attribute names a modification may change.
_PATCHABLE = frozenset(FIELDS.values()) - {'id'}

class StreamOverlay(namedtuple(
        'StreamOverlay', 'disabled_stream_ids stream_overrides')):
    """ A plan's view overlay: streams to skip and amounts to replace.

    Attributes:
        disabled_stream_ids (frozenset[str]): Streams left out of the
            simulation.
        stream_overrides (dict[str, dict[str, Any]]): `{stream_id:
            {'amount': value}}` pairs.
    """

    __slots__ = ()

    @classmethod
    def from_plan(cls, plan):
        return cls(
            frozenset(plan.disabled_stream_ids), dict(plan.stream_overrides))

    def override_amount(self, stream_id):
        """ Returns the usable override amount for a stream, or None.

        Overrides whose amount is missing, not a number, or not
        positive are treated as if they weren't there.
        """
        override = self.stream_overrides.get(stream_id)
        if not isinstance(override, dict):
            return None
        amount = override.get('amount')
        if isinstance(amount, bool) or not isinstance(
                amount, (int, float, str, Decimal)):
            return None
        try:
            amount = to_decimal(amount)
        except ValueError:
            return None
        if amount <= 0:
            return None
        return amount

def resolve_effective_stream(stream, overlay):
    """ Returns the stream as the simulator should see it, or None.

    Arguments:
        stream (CashFlowStream): A stored stream. Never modified.
        overlay (StreamOverlay): The plan's view overlay.

    Returns:
        CashFlowStream | None: None if the stream is disabled; a copy
        with the override amount if the stream has a usable override;
        otherwise `stream` itself.
    """
    if stream.id in overlay.disabled_stream_ids:
        return None
    amount = overlay.override_amount(stream.id)
    if amount is None:
        return stream
    return stream.replace(amount=amount)

def effective_streams(plan):
    """ Returns the plan's streams after applying its view overlay. """
    overlay = StreamOverlay.from_plan(plan)
    resolved = (
        resolve_effective_stream(stream, overlay) for stream in plan.streams)
    return [stream for stream in resolved if stream is not None]

class _PlanDraft(object):
    """ The mutable working state of a decision being applied.

    Only `DecisionResolver` holds one, and every stream in it is a copy
    owned by the draft.
    """

    def __init__(self, streams, checking_balance, savings_balance):
        self.streams = streams
        self.checking_balance = checking_balance
        self.savings_balance = savings_balance

class DecisionResolver(MethodRegister):
    """ Applies decisions to baseline plans.

    A decision is applied as a left fold of its operations (see
    `Decision.operations`) over a draft copied from the baseline. Each
    operation kind has a registered handler; supporting a new kind
    means registering one more `operation_method`.

    Operations the resolver doesn't recognize are skipped.
    """

    def __call__(self, baseline, decision):
        return self.apply(baseline, decision)

    def apply(self, baseline, decision):
        """ Returns a new plan: `baseline` with `decision` applied.

        Neither argument is modified, and the result shares no mutable
        state with either.

        The result uses the decision's id and name, the baseline's date
        range, safety buffer and accounts, and no view overlays.
        """
        draft = _PlanDraft(
            streams=[stream.replace() for stream in baseline.streams],
            checking_balance=baseline.checking_balance,
            savings_balance=baseline.savings_balance)

        for operation in decision.operations():
            if not self.is_registered(operation.kind):
                logger.debug(
                    'Decision %s: skipping unknown operation %r',
                    decision.id, operation.kind)
                continue
            draft = self.call_registered_method(
                operation.kind, draft, operation.payload)

        return Plan(
            id=decision.id,
            name=decision.name,
            start_date=baseline.start_date,
            end_date=baseline.end_date,
            checking_balance=draft.checking_balance,
            savings_balance=draft.savings_balance,
            safety_buffer=baseline.safety_buffer,
            streams=draft.streams,
            accounts=copy.deepcopy(baseline.accounts))

    @operation_method(OPERATION_REMOVE)
    def remove(self, draft, stream_id):
        draft.streams = [
            stream for stream in draft.streams if stream.id != stream_id]
        return draft

    @operation_method(OPERATION_MODIFY)
    def modify(self, draft, modification):
        """ Patches the first stream with a matching id, if there is one.

        A stream's `id` is never changed, even if `changes` names it,
        and keys that aren't stream attributes are ignored.
        """
        changes = {}
        for attr, value in modification.changes.items():
            if attr not in _PATCHABLE:
                logger.debug(
                    'Ignoring unsupported change %r to stream %r',
                    attr, modification.stream_id)
                continue
            changes[attr] = value
        for index, stream in enumerate(draft.streams):
            if stream.id == modification.stream_id:
                draft.streams[index] = stream.replace(**changes)
                return draft
        logger.debug(
            'Ignoring change to stream %r, which is not in the plan',
            modification.stream_id)
        return draft

    @operation_method(OPERATION_ADD)
    def add(self, draft, stream):
        draft.streams.append(stream.replace())
        return draft

    @operation_method(OPERATION_ADJUST_BALANCE)
    def adjust_balance(self, draft, adjustment):
        draft.checking_balance = draft.checking_balance + adjustment.checking
        draft.savings_balance = draft.savings_balance + adjustment.savings
        return draft

DECISION_RESOLVER = DecisionResolver()

def apply_decision(baseline, decision):
    """ Returns a new plan: `baseline` with `decision` applied. """
    return DECISION_RESOLVER.apply(baseline, decision)
