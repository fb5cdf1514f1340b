""" Functions for loading plan and decision documents from disk. """

from decimal import Decimal
from cashflow_forecaster.utility.value_reader import load_json
from cashflow_forecaster.model.document import DocumentError, expect_dict
from cashflow_forecaster.model.plan import Plan
from cashflow_forecaster.model.decision import Decision

def load_plan(path, *, default_months=None):
    """ Loads a `Plan` document from the JSON file at `path`.

    Numbers are read as `Decimal`, so amounts like `2317.15` are exact.

    Arguments:
        path (str | PathLike): The file to read.
        default_months (int): Horizon for documents without an
            `endDate`. Optional.

    Raises:
        OSError: The file can't be read.
        ValueError: The file isn't valid JSON.
        DocumentError: The document has the wrong shape.
    """
    data = load_json(path, high_precision=Decimal)
    return Plan.from_dict(
        expect_dict(data, 'plan'), 'plan', default_months=default_months)

def load_decisions(path):
    """ Loads decisions from the JSON file at `path`.

    The file may contain a single `Decision` document or an array of
    them.

    Returns:
        list[Decision]: The decisions, in file order.

    Raises:
        OSError: The file can't be read.
        ValueError: The file isn't valid JSON.
        DocumentError: A document has the wrong shape.
    """
    data = load_json(path, high_precision=Decimal)
    if isinstance(data, dict):
        return [Decision.from_dict(data, 'decision')]
    if not isinstance(data, list):
        raise DocumentError('decisions: expected object or array')
    return [
        Decision.from_dict(
            expect_dict(item, 'decisions[' + str(index) + ']'),
            'decisions[' + str(index) + ']')
        for index, item in enumerate(data)]
