""" Helpers for parsing JSON documents into model objects.

Every `from_dict` in `cashflow_forecaster.model` passes a `path` (e.g.
`'plan.streams[2]'`) down through these helpers so that a malformed
document is reported with the location of the offending field.
"""

from cashflow_forecaster.money import to_decimal
from cashflow_forecaster.utility.dates import parse_date

class DocumentError(ValueError):
    """ Raised when a JSON document has the wrong shape. """

def expect_dict(value, path):
    if not isinstance(value, dict):
        raise DocumentError(path + ': expected object')
    return value

def expect_list(value, path):
    if not isinstance(value, list):
        raise DocumentError(path + ': expected array')
    return value

def require(data, key, path):
    if key not in data or data[key] is None:
        raise DocumentError(path + '.' + key + ': missing required field')
    return data[key]

def optional(data, key, default=None):
    value = data.get(key)
    return default if value is None else value

def as_str(value, path):
    if not isinstance(value, str):
        raise DocumentError(path + ': expected a string')
    return value

def as_decimal(value, path):
    """ Converts a JSON number (or numeric string) to `Decimal`. """
    try:
        return to_decimal(value)
    except (TypeError, ValueError) as error:
        raise DocumentError(path + ': expected a number') from error

def as_int(value, path):
    if isinstance(value, bool) or not isinstance(value, int):
        raise DocumentError(path + ': expected an integer')
    return value

def as_bool(value, path):
    # Strings like "false" are truthy, so only JSON booleans are accepted.
    if not isinstance(value, bool):
        raise DocumentError(path + ': expected true or false')
    return value

def as_date(value, path):
    """ Converts a `YYYY-MM-DD` string (or a date) to `datetime.date`. """
    try:
        return parse_date(value)
    except (TypeError, ValueError) as error:
        raise DocumentError(path + ': expected a YYYY-MM-DD date') from error

def optional_field(data, key, path, convert):
    """ Converts `data[key]` with `convert` if present, else None. """
    value = data.get(key)
    if value is None:
        return None
    return convert(value, path + '.' + key)

def required_field(data, key, path, convert):
    """ Converts the required `data[key]` with `convert`. """
    return convert(require(data, key, path), path + '.' + key)

def parse_list(data, key, path, item_from_dict):
    """ Parses an optional array of objects with `item_from_dict`. """
    items = expect_list(optional(data, key, []), path + '.' + key)
    parsed = []
    for index, item in enumerate(items):
        item_path = path + '.' + key + '[' + str(index) + ']'
        parsed.append(item_from_dict(expect_dict(item, item_path), item_path))
    return parsed

def drop_none(document):
    """ Omits optional fields that are unset, as the documents do. """
    return {key: value for key, value in document.items() if value is not None}
