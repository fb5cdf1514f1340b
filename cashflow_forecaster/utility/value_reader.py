""" Provides classes for reading and writing JSON-encoded values.

Money in plan documents is written as JSON numbers (e.g. `1234.50`).
Reading those through `float` would reintroduce the binary rounding
error that the engine's cent arithmetic avoids, so everything here can
parse floats straight into a high-precision type such as `Decimal`.
"""

import os
import json

DIR_PATH = os.path.dirname(__file__)
DATA_PATH = os.path.join(DIR_PATH, '..', 'data')

def resolve_data_path(filename):
    """ Returns an absolute path to `filename`.

    If `filename` is a relative path, it is resolved to an absolute
    path with a root in this package's `cashflow_forecaster/data/`
    directory. If `filename` is an absolute path, it is returned
    unchanged.
    """
    filename = os.fspath(filename)
    # Don't modify absolute paths:
    if not os.path.isabs(filename):
        filename = os.path.join(DATA_PATH, filename)
    return filename

def load_json(filename, *, high_precision=None, decoder_cls=None):
    """ Reads any JSON value from the UTF-8 encoded file `filename`.

    Unlike `ValueReader.read`, this does not resolve relative paths
    against the package data directory and does not require the root
    to be an object.

    Arguments:
        filename (str | PathLike): The file to read.
        high_precision (Callable[[str], HighPrecisionType]): Converts
            the text of each JSON float (e.g. `Decimal`). Optional;
            floats are read as `float` if not provided.
        decoder_cls (JSONDecoder): A custom decoder class. Optional.

    Raises:
        OSError: The file can't be opened.
        ValueError: The file is not valid JSON, or contains `NaN`.
    """
    parse_float = high_precision if high_precision is not None else float
    with open(filename, 'rt', encoding='utf-8') as file:
        return json.load(
            file, cls=decoder_cls,
            parse_float=parse_float,
            parse_constant=_reject_constant)

def _reject_constant(val):
    """ Refuses 'Infinity', '-Infinity' and 'NaN' as money values. """
    raise ValueError("'" + val + "' value not supported.")

class ValueReaderAttribute(object):
    """ A descriptor for managed attributes of `ValueReader`.

    Attributes with this descriptor are get and set via the `values`
    dict (rather than `__dict__`).
    """

    def __init__(self, default=None):
        self.default = default
        self.name = None # set in __set_name__

    def __set_name__(self, owner, name):
        # Called when `owner` is defined; `name` is the key in `values`.
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        # Fall back to the class-level default if the file didn't
        # provide a value (and the reader allows defaults):
        if (
                self.name not in obj.values and
                self.default is not None and
                getattr(obj, 'use_defaults', False)):
            return self.default
        return obj.values[self.name]

    def __set__(self, obj, value):
        obj.values[self.name] = value

    def __delete__(self, obj):
        del obj.values[self.name]

class HighPrecisionJSONEncoder(json.JSONEncoder):
    """ Extends JSONEncoder to support high-precision numeric types.

    Arguments:
        high_precision (Callable[[float], HighPrecisionType]): The
            high-precision type (or a factory for it), e.g. `Decimal`.
            Optional.
        high_precision_serialize (Callable[[HighPrecisionType], Any]):
            Converts a high-precision number to something JSON can
            represent. Optional. Defaults to `str` if `numeric_convert`
            is True, otherwise to `float`.
        numeric_convert (bool): Whether high-precision numbers are
            written as strings (lossless) or as JSON numbers (lossy
            for values that aren't exact in binary). Optional.
    """

    def __init__(
            self, *args, high_precision=None, high_precision_serialize=None,
            numeric_convert=True, **kwargs):
        super().__init__(*args, **kwargs)
        self.high_precision_type = None
        self.high_precision_serialize = None
        if high_precision is not None:
            # Infer the high-precision type from a sample value:
            self.high_precision_type = type(high_precision(0))
            if high_precision_serialize is None:
                # NOTE: `float` is lossy for values like 0.1.
                high_precision_serialize = str if numeric_convert else float
            self.high_precision_serialize = high_precision_serialize

    def default(self, o):
        """ Serializes high-precision numeric types. """
        if (
                self.high_precision_type is not None and
                isinstance(o, self.high_precision_type)):
            return self.high_precision_serialize(o)
        # Otherwise, raise the usual TypeError:
        return super().default(o)

class ValueReader(object):
    """ Reads values from JSON-encoded files.

    Values read from the JSON file are stored in a `values` dict.
    Subclasses can expose these values as attributes by providing
    `ValueReaderAttribute` instances as class variables with the same
    name as a key in the `values` dict.

    Relative paths in `filename` are resolved relative to
    `cashflow_forecaster/data/`, not the current working directory.

    Examples:
        reader = ValueReader(
            "settings.json",  # Read this file in cashflow_forecaster/data
            high_precision=Decimal)  # Read floats as Decimal

    Arguments:
        filename (str): The filename of a JSON file to read.
            The file must be UTF-8 encoded. Optional.
        encoder_cls (JSONEncoder): A custom JSONEncoder for `dumps`.
            Optional. Defaults to `HighPrecisionJSONEncoder`.
        decoder_cls (JSONDecoder): A custom JSONDecoder for `read`.
            Optional.
        high_precision (Callable[[str], HighPrecisionType]): Converts
            JSON floats on read (e.g. `Decimal`). Optional.
        use_defaults (bool): If True, any `ValueReaderAttribute` which
            doesn't have a value read in from file will return its
            default value. Optional. Defaults to True.
    """

    def __init__(
            self, filename=None, *,
            encoder_cls=None, decoder_cls=None,
            high_precision=None, use_defaults=True):
        self.values = {}
        self.encoder_cls = encoder_cls
        self.decoder_cls = decoder_cls
        self.high_precision = high_precision
        self.use_defaults = use_defaults
        if filename is not None:
            self.read(filename)

    def read(self, filename):
        """ Reads in values from file `filename`.

        Any existing values are discarded.

        Raises:
            FileNotFoundError: No such file or directory.
            TypeError: The file's root value is not a JSON object.
        """
        # If this is a bare filename, assume it's in /data:
        values = load_json(
            resolve_data_path(filename),
            high_precision=self.high_precision,
            decoder_cls=self.decoder_cls)
        # Attributes are looked up by key, so the root must be an object:
        if not isinstance(values, dict):
            raise TypeError('JSON file must provide dict of key: value pairs')
        self.values = values

    def dumps(self, vals=None):
        """ Serializes values as indented JSON text.

        Arguments:
            vals (Any): The values to serialize. Optional; defaults to
                this object's `values`.
        """
        if vals is None:
            vals = self.values
        return json.dumps(vals, **self._encoder_args())

    def _encoder_args(self):
        # Sorted and indented, so output diffs cleanly between runs:
        encoder_args = {
            'ensure_ascii': True,
            'indent': 2,
            'sort_keys': True
        }
        cls = self.encoder_cls
        if cls is None:
            # Only the default encoder knows about high-precision types;
            # a custom encoder is passed through untouched.
            cls = HighPrecisionJSONEncoder
            encoder_args['high_precision'] = self.high_precision
            # Money goes out as JSON numbers, not strings:
            encoder_args['numeric_convert'] = False
        encoder_args['cls'] = cls
        return encoder_args
