""" This module provides user-modifiable settings for the application.

Settings are read from a JSON file. Any setting the file doesn't
provide falls back to the default declared on the `Settings` class.
"""

from decimal import Decimal
from cashflow_forecaster.utility.value_reader import (
    ValueReader, ValueReaderAttribute as Attr)

FILENAME_DEFAULT = 'settings.json'

class Settings(ValueReader):
    """ Container for variables used to control application settings.

    All settings are exposed as attributes of `Settings` objects. For
    example, `Settings().currency` returns the value of the
    `'currency'` key in `data/settings.json` (or the default, if the
    file doesn't set it).

    Relative paths are resolved from `cashflow_forecaster/data`, so use
    an absolute path for a settings file anywhere else.

    Arguments:
        filename (str): The filename of a JSON file to read.
            The file must be UTF-8 encoded. Optional. Defaults to
            `cashflow_forecaster/data/settings.json`.
        use_defaults (bool): If True, settings missing from the file
            take their default values. Optional. Defaults to True.

    Attributes:
        currency (str): Three-letter code of the currency amounts are
            displayed in. Defaults to 'USD'.
        locale (str): Locale used to format money. Defaults to 'en_US'.
        forecast_months (int): Forecast length for plans that don't
            give an end date. Defaults to 12.
        log_level (str): Logging level for the command line tool.
            Defaults to 'WARNING'.
    """

    currency = Attr('USD')
    locale = Attr('en_US')
    forecast_months = Attr(12)
    log_level = Attr('WARNING')

    def __init__(self, filename=None, *, use_defaults=True):
        if filename is None:
            filename = FILENAME_DEFAULT
        super().__init__(
            filename, high_precision=Decimal, use_defaults=use_defaults)
