''' Unit tests for the `ValueReader` class and `load_json`. '''

import unittest
import os
import json
import tempfile
from decimal import Decimal
from cashflow_forecaster.utility.value_reader import (
    ValueReader, ValueReaderAttribute, load_json, resolve_data_path,
    DATA_PATH)

class TestValueReader(unittest.TestCase):
    """ Tests the `ValueReader` class. """

    def write(self, vals, filename=None):
        """ Convenience method for writing to a testing JSON file """
        if filename is None:
            filename = self.filename
        with open(filename, 'w', encoding="utf-8") as file:
            json.dump(vals, file, indent=2, sort_keys=True)

    def setUp(self):
        """ Use a fresh file in a temporary directory for each test. """
        self.tempdir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.tempdir.name, "_testing.json")
        self.values = {
            'dict': {'key': 'val'},
            'float': 0.5,
            'int': 1,
            'str': 'str',
            'list': ['a', 'b', 'c']
        }
        self.write(self.values)

    def tearDown(self):
        self.tempdir.cleanup()

    def test_init_read(self):
        """ Test reading a file on init. """
        reader = ValueReader(self.filename)
        self.assertEqual(reader.values, self.values)

    def test_read(self):
        """ Test reading a file with explicit `read()` call. """
        reader = ValueReader()
        reader.read(self.filename)
        self.assertEqual(reader.values, self.values)

    def test_read_again(self):
        """ Test reading from a file, then reading from a different file """
        reader = ValueReader(self.filename)
        # Change the file by removing one attribute and adding another:
        del self.values['str']
        self.values['new_attr'] = 'new_val'
        self.write(self.values)
        reader.read(self.filename)
        # The new values should match the updated self.values exactly:
        self.assertEqual(reader.values, self.values)

    def test_read_not_object(self):
        """ A file whose root isn't an object can't provide values. """
        self.write([1, 2, 3])
        with self.assertRaises(TypeError):
            ValueReader(self.filename)

    def test_read_missing(self):
        with self.assertRaises(FileNotFoundError):
            ValueReader(os.path.join(self.tempdir.name, 'missing.json'))

    def test_resolve_data_path(self):
        """ Relative paths resolve to the package data directory. """
        self.assertEqual(
            resolve_data_path('settings.json'),
            os.path.join(DATA_PATH, 'settings.json'))
        self.assertEqual(resolve_data_path(self.filename), self.filename)

    def test_attribute(self):
        """ Test ValueReaderAttribute descriptor """
        class TestReader(ValueReader):
            """ A ValueReader with one ValueReaderAttribute attr. """
            test_attr = ValueReaderAttribute()

        reader = TestReader()
        value = "new value"
        reader.test_attr = value
        # The value should be accessible via both the `test_attr`
        # attribute and as a value in the `values` dict:
        self.assertEqual(reader.test_attr, value)
        self.assertEqual(reader.values['test_attr'], value)

    def test_attribute_default(self):
        """ Test ValueReaderAttribute descriptor with default value. """
        class TestReader(ValueReader):
            """ A ValueReader with one ValueReaderAttribute attr. """
            test_attr = ValueReaderAttribute("default")

        reader = TestReader()
        self.assertEqual(reader.test_attr, "default")
        reader.test_attr = "value"
        self.assertEqual(reader.test_attr, "value")

    def test_attribute_no_default(self):
        """ Test ValueReaderAttribute with use_defaults=False. """
        class TestReader(ValueReader):
            """ A ValueReader with one ValueReaderAttribute attr. """
            test_attr = ValueReaderAttribute("default")

        reader = TestReader(use_defaults=False)
        with self.assertRaises(KeyError):
            _ = reader.test_attr

    def test_dumps(self):
        """ Test `dumps()` """
        reader = ValueReader()
        del self.values['str']
        self.values['new_attr'] = 'new_val'
        self.assertEqual(json.loads(reader.dumps(self.values)), self.values)

    def test_dumps_self(self):
        """ Test `dumps()` called with no explicit values. """
        reader = ValueReader(self.filename)
        self.assertEqual(json.loads(reader.dumps()), self.values)

    def test_decimal_read(self):
        """ Tests converting to Decimal values on read. """
        reader = ValueReader(self.filename, high_precision=Decimal)
        self.assertEqual(reader.values['float'], Decimal('0.5'))
        self.assertIsInstance(reader.values['int'], int)

    def test_decimal_round_trip(self):
        """ Tests dumping Decimal values and reading them back in. """
        writer = ValueReader(high_precision=Decimal)
        with open(self.filename, 'w', encoding='utf-8') as file:
            file.write(writer.dumps({'decimal': Decimal('1234.50')}))
        reader = ValueReader(self.filename, high_precision=Decimal)
        self.assertEqual(reader.values['decimal'], Decimal('1234.5'))

    def test_dumps_numbers(self):
        """ Decimals are written as JSON numbers, not strings. """
        writer = ValueReader(high_precision=Decimal)
        self.assertEqual(
            json.loads(writer.dumps({'amount': Decimal('12.25')})),
            {'amount': 12.25})

class TestLoadJson(unittest.TestCase):
    """ Tests `load_json`. """

    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.tempdir.name, "doc.json")

    def tearDown(self):
        self.tempdir.cleanup()

    def write_text(self, text):
        with open(self.filename, 'w', encoding='utf-8') as file:
            file.write(text)

    def test_any_root(self):
        self.write_text('[{"amount": 2317.15}]')
        self.assertEqual(
            load_json(self.filename, high_precision=Decimal),
            [{'amount': Decimal('2317.15')}])

    def test_floats_without_high_precision(self):
        self.write_text('{"amount": 0.5}')
        self.assertEqual(load_json(self.filename), {'amount': 0.5})

    def test_rejects_nan(self):
        self.write_text('{"amount": NaN}')
        with self.assertRaises(ValueError):
            load_json(self.filename)

    def test_rejects_infinity(self):
        self.write_text('{"amount": -Infinity}')
        with self.assertRaises(ValueError):
            load_json(self.filename, high_precision=Decimal)

if __name__ == '__main__':
    unittest.TextTestRunner().run(
        unittest.TestLoader().loadTestsFromName(__name__))
