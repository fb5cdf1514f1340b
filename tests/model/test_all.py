''' Runs all unit tests for the `cashflow_forecaster.model` package. '''

import unittest

if __name__ == '__main__':
    SUITE = unittest.TestLoader().discover(
        './tests/model', pattern='test_*.py', top_level_dir='.')

    unittest.TextTestRunner().run(SUITE)
