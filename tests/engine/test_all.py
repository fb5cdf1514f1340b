''' Runs all unit tests for the `cashflow_forecaster.engine` package. '''

import unittest

if __name__ == '__main__':
    SUITE = unittest.TestLoader().discover(
        './tests/engine', pattern='test_*.py', top_level_dir='.')

    unittest.TextTestRunner().run(SUITE)
