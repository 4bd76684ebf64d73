#!/usr/bin/env python3
"""Run all tests.

Reference: http://stackoverflow.com/questions/1896918/running-unittest-with-typical-test-directory-structure
"""

import sys
import unittest

if __name__ == '__main__':
    # use the default shared TestLoader instance
    test_loader = unittest.defaultTestLoader
    # use the basic test runner that outputs to sys.stderr
    test_runner = unittest.TextTestRunner()
    # automatically discover all tests in tests/zonescan of the form test*.py
    test_suite = test_loader.discover('tests/zonescan')
    # run the test suite
    result = test_runner.run(test_suite)
    sys.exit(not result.wasSuccessful())
