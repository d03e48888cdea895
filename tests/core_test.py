"""
Verification Scenarios for logging setup
"""

import logging
import unittest

from rewriter.core import CompanyFormatter, setup_logger, resolve_level


class TestLogging(unittest.TestCase):
    def test_formatter_includes_level_and_context(self):
        record = logging.LogRecord("url_service.api", logging.WARNING, __file__, 1, "rejected", None, None)
        record.context = "api"
        line = CompanyFormatter().format(record)
        self.assertTrue(line.startswith("[ "))
        self.assertTrue(line.endswith(" : WARNING : api : rejected"))

    def test_context_defaults_to_root(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
        self.assertIn(" : INFO : root : hello", CompanyFormatter().format(record))

    def test_no_duplicate_handlers(self):
        """Scenario: repeated setup returns the same logger without stacking handlers."""
        first = setup_logger()
        count = len(first.handlers)
        second = setup_logger()
        self.assertIs(first, second)
        self.assertEqual(len(second.handlers), count)

    def test_child_logger_propagates(self):
        child = setup_logger("url_service.child_test")
        self.assertTrue(child.propagate)
        self.assertEqual(child.handlers, [])
        self.assertTrue(logging.getLogger("url_service").handlers)

    def test_resolve_level(self):
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level("nonsense"), logging.INFO)


if __name__ == "__main__":
    unittest.main()
