# -*- coding: utf-8 -*-
"""Tests for the JSON logging setup."""

import io
import json
import logging
import sys
import unittest

from ledger.account import Account
from ledger.errors import InsufficientFunds
from ledger.logging_config import JSONFormatter, get_logger, setup_logging


class TestLoggingConfig(unittest.TestCase):
    def setUp(self):
        self.stream = io.StringIO()
        self.logger = setup_logging("DEBUG", logger_name="ledger", stream=self.stream)

    def tearDown(self):
        for handler in self.logger.handlers[:]:
            if not isinstance(handler, logging.NullHandler):
                self.logger.removeHandler(handler)
        self.logger.setLevel(logging.NOTSET)
        self.logger.propagate = True

    def _records(self):
        return [json.loads(line) for line in self.stream.getvalue().splitlines()]

    def test_structured_fields_from_library(self):
        acc = Account("L100", "Logan", 5.0)
        with self.assertRaises(InsufficientFunds):
            acc.withdraw(10.0)

        records = self._records()
        refused = [r for r in records if r.get("operation") == "withdraw"]
        self.assertEqual(len(refused), 1)
        self.assertEqual(refused[0]["level"], "INFO")
        self.assertEqual(refused[0]["account_number"], "L100")
        self.assertEqual(refused[0]["amount"], 10.0)
        self.assertEqual(refused[0]["logger"], "ledger.account")

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging("INFO", logger_name="ledger", stream=self.stream)
        get_logger("ledger").info("once")
        self.assertEqual(len([r for r in self._records() if r["message"] == "once"]), 1)

    def test_level_filters_debug(self):
        setup_logging("WARNING", logger_name="ledger", stream=self.stream)
        Account("L101", "Logan", 1.0).deposit(1.0)
        get_logger("ledger").warning("kept")
        self.assertEqual([r["message"] for r in self._records()], ["kept"])

    def test_exception_is_serialized(self):
        formatter = JSONFormatter()
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.getLogger("ledger").makeRecord(
                "ledger", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        entry = json.loads(formatter.format(record))
        self.assertEqual(entry["message"], "failed")
        self.assertIn("RuntimeError: boom", entry["exception"])
        self.assertNotIn("account_number", entry)


if __name__ == '__main__':
    unittest.main(verbosity=2)
