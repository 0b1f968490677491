# -*- coding: utf-8 -*-
"""
Exception classes for the ledger.

- InvalidArgument is a caller error (bad amount, bad rate, self-transfer).
  It is never recovered internally.
- InsufficientFunds is an expected business outcome; callers catch it and
  react (abort, notify) instead of crashing.
"""


class LedgerError(Exception):
    """Base class for every failure raised by the ledger."""


class InvalidArgument(LedgerError, ValueError):
    """
    Raised when an input is out of domain:
    - Negative or non-finite amount / initial balance.
    - Negative interest rate.
    - Transfer whose destination is the source account itself.
    """


class InsufficientFunds(LedgerError):
    """
    Raised when a withdrawal or transfer would drive a balance below zero.
    The balance is left exactly as it was.
    """

    def __init__(self, account_number: str, requested: float, available: float):
        self.account_number = account_number
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient funds in account {account_number}: "
            f"requested {requested:.2f}, available {available:.2f}"
        )
