# -*- coding: utf-8 -*-
"""
Core logic of the concurrent in-memory ledger.

Balances are plain floats. Decimal-exact money is out of scope; expect tiny
rounding drift after long sequences of fractional amounts.
"""
import logging

from .account import Account
from .errors import InsufficientFunds, InvalidArgument, LedgerError
from .savings_account import SavingsAccount

# Library convention: stay silent unless the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Account",
    "SavingsAccount",
    "LedgerError",
    "InvalidArgument",
    "InsufficientFunds",
]
