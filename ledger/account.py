# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Account - Lock-Based Balance

- Every account owns an RLock; the balance is never read or written outside it.
- Check-then-act sequences (withdraw, transfer) run as one critical section.
- Transfers take both locks in a canonical order so two opposite transfers
  between the same pair cannot deadlock.
- Amount validation goes through money.py.
"""

import logging
from threading import RLock
import time

import ledger.config as cfg
from .errors import InsufficientFunds, InvalidArgument
from .money import validate_non_negative

logger = logging.getLogger(__name__)


class Account:
    def __init__(self, account_number: str, account_holder: str,
                 initial_balance: float = cfg.DEFAULT_INITIAL_BALANCE):
        # Lock ordering compares account numbers, so they must all be str
        if not isinstance(account_number, str):
            raise InvalidArgument(f"account_number must be a string, got {account_number!r}")
        self._account_number = account_number
        self._account_holder = account_holder
        self._balance = validate_non_negative(initial_balance, "Initial balance")
        self._lock = RLock()

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(account_number={self._account_number!r}, "
                f"account_holder={self._account_holder!r}, balance={self.get_balance()})")

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def account_holder(self) -> str:
        return self._account_holder

    def get_balance(self) -> float:
        with self._lock:
            return self._balance

    def _lock_key(self):
        # Total order over accounts; id() breaks ties between distinct
        # objects that happen to share an account number.
        return (self._account_number, id(self))

    def deposit(self, amount: float) -> None:
        amt = validate_non_negative(amount)
        with self._lock:
            if cfg.CRIT_DELAY_SEC > 0:
                time.sleep(cfg.CRIT_DELAY_SEC)
            self._balance += amt
            logger.debug("deposit %s into %s -> %s", amt, self._account_number, self._balance)

    def withdraw(self, amount: float) -> None:
        amt = validate_non_negative(amount)
        with self._lock:
            if amt > self._balance:
                logger.info(
                    "withdraw refused: insufficient funds",
                    extra={"account_number": self._account_number,
                           "operation": "withdraw", "amount": amt},
                )
                raise InsufficientFunds(self._account_number, amt, self._balance)
            if cfg.CRIT_DELAY_SEC > 0:
                time.sleep(cfg.CRIT_DELAY_SEC)
            self._balance -= amt
            logger.debug("withdraw %s from %s -> %s", amt, self._account_number, self._balance)

    def transfer_to(self, other: Account, amount: float) -> None:
        amt = validate_non_negative(amount)
        if other is self:
            raise InvalidArgument("Cannot transfer to the same account")

        first, second = (self, other) if self._lock_key() < other._lock_key() else (other, self)
        with first._lock:
            with second._lock:
                if amt > self._balance:
                    logger.info(
                        "transfer refused: insufficient funds",
                        extra={"account_number": self._account_number,
                               "operation": "transfer", "amount": amt},
                    )
                    raise InsufficientFunds(self._account_number, amt, self._balance)
                if cfg.CRIT_DELAY_SEC > 0:
                    time.sleep(cfg.CRIT_DELAY_SEC)
                self._balance -= amt
                other._balance += amt
                logger.debug("transfer %s from %s to %s",
                             amt, self._account_number, other._account_number)
