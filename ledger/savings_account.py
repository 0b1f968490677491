# -*- coding: utf-8 -*-
"""
Savings Account - Account plus a monthly interest policy.

- annual_interest_rate is a decimal fraction (0.03 = 3% per year).
- apply_monthly_interest() credits balance * (annual_interest_rate / 12).
- Reading the balance, computing the interest and crediting it happen under
  the account's own RLock, so no deposit, withdrawal, transfer or rate change
  can slip in between and leave the interest computed on a stale balance.
"""

import logging

import ledger.config as cfg
from .account import Account
from .money import validate_non_negative

logger = logging.getLogger(__name__)


class SavingsAccount(Account):
    def __init__(self, account_number: str, account_holder: str,
                 initial_balance: float = cfg.DEFAULT_INITIAL_BALANCE,
                 annual_interest_rate: float = 0.0):
        super().__init__(account_number, account_holder, initial_balance)
        self._annual_interest_rate = 0.0
        self.set_annual_interest_rate(annual_interest_rate)

    @classmethod
    def open(cls, account_number: str, account_holder: str,
             annual_interest_rate: float) -> "SavingsAccount":
        """Open an empty savings account at the given annual rate."""
        return cls(account_number, account_holder,
                   cfg.DEFAULT_INITIAL_BALANCE, annual_interest_rate)

    def __repr__(self) -> str:
        with self._lock:
            return (f"{type(self).__name__}(account_number={self.account_number!r}, "
                    f"account_holder={self.account_holder!r}, balance={self._balance}, "
                    f"annual_interest_rate={self._annual_interest_rate})")

    def get_annual_interest_rate(self) -> float:
        with self._lock:
            return self._annual_interest_rate

    def set_annual_interest_rate(self, annual_interest_rate: float) -> None:
        rate = validate_non_negative(annual_interest_rate, "annual_interest_rate")
        with self._lock:
            self._annual_interest_rate = rate

    annual_interest_rate = property(get_annual_interest_rate, set_annual_interest_rate)

    @property
    def monthly_interest_rate(self) -> float:
        return self.get_annual_interest_rate() / cfg.MONTHS_PER_YEAR

    def apply_monthly_interest(self) -> float:
        """
        Apply one month's interest to this account.

        Returns the interest credited; 0.0 when the balance is empty.
        """
        with self._lock:
            interest = self._balance * (self._annual_interest_rate / cfg.MONTHS_PER_YEAR)
            if interest > 0:
                # RLock: deposit re-enters the lock we already hold
                self.deposit(interest)
        logger.debug("monthly interest %s applied to %s", interest, self.account_number)
        return interest
