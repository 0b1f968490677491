# -*- coding: utf-8 -*-
"""
Money Handling Utilities.

Purpose:
- Normalizes every monetary input to a plain ``float``. Balances are kept in
  binary floating point, so long runs of deposits and withdrawals can pick up
  rounding error; callers comparing totals should use ``cfg.MONEY_TOLERANCE``.
- Centralizes the non-negativity rule shared by amounts, initial balances
  and interest rates.
"""

import math

from .errors import InvalidArgument


def as_amount(value, what: str = "Amount") -> float:
    """
    Convert ``value`` to a finite float.

    Raises InvalidArgument for anything that is not a real number
    (strings, None, NaN, infinities). Booleans are refused as well.
    """
    # float() would happily parse "1000" or b" 1e3 "
    if isinstance(value, (bool, str, bytes, bytearray)):
        raise InvalidArgument(f"{what} must be a number, got {value!r}")
    try:
        amt = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{what} must be a number, got {value!r}") from None
    if not math.isfinite(amt):
        raise InvalidArgument(f"{what} must be finite, got {value!r}")
    return amt


def validate_non_negative(value, what: str = "Amount") -> float:
    """
    Validate that ``value`` is a finite number >= 0 and return it as float.

    Zero is accepted: depositing or withdrawing 0 is a valid no-op.
    """
    amt = as_amount(value, what)
    if amt < 0:
        raise InvalidArgument(f"{what} cannot be negative: {amt}")
    return amt


def fmt_money(value: float, symbol: str = "") -> str:
    return f"{symbol}{value:,.2f}"
