"""
Central Configuration File (SSOT).

Modules read these as ``cfg.NAME`` at call time, so tweaking a value at
runtime (the demo's delay menu, a test's setUp) takes effect immediately.
"""

# --- Business Rules ---
CURRENCY_SYMBOL = "$"
DEFAULT_INITIAL_BALANCE: float = 0.0
MONTHS_PER_YEAR: int = 12

# Balances are floats; totals compared after many operations may differ
# from the exact sum by accumulated rounding error.
MONEY_TOLERANCE: float = 1e-6

# --- Concurrency ---
CRIT_DELAY_SEC: float = 0.0  # artificial critical-section delay, 0 = off

# --- Logging ---
LOG_LEVEL = "INFO"
LOGGER_NAME = "ledger"

# --- Simulation Settings ---
SIM_MAX_AMOUNT_CENTS: int = 5000
SIM_P95: float = 0.95
