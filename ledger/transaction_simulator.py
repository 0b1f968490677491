# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import random
import time
from threading import Thread, Lock
from typing import Dict, List, Tuple

import ledger.config as cfg
from .account import Account
from .errors import InsufficientFunds, InvalidArgument
from .savings_account import SavingsAccount

"""
Concurrent Transaction Simulator

Purpose:
- Drive concurrent workloads (deposit, withdraw, transfer, monthly interest)
  over a list of accounts.
- Produce metrics that show whether the balance invariants held.

Collected metrics:
- attempted.total / succeeded.total / failed.total
- failed.by_reason: {insufficient_funds, invalid_argument, same_account, other}
- avg_latency_ms, p95_latency_ms (per-operation wall-clock latency)
- ops_per_sec (throughput under load)
- net_flow: deposits - successful withdrawals + interest credited
- total_drift: final total - initial total
- unexplained_drift: total_drift - net_flow. Lost updates show up here; with
  race-free accounts it is zero up to float rounding.

Notes:
- Python threads are used; the GIL limits CPU parallelism but thread switches
  inside read-modify-write sequences still surface races.
"""

logger = logging.getLogger(__name__)


class TransactionSimulator:
    """
    Runs ``users`` threads, each performing ``ops_per_user`` random operations
    on the given accounts.

    - Transfer-only workloads are closed: total_drift must be 0.
    - Mixed workloads are open: total_drift must equal net_flow.
    """

    def __init__(self,
                 accounts: List[Account],
                 users: int,
                 ops_per_user: int,
                 transfer_prob: float = 0.5,
                 interest_prob: float = 0.0,
                 seed: int | None = None):
        if not accounts:
            raise InvalidArgument("At least one account is required")
        if users <= 0 or ops_per_user <= 0:
            raise InvalidArgument("users and ops_per_user must be positive")
        self.accounts = accounts
        self.users = users
        self.ops_per_user = ops_per_user
        self.transfer_prob = max(0.0, min(1.0, float(transfer_prob)))
        self.interest_prob = max(0.0, min(1.0, float(interest_prob)))
        self._savings = [a for a in accounts if isinstance(a, SavingsAccount)]
        self._rng = random.Random(seed)
        self._rng_lock = Lock()
        self._mtx = Lock()
        self._reset_metrics()

    def _reset_metrics(self) -> None:
        """Zero the shared metrics; every run() reports on its own workload only."""
        self._attempted = 0
        self._succeeded = 0
        self._failed = 0
        self._failed_by_reason = {
            'insufficient_funds': 0,
            'invalid_argument': 0,
            'same_account': 0,
            'other': 0,
        }
        self._net_flow = 0.0
        self._latencies: List[float] = []  # seconds per op

    # ---------- helpers ----------
    def _random(self) -> float:
        with self._rng_lock:
            return self._rng.random()

    def _pick_two(self) -> Tuple[Account, Account]:
        """Pick two accounts (the same one twice if only one account exists)."""
        with self._rng_lock:
            if len(self.accounts) >= 2:
                a, b = self._rng.sample(self.accounts, 2)
                return a, b
            return self.accounts[0], self.accounts[0]

    def _pick(self, accounts: List[Account]) -> Account:
        with self._rng_lock:
            return self._rng.choice(accounts)

    def _amount(self) -> float:
        """Random amount between 0.01 and SIM_MAX_AMOUNT_CENTS / 100."""
        with self._rng_lock:
            cents = self._rng.randint(1, cfg.SIM_MAX_AMOUNT_CENTS)
        return cents / 100

    def _record(self, started: float, reason: str | None, flow: float = 0.0) -> None:
        elapsed = time.perf_counter() - started
        with self._mtx:
            self._attempted += 1
            self._latencies.append(elapsed)
            if reason is None:
                self._succeeded += 1
                self._net_flow += flow
            else:
                self._failed += 1
                self._failed_by_reason[reason] += 1

    def _run_op(self, op, flow: float) -> None:
        t0 = time.perf_counter()
        try:
            result = op()
        except InsufficientFunds:
            self._record(t0, 'insufficient_funds')
        except InvalidArgument:
            self._record(t0, 'invalid_argument')
        except Exception:
            logger.exception("unexpected failure during simulated operation")
            self._record(t0, 'other')
        else:
            self._record(t0, None, flow if result is None else result)

    def _do_transfer(self) -> None:
        src, dst = self._pick_two()
        if src is dst:
            with self._mtx:
                self._attempted += 1
                self._failed += 1
                self._failed_by_reason['same_account'] += 1
            return
        amt = self._amount()
        self._run_op(lambda: src.transfer_to(dst, amt), 0.0)

    def _do_interest(self) -> None:
        acc = self._pick(self._savings)
        # apply_monthly_interest returns the credited amount, recorded as flow
        self._run_op(acc.apply_monthly_interest, 0.0)

    def _do_dw(self) -> None:
        acc = self._pick(self.accounts)
        amt = self._amount()
        if self._random() < 0.5:
            self._run_op(lambda: acc.deposit(amt), amt)
        else:
            self._run_op(lambda: acc.withdraw(amt), -amt)

    def _worker(self) -> None:
        for _ in range(self.ops_per_user):
            roll = self._random()
            if roll < self.transfer_prob:
                self._do_transfer()
            elif roll < self.transfer_prob + self.interest_prob and self._savings:
                self._do_interest()
            else:
                self._do_dw()

    def _total(self) -> float:
        return sum(a.get_balance() for a in self.accounts)

    # ---------- public ----------
    def run(self) -> Dict:
        """
        Run all worker threads and return the metrics dict described in the
        module docstring.
        """
        self._reset_metrics()
        start_total = self._total()
        t0 = time.perf_counter()

        threads = [Thread(target=self._worker, daemon=True) for _ in range(self.users)]
        for th in threads: th.start()
        for th in threads: th.join()

        elapsed = max(time.perf_counter() - t0, 1e-9)
        end_total = self._total()
        drift = end_total - start_total

        lats = sorted(self._latencies)
        avg_ms = (sum(lats) / len(lats) * 1000.0) if lats else 0.0
        p95_ms = (lats[int(cfg.SIM_P95 * (len(lats) - 1))] * 1000.0) if lats else 0.0

        stats = {
            'attempted': {'total': self._attempted},
            'succeeded': {'total': self._succeeded},
            'failed': {
                'total': self._failed,
                'by_reason': self._failed_by_reason.copy(),
            },
            'ops_per_sec': float(self._attempted) / elapsed,
            'avg_latency_ms': round(avg_ms, 3),
            'p95_latency_ms': round(p95_ms, 3),
            'net_flow': self._net_flow,
            'total_drift': drift,
            'unexplained_drift': drift - self._net_flow,
        }
        logger.debug("simulation finished: %s", stats)
        return stats
