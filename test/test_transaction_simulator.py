# -*- coding: utf-8 -*-
"""
Integration tests driven by TransactionSimulator.

- Closed (transfer-only) economy: total drift must be 0 up to float rounding.
- Open flows: total drift must be fully explained by the recorded net flow.
"""

import unittest

import ledger.config as cfg
from ledger.account import Account
from ledger.errors import InvalidArgument
from ledger.savings_account import SavingsAccount
from ledger.transaction_simulator import TransactionSimulator


class TestTransactionSimulator(unittest.TestCase):
    def _assert_counters(self, stats, users, ops_per_user):
        attempted = stats["attempted"]["total"]
        self.assertEqual(attempted, users * ops_per_user)
        self.assertEqual(stats["succeeded"]["total"] + stats["failed"]["total"], attempted)
        self.assertEqual(sum(stats["failed"]["by_reason"].values()), stats["failed"]["total"])
        self.assertEqual(stats["failed"]["by_reason"]["other"], 0)

    def test_transfer_only_has_zero_drift(self):
        accounts = [Account(f"C_{i:02d}", f"Holder {i}", 1000.0) for i in range(10)]
        sim = TransactionSimulator(accounts, users=8, ops_per_user=500, transfer_prob=1.0, seed=7)
        stats = sim.run()

        self._assert_counters(stats, 8, 500)
        self.assertAlmostEqual(stats["total_drift"], 0.0, delta=cfg.MONEY_TOLERANCE)
        self.assertEqual(stats["net_flow"], 0.0)
        self.assertTrue(all(a.get_balance() >= 0 for a in accounts))

    def test_deposit_withdraw_drift_is_explained(self):
        accounts = [Account("NC_00", "Shared", 1000.0)]
        sim = TransactionSimulator(accounts, users=8, ops_per_user=500, transfer_prob=0.0, seed=11)
        stats = sim.run()

        self._assert_counters(stats, 8, 500)
        self.assertAlmostEqual(stats["unexplained_drift"], 0.0, delta=cfg.MONEY_TOLERANCE)
        self.assertGreaterEqual(accounts[0].get_balance(), 0.0)

    def test_interest_mix_drift_is_explained(self):
        accounts = [SavingsAccount(f"S_{i:02d}", f"Saver {i}", 500.0, 0.06) for i in range(4)]
        sim = TransactionSimulator(accounts, users=8, ops_per_user=300,
                                   transfer_prob=0.5, interest_prob=0.2, seed=3)
        stats = sim.run()

        self._assert_counters(stats, 8, 300)
        self.assertAlmostEqual(stats["unexplained_drift"], 0.0, delta=cfg.MONEY_TOLERANCE)

    def test_second_run_reports_only_its_own_workload(self):
        accounts = [Account("RR_00", "Shared", 1000.0)]
        sim = TransactionSimulator(accounts, users=4, ops_per_user=200, transfer_prob=0.0, seed=5)
        sim.run()
        before_second = accounts[0].get_balance()
        stats = sim.run()

        self._assert_counters(stats, 4, 200)
        self.assertAlmostEqual(stats["unexplained_drift"], 0.0, delta=cfg.MONEY_TOLERANCE)
        self.assertAlmostEqual(stats["total_drift"], accounts[0].get_balance() - before_second,
                               delta=cfg.MONEY_TOLERANCE)

    def test_single_account_transfers_count_as_same_account(self):
        accounts = [Account("ONLY", "Solo", 100.0)]
        sim = TransactionSimulator(accounts, users=2, ops_per_user=50, transfer_prob=1.0)
        stats = sim.run()
        self.assertEqual(stats["attempted"]["total"], 100)
        self.assertEqual(stats["failed"]["by_reason"]["same_account"], 100)
        self.assertEqual(stats["total_drift"], 0.0)
        self.assertEqual(accounts[0].get_balance(), 100.0)

    def test_metrics_shape(self):
        accounts = [Account("M0", "A", 100.0), Account("M1", "B", 100.0)]
        stats = TransactionSimulator(accounts, users=2, ops_per_user=20, seed=1).run()
        for key in ("ops_per_sec", "avg_latency_ms", "p95_latency_ms",
                    "net_flow", "total_drift", "unexplained_drift"):
            self.assertIn(key, stats)
        self.assertGreater(stats["ops_per_sec"], 0.0)
        self.assertGreaterEqual(stats["p95_latency_ms"], 0.0)

    def test_invalid_parameters(self):
        acc = Account("P0", "A", 1.0)
        with self.assertRaises(InvalidArgument):
            TransactionSimulator([acc], users=0, ops_per_user=1)
        with self.assertRaises(InvalidArgument):
            TransactionSimulator([acc], users=1, ops_per_user=0)
        with self.assertRaises(InvalidArgument):
            TransactionSimulator([], users=1, ops_per_user=1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
