# -*- coding: utf-8 -*-
"""
Interactive Ledger Console

Purpose:
- Walks through the basic account operations (deposit, refused withdrawal,
  transfer, monthly interest).
- Runs stress scenarios that exercise the locking under contention:
  1) Single Account Stress: deposit/withdraw on one account
  2) Hot-Spot: transfers between two accounts in both directions
  3) Interest Under Contention: monthly interest racing with transfers
- Log records go to stderr as JSON; results are printed as tables.
"""


from __future__ import annotations

import logging
from typing import Dict, List

from ledger.account import Account
from ledger.errors import InsufficientFunds
from ledger.logging_config import setup_logging
from ledger.money import fmt_money
from ledger.savings_account import SavingsAccount
from ledger.transaction_simulator import TransactionSimulator
import ledger.config as cfg

logger = setup_logging()


def money(x: float) -> str:
    return fmt_money(x, cfg.CURRENCY_SYMBOL)

def pause() -> None:
    """Pause for user input (safe in case of non-interactive piping)."""
    try:
        input("\nPress Enter to continue... ")
    except (EOFError, KeyboardInterrupt):
        print("")

def explain_drift_line(transfer_only: bool) -> str:
    if transfer_only:
        return ("(Final Total - Initial Total. Must be 0.00 in transfer-only (closed) scenarios.)")
    return ("(Final Total - Initial Total. Open scenario: must match the net flow of "
            "deposits, successful withdrawals and interest.)")

def print_results_table(stats: Dict, *, transfer_only: bool) -> None:
    succeeded = stats['succeeded']['total']
    attempted = stats['attempted']['total']
    by_reason = stats['failed']['by_reason']

    print("\n  --- Simulation Results ---")
    print("  " + "=" * 45)
    print(f"  {'Succeeded / Attempted Ops':<28}: {succeeded:,}/{attempted:,}")
    print(f"  {'Insufficient Funds':<28}: {by_reason['insufficient_funds']:,}")
    print(f"  {'Throughput (Ops/Sec)':<28}: {stats['ops_per_sec']:,.0f}")
    print(f"  {'Latency avg / p95 (ms)':<28}: {stats['avg_latency_ms']} / {stats['p95_latency_ms']}")
    print(f"  {'Total Money Drift':<28}: {money(stats['total_drift'])}")
    print(f"  {'':<30}  {explain_drift_line(transfer_only)}")
    print(f"  {'Unexplained Drift':<28}: {stats['unexplained_drift']:.9f}")
    print("  " + "=" * 45)

def walkthrough() -> None:
    a = Account("A100", "Alice", 1000.0)
    b = Account("B200", "Bob", 500.0)
    print(f"Initial: {a} | {b}")

    a.deposit(200.0)
    print(f"After deposit to A: {a}")

    try:
        a.withdraw(1500.0)
    except InsufficientFunds as e:
        print(f"Expected insufficient funds when withdrawing 1500 from A: {e}")

    a.transfer_to(b, 500.0)
    print("After transfer 500 from A to B:")
    print(f"  A: {a}")
    print(f"  B: {b}")

    s = SavingsAccount("S300", "Carol", 1000.0, annual_interest_rate=0.06)
    print(f"Before interest: {s}")
    interest = s.apply_monthly_interest()
    print(f"Applied monthly interest: {money(interest)}")
    print(f"After interest: {s}")

    print(f"Final: {a} | {b} | {s}")

def run_scenario(title: str, accounts: List[Account], users: int, ops: int,
                 *, transfer_prob: float, interest_prob: float = 0.0) -> None:
    print(f"\n--- {title} ---")
    print(f"{users} users x {ops:,} ops over {len(accounts)} account(s). Please wait...")
    logger.info("scenario started", extra={"scenario": title})
    # one INFO record per refused withdrawal would flood the console
    account_log = logging.getLogger("ledger.account")
    previous = account_log.level
    account_log.setLevel(logging.WARNING)
    try:
        sim = TransactionSimulator(accounts, users, ops_per_user=ops,
                                   transfer_prob=transfer_prob, interest_prob=interest_prob)
        stats = sim.run()
    finally:
        account_log.setLevel(previous)
    print_results_table(stats, transfer_only=transfer_prob >= 1.0)
    for acc in accounts[:5]:
        print(f"  {acc}")
    pause()

def menu_scenarios() -> None:
    while True:
        try:
            print("\n=== Stress Scenarios ===")
            print("1) Single Account Stress")
            print("2) Hot-Spot: Transfers Between Two Accounts")
            print("3) Interest Under Contention")
            print("0) Back to Main Menu")
            choice = input("Choice: ").strip()

            if choice == "1":
                run_scenario("Single Account Stress",
                             [Account("A00", "Stress", 1000.0)],
                             users=16, ops=5000, transfer_prob=0.0)
            elif choice == "2":
                run_scenario("Hot-Spot: Transfers Between Two Accounts",
                             [Account("A00", "Left", 1000.0), Account("A01", "Right", 1000.0)],
                             users=16, ops=5000, transfer_prob=1.0)
            elif choice == "3":
                accounts = [SavingsAccount(f"S{i:02d}", f"Saver {i}", 1000.0, annual_interest_rate=0.06)
                            for i in range(4)]
                run_scenario("Interest Under Contention", accounts,
                             users=16, ops=2000, transfer_prob=0.7, interest_prob=0.1)
            elif choice == "0":
                break
            else:
                print("Invalid choice.")
        except KeyboardInterrupt:
            print("\nReturning to main menu...")
            break

def delay_settings_menu() -> None:
    print(f"\nCurrent artificial delay: {cfg.CRIT_DELAY_SEC*1000:.2f} ms")
    s = input("Enter new value in ms (0=off, blank=cancel): ").strip()
    if not s:
        return
    try:
        ms = float(s)
        if ms < 0:
            raise ValueError
        cfg.CRIT_DELAY_SEC = ms / 1000.0
        print(f"New delay set to: {cfg.CRIT_DELAY_SEC*1000:.2f} ms")
    except ValueError:
        print("Invalid value.")

def main() -> None:
    print("== Thread-Safe Ledger CLI ==")
    print(f"Current artificial delay: {cfg.CRIT_DELAY_SEC * 1000:.1f} ms\n")

    while True:
        try:
            print("\n=== Main Menu ===")
            print("1) Walkthrough")
            print("2) Stress Scenarios")
            print("3) Delay Settings")
            print("0) Quit")
            sel = input("Choice: ").strip()

            if sel == "0":
                print("Goodbye.")
                break
            elif sel == "1":
                walkthrough()
                pause()
            elif sel == "2":
                menu_scenarios()
            elif sel == "3":
                delay_settings_menu()
                pause()
            else:
                print("Invalid choice.")
                pause()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye.")
            break

if __name__ == "__main__":
    main()
