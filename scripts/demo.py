"""Demo: expected balances for one fulfillment, verified against an in-memory oracle.

Scenarios covered:
S1) Full fill: 100 A for 10 native, 21000 gas at 1 gwei
S2) Partial fill (--units of 10) with an optional tip
S3) Tampered oracle (--off-by) to show a mismatch report
"""
from __future__ import annotations

import argparse
import asyncio
import sys

from settlement_audit import (
    NATIVE,
    AssetDescriptor,
    ConsiderationItem,
    OfferItem,
    Order,
    SettlementOptions,
    SettlementSimulator,
    StaticBalanceOracle,
    TipItem,
    UnitsToFill,
    format_mismatches,
    simulate_and_verify,
)
from settlement_audit.core import GWEI, fmt_asset, fmt_write

OFFERER = "0x00000000000000000000000000000000000000a1"
FULFILLER = "0x00000000000000000000000000000000000000f1"
TIP_RECIPIENT = "0x00000000000000000000000000000000000000b7"
TOKEN_A = AssetDescriptor("0x000000000000000000000000000000000000aaaa", 0)


# ---------- pretty printers ----------

def print_ledger(title: str, ledger) -> None:
    print(f"\n=== {title} ===")
    for e in ledger:
        print(f"  • {e.owner} {fmt_asset(e.asset)}: {e.balance}")


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Simulate and verify one order fulfillment.")
    p.add_argument("--units", type=int, default=None, help="Units to fill out of 10 (default: full fill)")
    p.add_argument("--tip", type=int, default=0, help="Native tip to a third party (prorated)")
    p.add_argument("--gas-used", type=int, default=21_000)
    p.add_argument("--gas-price", type=int, default=GWEI)
    p.add_argument("--off-by", type=int, default=0, help="Perturb the fulfiller's observed native balance")
    p.add_argument("--trace", action="store_true", help="Print every ledger write")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    order = Order(
        offerer=OFFERER,
        offer=[OfferItem(TOKEN_A, 100, 100)],
        consideration=[ConsiderationItem(NATIVE, 10, 10, OFFERER)],
    )
    fill = UnitsToFill(args.units) if args.units else None
    tips = [TipItem(NATIVE, args.tip, TIP_RECIPIENT)] if args.tip else []
    sink = (lambda w: print(f"    write {fmt_write(w)}")) if args.trace else None

    expected = SettlementSimulator(sink=sink).simulate(
        order, fill, FULFILLER, tips=tips, gas_used=args.gas_used, gas_price=args.gas_price,
    )
    print_ledger("Expected deltas", expected)

    # Stand-in for the chain: the expected values, optionally tampered
    oracle = StaticBalanceOracle.from_ledger(expected)
    if args.off_by:
        oracle.set(FULFILLER, NATIVE, expected.read(FULFILLER, NATIVE) + args.off_by)

    opts = SettlementOptions(tips=tips, gas_used=args.gas_used, gas_price=args.gas_price)
    mismatches = asyncio.run(simulate_and_verify(order, fill, oracle, opts, fulfiller=FULFILLER))
    print("\n" + format_mismatches(mismatches))
    return 1 if mismatches else 0


if __name__ == "__main__":
    sys.exit(main())
