"""
Verifier: compare an expected ledger against observed balances.

Oracle queries are pure reads, so every key is queried concurrently and the
report is produced after the full fan-out completes. Mismatches are returned
as data; oracle errors propagate to the caller unchanged.
"""

from __future__ import annotations

import asyncio
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from .core.datatypes import AssetDescriptor, Mismatch, Order, TipItem
from .ledger import BalanceLedger, BalanceSink
from .resolver import to_consideration_item
from .simulator import SettlementSimulator

# Debug printing control
DEBUG_VERIFIER = False

def _dbg(msg: str) -> None:
    if DEBUG_VERIFIER:
        print(msg)


class BalanceOracle(Protocol):
    """Source of observed balances (a chain client, an indexer, a fixture)."""

    async def get(self, owner: str, asset: AssetDescriptor) -> int: ...


class StaticBalanceOracle:
    """In-memory oracle over a {(owner, asset): balance} mapping.

    Unknown keys return `default`.
    """

    def __init__(self, balances: Optional[Mapping[Tuple[str, AssetDescriptor], int]] = None, default: int = 0) -> None:
        self._balances: Dict[Tuple[str, AssetDescriptor], int] = dict(balances or {})
        self.default = default
        self.queries = 0

    @classmethod
    def from_ledger(cls, ledger: BalanceLedger) -> "StaticBalanceOracle":
        return cls(ledger.balances())

    def set(self, owner: str, asset: AssetDescriptor, balance: int) -> None:
        self._balances[(owner, asset)] = balance

    async def get(self, owner: str, asset: AssetDescriptor) -> int:
        self.queries += 1
        return self._balances.get((owner, asset), self.default)


async def verify(expected: BalanceLedger, oracle: BalanceOracle) -> List[Mismatch]:
    """Query every ledger key concurrently and report each inequality.

    Results keep the ledger's iteration order. No short-circuit on mismatch.
    """
    entries = expected.entries()
    actuals = await asyncio.gather(*(oracle.get(e.owner, e.asset) for e in entries))
    mismatches = []
    for entry, actual in zip(entries, actuals):
        _dbg(f"expected balance {entry.balance} actual balance {actual}")
        if actual != entry.balance:
            mismatches.append(Mismatch(entry.owner, entry.asset, entry.balance, actual))
    return mismatches


async def snapshot_balances(
    order: Order,
    fulfiller: str,
    oracle: BalanceOracle,
    tips: Sequence[TipItem] = (),
    sink: Optional[BalanceSink] = None,
) -> BalanceLedger:
    """Capture pre-fulfillment balances for every key the fulfillment can touch.

    Keys are prepopulated first, then all balances are fetched concurrently.
    """
    consideration = order.consideration + tuple(to_consideration_item(t) for t in tips)
    addresses = SettlementSimulator.relevant_addresses(order.offerer, fulfiller, consideration)
    ledger = BalanceLedger.snapshot(addresses, order.offer + consideration, sink=sink)
    entries = ledger.entries()
    observed = await asyncio.gather(*(oracle.get(e.owner, e.asset) for e in entries))
    for entry, balance in zip(entries, observed):
        ledger.set_balance(entry.owner, entry.asset, balance)
    return ledger


__all__ = [
    "DEBUG_VERIFIER",
    "BalanceOracle",
    "StaticBalanceOracle",
    "verify",
    "snapshot_balances",
]
