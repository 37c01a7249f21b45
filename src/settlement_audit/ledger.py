"""
Balance ledger keyed by (owner, asset contract, sub-identifier).

The ledger is a single flat mapping from a composite key to a signed running
balance plus the item last associated with that key. It must be fully
prepopulated via `snapshot` before any delta is applied: a lookup miss is a
caller bug and raises MissingLedgerEntryError.

The ledger is single-writer: built and mutated during simulation, read-only
afterwards. It does no locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .core.amounts import require_non_negative
from .core.datatypes import NATIVE, AssetDescriptor, BalanceWrite
from .core.exc import MissingLedgerEntryError
from .core.fmt import fmt_write

# Debug printing control
DEBUG_LEDGER = False

def _dbg(msg: str) -> None:
    if DEBUG_LEDGER:
        print(msg)


LedgerKey = Tuple[str, str, int]
BalanceSink = Callable[[BalanceWrite], None]


def ledger_key(owner: str, asset: AssetDescriptor) -> LedgerKey:
    return (owner, asset.token, asset.identifier)


@dataclass
class LedgerEntry:
    """Running balance for one key. `item` is diagnostic only, not compared."""

    owner: str
    asset: AssetDescriptor
    balance: int = 0
    item: Any = None


class BalanceLedger:
    """Flat (owner, token, identifier) -> LedgerEntry table."""

    def __init__(self, sink: Optional[BalanceSink] = None) -> None:
        self._entries: Dict[LedgerKey, LedgerEntry] = {}
        self.sink = sink

    # ------------- construction -------------

    @classmethod
    def snapshot(
        cls,
        addresses: Iterable[str],
        items: Iterable[Any],
        sink: Optional[BalanceSink] = None,
    ) -> "BalanceLedger":
        """Zero-initialise one entry per (address, item asset) pair.

        `items` may be any objects exposing `.asset`; the last item seen for an
        asset becomes that key's metadata. Insertion order is preserved.
        """
        ledger = cls(sink=sink)
        addrs = list(dict.fromkeys(addresses))
        for item in items:
            for address in addrs:
                ledger._put(address, item.asset, item)
        _dbg(f"snapshot: {len(addrs)} addresses -> {len(ledger)} entries")
        return ledger

    def _put(self, owner: str, asset: AssetDescriptor, item: Any) -> None:
        key = ledger_key(owner, asset)
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = LedgerEntry(owner, asset, 0, item)
        else:
            entry.item = item

    def add_entries(self, addresses: Iterable[str], items: Iterable[Any]) -> None:
        """Add zero entries for any missing (address, asset) pair; existing balances are kept."""
        addrs = list(dict.fromkeys(addresses))
        for item in items:
            for address in addrs:
                self._put(address, item.asset, item)

    def copy(self, sink: Optional[BalanceSink] = None) -> "BalanceLedger":
        out = BalanceLedger(sink=sink if sink is not None else self.sink)
        for key, e in self._entries.items():
            out._entries[key] = LedgerEntry(e.owner, e.asset, e.balance, e.item)
        return out

    # ------------- access -------------

    def _entry(self, owner: str, asset: AssetDescriptor) -> LedgerEntry:
        try:
            return self._entries[ledger_key(owner, asset)]
        except KeyError:
            raise MissingLedgerEntryError(owner, asset) from None

    def read(self, owner: str, asset: AssetDescriptor) -> int:
        return self._entry(owner, asset).balance

    def contains(self, owner: str, asset: AssetDescriptor) -> bool:
        return ledger_key(owner, asset) in self._entries

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        owner, asset = key
        return isinstance(asset, AssetDescriptor) and self.contains(owner, asset)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(list(self._entries.values()))

    def entries(self) -> List[LedgerEntry]:
        return list(self._entries.values())

    def balances(self) -> Dict[Tuple[str, AssetDescriptor], int]:
        """Plain {(owner, asset): balance} view, e.g. to compare two ledgers."""
        return {(e.owner, e.asset): e.balance for e in self._entries.values()}

    # ------------- mutation -------------

    def _write(self, entry: LedgerEntry, after: int, item: Any, reason: str) -> None:
        before = entry.balance
        entry.balance = after
        if item is not None:
            entry.item = item
        write = BalanceWrite(entry.owner, entry.asset, before, after, entry.item, reason)
        _dbg(f"ledger write: {fmt_write(write)}")
        if self.sink is not None:
            self.sink(write)

    def set_balance(self, owner: str, asset: AssetDescriptor, balance: int, *, reason: str = "baseline") -> None:
        entry = self._entry(owner, asset)
        self._write(entry, balance, None, reason)

    def apply_delta(
        self,
        owner: str,
        asset: AssetDescriptor,
        amount: int,
        *,
        item: Any = None,
        reason: str = "",
    ) -> int:
        """Add `amount` (may be negative) to an existing entry; return the new balance."""
        entry = self._entry(owner, asset)
        self._write(entry, entry.balance + amount, item, reason)
        return entry.balance

    def deduct_gas(self, payer: str, gas_used: int, gas_price: int) -> bool:
        """Subtract gas_used * gas_price from the payer's native entry.

        Returns False (no-op) when the payer has no native entry.
        """
        require_non_negative(gas_used, "gas_used")
        require_non_negative(gas_price, "gas_price")
        if not self.contains(payer, NATIVE):
            _dbg(f"deduct_gas: {payer} has no native entry, skipping")
            return False
        self.apply_delta(payer, NATIVE, -(gas_used * gas_price), reason="gas")
        return True


__all__ = [
    "DEBUG_LEDGER",
    "LedgerKey",
    "BalanceSink",
    "ledger_key",
    "LedgerEntry",
    "BalanceLedger",
]
