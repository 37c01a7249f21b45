"""
Public entry point: simulate one fulfillment and verify observed balances.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .core.datatypes import FillParameters, Mismatch, Order, TimeWindow, TipItem
from .core.fmt import fmt_mismatch
from .ledger import BalanceLedger, BalanceSink
from .simulator import SettlementSimulator
from .verifier import BalanceOracle, verify


@dataclass(frozen=True)
class SettlementOptions:
    """Optional settlement inputs.

    Defaults: no tips, static amounts, no fee deduction, delta-only ledger.
    """

    tips: Sequence[TipItem] = ()
    time_window: Optional[TimeWindow] = None
    gas_used: int = 0
    gas_price: int = 0
    baseline: Optional[BalanceLedger] = None
    sink: Optional[BalanceSink] = None


async def simulate_and_verify(
    order: Order,
    fill: Optional[FillParameters],
    oracle: BalanceOracle,
    options: Optional[SettlementOptions] = None,
    *,
    fulfiller: str,
    simulator: Optional[SettlementSimulator] = None,
) -> List[Mismatch]:
    """Return every (owner, asset) whose observed balance differs from expected.

    An empty list means the fulfillment settled exactly as the order dictates.
    Whether any mismatch is a failure is the caller's decision.
    """
    opts = options if options is not None else SettlementOptions()
    sim = simulator if simulator is not None else SettlementSimulator(sink=opts.sink)
    expected = sim.simulate(
        order,
        fill,
        fulfiller,
        tips=opts.tips,
        time_window=opts.time_window,
        gas_used=opts.gas_used,
        gas_price=opts.gas_price,
        baseline=opts.baseline,
    )
    return await verify(expected, oracle)


def format_mismatches(mismatches: Sequence[Mismatch]) -> str:
    if not mismatches:
        return "all balances match"
    lines = [f"{len(mismatches)} balance mismatch(es):"]
    lines.extend(f"  - {fmt_mismatch(m)}" for m in mismatches)
    return "\n".join(lines)


__all__ = ["SettlementOptions", "simulate_and_verify", "format_mismatches"]
