"""
Settlement simulator: expected post-fulfillment balances for one fill.

Flow per fulfillment:
  1. map tips onto consideration items and prorate them by the fill fraction
     (denominator = the order's maximum fillable size);
  2. rescale the order's own amounts for the fill (unit or status mode);
  3. snapshot the ledger over {offerer, fulfiller, every recipient} x every item;
  4. offer items move offerer -> fulfiller at the descending (round-down) price;
  5. consideration and tip items move fulfiller -> recipient at the ascending
     (round-up) price;
  6. the fulfiller's native entry pays gas, once.

No I/O happens here and the input order is never mutated. Any precondition
violation aborts the whole call; no partial ledger is returned.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .core.datatypes import (
    ConsiderationItem,
    FilledStatus,
    FillParameters,
    Order,
    TimeWindow,
    TipItem,
    TransactionReceipt,
    UnitsToFill,
)
from .core.exc import FillParametersError, PreconditionViolation
from .interpolation import LinearTimeInterpolator, TimeInterpolator
from .ledger import BalanceLedger, BalanceSink
from .resolver import AmountResolver, FractionalAmountResolver, tip_ratio
from .tips import scale_tips

# Debug printing control
DEBUG_SIMULATOR = False

def _dbg(msg: str) -> None:
    if DEBUG_SIMULATOR:
        print(msg)


class SettlementSimulator:
    """Compute the expected ledger for one fulfillment.

    Collaborators are injectable; the defaults are the exact-integer resolver
    and the linear interpolator. `sink` receives every ledger write.
    """

    def __init__(
        self,
        resolver: Optional[AmountResolver] = None,
        interpolator: Optional[TimeInterpolator] = None,
        sink: Optional[BalanceSink] = None,
    ) -> None:
        self.resolver = resolver if resolver is not None else FractionalAmountResolver()
        self.interpolator = interpolator if interpolator is not None else LinearTimeInterpolator()
        self.sink = sink

    # ------------- helpers -------------

    def prorated_tips(self, order: Order, fill: FillParameters, tips: Sequence[TipItem]) -> tuple:
        """Tips as consideration items, scaled for this fill."""
        if not tips:
            return ()
        tip_items = [self.resolver.to_consideration_item(t) for t in tips]
        max_units = None
        if isinstance(fill, UnitsToFill):
            max_units = self.resolver.max_fillable_size(order)
        num, den = tip_ratio(order, fill, max_units)
        _dbg(f"prorated_tips: {len(tip_items)} tips scaled by {num}/{den}")
        return scale_tips(tip_items, num, den)

    def adjusted_order(self, order: Order, fill: FillParameters) -> Order:
        if isinstance(fill, UnitsToFill):
            return self.resolver.rescale_by_fraction(order, fill.units, fill.total_size, fill.total_filled)
        if isinstance(fill, FilledStatus):
            return self.resolver.rescale_by_filled_status(order, fill.total_filled, fill.total_size)
        raise FillParametersError(f"unsupported fill parameters: {type(fill).__name__}")

    @staticmethod
    def relevant_addresses(offerer: str, fulfiller: str, consideration: Iterable[ConsiderationItem]) -> list:
        seen = [offerer, fulfiller] + [item.recipient for item in consideration]
        return list(dict.fromkeys(seen))

    # ------------- entry point -------------

    def simulate(
        self,
        order: Order,
        fill: Optional[FillParameters],
        fulfiller: str,
        *,
        tips: Sequence[TipItem] = (),
        time_window: Optional[TimeWindow] = None,
        gas_used: int = 0,
        gas_price: int = 0,
        receipt: Optional[TransactionReceipt] = None,
        baseline: Optional[BalanceLedger] = None,
    ) -> BalanceLedger:
        """Return the expected ledger after `fulfiller` executes `fill` on `order`.

        `fill=None` means a full fill of an untouched order. `receipt` is an
        alternative to gas_used/gas_price. With a `baseline` ledger the result
        holds absolute balances; without one it holds deltas.
        """
        if receipt is not None:
            if gas_used or gas_price:
                raise PreconditionViolation("pass either receipt or gas_used/gas_price, not both")
            gas_used, gas_price = receipt.gas_used, receipt.gas_price
        if fill is None:
            fill = FilledStatus()

        scaled_tips = self.prorated_tips(order, fill, tips)
        adjusted = self.adjusted_order(order, fill)
        consideration = adjusted.consideration + tuple(scaled_tips)

        addresses = self.relevant_addresses(adjusted.offerer, fulfiller, consideration)
        items = adjusted.offer + consideration
        if baseline is None:
            ledger = BalanceLedger.snapshot(addresses, items, sink=self.sink)
        else:
            ledger = baseline.copy(sink=self.sink)
            ledger.add_entries(addresses, items)

        for item in adjusted.offer:
            exchanged = self.interpolator.present_amount(
                item.start_amount, item.end_amount, time_window, False
            )
            ledger.apply_delta(adjusted.offerer, item.asset, -exchanged, item=item, reason="offer out")
            ledger.apply_delta(fulfiller, item.asset, exchanged, item=item, reason="offer in")

        for item in consideration:
            exchanged = self.interpolator.present_amount(
                item.start_amount, item.end_amount, time_window, True
            )
            ledger.apply_delta(fulfiller, item.asset, -exchanged, item=item, reason="consideration out")
            ledger.apply_delta(item.recipient, item.asset, exchanged, item=item, reason="consideration in")

        ledger.deduct_gas(fulfiller, gas_used, gas_price)
        return ledger


def simulate(
    order: Order,
    fill: Optional[FillParameters],
    fulfiller: str,
    **kwargs,
) -> BalanceLedger:
    """Module-level shortcut using the default collaborators."""
    return SettlementSimulator().simulate(order, fill, fulfiller, **kwargs)


__all__ = ["DEBUG_SIMULATOR", "SettlementSimulator", "simulate"]
