"""
Order amount resolution for partial fills.

Every item amount is rescaled by the fill fraction in the integer domain:
offer amounts round down and consideration amounts round up, matching the way
an exchange contract prorates partial fills. The fraction itself is exact
(`fractions.Fraction`), never a float or basis-point approximation.

Two ways of describing a fill converge on the same fraction:
  - UnitsToFill: `units` out of the order's maximum fillable size (gcd of all
    amounts), capped to what the on-chain status says is left.
  - FilledStatus: the status observed before the fulfillment; the fulfillment
    consumes the remainder.
"""

from __future__ import annotations

import math
from dataclasses import replace
from fractions import Fraction
from functools import reduce
from typing import Optional, Protocol, Tuple

from .core.amounts import scale_by_fraction
from .core.datatypes import (
    ConsiderationItem,
    FilledStatus,
    FillParameters,
    Order,
    TipItem,
    UnitsToFill,
)
from .core.exc import FillParametersError

_ONE = Fraction(1)


# ----------------------------
# Size basis
# ----------------------------

def max_fillable_size(order: Order) -> int:
    """Largest unit count the order divides into evenly (gcd of all amounts).

    Zero amounts do not constrain the gcd; an all-zero order has size 1.
    """
    amounts = []
    for item in order.items():
        amounts.append(item.start_amount)
        amounts.append(item.end_amount)
    size = reduce(math.gcd, amounts, 0)
    return size if size > 0 else 1


def _remaining_fraction(total_filled: int, total_size: int) -> Fraction:
    if total_size == 0 or total_filled == 0:
        return _ONE
    return Fraction(total_size - total_filled, total_size)


def fill_fraction(order: Order, fill: FillParameters, max_units: Optional[int] = None) -> Fraction:
    """Resolve either fill representation to the fraction of the order being filled.

    `max_units` overrides the gcd size basis for unit fills.
    """
    if isinstance(fill, UnitsToFill):
        if max_units is None:
            max_units = max_fillable_size(order)
        if max_units <= 0:
            raise FillParametersError(f"maximum fillable size must be > 0, got {max_units}")
        requested = Fraction(fill.units, max_units)
        return min(requested, _remaining_fraction(fill.total_filled, fill.total_size))
    if isinstance(fill, FilledStatus):
        return _remaining_fraction(fill.total_filled, fill.total_size)
    raise FillParametersError(f"unsupported fill parameters: {type(fill).__name__}")


def tip_ratio(order: Order, fill: FillParameters, max_units: Optional[int] = None) -> Tuple[int, int]:
    """Return (numerator, denominator) for prorating tips.

    For unit fills the denominator is the maximum fillable size, not the
    status `total_size`. A capped unit fill and status fills use the resolved
    fraction directly.
    """
    if isinstance(fill, UnitsToFill) and max_units is None:
        max_units = max_fillable_size(order)
    fraction = fill_fraction(order, fill, max_units)
    if isinstance(fill, UnitsToFill):
        if fraction == Fraction(fill.units, max_units):
            return fill.units, max_units
    return fraction.numerator, fraction.denominator


# ----------------------------
# Rescaling
# ----------------------------

def rescale(order: Order, fraction: Fraction) -> Order:
    """Return a new Order with every amount scaled by `fraction`."""
    if fraction < 0:
        raise FillParametersError(f"negative fill fraction: {fraction}")
    if fraction == _ONE:
        return order
    offer = tuple(
        replace(
            item,
            start_amount=scale_by_fraction(item.start_amount, fraction, round_up=False),
            end_amount=scale_by_fraction(item.end_amount, fraction, round_up=False),
        )
        for item in order.offer
    )
    consideration = tuple(
        replace(
            item,
            start_amount=scale_by_fraction(item.start_amount, fraction, round_up=True),
            end_amount=scale_by_fraction(item.end_amount, fraction, round_up=True),
        )
        for item in order.consideration
    )
    return replace(order, offer=offer, consideration=consideration)


def rescale_by_fraction(
    order: Order,
    units_to_fill: int,
    total_size: int = 0,
    total_filled: int = 0,
    max_units: Optional[int] = None,
) -> Order:
    fill = UnitsToFill(units_to_fill, total_size, total_filled)
    return rescale(order, fill_fraction(order, fill, max_units))


def rescale_by_filled_status(order: Order, total_filled: int, total_size: int) -> Order:
    return rescale(order, fill_fraction(order, FilledStatus(total_filled, total_size)))


def to_consideration_item(tip: TipItem) -> ConsiderationItem:
    """Map a tip onto the consideration item shape (start == end == amount)."""
    return ConsiderationItem(
        asset=tip.asset,
        start_amount=tip.amount,
        end_amount=tip.amount,
        recipient=tip.recipient,
        item_type=tip.item_type,
    )


# ----------------------------
# Collaborator interface
# ----------------------------

class AmountResolver(Protocol):
    """Interface consumed by the simulator for order rescaling."""

    def rescale_by_fraction(self, order: Order, units_to_fill: int, total_size: int = 0, total_filled: int = 0) -> Order: ...

    def rescale_by_filled_status(self, order: Order, total_filled: int, total_size: int) -> Order: ...

    def max_fillable_size(self, order: Order) -> int: ...

    def to_consideration_item(self, tip: TipItem) -> ConsiderationItem: ...


class FractionalAmountResolver:
    """Default resolver backed by the module-level functions."""

    def rescale_by_fraction(self, order: Order, units_to_fill: int, total_size: int = 0, total_filled: int = 0) -> Order:
        return rescale_by_fraction(order, units_to_fill, total_size, total_filled, self.max_fillable_size(order))

    def rescale_by_filled_status(self, order: Order, total_filled: int, total_size: int) -> Order:
        return rescale_by_filled_status(order, total_filled, total_size)

    def max_fillable_size(self, order: Order) -> int:
        return max_fillable_size(order)

    def to_consideration_item(self, tip: TipItem) -> ConsiderationItem:
        return to_consideration_item(tip)


__all__ = [
    "max_fillable_size",
    "fill_fraction",
    "tip_ratio",
    "rescale",
    "rescale_by_fraction",
    "rescale_by_filled_status",
    "to_consideration_item",
    "AmountResolver",
    "FractionalAmountResolver",
]
