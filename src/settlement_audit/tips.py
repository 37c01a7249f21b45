"""Tip proration: scale fixed side payments by the fill fraction (rounding up)."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Tuple

from .core.amounts import mul_div
from .core.datatypes import ConsiderationItem
from .core.exc import FillParametersError


def scale_tip_amount(amount: int, fill_numerator: int, fill_denominator: int) -> int:
    """ceil(amount * num / den), the same rule as consideration scaling."""
    if fill_denominator == 0:
        raise FillParametersError("tip proration denominator must be non-zero")
    return mul_div(amount, fill_numerator, fill_denominator, round_up=True)


def scale_tips(
    tips: Iterable[ConsiderationItem],
    fill_numerator: int,
    fill_denominator: int,
) -> Tuple[ConsiderationItem, ...]:
    """Prorate tips already mapped to consideration items.

    `fill_denominator` is the order's maximum fillable size so a partial fill
    never underpays a tip recipient relative to the fraction filled.
    """
    if fill_denominator == 0:
        raise FillParametersError("tip proration denominator must be non-zero")
    return tuple(
        replace(
            tip,
            start_amount=scale_tip_amount(tip.start_amount, fill_numerator, fill_denominator),
            end_amount=scale_tip_amount(tip.end_amount, fill_numerator, fill_denominator),
        )
        for tip in tips
    )


__all__ = ["scale_tip_amount", "scale_tips"]
