"""
Time-based item amounts (ascending/descending price curves).

An item whose start and end amounts differ is priced linearly over its time
window. Consideration amounts round up and offer amounts round down, so the
payer never underpays and the offerer never over-delivers.
"""

from __future__ import annotations

from typing import Optional, Protocol

from .core.amounts import ceil_div, floor_div, require_non_negative
from .core.datatypes import TimeWindow


def present_amount(
    start_amount: int,
    end_amount: int,
    window: Optional[TimeWindow],
    is_consideration: bool,
) -> int:
    """Return the amount owed at `window.current_time`.

    Without a window the start amount is used as-is. The effective time is
    clamped to [start_time, end_time] rather than rejected.
    """
    require_non_negative(start_amount, "start_amount")
    require_non_negative(end_amount, "end_amount")
    if window is None:
        return start_amount

    duration = window.duration
    if duration == 0:
        return end_amount

    t = window.current_time
    if end_amount > start_amount:
        t += window.ascending_buffer
    t = min(max(t, window.start_time), window.end_time)

    elapsed = t - window.start_time
    remaining = duration - elapsed
    total = start_amount * remaining + end_amount * elapsed
    if is_consideration:
        return ceil_div(total, duration)
    return floor_div(total, duration)


class TimeInterpolator(Protocol):
    """Interface consumed by the simulator for present-amount pricing."""

    def present_amount(
        self,
        start_amount: int,
        end_amount: int,
        window: Optional[TimeWindow],
        is_consideration: bool,
    ) -> int: ...


class LinearTimeInterpolator:
    """Default interpolator: linear curve, directional rounding."""

    def present_amount(
        self,
        start_amount: int,
        end_amount: int,
        window: Optional[TimeWindow],
        is_consideration: bool,
    ) -> int:
        return present_amount(start_amount, end_amount, window, is_consideration)


__all__ = ["present_amount", "TimeInterpolator", "LinearTimeInterpolator"]
