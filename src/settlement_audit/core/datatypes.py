"""
Core datatypes for orders, fills and balance reports.

These datatypes are intentionally minimal and immutable so that the simulator
can remain deterministic and testable. The amount resolver produces new Order
values rather than mutating existing ones.

Notes:
- Amounts are plain ints in base units (wei for native currency).
- An asset is identified by (token, identifier); native currency uses the zero
  contract marker with identifier 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Union

from .amounts import require_non_negative
from .constants import ZERO_ADDRESS, NATIVE_IDENTIFIER
from .exc import FillParametersError, TimeWindowError


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

class ItemType(Enum):
    """Token standard of an item. Diagnostic metadata only; never part of a key."""
    NATIVE = 0
    ERC20 = 1
    ERC721 = 2
    ERC1155 = 3


@dataclass(frozen=True)
class AssetDescriptor:
    """Asset identified by contract marker and sub-identifier.

    Two descriptors are equal iff both fields match; the identifier is not a
    wildcard for fungible tokens, callers must pass 0.
    """

    token: str
    identifier: int = NATIVE_IDENTIFIER

    def __post_init__(self):
        require_non_negative(self.identifier, "identifier")

    @property
    def is_native(self) -> bool:
        return self.token == ZERO_ADDRESS and self.identifier == NATIVE_IDENTIFIER


NATIVE = AssetDescriptor(ZERO_ADDRESS, NATIVE_IDENTIFIER)


def _default_item_type(asset: AssetDescriptor) -> ItemType:
    return ItemType.NATIVE if asset.is_native else ItemType.ERC20


# ---------------------------------------------------------------------------
# Order items
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OfferItem:
    """An asset the offerer gives up; the implicit recipient is the fulfiller."""

    asset: AssetDescriptor
    start_amount: int
    end_amount: int
    item_type: Optional[ItemType] = None

    def __post_init__(self):
        require_non_negative(self.start_amount, "start_amount")
        require_non_negative(self.end_amount, "end_amount")
        if self.item_type is None:
            object.__setattr__(self, "item_type", _default_item_type(self.asset))


@dataclass(frozen=True)
class ConsiderationItem:
    """An asset the fulfiller must deliver to `recipient`."""

    asset: AssetDescriptor
    start_amount: int
    end_amount: int
    recipient: str
    item_type: Optional[ItemType] = None

    def __post_init__(self):
        require_non_negative(self.start_amount, "start_amount")
        require_non_negative(self.end_amount, "end_amount")
        if self.item_type is None:
            object.__setattr__(self, "item_type", _default_item_type(self.asset))


Item = Union[OfferItem, ConsiderationItem]


@dataclass(frozen=True)
class TipItem:
    """Fixed-amount side payment added at fulfillment time."""

    asset: AssetDescriptor
    amount: int
    recipient: str
    item_type: Optional[ItemType] = None

    def __post_init__(self):
        require_non_negative(self.amount, "tip amount")
        if self.item_type is None:
            object.__setattr__(self, "item_type", _default_item_type(self.asset))


@dataclass(frozen=True)
class Order:
    """Offerer plus ordered offer and consideration items (immutable)."""

    offerer: str
    offer: Tuple[OfferItem, ...] = ()
    consideration: Tuple[ConsiderationItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "offer", tuple(self.offer))
        object.__setattr__(self, "consideration", tuple(self.consideration))

    def items(self) -> Tuple[Item, ...]:
        return self.offer + self.consideration


# ---------------------------------------------------------------------------
# Fill parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnitsToFill:
    """Fill `units` out of the order's maximum fillable size.

    `total_size`/`total_filled` describe the on-chain status and only cap the
    fill to what remains; total_size == 0 means the order is untouched.
    """

    units: int
    total_size: int = 0
    total_filled: int = 0

    def __post_init__(self):
        if self.units <= 0:
            raise FillParametersError(f"units to fill must be > 0, got {self.units}")
        _check_status(self.total_filled, self.total_size)


@dataclass(frozen=True)
class FilledStatus:
    """Order status observed before the fulfillment; the fulfillment takes the remainder."""

    total_filled: int = 0
    total_size: int = 0

    def __post_init__(self):
        _check_status(self.total_filled, self.total_size)


def _check_status(total_filled: int, total_size: int) -> None:
    if total_filled < 0 or total_size < 0:
        raise FillParametersError("order status must be non-negative")
    if total_size > 0 and total_filled > total_size:
        raise FillParametersError(
            f"order overfilled: total_filled={total_filled} > total_size={total_size}"
        )


FillParameters = Union[UnitsToFill, FilledStatus]


# ---------------------------------------------------------------------------
# Time window and receipt
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TimeWindow:
    """Interpolation window for ascending/descending amounts.

    `ascending_buffer` is added to `current_time` for items whose amount rises
    over the window, so a consideration quoted slightly ahead of inclusion still
    covers the amount due at execution.
    """

    start_time: int
    end_time: int
    current_time: int
    ascending_buffer: int = 0

    def __post_init__(self):
        if self.end_time < self.start_time:
            raise TimeWindowError(
                f"window ends before it starts: start={self.start_time} end={self.end_time}"
            )
        if self.ascending_buffer < 0:
            raise TimeWindowError("ascending_buffer must be >= 0")

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class TransactionReceipt:
    gas_used: int
    gas_price: int

    def __post_init__(self):
        require_non_negative(self.gas_used, "gas_used")
        require_non_negative(self.gas_price, "gas_price")

    @property
    def fee(self) -> int:
        return self.gas_used * self.gas_price


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Mismatch:
    """Expected vs observed balance for one ledger key. Returned, never raised."""

    owner: str
    asset: AssetDescriptor
    expected: int
    actual: int

    @property
    def delta(self) -> int:
        return self.actual - self.expected


@dataclass(frozen=True)
class BalanceWrite:
    """Structured record of one ledger write, passed to an optional sink."""

    owner: str
    asset: AssetDescriptor
    before: int
    after: int
    item: Any = field(default=None, compare=False)
    reason: str = ""


__all__ = [
    "ItemType",
    "AssetDescriptor",
    "NATIVE",
    "OfferItem",
    "ConsiderationItem",
    "Item",
    "TipItem",
    "Order",
    "UnitsToFill",
    "FilledStatus",
    "FillParameters",
    "TimeWindow",
    "TransactionReceipt",
    "Mismatch",
    "BalanceWrite",
]
