"""
Settlement Audit Core
=====================

Unified exports for integer-domain primitives shared by the ledger, resolver,
simulator and verifier. All amounts are Python ints; rounding is explicit and
directional (payer side up, giver side down).
"""

# Constants
from .constants import (
    ZERO_ADDRESS,
    NATIVE_IDENTIFIER,
    GWEI,
)

# Integer rounding helpers
from .amounts import (
    ceil_div,
    floor_div,
    require_non_negative,
    mul_div,
    scale_by_fraction,
    to_fraction,
)

# Datatypes
from .datatypes import (
    ItemType,
    AssetDescriptor,
    NATIVE,
    OfferItem,
    ConsiderationItem,
    Item,
    TipItem,
    Order,
    UnitsToFill,
    FilledStatus,
    FillParameters,
    TimeWindow,
    TransactionReceipt,
    Mismatch,
    BalanceWrite,
)

# Diagnostics formatting
from .fmt import stringify, fmt_asset, fmt_write, fmt_mismatch

# Exceptions
from .exc import (
    PreconditionViolation,
    MissingLedgerEntryError,
    AmountDomainError,
    FillParametersError,
    TimeWindowError,
)

__all__ = [
    # constants
    "ZERO_ADDRESS",
    "NATIVE_IDENTIFIER",
    "GWEI",
    # amounts
    "ceil_div",
    "floor_div",
    "require_non_negative",
    "mul_div",
    "scale_by_fraction",
    "to_fraction",
    # datatypes
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
    # fmt
    "stringify",
    "fmt_asset",
    "fmt_write",
    "fmt_mismatch",
    # exceptions
    "PreconditionViolation",
    "MissingLedgerEntryError",
    "AmountDomainError",
    "FillParametersError",
    "TimeWindowError",
]
