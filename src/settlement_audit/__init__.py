"""
Top-level API for settlement_audit (integer domain).

Expected-balance simulation and verification for atomic multi-asset exchange
order fulfillments:
  - SettlementSimulator: expected ledger for one (partial) fill, with tips,
    time-based pricing and gas
  - verify / simulate_and_verify: compare against a BalanceOracle

Core value types and exceptions live in `settlement_audit.core`.
"""

from __future__ import annotations

from .core import (
    ZERO_ADDRESS,
    NATIVE,
    ItemType,
    AssetDescriptor,
    OfferItem,
    ConsiderationItem,
    TipItem,
    Order,
    UnitsToFill,
    FilledStatus,
    TimeWindow,
    TransactionReceipt,
    Mismatch,
    BalanceWrite,
    PreconditionViolation,
    MissingLedgerEntryError,
    AmountDomainError,
    FillParametersError,
    TimeWindowError,
)
from .interpolation import present_amount, TimeInterpolator, LinearTimeInterpolator
from .resolver import (
    AmountResolver,
    FractionalAmountResolver,
    max_fillable_size,
    fill_fraction,
)
from .tips import scale_tips, scale_tip_amount
from .ledger import BalanceLedger, LedgerEntry
from .simulator import SettlementSimulator, simulate
from .verifier import BalanceOracle, StaticBalanceOracle, verify, snapshot_balances
from .audit import SettlementOptions, simulate_and_verify, format_mismatches

__all__ = [
    # core types
    "ZERO_ADDRESS",
    "NATIVE",
    "ItemType",
    "AssetDescriptor",
    "OfferItem",
    "ConsiderationItem",
    "TipItem",
    "Order",
    "UnitsToFill",
    "FilledStatus",
    "TimeWindow",
    "TransactionReceipt",
    "Mismatch",
    "BalanceWrite",
    # exceptions
    "PreconditionViolation",
    "MissingLedgerEntryError",
    "AmountDomainError",
    "FillParametersError",
    "TimeWindowError",
    # collaborators
    "present_amount",
    "TimeInterpolator",
    "LinearTimeInterpolator",
    "AmountResolver",
    "FractionalAmountResolver",
    "max_fillable_size",
    "fill_fraction",
    "scale_tips",
    "scale_tip_amount",
    # ledger / simulation / verification
    "BalanceLedger",
    "LedgerEntry",
    "SettlementSimulator",
    "simulate",
    "BalanceOracle",
    "StaticBalanceOracle",
    "verify",
    "snapshot_balances",
    "SettlementOptions",
    "simulate_and_verify",
    "format_mismatches",
]
