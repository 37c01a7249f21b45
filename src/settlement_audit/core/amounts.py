"""
Integer amount helpers: exact multiply-then-divide with explicit rounding side.

- All balances and item amounts are Python ints (arbitrary precision, no float).
- Non-negative domain for item amounts: negative values are rejected at input.
- Rounding semantics: amounts the fulfiller pays (consideration, tips) round UP;
  amounts the offerer gives (offer) round DOWN. The protocol can never be drained
  by rounding error.
"""

from __future__ import annotations

from fractions import Fraction

from .exc import AmountDomainError, FillParametersError

# Debug printing control
DEBUG_AMOUNTS = False

def _dbg(msg: str) -> None:
    if DEBUG_AMOUNTS:
        print(msg)


# ----------------------------
# Integer rounding helpers (centralised)
# ----------------------------

def ceil_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("ceil_div expects a>=0 and b>0")
    return 0 if a == 0 else -(-a // b)


def floor_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("floor_div expects a>=0 and b>0")
    return a // b


def require_non_negative(value: int, what: str = "amount") -> int:
    """Return `value` as int, rejecting negatives and non-integers."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise AmountDomainError(f"{what} must be an int, got {type(value).__name__}")
    if value < 0:
        raise AmountDomainError(f"{what} must be >= 0, got {value}")
    return value


# ----------------------------
# Proportional scaling
# ----------------------------

def mul_div(amount: int, numerator: int, denominator: int, *, round_up: bool) -> int:
    """Compute amount * numerator / denominator in the integer domain.

    round_up=True gives the ceiling (payer side), otherwise the floor (giver side).
    """
    require_non_negative(amount)
    if denominator == 0:
        raise FillParametersError("fill denominator must be non-zero")
    if numerator < 0 or denominator < 0:
        raise FillParametersError(f"fill ratio must be non-negative: {numerator}/{denominator}")
    if amount == 0 or numerator == 0:
        return 0
    product = amount * numerator
    out = ceil_div(product, denominator) if round_up else floor_div(product, denominator)
    _dbg(f"mul_div: {amount}*{numerator}/{denominator} round_up={round_up} -> {out}")
    return out


def scale_by_fraction(amount: int, fraction: Fraction, *, round_up: bool) -> int:
    """Scale `amount` by a non-negative Fraction with the given rounding side."""
    return mul_div(amount, fraction.numerator, fraction.denominator, round_up=round_up)


def to_fraction(numerator: int, denominator: int) -> Fraction:
    """Build a fill fraction; a zero denominator is a precondition violation."""
    if denominator == 0:
        raise FillParametersError("fill denominator must be non-zero")
    if numerator < 0 or denominator < 0:
        raise FillParametersError(f"fill ratio must be non-negative: {numerator}/{denominator}")
    return Fraction(numerator, denominator)


__all__ = [
    "ceil_div",
    "floor_div",
    "require_non_negative",
    "mul_div",
    "scale_by_fraction",
    "to_fraction",
]
