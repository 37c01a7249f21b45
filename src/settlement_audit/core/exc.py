"""
Core exception types for settlement_audit.core.

These are dependency-free and may be imported by all modules. Every error here
signals a caller bug (a precondition violation); balance mismatches are data and
are never raised. Errors from a balance oracle are not wrapped.
"""

__all__ = [
    "PreconditionViolation",
    "MissingLedgerEntryError",
    "AmountDomainError",
    "FillParametersError",
    "TimeWindowError",
]


class PreconditionViolation(Exception):
    """Base class for conditions that should never happen in a correct caller."""
    pass


class MissingLedgerEntryError(PreconditionViolation, KeyError):
    """Raised when a ledger key is read or written before it was snapshotted.

    Attributes
    ----------
    owner : str
        Address whose entry was requested.
    asset : AssetDescriptor
        Asset descriptor of the missing entry.
    """

    def __init__(self, owner, asset):
        super().__init__(f"no ledger entry for owner={owner} asset={asset}")
        self.owner = owner
        self.asset = asset

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class AmountDomainError(PreconditionViolation):
    """Raised when an amount, gas value or identifier is negative."""
    pass


class FillParametersError(PreconditionViolation):
    """Raised for malformed fill parameters (zero denominator, non-positive units, overfilled status)."""
    pass


class TimeWindowError(PreconditionViolation):
    """Raised when a time window ends before it starts."""
    pass
