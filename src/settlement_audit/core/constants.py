"""
Settlement Audit Core Constants
===============================

Integer constants shared by the ledger, resolver and simulator. Nothing here
depends on a provider or chain client; native currency is identified purely by
the reserved zero contract marker.
"""

# NOTE: Native currency is keyed as (ZERO_ADDRESS, NATIVE_IDENTIFIER). Fungible
# tokens also use identifier 0; the sub-identifier is never a wildcard.

# ---------------------------------------------------------------------------
# Asset markers
# ---------------------------------------------------------------------------

#: Reserved contract marker for the native currency.
ZERO_ADDRESS: str = "0x0000000000000000000000000000000000000000"

#: Sub-identifier used for native currency and fungible tokens.
NATIVE_IDENTIFIER: int = 0


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

#: 1 gwei in wei (native base units).
GWEI: int = 10 ** 9


__all__ = [
    "ZERO_ADDRESS",
    "NATIVE_IDENTIFIER",
    "GWEI",
]
