from __future__ import annotations
from typing import List

import pytest

# Import project primitives
from settlement_audit.core import (
    NATIVE,
    AssetDescriptor,
    BalanceWrite,
    ConsiderationItem,
    ItemType,
    OfferItem,
    Order,
)


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

OFFERER = "0x00000000000000000000000000000000000000a1"
FULFILLER = "0x00000000000000000000000000000000000000f1"
FEE_RECIPIENT = "0x00000000000000000000000000000000000000fe"
TIP_RECIPIENT = "0x00000000000000000000000000000000000000b7"

TOKEN_A = AssetDescriptor("0x000000000000000000000000000000000000aaaa", 0)
TOKEN_B = AssetDescriptor("0x000000000000000000000000000000000000bbbb", 0)
NFT = AssetDescriptor("0x000000000000000000000000000000000000cccc", 7)


def make_order(offer_amount: int = 100, price: int = 10, fee: int = 0) -> Order:
    """Offerer sells `offer_amount` of TOKEN_A for `price` native (+ optional fee leg)."""
    consideration = [ConsiderationItem(NATIVE, price, price, OFFERER)]
    if fee:
        consideration.append(ConsiderationItem(NATIVE, fee, fee, FEE_RECIPIENT))
    return Order(
        offerer=OFFERER,
        offer=[OfferItem(TOKEN_A, offer_amount, offer_amount)],
        consideration=consideration,
    )


class RecordingSink:
    """Collects BalanceWrite events for diagnostics assertions."""

    def __init__(self) -> None:
        self.writes: List[BalanceWrite] = []

    def __call__(self, write: BalanceWrite) -> None:
        self.writes.append(write)


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def simple_order() -> Order:
    return make_order()


@pytest.fixture()
def fee_order() -> Order:
    # 1000 A for 950 native to offerer + 50 native to a fee recipient
    return make_order(offer_amount=1000, price=950, fee=50)


@pytest.fixture()
def nft_order() -> Order:
    # ERC1155-style lot of 4 priced at 400 TOKEN_B
    return Order(
        offerer=OFFERER,
        offer=[OfferItem(NFT, 4, 4, ItemType.ERC1155)],
        consideration=[ConsiderationItem(TOKEN_B, 400, 400, OFFERER)],
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()
