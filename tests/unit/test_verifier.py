import asyncio

import pytest

from conftest import FULFILLER, OFFERER, TIP_RECIPIENT, TOKEN_A, TOKEN_B

from settlement_audit import NATIVE
from settlement_audit.audit import SettlementOptions, format_mismatches, simulate_and_verify
from settlement_audit.core import GWEI, Mismatch, TipItem, UnitsToFill
from settlement_audit.simulator import simulate
from settlement_audit.verifier import StaticBalanceOracle, snapshot_balances, verify

GAS_FEE = 21_000 * GWEI


def _scenario_balances():
    return {
        (OFFERER, TOKEN_A): -100,
        (OFFERER, NATIVE): 10,
        (FULFILLER, TOKEN_A): 100,
        (FULFILLER, NATIVE): -10 - GAS_FEE,
    }


class SlowOracle(StaticBalanceOracle):
    """Oracle that yields to the loop and tracks peak concurrency."""

    def __init__(self, balances):
        super().__init__(balances)
        self.in_flight = 0
        self.peak = 0

    async def get(self, owner, asset):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0.01)
        self.in_flight -= 1
        return await super().get(owner, asset)


class BrokenOracle:
    async def get(self, owner, asset):
        raise ConnectionError("provider unreachable")


# -----------------------------
# verify()
# -----------------------------

def test_exact_oracle_reports_no_mismatch(simple_order):
    expected = simulate(simple_order, None, FULFILLER, gas_used=21_000, gas_price=GWEI)
    oracle = StaticBalanceOracle(_scenario_balances())
    assert asyncio.run(verify(expected, oracle)) == []
    assert oracle.queries == 4


def test_off_by_one_reports_single_mismatch(simple_order):
    expected = simulate(simple_order, None, FULFILLER, gas_used=21_000, gas_price=GWEI)
    balances = _scenario_balances()
    balances[(FULFILLER, NATIVE)] += 1
    mismatches = asyncio.run(verify(expected, StaticBalanceOracle(balances)))
    print(format_mismatches(mismatches))
    assert mismatches == [Mismatch(FULFILLER, NATIVE, -10 - GAS_FEE, -9 - GAS_FEE)]
    assert mismatches[0].delta == 1


def test_all_mismatches_collected(simple_order):
    expected = simulate(simple_order, None, FULFILLER)
    mismatches = asyncio.run(verify(expected, StaticBalanceOracle()))
    # every non-zero expected balance differs from the default 0
    assert len(mismatches) == 4
    assert [(m.owner, m.asset) for m in mismatches] == [(e.owner, e.asset) for e in expected]


def test_queries_run_concurrently(simple_order):
    expected = simulate(simple_order, None, FULFILLER)
    oracle = SlowOracle(expected.balances())
    assert asyncio.run(verify(expected, oracle)) == []
    assert oracle.peak == len(expected)


def test_oracle_errors_propagate_unchanged(simple_order):
    expected = simulate(simple_order, None, FULFILLER)
    with pytest.raises(ConnectionError, match="provider unreachable"):
        asyncio.run(verify(expected, BrokenOracle()))


def test_oracle_from_ledger_round_trip(fee_order):
    expected = simulate(fee_order, UnitsToFill(9), FULFILLER)
    assert asyncio.run(verify(expected, StaticBalanceOracle.from_ledger(expected))) == []


# -----------------------------
# snapshot_balances() / simulate_and_verify()
# -----------------------------

def test_snapshot_balances_fetches_every_key(simple_order):
    oracle = StaticBalanceOracle({(OFFERER, TOKEN_A): 7})
    tips = [TipItem(TOKEN_B, 1, TIP_RECIPIENT)]
    baseline = asyncio.run(snapshot_balances(simple_order, FULFILLER, oracle, tips=tips))
    assert len(baseline) == 9
    assert oracle.queries == 9
    assert baseline.read(OFFERER, TOKEN_A) == 7
    assert baseline.read(TIP_RECIPIENT, TOKEN_B) == 0


def test_simulate_and_verify_scenario(simple_order):
    opts = SettlementOptions(gas_used=21_000, gas_price=GWEI)
    ok = asyncio.run(simulate_and_verify(
        simple_order, None, StaticBalanceOracle(_scenario_balances()), opts, fulfiller=FULFILLER,
    ))
    assert ok == []
    assert format_mismatches(ok) == "all balances match"


def test_simulate_and_verify_end_to_end_with_baseline_and_tips(simple_order, sink):
    """Pre-state from the oracle, apply the fill on the 'chain', verify post-state."""
    chain = StaticBalanceOracle({
        (OFFERER, TOKEN_A): 1_000,
        (FULFILLER, NATIVE): 10 ** 18,
        (FULFILLER, TOKEN_B): 50,
    })
    tips = [TipItem(TOKEN_B, 7, TIP_RECIPIENT)]
    baseline = asyncio.run(snapshot_balances(simple_order, FULFILLER, chain, tips=tips))

    # the fulfillment as executed on chain: 3 of 10 units, tip ceil(7*3/10) = 3
    chain.set(OFFERER, TOKEN_A, 970)
    chain.set(FULFILLER, TOKEN_A, 30)
    chain.set(OFFERER, NATIVE, 3)
    chain.set(FULFILLER, NATIVE, 10 ** 18 - 3 - 21_000 * 2)
    chain.set(FULFILLER, TOKEN_B, 47)
    chain.set(TIP_RECIPIENT, TOKEN_B, 3)

    opts = SettlementOptions(tips=tips, gas_used=21_000, gas_price=2, baseline=baseline, sink=sink)
    mismatches = asyncio.run(simulate_and_verify(
        simple_order, UnitsToFill(3), chain, opts, fulfiller=FULFILLER,
    ))
    assert mismatches == []
    assert sink.writes


def test_format_mismatches_lists_each_key():
    text = format_mismatches([
        Mismatch(OFFERER, TOKEN_A, -100, -99),
        Mismatch(FULFILLER, NATIVE, 5, 0),
    ])
    assert text.splitlines()[0] == "2 balance mismatch(es):"
    assert "delta +1" in text and "delta -5" in text
