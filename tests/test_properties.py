"""Property sweeps — invariants that must hold for every price, method, and policy.

Each test walks a grid of prices (dense near zero where the floor/ceiling
and rounding interact, sparse up to $2,000) across both payment methods
and several policies.
"""

from __future__ import annotations

import pytest

from market_fees.config.policy import PRESETS, FeePolicy
from market_fees.engine.calculator import compute_fee
from market_fees.engine.settlement import estimate_settlement
from market_fees.formatting import format_usd

PRICES = list(range(0, 2_000, 7)) + list(range(2_000, 200_001, 997))
METHODS = ["card", "ach"]

POLICIES = {
    "balanced": PRESETS["balanced"],
    "aggressive": PRESETS["aggressive"],
    "reference": FeePolicy(margin_bps=500, margin_fixed_cents=130, min_fee_cents=0, max_fee_cents=99_999),
    "zero_margin": FeePolicy(margin_bps=0, margin_fixed_cents=0, min_fee_cents=0, max_fee_cents=1_000_000),
    "tight_bounds": FeePolicy(margin_bps=1_000, margin_fixed_cents=50, min_fee_cents=300, max_fee_cents=400),
}


@pytest.fixture(params=list(POLICIES), ids=list(POLICIES))
def policy(request) -> FeePolicy:
    return POLICIES[request.param]


@pytest.mark.parametrize("method", METHODS)
def test_total_is_price_plus_fee(policy: FeePolicy, method: str):
    for price in PRICES:
        res = compute_fee(price, method, policy)
        assert res.total_cents == price + res.fee_cents, f"price={price}"


@pytest.mark.parametrize("method", METHODS)
def test_fee_within_policy_bounds(policy: FeePolicy, method: str):
    for price in PRICES:
        fee = compute_fee(price, method, policy).fee_cents
        assert policy.min_fee_cents <= fee <= policy.max_fee_cents, f"price={price}"


@pytest.mark.parametrize("method", METHODS)
def test_fee_non_decreasing_in_price(policy: FeePolicy, method: str):
    previous = -1
    for price in PRICES:
        fee = compute_fee(price, method, policy).fee_cents
        assert fee >= previous, f"fee dropped at price={price}"
        previous = fee


@pytest.mark.parametrize("method", METHODS)
def test_fees_never_negative(policy: FeePolicy, method: str):
    for price in PRICES:
        res = compute_fee(price, method, policy)
        assert res.fee_cents >= 0
        assert res.platform_margin_cents >= 0


@pytest.mark.parametrize("method", METHODS)
def test_kill_switch_zeroes_every_fee(policy: FeePolicy, method: str):
    off = policy.model_copy(update={"fees_disabled": True})
    for price in PRICES:
        res = compute_fee(price, method, off)
        assert res.fee_cents == 0
        assert res.total_cents == price
        assert res.platform_margin_cents == 0


@pytest.mark.parametrize("method", METHODS)
def test_unclamped_fee_covers_margin_after_processor_cut(policy: FeePolicy, method: str):
    """The gross-up leaves at least the intended margin once the processor is paid."""
    checked = 0
    for price in PRICES:
        settlement = estimate_settlement(price, method, policy)
        if settlement.fee_clamped:
            continue
        checked += 1
        assert settlement.platform_net_cents >= settlement.platform_margin_cents, f"price={price}"
    assert checked > 0


@pytest.mark.parametrize("cents", [0, 1, 9, 10, 99, 100, 101, 1_234, 99_999, 10_000_000])
def test_format_usd_two_decimals(cents: int):
    text = format_usd(cents)
    assert text.startswith("$")
    whole, frac = text[1:].split(".")
    assert len(frac) == 2
    assert int(whole) * 100 + int(frac) == cents
