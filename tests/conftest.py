"""Shared test fixtures — policies and a clean fee environment."""

from __future__ import annotations

import pytest

from market_fees.config.policy import (
    DISABLE_ENV,
    MARGIN_BPS_ENV,
    MARGIN_FIXED_CENTS_ENV,
    MAX_CENTS_ENV,
    MIN_CENTS_ENV,
    MODE_ENV,
    PRESETS,
    FeePolicy,
)

FEE_ENV_VARS = (
    MODE_ENV,
    MARGIN_BPS_ENV,
    MARGIN_FIXED_CENTS_ENV,
    MIN_CENTS_ENV,
    MAX_CENTS_ENV,
    DISABLE_ENV,
)


@pytest.fixture(autouse=True)
def clean_fee_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FEES_* variables from the host shell out of every test."""
    for name in FEE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reference_policy() -> FeePolicy:
    """5% + $1.30, effectively unbounded — the worked examples use this."""
    return FeePolicy(
        margin_bps=500,
        margin_fixed_cents=130,
        min_fee_cents=0,
        max_fee_cents=99_999,
    )


@pytest.fixture
def balanced() -> FeePolicy:
    return PRESETS["balanced"]


@pytest.fixture
def aggressive() -> FeePolicy:
    return PRESETS["aggressive"]


@pytest.fixture
def disabled(balanced: FeePolicy) -> FeePolicy:
    return balanced.model_copy(update={"fees_disabled": True})
