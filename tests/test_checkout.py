"""Tests for engine/checkout.py — method parsing, quotes, charge parameters."""

from __future__ import annotations

import pytest

from market_fees.config.policy import FeePolicy, resolve_fee_policy
from market_fees.engine.calculator import compute_fee
from market_fees.engine.checkout import (
    SellerNotOnboardedError,
    build_charge_request,
    parse_payment_method,
    quote_fee,
)


class TestParsePaymentMethod:

    @pytest.mark.parametrize("raw", ["ach", "ACH", " ach "])
    def test_ach(self, raw: str):
        assert parse_payment_method(raw) == "ach"

    @pytest.mark.parametrize("raw", [None, "", "card", "bank", "paypal"])
    def test_everything_else_is_card(self, raw):
        assert parse_payment_method(raw) == "card"


class TestQuote:

    def test_breakdown(self, reference_policy: FeePolicy):
        q = quote_fee(2000, "card", reference_policy)
        assert q.subtotal_cents == 2000
        assert q.fee_cents == 328
        assert q.total_cents == 2328
        assert q.payment_method == "card"

    def test_disabled(self, disabled: FeePolicy):
        q = quote_fee(2000, "ach", disabled)
        assert q.fee_cents == 0
        assert q.total_cents == 2000


class TestChargeRequest:

    def test_amount_and_application_fee(self, balanced: FeePolicy):
        charge = build_charge_request("lst_1", 2000, "card", balanced, "acct_123")
        result = compute_fee(2000, "card", balanced)
        assert charge.amount_cents == result.total_cents
        assert charge.application_fee_cents == result.platform_margin_cents
        assert charge.currency == "usd"
        assert charge.destination_account == "acct_123"
        assert charge.metadata == {"listing_id": "lst_1"}

    def test_records_policy_version_and_method(self, aggressive: FeePolicy):
        charge = build_charge_request("lst_2", 5000, "ach", aggressive, "acct_9")
        assert charge.fee_policy_version == "aggressive"
        assert charge.payment_method == "ach"

    def test_policy_version_is_applied_preset(self):
        policy = resolve_fee_policy({"FEES_MODE": "turbo"})
        charge = build_charge_request("lst_6", 2000, "card", policy, "acct_1")
        assert charge.fee_policy_version == "balanced"
        assert charge.amount_cents == 2275

    def test_application_fee_is_pre_clamp_margin(self, balanced: FeePolicy):
        charge = build_charge_request("lst_3", 50_000, "card", balanced, "acct_1")
        assert charge.amount_cents == 50_999
        assert charge.application_fee_cents == 2099

    @pytest.mark.parametrize("account", [None, "", "   "])
    def test_seller_not_onboarded(self, balanced: FeePolicy, account):
        with pytest.raises(SellerNotOnboardedError):
            build_charge_request("lst_4", 2000, "card", balanced, account)

    def test_not_onboarded_is_value_error(self, balanced: FeePolicy):
        with pytest.raises(ValueError, match="not onboarded"):
            build_charge_request("lst_5", 2000, "card", balanced, None)
