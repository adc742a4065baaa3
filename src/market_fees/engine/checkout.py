"""Checkout glue — turn a listing + buyer choice into a quote or a charge.

The order workflow (storage, processor SDK) lives elsewhere; this module
only produces the numbers and parameters it needs.
"""

from __future__ import annotations

import logging

from market_fees.config.policy import FeePolicy
from market_fees.config.processor import PaymentMethod
from market_fees.engine.calculator import compute_fee
from market_fees.models.results import ChargeRequest, FeeQuote

logger = logging.getLogger(__name__)


class SellerNotOnboardedError(ValueError):
    """The seller has no payout account, so no charge can be routed to them."""


def parse_payment_method(value: str | None) -> PaymentMethod:
    """Map a client-supplied method to a PaymentMethod. Only ``"ach"`` selects ACH."""
    if value is not None and value.strip().lower() == "ach":
        return "ach"
    return "card"


def quote_fee(price_cents: int, method: PaymentMethod, policy: FeePolicy) -> FeeQuote:
    """Buyer-facing subtotal / fee / total breakdown."""
    result = compute_fee(price_cents, method, policy)
    return FeeQuote(
        subtotal_cents=price_cents,
        fee_cents=result.fee_cents,
        total_cents=result.total_cents,
        payment_method=method,
    )


def build_charge_request(
    listing_id: str,
    price_cents: int,
    method: PaymentMethod,
    policy: FeePolicy,
    destination_account: str | None,
) -> ChargeRequest:
    """Parameters for the processor's charge-creation call.

    Charges the buyer the fee-inclusive total and routes the platform
    margin as the application fee.

    Raises
    ------
    SellerNotOnboardedError
        If ``destination_account`` is missing or blank.
    """
    if not destination_account or not destination_account.strip():
        raise SellerNotOnboardedError("Seller not onboarded for payouts")

    result = compute_fee(price_cents, method, policy)
    logger.info(
        "Charge for listing %s: total=%d fee=%d margin=%d method=%s mode=%s",
        listing_id, result.total_cents, result.fee_cents,
        result.platform_margin_cents, method, policy.mode,
    )
    return ChargeRequest(
        amount_cents=result.total_cents,
        application_fee_cents=result.platform_margin_cents,
        destination_account=destination_account,
        payment_method=method,
        fee_policy_version=policy.mode,
        metadata={"listing_id": str(listing_id)},
    )
