"""Result types — the contract between the fee engine, checkout, and the API.

Every amount is an integer number of cents.  Models are frozen: they are
built once per computation and never mutated afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from market_fees.config.processor import PaymentMethod


# ═══════════════════════════════════════════════════════════════════════════
# Fee calculation
# ═══════════════════════════════════════════════════════════════════════════

class FeeResult(BaseModel):
    """Output of one gross-up fee calculation."""

    model_config = ConfigDict(frozen=True)

    fee_cents: int
    """Amount charged to the buyer above the listed price (after min/max clamp)."""

    total_cents: int
    """price_cents + fee_cents — the amount actually charged."""

    platform_margin_cents: int
    """Platform's intended take, computed BEFORE the min/max clamp.
    Passed to the processor as the application fee.  When a policy bound
    binds, this can differ from what the buyer actually paid toward margin."""


class FeeQuote(BaseModel):
    """Buyer-facing breakdown shown at checkout."""

    model_config = ConfigDict(frozen=True)

    subtotal_cents: int
    fee_cents: int
    total_cents: int
    payment_method: PaymentMethod


# ═══════════════════════════════════════════════════════════════════════════
# Processor charge parameters
# ═══════════════════════════════════════════════════════════════════════════

class ChargeRequest(BaseModel):
    """Parameters for the processor's charge-creation call.

    ``amount_cents`` is the buyer total; ``application_fee_cents`` is the
    platform margin routed to the platform account; the remainder (minus the
    processor's own cut) is transferred to ``destination_account``.
    """

    model_config = ConfigDict(frozen=True)

    amount_cents: int
    currency: str = "usd"
    application_fee_cents: int
    destination_account: str
    payment_method: PaymentMethod
    fee_policy_version: str
    metadata: dict[str, str]


# ═══════════════════════════════════════════════════════════════════════════
# Settlement (revenue accounting)
# ═══════════════════════════════════════════════════════════════════════════

class Settlement(BaseModel):
    """Where the money goes for one charged transaction.

    total_charged = seller_payout + processor_cost + platform_net
    """

    model_config = ConfigDict(frozen=True)

    total_charged_cents: int
    seller_payout_cents: int
    processor_cost_cents: int
    """Estimated processor cut on the total, using the same rates and
    rounding convention as the calculator."""
    platform_net_cents: int
    """What the platform keeps after the processor's cut.  Negative when
    fees are disabled or a low max-fee bound binds."""
    platform_margin_cents: int
    """Intended margin, copied from the FeeResult."""
    fee_clamped: bool
    """True when the policy's min/max bound changed the fee."""


class SettlementSummary(BaseModel):
    """Totals across many settlements — e.g. a seller dashboard or admin report."""

    model_config = ConfigDict(frozen=True)

    count: int = 0
    total_charged_cents: int = 0
    seller_payout_cents: int = 0
    processor_cost_cents: int = 0
    platform_net_cents: int = 0
    platform_margin_cents: int = 0
