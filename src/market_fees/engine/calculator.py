"""Gross-up fee calculation.

The processor takes its percentage from the TOTAL charged (price + fee),
not from the listed price, so ``price × (1 + margin)`` under-collects.
Solving the fixed point directly:

    fee = margin + r_part + f + r × fee
    fee = (margin + r_part + f) / (1 − r)

Rounding: anything charged to the buyer (fee, processor percentage part)
rounds UP; the platform margin rounds DOWN.  All arithmetic is integer or
Decimal, never binary float, and Decimal work runs in a fixed local
context so a caller's ``getcontext()`` cannot change the result.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_EVEN, Context, localcontext

from market_fees.config.policy import FeePolicy
from market_fees.config.processor import PaymentMethod, ProcessorRates, get_processor_rates
from market_fees.models.results import FeeResult

FEE_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)


def processor_percent_part(amount_cents: int, rates: ProcessorRates) -> int:
    """ceil(rate × amount), clamped to the processor's percentage cap if any."""
    with localcontext(FEE_CONTEXT):
        part = math.ceil(rates.rate * amount_cents)
    if rates.percent_cap_cents is not None and part > rates.percent_cap_cents:
        part = rates.percent_cap_cents
    return part


def compute_margin(price_cents: int, policy: FeePolicy) -> int:
    """floor(bps / 10000 × price) + fixed — what the platform intends to keep."""
    return (policy.margin_bps * price_cents) // 10_000 + policy.margin_fixed_cents


def gross_up_fee(price_cents: int, method: PaymentMethod, policy: FeePolicy) -> int:
    """Fee that covers margin + processor cost on the total, before min/max."""
    rates = get_processor_rates(method)
    r_part_cents = processor_percent_part(price_cents, rates)
    margin_cents = compute_margin(price_cents, policy)

    numerator = margin_cents + r_part_cents + rates.fixed_cents
    with localcontext(FEE_CONTEXT):
        return math.ceil(numerator / (1 - rates.rate))


def clamp_fee(fee_cents: int, policy: FeePolicy) -> int:
    """Apply the policy floor, then the ceiling."""
    if fee_cents < policy.min_fee_cents:
        fee_cents = policy.min_fee_cents
    if fee_cents > policy.max_fee_cents:
        fee_cents = policy.max_fee_cents
    return fee_cents


def compute_fee(
    price_cents: int,
    method: PaymentMethod,
    policy: FeePolicy,
) -> FeeResult:
    """Compute the buyer fee, total charge, and platform margin for one sale.

    Parameters
    ----------
    price_cents : int
        Listed price.  Must be >= 0; the caller validates this, and the
        result for a negative price is unspecified.
    method : PaymentMethod
        ``"card"`` or ``"ach"``.
    policy : FeePolicy
        Resolved pricing policy, normally from ``resolve_fee_policy()``.
        Required so the kill switch and operator overrides always apply.

    Returns
    -------
    FeeResult
        ``platform_margin_cents`` is the pre-clamp margin even when the
        min/max bound changed the fee.
    """
    # Kill switch bypasses everything else
    if policy.fees_disabled:
        return FeeResult(fee_cents=0, total_cents=price_cents, platform_margin_cents=0)

    fee_cents = clamp_fee(gross_up_fee(price_cents, method, policy), policy)

    return FeeResult(
        fee_cents=fee_cents,
        total_cents=price_cents + fee_cents,
        platform_margin_cents=compute_margin(price_cents, policy),
    )
