"""Settlement estimate — where each charged dollar ends up.

    total_charged = seller_payout + processor_cost + platform_net

The processor's cut is estimated on the TOTAL with the same rates and
ceiling convention the calculator uses for its gross-up.  Because the fee
was solved against that same cost, an unclamped fee always leaves the
platform at least its intended margin:

    platform_net >= platform_margin        (when not fee_clamped)
"""

from __future__ import annotations

from collections.abc import Iterable

from market_fees.config.processor import PaymentMethod, get_processor_rates
from market_fees.config.policy import FeePolicy
from market_fees.engine.calculator import compute_fee, gross_up_fee, processor_percent_part
from market_fees.models.results import FeeResult, Settlement, SettlementSummary


def estimate_processor_cost(total_cents: int, method: PaymentMethod) -> int:
    """Estimated processor cut on a charge of ``total_cents``."""
    rates = get_processor_rates(method)
    return processor_percent_part(total_cents, rates) + rates.fixed_cents


def estimate_settlement(
    price_cents: int,
    method: PaymentMethod,
    policy: FeePolicy,
    result: FeeResult | None = None,
) -> Settlement:
    """Split a charged total into seller payout, processor cost, and platform net.

    ``result`` is recomputed from ``policy`` when not supplied.
    """
    if result is None:
        result = compute_fee(price_cents, method, policy)

    processor_cost = estimate_processor_cost(result.total_cents, method)
    fee_clamped = (
        not policy.fees_disabled
        and gross_up_fee(price_cents, method, policy) != result.fee_cents
    )
    return Settlement(
        total_charged_cents=result.total_cents,
        seller_payout_cents=price_cents,
        processor_cost_cents=processor_cost,
        platform_net_cents=result.fee_cents - processor_cost,
        platform_margin_cents=result.platform_margin_cents,
        fee_clamped=fee_clamped,
    )


def summarize_settlements(settlements: Iterable[Settlement]) -> SettlementSummary:
    """Sum settlements for a revenue report."""
    count = 0
    total = payout = processor = net = margin = 0
    for s in settlements:
        count += 1
        total += s.total_charged_cents
        payout += s.seller_payout_cents
        processor += s.processor_cost_cents
        net += s.platform_net_cents
        margin += s.platform_margin_cents
    return SettlementSummary(
        count=count,
        total_charged_cents=total,
        seller_payout_cents=payout,
        processor_cost_cents=processor,
        platform_net_cents=net,
        platform_margin_cents=margin,
    )
