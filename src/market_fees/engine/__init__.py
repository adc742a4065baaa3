"""Engine — pure fee computation plus checkout and settlement helpers."""

from market_fees.engine.calculator import (
    clamp_fee,
    compute_fee,
    compute_margin,
    gross_up_fee,
    processor_percent_part,
)
from market_fees.engine.checkout import (
    SellerNotOnboardedError,
    build_charge_request,
    parse_payment_method,
    quote_fee,
)
from market_fees.engine.settlement import (
    estimate_processor_cost,
    estimate_settlement,
    summarize_settlements,
)

__all__ = [
    "compute_fee",
    "compute_margin",
    "gross_up_fee",
    "clamp_fee",
    "processor_percent_part",
    # Checkout
    "SellerNotOnboardedError",
    "parse_payment_method",
    "quote_fee",
    "build_charge_request",
    # Settlement
    "estimate_processor_cost",
    "estimate_settlement",
    "summarize_settlements",
]
