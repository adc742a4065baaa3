"""Configuration — fee policy and processor rates."""

from market_fees.config.processor import (
    PROCESSOR_RATES,
    PaymentMethod,
    ProcessorRates,
    get_processor_rates,
)
from market_fees.config.policy import (
    PRESETS,
    FeePolicy,
    get_preset,
    parse_int_or_default,
    resolve_fee_policy,
)

__all__ = [
    "PaymentMethod",
    "ProcessorRates",
    "PROCESSOR_RATES",
    "get_processor_rates",
    "FeePolicy",
    "PRESETS",
    "get_preset",
    "parse_int_or_default",
    "resolve_fee_policy",
]
