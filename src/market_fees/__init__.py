"""Marketplace payment fee engine."""

from market_fees.config import FeePolicy, PaymentMethod, resolve_fee_policy
from market_fees.engine import compute_fee
from market_fees.formatting import format_usd
from market_fees.models import FeeResult

__all__ = [
    "FeePolicy",
    "FeeResult",
    "PaymentMethod",
    "compute_fee",
    "format_usd",
    "resolve_fee_policy",
]
