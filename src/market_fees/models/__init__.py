"""Result models — fee engine output contracts."""

from market_fees.models.results import (
    ChargeRequest,
    FeeQuote,
    FeeResult,
    Settlement,
    SettlementSummary,
)

__all__ = [
    "ChargeRequest",
    "FeeQuote",
    "FeeResult",
    "Settlement",
    "SettlementSummary",
]
