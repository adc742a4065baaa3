"""Payment processor cost model — the processor's published rates.

These are NOT policy: operators cannot tune them.  The gross-up in
``engine.calculator`` has to absorb whatever the processor takes.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PaymentMethod = Literal["card", "ach"]
"""Buyer-selected payment method: ``"card"`` or ``"ach"`` (bank transfer)."""


class ProcessorRates(BaseModel):
    """Percentage-plus-fixed processor fee for one payment method."""

    model_config = ConfigDict(frozen=True)

    rate: Decimal = Field(
        ge=0, lt=1,
        description="Processor percentage as a fraction, e.g. 0.029 = 2.9%",
    )
    fixed_cents: int = Field(ge=0, description="Flat processor fee per charge (cents)")
    percent_cap_cents: int | None = Field(
        default=None, ge=0,
        description="Cap on the percentage portion (cents). None = uncapped.",
    )


PROCESSOR_RATES: dict[str, ProcessorRates] = {
    # Card: 2.9% + 30c
    "card": ProcessorRates(rate=Decimal("0.029"), fixed_cents=30),
    # ACH: 0.8%, no fixed fee, percentage portion capped at $5
    "ach": ProcessorRates(rate=Decimal("0.008"), fixed_cents=0, percent_cap_cents=500),
}


def get_processor_rates(method: PaymentMethod) -> ProcessorRates:
    """Return the processor's rates for ``method``."""
    return PROCESSOR_RATES[method]
