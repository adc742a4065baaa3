"""Fee policy — named presets plus environment overrides.

Operators tune pricing without a deploy:

    FEES_MODE                 balanced | aggressive   (unknown → balanced)
    FEES_MARGIN_BPS           integer override
    FEES_MARGIN_FIXED_CENTS   integer override
    FEES_MIN_CENTS            integer override
    FEES_MAX_CENTS            integer override
    FEES_DISABLE              true/1/yes → zero fees platform-wide

Resolution never fails.  A missing checkout is worse than a mispriced one,
so malformed values fall back to the preset and are logged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MODE_ENV = "FEES_MODE"
MARGIN_BPS_ENV = "FEES_MARGIN_BPS"
MARGIN_FIXED_CENTS_ENV = "FEES_MARGIN_FIXED_CENTS"
MIN_CENTS_ENV = "FEES_MIN_CENTS"
MAX_CENTS_ENV = "FEES_MAX_CENTS"
DISABLE_ENV = "FEES_DISABLE"

DEFAULT_MODE = "balanced"

_TRUTHY = ("true", "1", "yes")


class FeePolicy(BaseModel):
    """Platform pricing policy consumed by ``compute_fee``.

    ``min_fee_cents <= max_fee_cents`` is expected but not enforced: an
    inverted pair is an operator configuration error, and the calculator
    simply applies the floor then the ceiling.
    """

    model_config = ConfigDict(frozen=True)

    margin_bps: int = Field(
        ge=0,
        description="Platform percentage margin in basis points (400 = 4.00%)",
    )
    margin_fixed_cents: int = Field(ge=0, description="Flat platform margin per transaction (cents)")
    min_fee_cents: int = Field(ge=0, description="Floor on the buyer fee (cents)")
    max_fee_cents: int = Field(ge=0, description="Ceiling on the buyer fee (cents)")

    fees_disabled: bool = Field(
        default=False,
        description="Emergency kill switch. True = every fee is zero, "
                    "regardless of method or the fields above.",
    )
    mode: str = Field(
        default=DEFAULT_MODE,
        description="Preset the policy was built from. Recorded on orders "
                    "as the fee policy version.",
    )


PRESETS: dict[str, FeePolicy] = {
    # 4% + $0.99, fee bounded to [$0.99, $9.99]
    "balanced": FeePolicy(
        margin_bps=400,
        margin_fixed_cents=99,
        min_fee_cents=99,
        max_fee_cents=999,
        mode="balanced",
    ),
    # 6% + $1.29, fee bounded to [$0.99, $12.99]
    "aggressive": FeePolicy(
        margin_bps=600,
        margin_fixed_cents=129,
        min_fee_cents=99,
        max_fee_cents=1299,
        mode="aggressive",
    ),
}


def get_preset(mode: str | None) -> FeePolicy:
    """Return the preset named ``mode``; anything unrecognised gets ``balanced``."""
    if mode in PRESETS:
        return PRESETS[mode]
    if mode:
        logger.warning("Unknown fee mode %r, falling back to %r", mode, DEFAULT_MODE)
    return PRESETS[DEFAULT_MODE]


def parse_int_or_default(raw: str | None, default: int) -> int:
    """Parse ``raw`` as a non-negative integer, or return ``default``.

    Missing, blank, non-integer, and negative values all yield ``default``.
    This is the single tolerance rule for every numeric override.
    """
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring non-integer fee override %r (using %d)", raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring negative fee override %r (using %d)", raw, default)
        return default
    return value


def parse_flag(raw: str | None) -> bool:
    """Interpret an environment flag. Only true/1/yes (any case) are on."""
    return raw is not None and raw.strip().lower() in _TRUTHY


def resolve_fee_policy(env: Mapping[str, str] | None = None) -> FeePolicy:
    """Build the active ``FeePolicy`` from ``env`` (defaults to ``os.environ``).

    Never raises.  Call once per request and pass the result to
    ``compute_fee`` for each transaction.
    """
    if env is None:
        env = os.environ

    base = get_preset(env.get(MODE_ENV))
    return FeePolicy(
        margin_bps=parse_int_or_default(env.get(MARGIN_BPS_ENV), base.margin_bps),
        margin_fixed_cents=parse_int_or_default(
            env.get(MARGIN_FIXED_CENTS_ENV), base.margin_fixed_cents,
        ),
        min_fee_cents=parse_int_or_default(env.get(MIN_CENTS_ENV), base.min_fee_cents),
        max_fee_cents=parse_int_or_default(env.get(MAX_CENTS_ENV), base.max_fee_cents),
        fees_disabled=parse_flag(env.get(DISABLE_ENV)),
        mode=base.mode,
    )
