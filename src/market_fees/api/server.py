"""FastAPI server — fee quotes and charge parameters for the checkout flow.

Run with:
    market-fees-api

Or:
    python -m market_fees.api.server

Both go through ``main()``, which hands LOG_LEVEL and the log format to
uvicorn. A bare ``uvicorn market_fees.api.server:app`` keeps uvicorn's
default logging.

Endpoints:
    GET  /health            — liveness check
    GET  /policy            — active fee policy resolved from the environment
    POST /quote             — subtotal / fee / total for one price + method
    POST /quote/compare     — the same quote for every payment method
    POST /checkout/charge   — processor charge parameters for a listing

The policy is resolved from the environment on every request, so a
changed FEES_* variable (or the FEES_DISABLE kill switch) takes effect
without a restart.
"""

from __future__ import annotations

import logging
import os
from typing import Any, get_args

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from market_fees.config.policy import FeePolicy, resolve_fee_policy
from market_fees.config.processor import PaymentMethod
from market_fees.engine.checkout import (
    SellerNotOnboardedError,
    build_charge_request,
    parse_payment_method,
    quote_fee,
)
from market_fees.formatting import format_usd
from market_fees.models.results import ChargeRequest, FeeQuote

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Marketplace Fee API",
    version="1.0",
    description=(
        "Buyer fee quotes and processor charge parameters for marketplace "
        "checkout. All amounts are integer cents."
    ),
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class QuoteRequest(BaseModel):
    """Request body for /quote."""
    price_cents: int = Field(ge=0, description="Listed price in cents")
    payment_method: str | None = Field(
        default=None,
        description="'ach' for bank transfer; anything else (or omitted) is card.",
    )


class CompareRequest(BaseModel):
    """Request body for /quote/compare."""
    price_cents: int = Field(ge=0, description="Listed price in cents")


class ChargeRequestBody(BaseModel):
    """Request body for /checkout/charge."""
    listing_id: str = Field(min_length=1)
    price_cents: int = Field(ge=0, description="Listed price from the listing record")
    payment_method: str | None = None
    destination_account: str | None = Field(
        default=None,
        description="Seller's payout account id at the processor",
    )


class QuoteResponse(BaseModel):
    """Quote plus display strings."""
    quote: FeeQuote
    display: dict[str, str]


class CompareResponse(BaseModel):
    """Response from /quote/compare, cheapest total first."""
    quotes: list[QuoteResponse]


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _quote_response(price_cents: int, method: PaymentMethod, policy: FeePolicy) -> QuoteResponse:
    quote = quote_fee(price_cents, method, policy)
    return QuoteResponse(
        quote=quote,
        display={
            "subtotal": format_usd(quote.subtotal_cents),
            "fee": format_usd(quote.fee_cents),
            "total": format_usd(quote.total_cents),
        },
    )


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/policy", response_model=FeePolicy)
def get_policy():
    """Fee policy currently in effect."""
    return resolve_fee_policy()


@app.post("/quote", response_model=QuoteResponse)
def quote(req: QuoteRequest):
    """Fee breakdown for one price and payment method.

    Example request:
    ```json
    {"price_cents": 2000, "payment_method": "card"}
    ```
    """
    method = parse_payment_method(req.payment_method)
    return _quote_response(req.price_cents, method, resolve_fee_policy())


@app.post("/quote/compare", response_model=CompareResponse)
def quote_compare(req: CompareRequest):
    """Quote the same price under every payment method, cheapest total first."""
    policy = resolve_fee_policy()
    quotes = [
        _quote_response(req.price_cents, method, policy)
        for method in get_args(PaymentMethod)
    ]
    quotes.sort(key=lambda q: q.quote.total_cents)
    return CompareResponse(quotes=quotes)


@app.post("/checkout/charge", response_model=ChargeRequest)
def checkout_charge(req: ChargeRequestBody):
    """Processor charge parameters: amount = total, application fee = margin."""
    method = parse_payment_method(req.payment_method)
    try:
        return build_charge_request(
            req.listing_id,
            req.price_cents,
            method,
            resolve_fee_policy(),
            req.destination_account,
        )
    except SellerNotOnboardedError as exc:
        logger.warning("Charge refused for listing %s: %s", req.listing_id, exc)
        raise HTTPException(status_code=400, detail=str(exc))


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def resolve_log_level(raw: str | None = None) -> str:
    """Normalise LOG_LEVEL; anything unrecognised is INFO."""
    if raw is None:
        raw = os.environ.get("LOG_LEVEL", "INFO")
    name = raw.strip().upper()
    return name if name in _LOG_LEVELS else "INFO"


def build_log_config(level: str | None = None) -> dict[str, Any]:
    """dictConfig for uvicorn's ``log_config``.

    Uvicorn applies this in every server process, including the reload
    worker that actually serves requests, so the app's loggers and
    uvicorn's own share one format and level.
    """
    level = resolve_log_level(level)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "market_fees": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"level": level},
            "uvicorn.access": {"handlers": ["default"], "level": level, "propagate": False},
        },
    }


def main():
    """Run the API server."""
    import uvicorn

    level = resolve_log_level()
    uvicorn.run(
        "market_fees.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=build_log_config(level),
        log_level=level.lower(),
    )


if __name__ == "__main__":
    main()
