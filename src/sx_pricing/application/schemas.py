"""Pydantic schemas for sx_pricing API."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.sx_pricing.domain.spread import BidAskQuote


class SwapRequest(BaseModel):
    from_currency: str = Field(..., min_length=1, max_length=16)
    to_currency: str = Field(..., min_length=1, max_length=16)
    amount: Decimal

    @field_validator("from_currency", "to_currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()


class QuoteResponse(BaseModel):
    pair: str
    bid: Decimal
    ask: Decimal
    mid: Decimal
    spread_pct: Decimal

    @classmethod
    def from_domain(cls, q: BidAskQuote) -> "QuoteResponse":
        return cls(pair=q.pair, bid=q.bid, ask=q.ask, mid=q.mid, spread_pct=q.spread_pct)


class SwapResponse(BaseModel):
    from_currency: str
    to_currency: str
    amount: Decimal
    rate: Decimal
    received_amount: Decimal
    transaction_id: int | None
