"""Pydantic schemas for sx_market API."""

from decimal import Decimal

from pydantic import BaseModel

from src.sx_market.domain.models import OrderbookSnapshot, TradingPair


class PairItem(BaseModel):
    symbol: str
    base: str
    quote: str

    @classmethod
    def from_domain(cls, pair: TradingPair) -> "PairItem":
        return cls(symbol=pair.symbol, base=pair.base, quote=pair.quote)


class BookEntryItem(BaseModel):
    price: Decimal
    quantity: Decimal


class OrderbookResponse(BaseModel):
    pair: str
    bids: list[BookEntryItem]
    asks: list[BookEntryItem]
    updated_at: str

    @classmethod
    def from_snapshot(cls, snapshot: OrderbookSnapshot) -> "OrderbookResponse":
        return cls(
            pair=snapshot.pair,
            bids=[BookEntryItem(price=e.price, quantity=e.quantity) for e in snapshot.bids],
            asks=[BookEntryItem(price=e.price, quantity=e.quantity) for e in snapshot.asks],
            updated_at=snapshot.updated_at.isoformat(),
        )
