"""Domain models for sx_market: pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class TradingPair:
    base: str
    quote: str

    @property
    def symbol(self) -> str:
        return f"{self.base}/{self.quote}"


@dataclass
class BookEntry:
    """One resting order as shown in the market-data view (orders are not aggregated)."""

    price: Decimal
    quantity: Decimal


@dataclass
class OrderbookSnapshot:
    """Top-N view of one pair's book."""

    pair: str
    bids: list[BookEntry]  # descending by price
    asks: list[BookEntry]  # ascending by price
    updated_at: datetime
