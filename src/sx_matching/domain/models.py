from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class BookOrder:
    """In-memory resting limit order."""

    order_id: str
    owner_id: str
    pair: str
    side: str  # OrderSide value
    price: Decimal  # quote units per one base unit
    quantity: Decimal  # remaining unfilled base units
    original_quantity: Decimal
    created_at: datetime
    sequence: int = 0  # arrival order within the book, assigned on insert

    @property
    def is_filled(self) -> bool:
        return self.quantity == 0


@dataclass
class Fill:
    """Single fill passed from matching to settlement."""

    pair: str
    buy_order_id: str
    sell_order_id: str
    buyer_id: str
    seller_id: str
    quantity: Decimal
    price: Decimal  # resting (maker) order's price
    maker_order_id: str
    taker_order_id: str

    @property
    def notional(self) -> Decimal:
        return self.quantity * self.price
