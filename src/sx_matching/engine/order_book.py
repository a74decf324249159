import itertools
from dataclasses import dataclass, field, replace
from operator import attrgetter

from src.sx_common.enums import OrderSide
from src.sx_matching.domain.models import BookOrder

_by_price = attrgetter("price")


@dataclass
class OrderBook:
    """Open limit orders for one trading pair.

    bids: price descending; asks: price ascending. list.sort is stable, so
    equal prices keep arrival (FIFO) order after every re-sort.
    """

    pair: str
    bids: list[BookOrder] = field(default_factory=list)
    asks: list[BookOrder] = field(default_factory=list)
    _sequence: itertools.count = field(default_factory=lambda: itertools.count(1), repr=False)

    def _side(self, side: str) -> list[BookOrder]:
        return self.bids if side == OrderSide.BUY else self.asks

    def add_order(self, order: BookOrder) -> None:
        order.sequence = next(self._sequence)
        if order.side == OrderSide.BUY:
            self.bids.append(order)
            self.bids.sort(key=_by_price, reverse=True)
        else:
            self.asks.append(order)
            self.asks.sort(key=_by_price)

    def peek_best(self, side: str) -> BookOrder | None:
        orders = self._side(side)
        return orders[0] if orders else None

    def remove_if_filled(self, side: str, order: BookOrder) -> bool:
        orders = self._side(side)
        if orders and orders[0] is order and order.is_filled:
            orders.pop(0)
            return True
        return False

    def cancel_order(self, order_id: str) -> BookOrder | None:
        for orders in (self.bids, self.asks):
            for i, bo in enumerate(orders):
                if bo.order_id == order_id:
                    del orders[i]
                    return bo
        return None

    def find(self, order_id: str) -> BookOrder | None:
        for bo in itertools.chain(self.bids, self.asks):
            if bo.order_id == order_id:
                return bo
        return None

    def checkpoint(self) -> tuple[list[BookOrder], list[BookOrder]]:
        """Deep-enough copy to undo an insert + match cascade."""
        return [replace(o) for o in self.bids], [replace(o) for o in self.asks]

    def restore(self, checkpoint: tuple[list[BookOrder], list[BookOrder]]) -> None:
        self.bids, self.asks = checkpoint


class OrderBookRegistry:
    """Process-wide map of pair symbol -> OrderBook. Constructed once, injected."""

    def __init__(self) -> None:
        self._books: dict[str, OrderBook] = {}

    def get_or_create(self, pair: str) -> OrderBook:
        if pair not in self._books:
            self._books[pair] = OrderBook(pair=pair)
        return self._books[pair]

    def get(self, pair: str) -> OrderBook | None:
        return self._books.get(pair)

    def __len__(self) -> int:
        return len(self._books)
