"""Price-time priority matching loop for one pair's book."""
from decimal import Decimal

from src.sx_common.enums import OrderSide
from src.sx_matching.domain.models import BookOrder, Fill
from src.sx_matching.engine.order_book import OrderBook


def is_crossed(ob: OrderBook) -> bool:
    best_bid = ob.peek_best(OrderSide.BUY)
    best_ask = ob.peek_best(OrderSide.SELL)
    return best_bid is not None and best_ask is not None and best_bid.price >= best_ask.price


def match_book(ob: OrderBook) -> list[Fill]:
    """Execute every crossing trade left in the book, best prices first.

    Mutates resting quantities and removes fully filled orders. Returns the
    fills in execution order; settlement is the caller's job.
    """
    fills: list[Fill] = []
    while is_crossed(ob):
        bid: BookOrder = ob.bids[0]
        ask: BookOrder = ob.asks[0]
        fill_qty: Decimal = min(bid.quantity, ask.quantity)
        fills.append(_make_fill(ob.pair, bid, ask, fill_qty))
        bid.quantity -= fill_qty
        ask.quantity -= fill_qty
        ob.remove_if_filled(OrderSide.BUY, bid)
        ob.remove_if_filled(OrderSide.SELL, ask)
    return fills


def _make_fill(pair: str, bid: BookOrder, ask: BookOrder, qty: Decimal) -> Fill:
    # earlier arrival = resting = maker; the maker's price is the trade price
    maker, taker = (bid, ask) if bid.sequence < ask.sequence else (ask, bid)
    return Fill(
        pair=pair,
        buy_order_id=bid.order_id,
        sell_order_id=ask.order_id,
        buyer_id=bid.owner_id,
        seller_id=ask.owner_id,
        quantity=qty,
        price=maker.price,
        maker_order_id=maker.order_id,
        taker_order_id=taker.order_id,
    )
