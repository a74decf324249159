# src/sx_order/application/service.py
from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_matching.domain.models import BookOrder
from src.sx_matching.engine.engine import MatchingEngine
from src.sx_order.application.schemas import (
    CancelOrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
)


def _order_to_response(order: BookOrder) -> PlaceOrderResponse:
    return PlaceOrderResponse(
        order_id=order.order_id,
        pair=order.pair,
        side=order.side,
        price=order.price,
        quantity=order.original_quantity,
        remaining_quantity=order.quantity,
        resting=order.quantity > 0,
    )


async def place_order(
    req: PlaceOrderRequest, user_id: str, engine: MatchingEngine, db: AsyncSession
) -> PlaceOrderResponse:
    # Fill details are not part of the contract; the engine already logged them.
    order, _fills = await engine.place_order(
        req.pair, req.side, req.quantity, req.price, user_id, db
    )
    return _order_to_response(order)


async def cancel_order(
    pair: str, order_id: str, user_id: str, engine: MatchingEngine
) -> CancelOrderResponse:
    order = await engine.cancel_order(pair, order_id, user_id)
    return CancelOrderResponse(
        order_id=order.order_id,
        pair=order.pair,
        side=order.side,
        cancelled_quantity=order.quantity,
    )
