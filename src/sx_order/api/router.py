# src/sx_order/api/router.py
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_common.database import get_db_session
from src.sx_common.response import ApiResponse, success_response
from src.sx_gateway.auth.dependencies import get_current_user_id
from src.sx_matching.application.service import get_matching_engine
from src.sx_matching.engine.engine import MatchingEngine
from src.sx_order.application import service as svc
from src.sx_order.application.schemas import PlaceOrderRequest

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=201)
async def place_order(
    req: PlaceOrderRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
    engine: Annotated[MatchingEngine, Depends(get_matching_engine)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await svc.place_order(req, user_id, engine, db)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{base}/{quote}/{order_id}/cancel")
async def cancel_order(
    base: str,
    quote: str,
    order_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    engine: Annotated[MatchingEngine, Depends(get_matching_engine)],
    request: Request,
) -> ApiResponse:
    data = await svc.cancel_order(f"{base}/{quote}", order_id, user_id, engine)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
