"""sx_pricing REST API: reference quote (public) and direct swap."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_common.database import get_db_session
from src.sx_common.response import ApiResponse, success_response
from src.sx_gateway.auth.dependencies import get_current_user_id
from src.sx_market.domain.pairs import PairRegistry
from src.sx_matching.application.service import get_pair_registry
from src.sx_pricing.application.schemas import SwapRequest
from src.sx_pricing.application.service import PricingApplicationService

router = APIRouter(prefix="/pricing", tags=["pricing"])


def get_pricing_service(
    pairs: Annotated[PairRegistry, Depends(get_pair_registry)],
) -> PricingApplicationService:
    return PricingApplicationService(pairs)


@router.get("/quote")
async def get_quote(
    service: Annotated[PricingApplicationService, Depends(get_pricing_service)],
    request: Request,
    base: str = Query(..., min_length=1, max_length=16),
    quote: str = Query(..., min_length=1, max_length=16),
) -> ApiResponse:
    data = service.get_quote(base, quote)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/swap")
async def swap(
    body: SwapRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[PricingApplicationService, Depends(get_pricing_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await service.swap(db, user_id, body.from_currency, body.to_currency, body.amount)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
