"""sx_market REST API: trading pairs and order-book market data (public)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from config.settings import settings
from src.sx_common.response import ApiResponse, success_response
from src.sx_market.application.service import MarketApplicationService
from src.sx_market.domain.pairs import PairRegistry
from src.sx_matching.application.service import get_matching_engine, get_pair_registry
from src.sx_matching.engine.engine import MatchingEngine

router = APIRouter(prefix="/pairs", tags=["market"])


def get_market_service(
    pairs: Annotated[PairRegistry, Depends(get_pair_registry)],
    engine: Annotated[MatchingEngine, Depends(get_matching_engine)],
) -> MarketApplicationService:
    return MarketApplicationService(pairs, engine)


@router.get("")
async def list_pairs(
    service: Annotated[MarketApplicationService, Depends(get_market_service)],
    request: Request,
) -> ApiResponse:
    data = [p.model_dump() for p in service.list_pairs()]
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{base}/{quote}/orderbook")
async def get_orderbook(
    base: str,
    quote: str,
    service: Annotated[MarketApplicationService, Depends(get_market_service)],
    request: Request,
    depth: int = Query(
        settings.ORDERBOOK_DEFAULT_DEPTH,
        ge=1,
        le=settings.ORDERBOOK_MAX_DEPTH,
        description="Orders per side",
    ),
) -> ApiResponse:
    data = await service.get_orderbook(f"{base}/{quote}", depth)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
