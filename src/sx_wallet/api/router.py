"""sx_wallet REST API: 3 endpoints, all scoped to the calling user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_common.database import get_db_session
from src.sx_common.response import ApiResponse, success_response
from src.sx_gateway.auth.dependencies import get_current_user_id
from src.sx_market.domain.pairs import PairRegistry
from src.sx_matching.application.service import get_pair_registry
from src.sx_wallet.application.schemas import DepositRequest
from src.sx_wallet.application.service import WalletApplicationService

router = APIRouter(prefix="/wallet", tags=["wallet"])


def get_wallet_service(
    pairs: Annotated[PairRegistry, Depends(get_pair_registry)],
) -> WalletApplicationService:
    return WalletApplicationService(pairs)


@router.post("", status_code=201)
async def create_wallet(
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[WalletApplicationService, Depends(get_wallet_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await service.create_wallet(db, user_id)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/balances")
async def get_balances(
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[WalletApplicationService, Depends(get_wallet_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await service.get_balances(db, user_id)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/deposit")
async def deposit(
    body: DepositRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[WalletApplicationService, Depends(get_wallet_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await service.deposit(db, user_id, body.currency, body.amount)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
