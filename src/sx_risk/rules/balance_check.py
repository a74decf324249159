"""Balance sufficiency pre-check for new orders.

Nothing is frozen or reserved: balances only move at settlement. A resting
order's backing funds can therefore be spent elsewhere before it fills; that
case surfaces as InsufficientBalanceError from settlement and fails the
placement that triggered the match.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_common.enums import OrderSide
from src.sx_common.errors import InsufficientBalanceError, WalletNotFoundError
from src.sx_market.domain.models import TradingPair
from src.sx_matching.domain.models import BookOrder
from src.sx_wallet.domain.repository import WalletRepositoryProtocol


async def check_balance(
    order: BookOrder,
    pair: TradingPair,
    wallets: WalletRepositoryProtocol,
    db: AsyncSession,
) -> None:
    wallet = await wallets.get_wallet(db, order.owner_id)
    if wallet is None:
        raise WalletNotFoundError(order.owner_id)

    if order.side == OrderSide.BUY:
        currency = pair.quote
        required = order.quantity * order.price
    else:
        currency = pair.base
        required = order.quantity

    available = wallet.balance_of(currency)
    if available < required:
        raise InsufficientBalanceError(currency, required, available)
