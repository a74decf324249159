"""Trade settlement: applies one fill to both wallets and logs both sides.

Runs inside the placement transaction opened by MatchingEngine. Every error
propagates; the engine rolls back the database and restores the book.
"""
import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_common.datetime_utils import utc_now
from src.sx_common.enums import OrderSide, TransactionStatus, TransactionType
from src.sx_common.errors import MissingLedgerError
from src.sx_market.domain.pairs import split_symbol
from src.sx_matching.domain.models import Fill
from src.sx_wallet.domain.models import TransactionRecord
from src.sx_wallet.domain.repository import TransactionLogProtocol, WalletRepositoryProtocol

logger = logging.getLogger(__name__)


async def settle_fill(
    fill: Fill,
    wallets: WalletRepositoryProtocol,
    tx_log: TransactionLogProtocol,
    db: AsyncSession,
) -> None:
    """Buyer pays quantity*price in quote and receives quantity in base; seller mirrored."""
    base, quote = split_symbol(fill.pair)

    for user_id in (fill.buyer_id, fill.seller_id):
        if await wallets.get_wallet(db, user_id) is None:
            logger.error(
                "Ledger integrity: no wallet for user=%s in fill %s/%s on %s",
                user_id,
                fill.buy_order_id,
                fill.sell_order_id,
                fill.pair,
            )
            raise MissingLedgerError(user_id)

    cost = fill.notional

    await wallets.adjust_balance(db, fill.buyer_id, quote, -cost)
    await wallets.adjust_balance(db, fill.buyer_id, base, fill.quantity)

    await wallets.adjust_balance(db, fill.seller_id, base, -fill.quantity)
    await wallets.adjust_balance(db, fill.seller_id, quote, cost)

    executed_at = utc_now()
    await tx_log.append(db, _trade_record(fill, OrderSide.BUY, executed_at))
    await tx_log.append(db, _trade_record(fill, OrderSide.SELL, executed_at))

    logger.debug(
        "Settled %s %s @ %s buyer=%s seller=%s",
        fill.pair,
        fill.quantity,
        fill.price,
        fill.buyer_id,
        fill.seller_id,
    )


def _trade_record(fill: Fill, side: OrderSide, executed_at: datetime) -> TransactionRecord:
    is_buy = side == OrderSide.BUY
    return TransactionRecord(
        owner_id=fill.buyer_id if is_buy else fill.seller_id,
        counterparty_id=fill.seller_id if is_buy else fill.buyer_id,
        tx_type=TransactionType.TRADE.value,
        pair=fill.pair,
        side=side.value,
        quantity=fill.quantity,
        price=fill.price,
        status=TransactionStatus.COMPLETED.value,
        timestamp=executed_at,
    )
