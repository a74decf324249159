"""MatchingEngine: stateful orchestrator for per-pair order placement."""
import asyncio
import logging
from collections import defaultdict
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_clearing.domain.settlement import settle_fill
from src.sx_common.datetime_utils import utc_now
from src.sx_common.enums import OrderSide
from src.sx_common.errors import (
    InvalidOrderSideError,
    OrderNotFoundError,
    OrderOwnershipError,
)
from src.sx_common.id_generator import generate_order_id
from src.sx_market.domain.models import BookEntry, OrderbookSnapshot, TradingPair
from src.sx_market.domain.pairs import PairRegistry
from src.sx_matching.domain.models import BookOrder, Fill
from src.sx_matching.engine.matching_algo import match_book
from src.sx_matching.engine.order_book import OrderBook, OrderBookRegistry
from src.sx_risk.rules.balance_check import check_balance
from src.sx_risk.rules.order_params import check_order_params
from src.sx_wallet.domain.repository import TransactionLogProtocol, WalletRepositoryProtocol
from src.sx_wallet.infrastructure.persistence import TransactionLog, WalletRepository

logger = logging.getLogger(__name__)


def _parse_side(side: str) -> OrderSide:
    try:
        return OrderSide(str(side).upper())
    except ValueError:
        raise InvalidOrderSideError(side) from None


class MatchingEngine:
    def __init__(
        self,
        pairs: PairRegistry,
        books: OrderBookRegistry | None = None,
        wallets: WalletRepositoryProtocol | None = None,
        tx_log: TransactionLogProtocol | None = None,
    ) -> None:
        self._pairs = pairs
        self._books = books if books is not None else OrderBookRegistry()
        self._wallets: WalletRepositoryProtocol = wallets or WalletRepository()
        self._tx_log: TransactionLogProtocol = tx_log or TransactionLog()
        self._pair_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @property
    def books(self) -> OrderBookRegistry:
        return self._books

    @property
    def pairs(self) -> PairRegistry:
        return self._pairs

    def _get_or_create_lock(self, pair: str) -> asyncio.Lock:
        return self._pair_locks[pair]

    async def place_order(
        self,
        pair_symbol: str,
        side: str,
        quantity: Decimal,
        price: Decimal,
        owner_id: str,
        db: AsyncSession,
    ) -> tuple[BookOrder, list[Fill]]:
        """Main entry point. Returns (order as left in the book, fills executed).

        Validation errors are raised before anything is touched. Once the pair
        lock is held, insert + match + settle run in one DB transaction; on any
        failure the transaction is rolled back and the book is restored to its
        pre-placement state.
        """
        pair = self._pairs.resolve(pair_symbol)
        order_side = _parse_side(side)
        check_order_params(quantity, price)

        order = BookOrder(
            order_id=generate_order_id(),
            owner_id=owner_id,
            pair=pair.symbol,
            side=order_side.value,
            price=price,
            quantity=quantity,
            original_quantity=quantity,
            created_at=utc_now(),
        )

        lock = self._get_or_create_lock(pair.symbol)
        async with lock:
            ob = self._books.get_or_create(pair.symbol)
            checkpoint = ob.checkpoint()
            try:
                async with db.begin_nested():
                    fills = await self._place_order_inner(order, pair, ob, db)
                await db.commit()
            except Exception:
                ob.restore(checkpoint)
                await db.rollback()
                logger.warning(
                    "Order %s on %s rolled back; book restored", order.order_id, pair.symbol
                )
                raise

        logger.info(
            "Order %s %s %s @ %s on %s by %s: %d fill(s), remaining %s",
            order.order_id,
            order.side,
            order.original_quantity,
            order.price,
            pair.symbol,
            owner_id,
            len(fills),
            order.quantity,
        )
        return order, fills

    async def _place_order_inner(
        self, order: BookOrder, pair: TradingPair, ob: OrderBook, db: AsyncSession
    ) -> list[Fill]:
        await check_balance(order, pair, self._wallets, db)

        ob.add_order(order)
        fills = match_book(ob)

        for fill in fills:
            await settle_fill(fill, self._wallets, self._tx_log, db)
        return fills

    async def cancel_order(self, pair_symbol: str, order_id: str, owner_id: str) -> BookOrder:
        """Remove a resting order. Nothing was reserved, so no ledger effect."""
        pair = self._pairs.resolve(pair_symbol)
        lock = self._get_or_create_lock(pair.symbol)
        async with lock:
            ob = self._books.get(pair.symbol)
            order = ob.find(order_id) if ob is not None else None
            if ob is None or order is None:
                raise OrderNotFoundError(order_id)
            if order.owner_id != owner_id:
                raise OrderOwnershipError(order_id)
            ob.cancel_order(order_id)
        logger.info("Order %s on %s cancelled by %s", order_id, pair.symbol, owner_id)
        return order

    async def get_orderbook_snapshot(self, pair_symbol: str, depth: int) -> OrderbookSnapshot:
        """Top `depth` levels per side. Waits for any in-flight placement on the pair."""
        pair = self._pairs.resolve(pair_symbol)
        depth = max(depth, 0)
        async with self._get_or_create_lock(pair.symbol):
            ob = self._books.get_or_create(pair.symbol)
            bids = [BookEntry(price=o.price, quantity=o.quantity) for o in ob.bids[:depth]]
            asks = [BookEntry(price=o.price, quantity=o.quantity) for o in ob.asks[:depth]]
        return OrderbookSnapshot(pair=pair.symbol, bids=bids, asks=asks, updated_at=utc_now())
