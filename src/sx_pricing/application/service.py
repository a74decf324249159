"""PricingApplicationService: reference quotes and direct currency swaps.

A swap never touches the order book. It converts at the oracle rate inside a
single DB transaction: debit, credit, then one SWAP record.
"""

import logging
import random
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.sx_common.datetime_utils import utc_now
from src.sx_common.decimals import fits_storage_scale
from src.sx_common.enums import TransactionStatus, TransactionType
from src.sx_common.errors import (
    InvalidAmountError,
    SameCurrencyPairError,
    SameCurrencySwapError,
    UnsupportedCurrencyError,
    WalletNotFoundError,
)
from src.sx_market.domain.pairs import PairRegistry
from src.sx_pricing.application.schemas import QuoteResponse, SwapResponse
from src.sx_pricing.domain.oracle import PriceOracle, StaticPriceOracle
from src.sx_pricing.domain.spread import SpreadConfig, quote_bid_ask, resolve_spread
from src.sx_wallet.domain.models import TransactionRecord
from src.sx_wallet.domain.repository import TransactionLogProtocol, WalletRepositoryProtocol
from src.sx_wallet.infrastructure.persistence import TransactionLog, WalletRepository

logger = logging.getLogger(__name__)


class PricingApplicationService:
    def __init__(
        self,
        pairs: PairRegistry,
        oracle: PriceOracle | None = None,
        repo: WalletRepositoryProtocol | None = None,
        tx_log: TransactionLogProtocol | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._pairs = pairs
        self._oracle: PriceOracle = oracle or StaticPriceOracle()
        self._repo: WalletRepositoryProtocol = repo or WalletRepository()
        self._tx_log: TransactionLogProtocol = tx_log or TransactionLog()
        self._rng = rng

    def _require_active(self, *currencies: str) -> None:
        for currency in currencies:
            if not self._pairs.is_active_currency(currency):
                raise UnsupportedCurrencyError(currency)

    def get_quote(self, base: str, quote: str) -> QuoteResponse:
        base, quote = base.upper(), quote.upper()
        if base == quote:
            raise SameCurrencyPairError(f"{base}/{quote}")
        self._require_active(base, quote)

        spread = resolve_spread(
            f"{base}/{quote}",
            settings.PAIR_SPREADS,
            SpreadConfig(settings.DEFAULT_SPREAD_MIN_PCT, settings.DEFAULT_SPREAD_MAX_PCT),
        )
        return QuoteResponse.from_domain(
            quote_bid_ask(base, quote, self._oracle, spread, self._rng)
        )

    async def swap(
        self,
        db: AsyncSession,
        user_id: str,
        from_currency: str,
        to_currency: str,
        amount: Decimal,
    ) -> SwapResponse:
        if from_currency == to_currency:
            raise SameCurrencySwapError(from_currency)
        if not amount.is_finite() or amount <= 0 or not fits_storage_scale(amount):
            raise InvalidAmountError(amount)
        self._require_active(from_currency, to_currency)

        rate = self._oracle.get_rate(from_currency, to_currency)
        received = amount * rate
        record = TransactionRecord(
            owner_id=user_id,
            tx_type=TransactionType.SWAP.value,
            pair=f"{from_currency}/{to_currency}",
            quantity=amount,
            price=rate,
            status=TransactionStatus.COMPLETED.value,
            timestamp=utc_now(),
        )

        try:
            if await self._repo.get_wallet(db, user_id) is None:
                raise WalletNotFoundError(user_id)
            await self._repo.adjust_balance(db, user_id, from_currency, -amount)
            await self._repo.adjust_balance(db, user_id, to_currency, received)
            await self._tx_log.append(db, record)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Swap %s %s -> %s %s @ %s for user=%s",
            amount,
            from_currency,
            received,
            to_currency,
            rate,
            user_id,
        )
        return SwapResponse(
            from_currency=from_currency,
            to_currency=to_currency,
            amount=amount,
            rate=rate,
            received_amount=received,
            transaction_id=record.id,
        )
