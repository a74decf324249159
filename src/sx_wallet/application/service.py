"""WalletApplicationService: wallet creation, balance reads and simulated deposits.

Writes commit explicitly and roll back on any error; reads run without an
explicit transaction.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_common.datetime_utils import utc_now
from src.sx_common.decimals import display, fits_storage_scale
from src.sx_common.enums import TransactionStatus, TransactionType
from src.sx_common.errors import InvalidAmountError, UnsupportedCurrencyError, WalletNotFoundError
from src.sx_market.domain.pairs import PairRegistry
from src.sx_wallet.application.schemas import DepositResponse, WalletResponse
from src.sx_wallet.domain.models import TransactionRecord
from src.sx_wallet.domain.repository import TransactionLogProtocol, WalletRepositoryProtocol
from src.sx_wallet.infrastructure.persistence import TransactionLog, WalletRepository

logger = logging.getLogger(__name__)


class WalletApplicationService:
    def __init__(
        self,
        pairs: PairRegistry,
        repo: WalletRepositoryProtocol | None = None,
        tx_log: TransactionLogProtocol | None = None,
    ) -> None:
        self._pairs = pairs
        self._repo: WalletRepositoryProtocol = repo or WalletRepository()
        self._tx_log: TransactionLogProtocol = tx_log or TransactionLog()

    async def create_wallet(self, db: AsyncSession, user_id: str) -> WalletResponse:
        """Idempotent: returns the existing wallet when there is one."""
        try:
            wallet = await self._repo.create_wallet(db, user_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return WalletResponse.from_domain(wallet)

    async def get_balances(self, db: AsyncSession, user_id: str) -> WalletResponse:
        wallet = await self._repo.get_wallet(db, user_id)
        if wallet is None:
            raise WalletNotFoundError(user_id)
        return WalletResponse.from_domain(wallet)

    async def deposit(
        self, db: AsyncSession, user_id: str, currency: str, amount: Decimal
    ) -> DepositResponse:
        if not self._pairs.is_active_currency(currency):
            raise UnsupportedCurrencyError(currency)
        if not amount.is_finite() or amount <= 0 or not fits_storage_scale(amount):
            raise InvalidAmountError(amount)

        record = TransactionRecord(
            owner_id=user_id,
            tx_type=TransactionType.DEPOSIT.value,
            currency=currency,
            quantity=amount,
            status=TransactionStatus.COMPLETED.value,
            timestamp=utc_now(),
        )
        try:
            balance = await self._repo.adjust_balance(db, user_id, currency, amount)
            await self._tx_log.append(db, record)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Deposit %s %s for user=%s, balance now %s", amount, currency, user_id, balance)
        return DepositResponse(
            currency=currency,
            amount=amount,
            balance=balance,
            balance_display=display(balance),
            transaction_id=record.id,
        )
