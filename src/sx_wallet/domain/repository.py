"""Repository Protocols: dependency inversion for testability.

Unit tests inject in-memory fakes that conform to these Protocols.
Infrastructure layer provides the real implementations.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_wallet.domain.models import TransactionRecord, Wallet


class WalletRepositoryProtocol(Protocol):
    async def get_wallet(self, db: AsyncSession, user_id: str) -> Wallet | None: ...

    async def create_wallet(self, db: AsyncSession, user_id: str) -> Wallet: ...

    async def get_balance(self, db: AsyncSession, user_id: str, currency: str) -> Decimal: ...

    async def adjust_balance(
        self, db: AsyncSession, user_id: str, currency: str, delta: Decimal
    ) -> Decimal: ...


class TransactionLogProtocol(Protocol):
    async def append(self, db: AsyncSession, record: TransactionRecord) -> None: ...
