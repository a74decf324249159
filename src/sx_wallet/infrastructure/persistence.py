"""WalletRepository / TransactionLog: concrete implementations of the wallet Protocols.

Balance mutations use atomic PostgreSQL UPDATE ... RETURNING.
A result of 0 rows means a business constraint was violated (insufficient funds
or missing wallet); the follow-up read only decides which error to raise.

Transaction ownership: the CALLER (matching engine or application service) is
responsible for starting and committing the transaction.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sx_common.errors import InsufficientBalanceError, InternalError, WalletNotFoundError
from src.sx_wallet.domain.models import TransactionRecord, Wallet

# ---------------------------------------------------------------------------
# SQL: wallets
# ---------------------------------------------------------------------------

_GET_WALLET_SQL = text("""
    SELECT id, user_id, created_at
    FROM wallets
    WHERE user_id = :user_id
""")

_CREATE_WALLET_SQL = text("""
    INSERT INTO wallets (user_id)
    VALUES (:user_id)
    ON CONFLICT (user_id) DO UPDATE
        SET updated_at = NOW()
    RETURNING id, user_id, created_at
""")

_LIST_BALANCES_SQL = text("""
    SELECT currency, balance
    FROM wallet_balances
    WHERE user_id = :user_id
    ORDER BY currency
""")

# ---------------------------------------------------------------------------
# SQL: balances
# ---------------------------------------------------------------------------

_GET_BALANCE_SQL = text("""
    SELECT balance
    FROM wallet_balances
    WHERE user_id = :user_id AND currency = :currency
""")

# Credit: only succeeds when the wallet exists (INSERT ... SELECT FROM wallets)
_CREDIT_SQL = text("""
    INSERT INTO wallet_balances (user_id, currency, balance)
    SELECT w.user_id, :currency, :delta
    FROM wallets w
    WHERE w.user_id = :user_id
    ON CONFLICT (user_id, currency) DO UPDATE
        SET balance = wallet_balances.balance + EXCLUDED.balance,
            version = wallet_balances.version + 1,
            updated_at = NOW()
    RETURNING balance
""")

_DEBIT_SQL = text("""
    UPDATE wallet_balances
    SET balance = balance - :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE user_id = :user_id
      AND currency = :currency
      AND balance >= :amount
    RETURNING balance
""")

# ---------------------------------------------------------------------------
# SQL: wallet_transactions
# ---------------------------------------------------------------------------

_INSERT_TRANSACTION_SQL = text("""
    INSERT INTO wallet_transactions
        (owner_id, counterparty_id, tx_type, pair, side, currency,
         quantity, price, status, executed_at)
    VALUES
        (:owner_id, :counterparty_id, :tx_type, :pair, :side, :currency,
         :quantity, :price, :status, :executed_at)
    RETURNING id
""")


class WalletRepository:
    """Concrete repository: all balance operations atomic at the SQL level."""

    async def get_wallet(self, db: AsyncSession, user_id: str) -> Wallet | None:
        row = (await db.execute(_GET_WALLET_SQL, {"user_id": user_id})).fetchone()
        if row is None:
            return None
        balance_rows = (await db.execute(_LIST_BALANCES_SQL, {"user_id": user_id})).fetchall()
        return Wallet(
            id=str(row.id),
            user_id=row.user_id,
            balances={r.currency: r.balance for r in balance_rows},
            created_at=row.created_at,
        )

    async def create_wallet(self, db: AsyncSession, user_id: str) -> Wallet:
        row = (await db.execute(_CREATE_WALLET_SQL, {"user_id": user_id})).fetchone()
        if row is None:
            raise InternalError("Wallet upsert returned no rows; this should never happen")
        wallet = await self.get_wallet(db, user_id)
        if wallet is None:
            raise InternalError(f"Wallet vanished after upsert for user {user_id}")
        return wallet

    async def get_balance(self, db: AsyncSession, user_id: str, currency: str) -> Decimal:
        row = (
            await db.execute(_GET_BALANCE_SQL, {"user_id": user_id, "currency": currency})
        ).fetchone()
        return row.balance if row else Decimal("0")

    async def adjust_balance(
        self, db: AsyncSession, user_id: str, currency: str, delta: Decimal
    ) -> Decimal:
        """Apply a signed delta; returns the new balance.

        Raises WalletNotFoundError when the user has no wallet and
        InsufficientBalanceError when a debit would take the balance below zero.
        """
        if delta >= 0:
            row = (
                await db.execute(
                    _CREDIT_SQL, {"user_id": user_id, "currency": currency, "delta": delta}
                )
            ).fetchone()
            if row is None:
                raise WalletNotFoundError(user_id)
            return row.balance

        amount = -delta
        row = (
            await db.execute(
                _DEBIT_SQL, {"user_id": user_id, "currency": currency, "amount": amount}
            )
        ).fetchone()
        if row is None:
            exists = (await db.execute(_GET_WALLET_SQL, {"user_id": user_id})).fetchone()
            if exists is None:
                raise WalletNotFoundError(user_id)
            available = await self.get_balance(db, user_id, currency)
            raise InsufficientBalanceError(currency, amount, available)
        return row.balance


class TransactionLog:
    """Append-only writer for wallet_transactions, within the caller's transaction."""

    async def append(self, db: AsyncSession, record: TransactionRecord) -> None:
        row = (
            await db.execute(
                _INSERT_TRANSACTION_SQL,
                {
                    "owner_id": record.owner_id,
                    "counterparty_id": record.counterparty_id,
                    "tx_type": record.tx_type,
                    "pair": record.pair,
                    "side": record.side,
                    "currency": record.currency,
                    "quantity": record.quantity,
                    "price": record.price,
                    "status": record.status,
                    "executed_at": record.timestamp,
                },
            )
        ).fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows; this should never happen")
        record.id = row.id
