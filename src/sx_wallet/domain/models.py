"""Domain models for sx_wallet: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass
class Wallet:
    id: str
    user_id: str
    balances: dict[str, Decimal] = field(default_factory=dict)  # currency -> amount
    created_at: datetime | None = None

    def balance_of(self, currency: str) -> Decimal:
        return self.balances.get(currency, Decimal("0"))


@dataclass
class TransactionRecord:
    """One append-only economic event. Never read back by the matching engine."""

    owner_id: str
    tx_type: str                     # TransactionType value
    quantity: Decimal                # base units for trades, amount for swap/deposit
    status: str                      # TransactionStatus value
    timestamp: datetime
    pair: str | None = None          # "BASE/QUOTE" for trades, "FROM/TO" for swaps
    side: str | None = None          # OrderSide value for trades
    price: Decimal | None = None     # trade price or swap rate
    currency: str | None = None      # deposits only
    counterparty_id: str | None = None
    id: int | None = None            # BIGSERIAL, set once persisted
