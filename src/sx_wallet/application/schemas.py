"""Pydantic schemas for sx_wallet API."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.sx_common.datetime_utils import iso_or_none
from src.sx_common.decimals import display
from src.sx_wallet.domain.models import Wallet

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class DepositRequest(BaseModel):
    currency: str = Field(..., min_length=1, max_length=16)
    amount: Decimal = Field(..., description="Amount to credit, must be positive")

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceItem(BaseModel):
    currency: str
    balance: Decimal
    balance_display: str


class WalletResponse(BaseModel):
    wallet_id: str
    user_id: str
    balances: list[BalanceItem]
    created_at: str | None

    @classmethod
    def from_domain(cls, wallet: Wallet) -> "WalletResponse":
        return cls(
            wallet_id=wallet.id,
            user_id=wallet.user_id,
            balances=[
                BalanceItem(currency=c, balance=b, balance_display=display(b))
                for c, b in sorted(wallet.balances.items())
            ],
            created_at=iso_or_none(wallet.created_at),
        )


class DepositResponse(BaseModel):
    currency: str
    amount: Decimal
    balance: Decimal
    balance_display: str
    transaction_id: int | None
