from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.sx_common.errors import (
    InsufficientBalanceError,
    InvalidPriceError,
    InvalidQuantityError,
    WalletNotFoundError,
)
from src.sx_market.domain.models import TradingPair
from src.sx_matching.domain.models import BookOrder
from src.sx_risk.rules.balance_check import check_balance
from src.sx_risk.rules.order_params import check_order_params
from tests.unit.fakes import InMemoryLedger

PAIR = TradingPair(base="BTC", quote="USD")


def _order(side: str, qty: str, price: str, owner: str = "alice") -> BookOrder:
    return BookOrder(
        order_id="o1",
        owner_id=owner,
        pair=PAIR.symbol,
        side=side,
        price=Decimal(price),
        quantity=Decimal(qty),
        original_quantity=Decimal(qty),
        created_at=datetime.now(UTC),
    )


class TestOrderParams:
    def test_valid(self) -> None:
        check_order_params(Decimal("0.001"), Decimal("60000"))

    def test_full_storage_scale_accepted(self) -> None:
        check_order_params(Decimal("0.000000000000000001"), Decimal("1.500000000000000000000"))

    @pytest.mark.parametrize("qty", ["0", "-1", "NaN", "Infinity", "1.0000000000000000001"])
    def test_bad_quantity(self, qty: str) -> None:
        with pytest.raises(InvalidQuantityError):
            check_order_params(Decimal(qty), Decimal("1"))

    @pytest.mark.parametrize("price", ["0", "-0.01", "NaN", "0.0000000000000000005"])
    def test_bad_price(self, price: str) -> None:
        with pytest.raises(InvalidPriceError):
            check_order_params(Decimal("1"), Decimal(price))


class TestBalanceCheck:
    async def test_buy_needs_quote_notional(self) -> None:
        ledger = InMemoryLedger()
        ledger.fund("alice", USD="100")
        await check_balance(_order("BUY", "2", "50"), PAIR, ledger, db=None)
        with pytest.raises(InsufficientBalanceError) as exc:
            await check_balance(_order("BUY", "2", "50.01"), PAIR, ledger, db=None)
        assert "USD" in exc.value.message

    async def test_sell_needs_base_quantity(self) -> None:
        ledger = InMemoryLedger()
        ledger.fund("alice", BTC="1", USD="1000000")
        await check_balance(_order("SELL", "1", "60000"), PAIR, ledger, db=None)
        with pytest.raises(InsufficientBalanceError) as exc:
            await check_balance(_order("SELL", "1.1", "1"), PAIR, ledger, db=None)
        assert "BTC" in exc.value.message

    async def test_no_wallet(self) -> None:
        with pytest.raises(WalletNotFoundError):
            await check_balance(_order("BUY", "1", "1"), PAIR, InMemoryLedger(), db=None)
