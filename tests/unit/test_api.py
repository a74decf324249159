"""HTTP-level tests: routers, error handlers and response envelope.

Database and engine dependencies are overridden with the in-memory ledger.
"""
from collections.abc import Iterator
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from src.main import app
from src.sx_common.database import get_db_session
from src.sx_market.domain.pairs import PairRegistry
from src.sx_matching.application.service import get_matching_engine, get_pair_registry
from src.sx_matching.engine.engine import MatchingEngine
from src.sx_pricing.api.router import get_pricing_service
from src.sx_pricing.application.service import PricingApplicationService
from src.sx_pricing.domain.oracle import StaticPriceOracle
from src.sx_wallet.api.router import get_wallet_service
from src.sx_wallet.application.service import WalletApplicationService
from tests.unit.fakes import FakeSession, InMemoryLedger

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


@pytest.fixture
def ledger() -> InMemoryLedger:
    ledger = InMemoryLedger()
    ledger.fund("alice", BTC="2", USD="0")
    ledger.fund("bob", USD="1000")
    return ledger


@pytest.fixture(autouse=True)
def overrides(ledger: InMemoryLedger) -> Iterator[None]:
    pairs = PairRegistry(["BTC/USD", "ETH/USD"], ["BTC", "ETH", "USD"])
    engine = MatchingEngine(pairs, wallets=ledger, tx_log=ledger)
    session = FakeSession(ledger)

    async def _db() -> FakeSession:
        return session

    app.dependency_overrides[get_db_session] = _db
    app.dependency_overrides[get_pair_registry] = lambda: pairs
    app.dependency_overrides[get_matching_engine] = lambda: engine
    app.dependency_overrides[get_wallet_service] = lambda: WalletApplicationService(
        pairs, repo=ledger, tx_log=ledger
    )
    app.dependency_overrides[get_pricing_service] = lambda: PricingApplicationService(
        pairs, StaticPriceOracle(), repo=ledger, tx_log=ledger
    )
    yield
    app.dependency_overrides.clear()


async def _place(
    client: AsyncClient, headers: dict[str, str], side: str, qty: str, price: str,
    pair: str = "BTC/USD",
) -> dict:
    resp = await client.post(
        "/api/v1/orders",
        json={"pair": pair, "side": side, "quantity": qty, "price": price},
        headers=headers,
    )
    return {"status": resp.status_code, **resp.json()}


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_request_id_header(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.headers["X-Request-Id"].startswith("req_")


class TestMarketApi:
    async def test_list_pairs(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/pairs")
        body = resp.json()
        assert body["code"] == 0
        assert [p["symbol"] for p in body["data"]] == ["BTC/USD", "ETH/USD"]

    async def test_orderbook_reflects_resting_orders(self, client: AsyncClient) -> None:
        await _place(client, ALICE, "SELL", "1", "105")
        await _place(client, BOB, "BUY", "2", "100")
        resp = await client.get("/api/v1/pairs/BTC/USD/orderbook", params={"depth": 5})
        data = resp.json()["data"]
        assert data["pair"] == "BTC/USD"
        assert [(Decimal(e["price"]), Decimal(e["quantity"])) for e in data["asks"]] == [
            (Decimal("105"), Decimal("1"))
        ]
        assert [Decimal(e["price"]) for e in data["bids"]] == [Decimal("100")]

    async def test_orderbook_unknown_pair(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/pairs/XRP/USD/orderbook")
        assert resp.status_code == 422
        assert resp.json()["code"] == 3001

    async def test_orderbook_depth_bounds(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/pairs/BTC/USD/orderbook", params={"depth": 0})
        assert resp.status_code == 422


class TestOrderApi:
    async def test_requires_user_header(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/orders",
            json={"pair": "BTC/USD", "side": "BUY", "quantity": "1", "price": "1"},
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == 1001

    async def test_resting_order_accepted(self, client: AsyncClient) -> None:
        body = await _place(client, ALICE, "sell", "1", "100")
        assert body["status"] == 201
        data = body["data"]
        assert data["accepted"] is True
        assert data["order_id"].startswith("ord_")
        assert data["side"] == "SELL"
        assert data["resting"] is True

    async def test_crossing_order_settles(
        self, client: AsyncClient, ledger: InMemoryLedger
    ) -> None:
        await _place(client, ALICE, "SELL", "1", "100")
        body = await _place(client, BOB, "BUY", "1", "110")
        assert body["status"] == 201
        assert Decimal(body["data"]["remaining_quantity"]) == 0
        assert body["data"]["resting"] is False
        assert ledger.balance("bob", "BTC") == Decimal("1")
        assert ledger.balance("alice", "USD") == Decimal("100")

    async def test_insufficient_balance(self, client: AsyncClient) -> None:
        body = await _place(client, BOB, "BUY", "100", "100")
        assert body["status"] == 422
        assert body["code"] == 2001
        assert body["data"] is None

    async def test_unknown_pair(self, client: AsyncClient) -> None:
        body = await _place(client, BOB, "BUY", "1", "1", pair="DOGE/USD")
        assert body["status"] == 422
        assert body["code"] == 3001

    async def test_invalid_side(self, client: AsyncClient) -> None:
        body = await _place(client, BOB, "HOLD", "1", "1")
        assert body["status"] == 422

    async def test_non_positive_price(self, client: AsyncClient) -> None:
        body = await _place(client, BOB, "BUY", "1", "0")
        assert body["status"] == 422
        assert body["code"] == 4001

    async def test_cancel_own_order(self, client: AsyncClient) -> None:
        placed = await _place(client, ALICE, "SELL", "1", "100")
        order_id = placed["data"]["order_id"]
        resp = await client.post(f"/api/v1/orders/BTC/USD/{order_id}/cancel", headers=ALICE)
        assert resp.status_code == 200
        assert Decimal(resp.json()["data"]["cancelled_quantity"]) == Decimal("1")
        book = await client.get("/api/v1/pairs/BTC/USD/orderbook")
        assert book.json()["data"]["asks"] == []

    async def test_cancel_someone_elses_order(self, client: AsyncClient) -> None:
        placed = await _place(client, ALICE, "SELL", "1", "100")
        order_id = placed["data"]["order_id"]
        resp = await client.post(f"/api/v1/orders/BTC/USD/{order_id}/cancel", headers=BOB)
        assert resp.status_code == 403
        assert resp.json()["code"] == 4005

    async def test_cancel_unknown_order(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/orders/BTC/USD/ord_nope/cancel", headers=ALICE)
        assert resp.status_code == 404


class TestWalletApi:
    async def test_create_deposit_and_read(self, client: AsyncClient) -> None:
        headers = {"X-User-Id": "dave"}
        created = await client.post("/api/v1/wallet", headers=headers)
        assert created.status_code == 201

        dep = await client.post(
            "/api/v1/wallet/deposit", json={"currency": "eth", "amount": "3.5"}, headers=headers
        )
        assert dep.status_code == 200
        assert dep.json()["data"]["balance_display"] == "3.5"

        resp = await client.get("/api/v1/wallet/balances", headers=headers)
        balances = resp.json()["data"]["balances"]
        assert [(b["currency"], b["balance_display"]) for b in balances] == [("ETH", "3.5")]

    async def test_balances_without_wallet(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/wallet/balances", headers={"X-User-Id": "nobody"})
        assert resp.status_code == 404
        assert resp.json()["code"] == 2002
        assert resp.json()["request_id"] == resp.headers["X-Request-Id"]

    async def test_storage_failure_maps_to_503(self, client: AsyncClient) -> None:
        failing = AsyncMock()
        failing.get_balances.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        app.dependency_overrides[get_wallet_service] = lambda: failing
        resp = await client.get("/api/v1/wallet/balances", headers=ALICE)
        assert resp.status_code == 503
        assert resp.json()["code"] == 9004


class TestPricingApi:
    async def test_quote(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/pricing/quote", params={"base": "BTC", "quote": "USD"})
        data = resp.json()["data"]
        assert Decimal(data["mid"]) == Decimal("60000")
        assert Decimal(data["bid"]) < Decimal(data["mid"]) < Decimal(data["ask"])

    async def test_swap(self, client: AsyncClient, ledger: InMemoryLedger) -> None:
        resp = await client.post(
            "/api/v1/pricing/swap",
            json={"from_currency": "BTC", "to_currency": "ETH", "amount": "1"},
            headers=ALICE,
        )
        assert resp.status_code == 200
        assert Decimal(resp.json()["data"]["received_amount"]) == Decimal("20")
        assert ledger.balance("alice", "ETH") == Decimal("20")

    async def test_swap_same_currency(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/pricing/swap",
            json={"from_currency": "BTC", "to_currency": "btc", "amount": "1"},
            headers=ALICE,
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 6001
