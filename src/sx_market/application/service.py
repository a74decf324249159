"""MarketApplicationService: read-only views over pairs and order books.

No DB access: pairs come from configuration, books from the matching engine.
"""

from src.sx_market.application.schemas import OrderbookResponse, PairItem
from src.sx_market.domain.pairs import PairRegistry
from src.sx_matching.engine.engine import MatchingEngine


class MarketApplicationService:
    def __init__(self, pairs: PairRegistry, engine: MatchingEngine) -> None:
        self._pairs = pairs
        self._engine = engine

    def list_pairs(self) -> list[PairItem]:
        return [PairItem.from_domain(p) for p in self._pairs.all()]

    async def get_orderbook(self, pair_symbol: str, depth: int) -> OrderbookResponse:
        snapshot = await self._engine.get_orderbook_snapshot(pair_symbol, depth)
        return OrderbookResponse.from_snapshot(snapshot)
