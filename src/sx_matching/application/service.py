# src/sx_matching/application/service.py
from config.settings import settings
from src.sx_market.domain.pairs import PairRegistry
from src.sx_matching.engine.engine import MatchingEngine

_pairs: PairRegistry | None = None
_engine: MatchingEngine | None = None


def get_pair_registry() -> PairRegistry:
    global _pairs  # noqa: PLW0603
    if _pairs is None:
        _pairs = PairRegistry(settings.TRADING_PAIRS, settings.ACTIVE_CURRENCIES)
    return _pairs


def get_matching_engine() -> MatchingEngine:
    global _engine  # noqa: PLW0603
    if _engine is None:
        _engine = MatchingEngine(get_pair_registry())
    return _engine
