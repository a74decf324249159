"""Trading pair registry: built once from configuration, immutable afterwards."""

import logging
from collections.abc import Iterable

from src.sx_common.errors import SameCurrencyPairError, TradingPairNotFoundError
from src.sx_market.domain.models import TradingPair

logger = logging.getLogger(__name__)


def split_symbol(symbol: str) -> tuple[str, str]:
    """'btc/usd' -> ('BTC', 'USD'). Raises TradingPairNotFoundError on malformed input."""
    parts = symbol.strip().upper().split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise TradingPairNotFoundError(symbol)
    return parts[0], parts[1]


class PairRegistry:
    def __init__(self, symbols: Iterable[str], active_currencies: Iterable[str]) -> None:
        self._active: frozenset[str] = frozenset(c.upper() for c in active_currencies)
        self._pairs: dict[str, TradingPair] = {}
        for symbol in symbols:
            base, quote = symbol.strip().upper().split("/")
            if base == quote:
                raise ValueError(f"Trading pair {symbol} has identical base and quote")
            for currency in (base, quote):
                if currency not in self._active:
                    raise ValueError(f"Trading pair {symbol} uses inactive currency {currency}")
            pair = TradingPair(base=base, quote=quote)
            if pair.symbol in self._pairs:
                raise ValueError(f"Duplicate trading pair {pair.symbol}")
            self._pairs[pair.symbol] = pair
        logger.info("Loaded %d trading pairs", len(self._pairs))

    @property
    def active_currencies(self) -> frozenset[str]:
        return self._active

    def all(self) -> list[TradingPair]:
        return list(self._pairs.values())

    def is_active_currency(self, currency: str) -> bool:
        return currency.upper() in self._active

    def resolve(self, symbol: str) -> TradingPair:
        """Return the configured pair or raise a validation error."""
        base, quote = split_symbol(symbol)
        if base == quote:
            raise SameCurrencyPairError(symbol)
        pair = self._pairs.get(f"{base}/{quote}")
        if pair is None:
            raise TradingPairNotFoundError(symbol)
        return pair
