"""Reference prices for the quote and swap paths.

The matching engine never consults an oracle: order-book trades always execute
at book prices. Live feed acquisition lives outside this service; anything
that implements PriceOracle can be injected.
"""

from decimal import Decimal
from typing import Protocol

_ONE = Decimal("1")

# Quoted as 1 BASE = rate QUOTE. Inverse directions are derived.
DEFAULT_RATES: dict[tuple[str, str], Decimal] = {
    ("BTC", "ETH"): Decimal("20"),
    ("UNI", "ETH"): Decimal("2.261723"),
    ("BTC", "USD"): Decimal("60000"),
}


class PriceOracle(Protocol):
    def get_rate(self, base: str, quote: str) -> Decimal: ...


class StaticPriceOracle:
    """Fixed rate table. Unknown pairs fall back to 1:1."""

    def __init__(self, rates: dict[tuple[str, str], Decimal] | None = None) -> None:
        table = DEFAULT_RATES if rates is None else rates
        self._rates: dict[tuple[str, str], Decimal] = {}
        for (base, quote), rate in table.items():
            if rate <= 0:
                raise ValueError(f"Rate for {base}/{quote} must be positive, got {rate}")
            self._rates[(base, quote)] = rate
            self._rates.setdefault((quote, base), _ONE / rate)

    def get_rate(self, base: str, quote: str) -> Decimal:
        if base == quote:
            return _ONE
        return self._rates.get((base, quote), _ONE)
