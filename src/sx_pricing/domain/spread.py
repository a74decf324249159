"""Simulated bid/ask around an oracle mid price."""

import logging
import random
from dataclasses import dataclass
from decimal import Decimal

from src.sx_common.decimals import to_decimal
from src.sx_pricing.domain.oracle import PriceOracle

logger = logging.getLogger(__name__)

_TWO = Decimal("2")


@dataclass(frozen=True)
class SpreadConfig:
    min_pct: Decimal
    max_pct: Decimal

    def __post_init__(self) -> None:
        if self.min_pct < 0 or self.max_pct < self.min_pct:
            raise ValueError(f"Invalid spread range [{self.min_pct}, {self.max_pct}]")


@dataclass(frozen=True)
class BidAskQuote:
    pair: str
    bid: Decimal
    ask: Decimal
    mid: Decimal
    spread_pct: Decimal


def resolve_spread(
    pair: str,
    pair_spreads: dict[str, dict[str, Decimal]],
    default: SpreadConfig,
) -> SpreadConfig:
    cfg = pair_spreads.get(pair)
    if cfg is None:
        return default
    return SpreadConfig(min_pct=to_decimal(cfg["min"]), max_pct=to_decimal(cfg["max"]))


def quote_bid_ask(
    base: str,
    quote: str,
    oracle: PriceOracle,
    spread: SpreadConfig,
    rng: random.Random | None = None,
) -> BidAskQuote:
    """mid from the oracle, spread pct drawn uniformly in [min, max].

    bid = mid - mid*pct/2, ask = mid + mid*pct/2.
    """
    pair = f"{base}/{quote}"
    mid = oracle.get_rate(base, quote)
    factor = Decimal(str((rng or random).random()))
    pct = spread.min_pct + (spread.max_pct - spread.min_pct) * factor
    half = mid * pct / _TWO

    logger.debug("Spread for %s: mid=%s pct=%s", pair, mid, pct)
    return BidAskQuote(pair=pair, bid=mid - half, ask=mid + half, mid=mid, spread_pct=pct)
