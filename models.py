from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SymbolConfig:
    amount_scale: int  # decimal places allowed for order quantity
    price_scale: int  # decimal places allowed for order price


@dataclass(frozen=True)
class Quote:
    volume: float
    last: float
    sell: float  # best ask
    buy: float  # best bid
    high: float
    low: float
    time: int  # ms since epoch


@dataclass(frozen=True)
class Kline:
    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class Trade:
    trade_id: int  # unique per symbol only
    trade_type: str  # "buy" or "sell"
    price: float
    amount: float
    time: int


@dataclass(frozen=True)
class DepthEntry:
    price: float
    amount: float


@dataclass(frozen=True)
class Depth:
    """
    Order-book snapshot.

    Asks and bids are kept in the order the exchange sent them
    (conventionally asks ascending, bids descending by price).
    """

    asks: Tuple[DepthEntry, ...]
    bids: Tuple[DepthEntry, ...]
    time: int

    @property
    def best_ask(self) -> Optional[DepthEntry]:
        return self.asks[0] if self.asks else None

    @property
    def best_bid(self) -> Optional[DepthEntry]:
        return self.bids[0] if self.bids else None

    def top(self, levels: int) -> "Depth":
        """Return a copy holding only the first `levels` entries per side."""
        if levels <= 0:
            raise ValueError("levels must be >= 1")
        return Depth(asks=self.asks[:levels], bids=self.bids[:levels], time=self.time)
