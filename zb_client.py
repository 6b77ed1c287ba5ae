from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple, Union
from urllib.parse import urlencode

from config_loader import ZbConfig
from decoders import (
    decode_depth,
    decode_klines,
    decode_quote,
    decode_symbols,
    decode_trades,
)
from models import Depth, Kline, Quote, SymbolConfig, Trade
from transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


# Map our internal intervals (e.g. "1m") to ZB kline `type` tokens.
INTERVAL_TO_PERIOD: Dict[str, str] = {
    "1m": "1min",
    "3m": "3min",
    "5m": "5min",
    "15m": "15min",
    "30m": "30min",
    "1h": "1hour",
    "2h": "2hour",
    "4h": "4hour",
    "6h": "6hour",
    "12h": "12hour",
    "1d": "1day",
    "3d": "3day",
    "1w": "1week",
}


def interval_to_period(interval: str) -> str:
    """Translate "1m"/"1h"/... to ZB's token; anything else is passed through."""
    return INTERVAL_TO_PERIOD.get(interval, interval)


def datetime_to_ms(dt: datetime) -> int:
    """Unix ms for `dt`; naive datetimes are read as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def _require_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


class ZbClient:
    """
    Read-only client for the ZB public market-data API.

    Public methods map one-to-one onto data endpoints:

      - get_symbols()                           GET markets
      - get_latest_quote(symbol)                GET ticker
      - get_klines(symbol, period, since, size) GET kline
      - get_trades(symbol, since)               GET trades
      - get_depth(symbol, size)                 GET depth

    Each call is one blocking round trip through the injected Transport
    followed by a pure decode. TransportError and DecodeError propagate to
    the caller; nothing is retried or cached here. Wrap calls in a
    resilience.ResilientExecutor if retries are wanted.
    """

    def __init__(
        self,
        cfg: Optional[ZbConfig] = None,
        transport: Optional[Transport] = None,
        strict: Optional[bool] = None,
    ) -> None:
        """
        :param cfg:       ZbConfig (base URL, timeout, decoding mode).
        :param transport: Anything with get(url) -> bytes. Defaults to an
                          HttpTransport using cfg.timeout_seconds.
        :param strict:    Overrides cfg.strict_decoding when given.
        """
        self.cfg = cfg or ZbConfig()
        self.transport = transport or HttpTransport(self.cfg.timeout_seconds)
        self.strict = self.cfg.strict_decoding if strict is None else strict

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _url(self, endpoint: str, **params: object) -> str:
        url = self.cfg.base_url + endpoint
        if params:
            url += "?" + urlencode(params)
        return url

    def _get(self, endpoint: str, **params: object) -> bytes:
        url = self._url(endpoint, **params)
        logger.debug("GET %s", url)
        return self.transport.get(url)

    # -------------------------------------------------------------------------
    # Public methods
    # -------------------------------------------------------------------------

    def get_symbols(self) -> Dict[str, SymbolConfig]:
        configs = decode_symbols(self._get("markets"), strict=self.strict)
        logger.debug("markets: %d symbols", len(configs))
        return configs

    def get_latest_quote(self, symbol: str) -> Quote:
        quote = decode_quote(self._get("ticker", market=symbol), strict=self.strict)
        logger.debug("ticker %s: last=%s time=%d", symbol, quote.last, quote.time)
        return quote

    def get_klines(
        self,
        symbol: str,
        period: str,
        since: Union[int, datetime],
        size: int,
    ) -> Tuple[Kline, ...]:
        """
        Fetch candles for `symbol`.

        :param period: ZB kline type ("1min", "1day", ...), sent unvalidated.
                       See interval_to_period() for the short forms.
        :param since:  Start time, as ms since epoch or a datetime.
        :param size:   Maximum number of candles.
        """
        if isinstance(since, datetime):
            since = datetime_to_ms(since)
        _require_non_negative("since", since)
        if size < 1:
            raise ValueError(f"size must be >= 1, got {size}")

        body = self._get("kline", market=symbol, type=period, since=since, size=size)
        klines = decode_klines(body, strict=self.strict)
        logger.debug("kline %s %s: %d candles", symbol, period, len(klines))
        return klines

    def get_trades(self, symbol: str, since: int) -> Tuple[Trade, ...]:
        """
        Fetch recent trades for `symbol`.

        :param since: Trade id (tid) to start from. Unlike get_klines this is
                      not a timestamp.
        """
        _require_non_negative("since", since)

        trades = decode_trades(
            self._get("trades", market=symbol, since=since), strict=self.strict
        )
        logger.debug("trades %s: %d trades", symbol, len(trades))
        return trades

    def get_depth(self, symbol: str, size: int) -> Depth:
        if size < 1:
            raise ValueError(f"size must be >= 1, got {size}")

        depth = decode_depth(
            self._get("depth", market=symbol, size=size), strict=self.strict
        )
        logger.debug(
            "depth %s: %d asks, %d bids", symbol, len(depth.asks), len(depth.bids)
        )
        return depth

    def get_depth_top_levels(self, symbol: str, size: int, levels: int) -> Depth:
        """
        Fetch the book up to `size` and keep only the top `levels` per side.
        """
        if levels < 1:
            raise ValueError("levels must be >= 1")
        return self.get_depth(symbol, size).top(levels)
