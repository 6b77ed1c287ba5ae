"""
Decoders for ZB data-API responses.

Each decode_* function is a pure function of the response body. Structural
problems (invalid JSON, wrong top-level type, missing `ticker`/`data`/
`asks`/`bids`) always raise DecodeError.

Individual fields are coerced with one explicit policy:

  - numbers may arrive as JSON numbers or as JSON strings holding an
    unsigned decimal ("50000.1", "1700000000000"); signs, underscores and
    surrounding whitespace are rejected;
  - booleans, negatives, NaN/inf and non-integral ids/timestamps are rejected;
  - strict=False: a rejected or missing field becomes 0 (or "" for the
    trade side) and a WARNING names the field;
  - strict=True: the first rejected or missing field raises FieldDecodeError.
"""
from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, List, Optional, Tuple, Union

from errors import DecodeError, FieldDecodeError
from models import Depth, DepthEntry, Kline, Quote, SymbolConfig, Trade

logger = logging.getLogger(__name__)

RawBody = Union[bytes, str]

MAX_SCALE = 255
KLINE_FIELDS = ("time", "open", "high", "low", "close", "volume")

_MISSING = object()

# Numeric strings follow JSON's digit grammar (no sign, underscores or padding).
_DECIMAL_RE = re.compile(r"[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?\Z")
_UINT_RE = re.compile(r"[0-9]+\Z")


# -----------------------------------------------------------------------------
# Field coercion
# -----------------------------------------------------------------------------


def _reject(field: str, value: Any, reason: str, strict: bool, default: Any) -> Any:
    if strict:
        raise FieldDecodeError(field, None if value is _MISSING else value, reason)
    logger.warning(
        "Zero-filling %s: %s (got %r)",
        field,
        reason,
        None if value is _MISSING else value,
    )
    return default


def _to_float(value: Any, field: str, strict: bool) -> float:
    if value is _MISSING:
        return _reject(field, value, "missing", strict, 0.0)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return _reject(field, value, "not a number", strict, 0.0)
    if isinstance(value, str) and not _DECIMAL_RE.match(value):
        return _reject(field, value, "not a decimal string", strict, 0.0)
    try:
        number = float(value)
    except OverflowError:
        return _reject(field, value, "out of range", strict, 0.0)
    if not math.isfinite(number) or number < 0:
        return _reject(field, value, "not a finite non-negative number", strict, 0.0)
    return number


def _to_uint(
    value: Any,
    field: str,
    strict: bool,
    upper: Optional[int] = None,
) -> int:
    if value is _MISSING:
        return _reject(field, value, "missing", strict, 0)
    if isinstance(value, bool):
        return _reject(field, value, "not an integer", strict, 0)

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return _reject(field, value, "not an integer", strict, 0)
        number = int(value)
    elif isinstance(value, str):
        if not _UINT_RE.match(value):
            return _reject(field, value, "not an integer string", strict, 0)
        number = int(value)
    else:
        return _reject(field, value, "not an integer", strict, 0)

    if number < 0 or (upper is not None and number > upper):
        return _reject(field, value, "out of range", strict, 0)
    return number


def _to_str(value: Any, field: str, strict: bool) -> str:
    if value is _MISSING:
        return _reject(field, value, "missing", strict, "")
    if not isinstance(value, str):
        return _reject(field, value, "not a string", strict, "")
    return value


def _item(seq: List[Any], index: int) -> Any:
    return seq[index] if index < len(seq) else _MISSING


# -----------------------------------------------------------------------------
# Structure helpers
# -----------------------------------------------------------------------------


def _load(raw: RawBody, endpoint: str) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        raise DecodeError(f"{endpoint}: response is not valid JSON: {e}") from e


def _load_object(raw: RawBody, endpoint: str) -> Dict[str, Any]:
    payload = _load(raw, endpoint)
    if not isinstance(payload, dict):
        raise DecodeError(
            f"{endpoint}: expected a JSON object, got {type(payload).__name__}"
        )
    return payload


def _require_list(payload: Dict[str, Any], key: str, endpoint: str) -> List[Any]:
    value = payload.get(key)
    if not isinstance(value, list):
        raise DecodeError(f"{endpoint}: missing {key!r} array")
    return value


def _as_object(value: Any, field: str, strict: bool) -> Dict[str, Any]:
    if isinstance(value, dict):
        return value
    return _reject(field, value, "not an object", strict, {})


def _as_array(value: Any, field: str, strict: bool) -> List[Any]:
    if isinstance(value, list):
        return value
    return _reject(field, value, "not an array", strict, [])


# -----------------------------------------------------------------------------
# Endpoint decoders
# -----------------------------------------------------------------------------


def decode_symbols(raw: RawBody, strict: bool = False) -> Dict[str, SymbolConfig]:
    """
    Decode `markets`: {"btc_usdt": {"amountScale": 4, "priceScale": 2, ...}, ...}.

    Every top-level key becomes one entry; other per-symbol keys are ignored.
    """
    payload = _load_object(raw, "markets")

    configs: Dict[str, SymbolConfig] = {}
    for symbol, value in payload.items():
        info = _as_object(value, symbol, strict)
        configs[symbol] = SymbolConfig(
            amount_scale=_to_uint(
                info.get("amountScale", _MISSING),
                f"{symbol}.amountScale",
                strict,
                upper=MAX_SCALE,
            ),
            price_scale=_to_uint(
                info.get("priceScale", _MISSING),
                f"{symbol}.priceScale",
                strict,
                upper=MAX_SCALE,
            ),
        )
    return configs


def decode_quote(raw: RawBody, strict: bool = False) -> Quote:
    """Decode `ticker`: {"ticker": {"vol": "...", "last": "...", ...}, "date": "..."}."""
    payload = _load_object(raw, "ticker")
    ticker = payload.get("ticker")
    if not isinstance(ticker, dict):
        raise DecodeError("ticker: missing 'ticker' object")

    def num(key: str) -> float:
        return _to_float(ticker.get(key, _MISSING), f"ticker.{key}", strict)

    return Quote(
        volume=num("vol"),
        last=num("last"),
        sell=num("sell"),
        buy=num("buy"),
        high=num("high"),
        low=num("low"),
        time=_to_uint(payload.get("date", _MISSING), "date", strict),
    )


def decode_klines(raw: RawBody, strict: bool = False) -> Tuple[Kline, ...]:
    """
    Decode `kline`: {"data": [[time, open, high, low, close, volume], ...]}.

    One Kline per element of `data`, in the same order. In lenient mode a
    short or malformed row still yields a Kline with the bad positions zeroed.
    """
    payload = _load_object(raw, "kline")
    rows = _require_list(payload, "data", "kline")

    klines: List[Kline] = []
    for i, value in enumerate(rows):
        path = f"data[{i}]"
        row = _as_array(value, path, strict)
        if row and len(row) != len(KLINE_FIELDS):
            _reject(
                path, row, f"expected {len(KLINE_FIELDS)} elements", strict, None
            )

        def num(index: int) -> float:
            return _to_float(
                _item(row, index), f"{path}.{KLINE_FIELDS[index]}", strict
            )

        klines.append(
            Kline(
                time=_to_uint(_item(row, 0), f"{path}.time", strict),
                open=num(1),
                high=num(2),
                low=num(3),
                close=num(4),
                volume=num(5),
            )
        )
    return tuple(klines)


def decode_trades(raw: RawBody, strict: bool = False) -> Tuple[Trade, ...]:
    """
    Decode `trades`: a bare JSON array of
    {"tid": 1, "type": "buy", "amount": "0.5", "price": "50000", "date": 1700000000}.

    Exchange order is preserved.
    """
    payload = _load(raw, "trades")
    if not isinstance(payload, list):
        raise DecodeError(
            f"trades: expected a JSON array, got {type(payload).__name__}"
        )

    trades: List[Trade] = []
    for i, value in enumerate(payload):
        path = f"[{i}]"
        item = _as_object(value, path, strict)
        trades.append(
            Trade(
                trade_id=_to_uint(item.get("tid", _MISSING), f"{path}.tid", strict),
                trade_type=_to_str(item.get("type", _MISSING), f"{path}.type", strict),
                price=_to_float(item.get("price", _MISSING), f"{path}.price", strict),
                amount=_to_float(item.get("amount", _MISSING), f"{path}.amount", strict),
                time=_to_uint(item.get("date", _MISSING), f"{path}.date", strict),
            )
        )
    return tuple(trades)


def _decode_levels(levels: List[Any], side: str, strict: bool) -> Tuple[DepthEntry, ...]:
    entries: List[DepthEntry] = []
    for i, value in enumerate(levels):
        path = f"{side}[{i}]"
        pair = _as_array(value, path, strict)
        entries.append(
            DepthEntry(
                price=_to_float(_item(pair, 0), f"{path}.price", strict),
                amount=_to_float(_item(pair, 1), f"{path}.amount", strict),
            )
        )
    return tuple(entries)


def decode_depth(raw: RawBody, strict: bool = False) -> Depth:
    """
    Decode `depth`: {"timestamp": ..., "asks": [[price, amount], ...], "bids": [...]}.

    Every level is decoded (price at index 0, amount at index 1); prices and
    amounts may be JSON strings or numbers.
    """
    payload = _load_object(raw, "depth")
    asks = _require_list(payload, "asks", "depth")
    bids = _require_list(payload, "bids", "depth")

    return Depth(
        asks=_decode_levels(asks, "asks", strict),
        bids=_decode_levels(bids, "bids", strict),
        time=_to_uint(payload.get("timestamp", _MISSING), "timestamp", strict),
    )
