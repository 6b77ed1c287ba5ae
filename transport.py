from __future__ import annotations

import logging
from typing import Protocol

import requests

from errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0


class Transport(Protocol):
    """Anything that can perform an HTTP GET and hand back the raw body."""

    def get(self, url: str) -> bytes:
        ...


class HttpTransport:
    """
    Default transport over `requests`.

    Every call issues an independent requests.get(), so one instance can be
    shared between threads. Any requests failure (including non-2xx status)
    is re-raised as TransportError with the original exception chained.
    """

    def __init__(self, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self.timeout_s = float(timeout_s)

    def get(self, url: str) -> bytes:
        try:
            resp = requests.get(url, timeout=self.timeout_s)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning("GET %s failed: %s", url, e)
            raise TransportError(f"GET {url} failed: {e}") from e
        return resp.content
