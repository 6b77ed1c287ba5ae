from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Generic

T = TypeVar("T")


class TransientError(RuntimeError):
    """
    Marks a failure that may succeed if the same call is repeated
    (network glitches, timeouts, 5xx responses).

    ZbClient never retries on its own; callers who want retries wrap
    client calls in a ResilientExecutor.
    """


class RetriesExhaustedError(RuntimeError):
    """Raised when a call still fails after max_attempts transient errors."""


@dataclass
class ResilienceConfig:
    max_attempts: int = 1
    base_backoff_seconds: float = 0.5
    max_backoff_seconds: float = 5.0


class ResilientExecutor(Generic[T]):
    """
    Caller-side retry helper for TransientError failures.

    - On success: the result is returned immediately.
    - On TransientError: sleep with exponential backoff and try again,
      up to max_attempts calls in total, then raise RetriesExhaustedError.
    - Any other exception propagates on the first occurrence.
    """

    def __init__(
        self,
        config: Optional[ResilienceConfig] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._cfg = config or ResilienceConfig()
        self._log = logger or logging.getLogger(__name__)
        self._sleep = sleep
        self._max_attempts = max(1, self._cfg.max_attempts)

    def call(self, fn: Callable[[], T]) -> T:
        # Single attempt: behave like a plain call.
        if self._max_attempts == 1:
            return fn()

        backoff = self._cfg.base_backoff_seconds
        attempt = 0

        while True:
            attempt += 1
            try:
                return fn()
            except TransientError as e:
                if attempt >= self._max_attempts:
                    self._log.error(
                        "Giving up after %d attempts: %s", attempt, e
                    )
                    raise RetriesExhaustedError(
                        f"Call failed after {attempt} attempts"
                    ) from e

                sleep_for = min(backoff, self._cfg.max_backoff_seconds)
                self._log.warning(
                    "Transient error: %s. Retrying in %.1fs (attempt %d/%d).",
                    e,
                    sleep_for,
                    attempt,
                    self._max_attempts,
                )
                self._sleep(sleep_for)
                backoff = min(backoff * 2, self._cfg.max_backoff_seconds)
