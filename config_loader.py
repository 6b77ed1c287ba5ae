from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from resilience import ResilienceConfig
from transport import DEFAULT_TIMEOUT_S


DEFAULT_BASE_URL = "http://api.zb.com/data/v1/"


# --- ZB data API ---------------------------------------------------------------


@dataclass
class ZbConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_S
    strict_decoding: bool = False

    def __post_init__(self) -> None:
        # Endpoint names are appended directly to base_url.
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")


# --- Logging / App config ----------------------------------------------------


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AppConfig:
    version: str = "dev"
    zb: ZbConfig = field(default_factory=ZbConfig)
    resilience: ResilienceConfig = field(default_factory=ResilienceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# --- Loader ------------------------------------------------------------------


def load_config(path: str | Path) -> AppConfig:
    """
    Load application configuration from JSON file at `path`.

    Every section is optional; omitted keys keep their defaults:

      {
        "version": "0.1.0",
        "zb": {
          "base_url": "http://api.zb.com/data/v1/",
          "timeout_seconds": 10.0,
          "strict_decoding": false
        },
        "resilience": {
          "max_attempts": 1,
          "base_backoff_seconds": 0.5,
          "max_backoff_seconds": 5.0
        },
        "logging": { "level": "INFO" }
      }

    Typical wiring in an application:

      cfg = load_config("config.json")
      setup_logging(cfg.logging.level)
      client = ZbClient(cfg.zb)
      executor = ResilientExecutor(cfg.resilience)
      depth = executor.call(lambda: client.get_depth("btc_usdt", 50))
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        raw: Dict[str, Any] = json.load(f)

    return AppConfig(
        version=raw.get("version", "dev"),
        zb=ZbConfig(**raw.get("zb", {})),
        resilience=ResilienceConfig(**raw.get("resilience", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )
