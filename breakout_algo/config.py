from __future__ import annotations

import os
from dataclasses import dataclass, field

from breakout_algo.scoring import FactorWeights


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None or value == "" else value


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _get_env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def weights_from_env() -> FactorWeights:
    """Default factor weights with per-factor BREAKOUT_WEIGHT_* overrides."""
    defaults = FactorWeights()
    return FactorWeights(
        stock_technicals=_get_env_float("BREAKOUT_WEIGHT_STOCK_TECHNICALS", defaults.stock_technicals),
        market_correlation=_get_env_float("BREAKOUT_WEIGHT_MARKET_CORRELATION", defaults.market_correlation),
        volume_pattern=_get_env_float("BREAKOUT_WEIGHT_VOLUME_PATTERN", defaults.volume_pattern),
        delivery_trend=_get_env_float("BREAKOUT_WEIGHT_DELIVERY_TREND", defaults.delivery_trend),
        market_sentiment=_get_env_float("BREAKOUT_WEIGHT_MARKET_SENTIMENT", defaults.market_sentiment),
    )


@dataclass(frozen=True)
class EngineConfig:
    log_level: str = "INFO"
    log_file: str | None = None
    snapshot_lookback: int = 20
    sample_market_seed: int = 42
    weights: FactorWeights = field(default_factory=FactorWeights)

    @staticmethod
    def from_env() -> "EngineConfig":
        return EngineConfig(
            log_level=_get_env("BREAKOUT_LOG_LEVEL", "INFO").strip().upper(),
            log_file=(_get_env("BREAKOUT_LOG_FILE", "").strip() or None),
            snapshot_lookback=_get_env_int("BREAKOUT_SNAPSHOT_LOOKBACK", 20),
            sample_market_seed=_get_env_int("BREAKOUT_SAMPLE_SEED", 42),
            weights=weights_from_env(),
        )
