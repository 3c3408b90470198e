"""
Data models for the breakout prediction engine.

Input records (TradingDay, MarketIndexDay) are owned by the ingestion layer
and treated as read-only. Output records (BreakoutPrediction,
TechnicalAnalysis) are value objects handed to the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple

NEUTRAL_SCORE: float = 50.0  # Seed and fallback for every factor score


class Direction(Enum):
    """Expected direction of the next move."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class Confidence(Enum):
    """Coarse confidence tier attached to a prediction."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(Enum):
    """Risk label for a snapshot read."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class TradingDay:
    """One trading session for the instrument."""
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int
    delivery_qty: int


@dataclass(frozen=True)
class MarketIndexDay:
    """One session of the broad market index."""
    date: date
    nifty_open: float
    nifty_high: float
    nifty_low: float
    nifty_close: float
    nifty_volume: float
    vix: Optional[float] = None             # Volatility index level
    advance_decline: Optional[float] = None  # Advancers / decliners


def delivery_percent(day: TradingDay) -> Optional[float]:
    """
    Delivered quantity as a percentage of traded volume.

    Returns None when volume is zero, since the ratio is undefined.
    """
    if day.volume <= 0:
        return None
    return day.delivery_qty / day.volume * 100


def intraday_change_percent(day: TradingDay) -> float:
    """Open-to-close change in percent (0 when open is not positive)."""
    if day.open <= 0:
        return 0.0
    return (day.close - day.open) / day.open * 100


@dataclass(frozen=True)
class FactorScoreSet:
    """Scores (0-100) from the five factor analyzers."""
    stock_technicals: float
    market_correlation: float
    volume_pattern: float
    delivery_trend: float
    market_sentiment: float

    def as_dict(self) -> Dict[str, float]:
        return {
            'stock_technicals': self.stock_technicals,
            'market_correlation': self.market_correlation,
            'volume_pattern': self.volume_pattern,
            'delivery_trend': self.delivery_trend,
            'market_sentiment': self.market_sentiment,
        }


@dataclass(frozen=True)
class RiskReward:
    """Distances (in % of close) to the stop and target levels."""
    risk: float
    reward: float
    ratio: float


@dataclass(frozen=True)
class BreakoutPrediction:
    """Forward-looking breakout call for a target session."""
    date: date
    probability: float                # 5-95
    confidence: Confidence
    factors: FactorScoreSet
    reasoning: str
    expected_direction: Direction
    risk_reward: RiskReward


@dataclass(frozen=True)
class KeyLevels:
    support: float
    resistance: float
    target: float


@dataclass(frozen=True)
class Signal:
    """A single observation surfaced by the snapshot analyzer."""
    type: str
    strength: float                   # 0-100
    description: str


@dataclass(frozen=True)
class TechnicalAnalysis:
    """Snapshot read of a single day, used for chart hover display."""
    trend: Direction
    probability: float
    reasoning: str
    key_levels: KeyLevels
    risk_level: RiskLevel
    signals: Tuple[Signal, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DayNarrative:
    """One-line story of a session plus its chart marker."""
    summary: str
    probability: float
    marker: str
    color: str
