"""
Stock Technicals Analyzer.

Scores the instrument's own price action going into the target session:
- 1-day momentum (close over previous close)
- Position versus the 20-day moving average
- Return volatility (breakouts tend to follow active tape)
- Proximity to the 10-day high (pressing on resistance)
"""

from __future__ import annotations

import logging
from typing import Sequence

from breakout_algo.models import NEUTRAL_SCORE, TradingDay
from breakout_algo.statistics import clamp, moving_average, volatility

logger = logging.getLogger(__name__)


class StockTechnicalsAnalyzer:
    """Price momentum, trend position, volatility and resistance proximity."""

    def __init__(
        self,
        lookback: int = 20,
        resistance_lookback: int = 10,
        resistance_proximity: float = 0.98,  # Within 2% below the high
    ):
        self.lookback = lookback
        self.resistance_lookback = resistance_lookback
        self.resistance_proximity = resistance_proximity

    def analyze(self, days: Sequence[TradingDay]) -> float:
        """
        Score the technical setup (0-100).

        Args:
            days: Trailing history, oldest first. The last entry is the
                most recent completed session.
        """
        if len(days) < self.lookback:
            logger.debug("stock technicals: %d days < %d, neutral", len(days), self.lookback)
            return NEUTRAL_SCORE

        recent = days[-self.lookback:]
        current = days[-1]
        previous = days[-2]
        closes = [d.close for d in recent]

        score = NEUTRAL_SCORE

        # Price momentum
        if previous.close > 0:
            price_change = (current.close - previous.close) / previous.close * 100
        else:
            price_change = 0.0

        if price_change > 2:
            score += 15
        elif price_change > 0:
            score += 5
        elif price_change < -2:
            score -= 15
        else:
            score -= 5

        # Moving average position
        ma = moving_average(closes, self.lookback)
        if current.close > ma[-1]:
            score += 10
        else:
            score -= 10

        # Volatility: active tape precedes breakouts, dead tape rarely does
        vol = volatility(closes)
        if vol > 3:
            score += 10
        elif vol < 1:
            score -= 5

        # Resistance proximity
        resistance = max(d.high for d in recent[-self.resistance_lookback:])
        if current.close > resistance * self.resistance_proximity:
            score += 15

        return clamp(score)
