"""
Market Sentiment Analyzer.

Reads the index tape: short-term index momentum, fear gauge (VIX) and
breadth (advance/decline). VIX and breadth are optional on each index
record and only contribute when present.
"""

from __future__ import annotations

import logging
from typing import Sequence

from breakout_algo.models import NEUTRAL_SCORE, MarketIndexDay
from breakout_algo.statistics import clamp, trend

logger = logging.getLogger(__name__)


class MarketSentimentAnalyzer:
    """Index momentum, VIX and breadth."""

    def __init__(
        self,
        lookback: int = 5,
        low_vix: float = 15.0,
        high_vix: float = 25.0,
        strong_breadth: float = 1.5,
        weak_breadth: float = 0.7,
    ):
        self.lookback = lookback
        self.low_vix = low_vix
        self.high_vix = high_vix
        self.strong_breadth = strong_breadth
        self.weak_breadth = weak_breadth

    def analyze(self, market: Sequence[MarketIndexDay]) -> float:
        """Score market sentiment (0-100)."""
        if len(market) < self.lookback:
            logger.debug("market sentiment: %d index days < %d, neutral", len(market), self.lookback)
            return NEUTRAL_SCORE

        current = market[-1]
        score = NEUTRAL_SCORE

        market_trend = trend([m.nifty_close for m in market[-self.lookback:]])
        if market_trend > 0:
            score += 15
        elif market_trend < 0:
            score -= 10

        if current.vix is not None:
            if current.vix < self.low_vix:
                score += 10   # Calm market favours breakouts
            elif current.vix > self.high_vix:
                score -= 10

        if current.advance_decline is not None:
            if current.advance_decline > self.strong_breadth:
                score += 10
            elif current.advance_decline < self.weak_breadth:
                score -= 10

        return clamp(score)
