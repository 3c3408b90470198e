"""
Market Correlation Analyzer.

A breakout is easier when the broad market is pulling the same way.
Compares the stock's short-term trend with the index trend and rewards
strong co-movement in a rising market.
"""

from __future__ import annotations

import logging
from typing import Sequence

from breakout_algo.models import NEUTRAL_SCORE, MarketIndexDay, TradingDay
from breakout_algo.statistics import clamp, correlation, trend

logger = logging.getLogger(__name__)


class MarketCorrelationAnalyzer:
    """Trend alignment and correlation strength against the index."""

    def __init__(self, lookback: int = 10, strong_correlation: float = 0.7):
        self.lookback = lookback
        self.strong_correlation = strong_correlation

    def analyze(
        self,
        days: Sequence[TradingDay],
        market: Sequence[MarketIndexDay],
    ) -> float:
        """
        Score market alignment (0-100).

        Both sequences are assumed index-aligned by the caller.
        """
        if len(market) < self.lookback or len(days) < self.lookback:
            logger.debug(
                "market correlation: %d stock / %d index days, neutral",
                len(days), len(market),
            )
            return NEUTRAL_SCORE

        stock_closes = [d.close for d in days[-self.lookback:]]
        index_closes = [m.nifty_close for m in market[-self.lookback:]]

        score = NEUTRAL_SCORE

        stock_trend = trend(stock_closes)
        market_trend = trend(index_closes)

        if stock_trend > 0 and market_trend > 0:
            score += 20   # Both rising
        elif stock_trend < 0 and market_trend < 0:
            score -= 10   # Both falling
        elif stock_trend > 0 and market_trend < 0:
            score += 5    # Outperforming a weak market

        # Stacks with the alignment adjustment above
        corr = correlation(stock_closes, index_closes)
        if abs(corr) > self.strong_correlation:
            if corr > 0 and market_trend > 0:
                score += 15
            elif corr > 0 and market_trend < 0:
                score -= 15

        return clamp(score)
