"""
Delivery Trend Analyzer.

Delivery percentage separates investment demand (shares actually taken
into demat) from intraday churn. High and rising delivery on an up day
is read as genuine buying; thin delivery on a down day as speculative
selling.
"""

from __future__ import annotations

import logging
from typing import Sequence

from breakout_algo.models import (
    NEUTRAL_SCORE,
    TradingDay,
    delivery_percent,
    intraday_change_percent,
)
from breakout_algo.statistics import clamp, trend

logger = logging.getLogger(__name__)


class DeliveryTrendAnalyzer:
    """Delivery level, delivery trend and delivery-price confirmation."""

    def __init__(self, lookback: int = 5):
        self.lookback = lookback

    def analyze(self, days: Sequence[TradingDay]) -> float:
        """
        Score delivery behaviour (0-100).

        A latest session with zero volume has no delivery information and
        scores neutral. Zero-volume sessions inside the window are left out
        of the trend.
        """
        if len(days) < self.lookback:
            logger.debug("delivery trend: %d days < %d, neutral", len(days), self.lookback)
            return NEUTRAL_SCORE

        current = days[-1]
        current_pct = delivery_percent(current)
        if current_pct is None:
            logger.debug("delivery trend: zero volume on %s, neutral", current.date)
            return NEUTRAL_SCORE

        score = NEUTRAL_SCORE

        if current_pct > 70:
            score += 20
        elif current_pct > 50:
            score += 10
        elif current_pct < 30:
            score -= 15

        series = [
            pct for pct in (delivery_percent(d) for d in days[-self.lookback:])
            if pct is not None
        ]
        if trend(series) > 0:
            score += 10
        else:
            score -= 5

        price_change = intraday_change_percent(current)
        if price_change > 0 and current_pct > 60:
            score += 15
        elif price_change < 0 and current_pct < 40:
            score -= 10

        return clamp(score)
