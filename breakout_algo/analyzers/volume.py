"""
Volume Pattern Analyzer.

Volume leads price. Looks for:
- A surge versus the prior sessions (relative volume)
- Rising participation over the window
- Price moving with volume behind it (accumulation / distribution)
"""

from __future__ import annotations

import logging
from typing import Sequence

from breakout_algo.models import NEUTRAL_SCORE, TradingDay, intraday_change_percent
from breakout_algo.statistics import clamp, trend

logger = logging.getLogger(__name__)


class VolumePatternAnalyzer:
    """Relative volume, volume trend and price-volume confirmation."""

    def __init__(
        self,
        lookback: int = 10,
        confirmation_ratio: float = 1.2,
    ):
        self.lookback = lookback
        self.confirmation_ratio = confirmation_ratio

    def analyze(self, days: Sequence[TradingDay]) -> float:
        """Score the volume pattern (0-100)."""
        if len(days) < self.lookback:
            logger.debug("volume pattern: %d days < %d, neutral", len(days), self.lookback)
            return NEUTRAL_SCORE

        recent = days[-self.lookback:]
        current = days[-1]

        score = NEUTRAL_SCORE

        # Relative volume against the sessions before today
        prior = recent[:-1]
        avg_volume = sum(d.volume for d in prior) / len(prior)
        volume_ratio = current.volume / avg_volume if avg_volume > 0 else 1.0

        if volume_ratio > 2:
            score += 25
        elif volume_ratio > 1.5:
            score += 15
        elif volume_ratio < 0.7:
            score -= 10

        # Participation trend
        if trend([d.volume for d in recent]) > 0:
            score += 10
        else:
            score -= 5

        # Price-volume relationship
        price_change = intraday_change_percent(current)
        if price_change > 0 and volume_ratio > self.confirmation_ratio:
            score += 15
        elif price_change < 0 and volume_ratio > self.confirmation_ratio:
            score -= 10

        return clamp(score)
