"""
Breakout Predictor - multi-factor call for a chosen trading day.

Process:
1. Locate the target session and slice history strictly before it
2. Score the five factors on that slice
3. Combine with the configured weights into a probability (5-95)
4. Grade confidence from history depth and score extremity
5. Resolve direction and risk/reward
6. Write the rationale

The target day's own data is never used, so the call only sees what was
known before the session opened.

Usage:
    predictor = BreakoutPredictor()
    prediction = predictor.predict(days, index_days, date(2024, 3, 15))
    print(prediction.probability, prediction.expected_direction)
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from breakout_algo.analyzers import (
    DeliveryTrendAnalyzer,
    MarketCorrelationAnalyzer,
    MarketSentimentAnalyzer,
    StockTechnicalsAnalyzer,
    VolumePatternAnalyzer,
)
from breakout_algo.direction import calculate_risk_reward, determine_direction
from breakout_algo.errors import InvalidTargetError
from breakout_algo.models import (
    BreakoutPrediction,
    FactorScoreSet,
    MarketIndexDay,
    TradingDay,
    delivery_percent,
)
from breakout_algo.scoring import (
    FactorWeights,
    combine_scores,
    confidence_level,
    generate_reasoning,
)

logger = logging.getLogger(__name__)


def find_target_index(days: Sequence[TradingDay], target_date: date) -> int:
    """Index of target_date in days; it must have at least one prior session."""
    for i, day in enumerate(days):
        if day.date == target_date:
            if i == 0:
                break
            return i
    logger.warning("Invalid prediction target %s (%d sessions loaded)", target_date, len(days))
    raise InvalidTargetError(target_date)


class BreakoutPredictor:
    """
    Main prediction engine.

    Stateless between calls: every prediction is computed from the
    sequences passed in, which are never modified or retained.
    """

    def __init__(self, weights: Optional[FactorWeights] = None):
        self.weights = weights or FactorWeights()

        self.technicals_analyzer = StockTechnicalsAnalyzer()
        self.correlation_analyzer = MarketCorrelationAnalyzer()
        self.volume_analyzer = VolumePatternAnalyzer()
        self.delivery_analyzer = DeliveryTrendAnalyzer()
        self.sentiment_analyzer = MarketSentimentAnalyzer()

    def score_factors(
        self,
        history: Sequence[TradingDay],
        market_history: Sequence[MarketIndexDay],
    ) -> FactorScoreSet:
        """Run the five analyzers over a historical slice."""
        return FactorScoreSet(
            stock_technicals=self.technicals_analyzer.analyze(history),
            market_correlation=self.correlation_analyzer.analyze(history, market_history),
            volume_pattern=self.volume_analyzer.analyze(history),
            delivery_trend=self.delivery_analyzer.analyze(history),
            market_sentiment=self.sentiment_analyzer.analyze(market_history),
        )

    def predict(
        self,
        stock_history: Sequence[TradingDay],
        market_history: Optional[Sequence[MarketIndexDay]],
        target_date: date,
    ) -> BreakoutPrediction:
        """
        Predict breakout probability for target_date.

        Args:
            stock_history: Sessions sorted ascending by date
            market_history: Index sessions aligned with stock_history, or None
            target_date: Session to predict; must exist and not be the first

        Raises:
            InvalidTargetError: target_date is absent or has no prior session
        """
        target_index = find_target_index(stock_history, target_date)

        history = list(stock_history[:target_index])
        market = list(market_history[:target_index]) if market_history else []
        current = history[-1]

        factors = self.score_factors(history, market)
        logger.debug(
            "Factors for %s over %d sessions: %s", target_date, len(history), factors.as_dict()
        )

        probability = combine_scores(factors, self.weights)
        confidence = confidence_level(probability, len(history))
        direction = determine_direction(history, market)
        risk_reward = calculate_risk_reward(history, direction)
        reasoning = generate_reasoning(factors, direction, delivery_percent(current))

        logger.info(
            "Prediction %s: %.1f%% %s (%s confidence, R/R %.2f)",
            target_date, probability, direction.value, confidence.value, risk_reward.ratio,
        )

        return BreakoutPrediction(
            date=target_date,
            probability=probability,
            confidence=confidence,
            factors=factors,
            reasoning=reasoning,
            expected_direction=direction,
            risk_reward=risk_reward,
        )
