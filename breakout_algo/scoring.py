"""
Composite scoring for breakout predictions.

Combines the five factor scores into one probability with explicit,
swappable weights, then grades confidence and writes the rationale.

The default weights are hand-tuned:
    stock_technicals   0.25
    market_correlation 0.20
    volume_pattern     0.20
    delivery_trend     0.20
    market_sentiment   0.15
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from breakout_algo.models import Confidence, Direction, FactorScoreSet
from breakout_algo.statistics import clamp

MIN_PROBABILITY: float = 5.0
MAX_PROBABILITY: float = 95.0
MIN_CONFIDENT_HISTORY: int = 20  # Fewer sessions than this is always low confidence


@dataclass(frozen=True)
class FactorWeights:
    """Weights for each factor in the composite score."""
    stock_technicals: float = 0.25
    market_correlation: float = 0.20
    volume_pattern: float = 0.20
    delivery_trend: float = 0.20
    market_sentiment: float = 0.15

    def as_dict(self) -> Dict[str, float]:
        return {
            'stock_technicals': self.stock_technicals,
            'market_correlation': self.market_correlation,
            'volume_pattern': self.volume_pattern,
            'delivery_trend': self.delivery_trend,
            'market_sentiment': self.market_sentiment,
        }

    def total(self) -> float:
        return sum(self.as_dict().values())

    def normalize(self) -> 'FactorWeights':
        """Normalize weights to sum to 1."""
        total = self.total()
        if total == 0:
            return self

        return FactorWeights(
            stock_technicals=self.stock_technicals / total,
            market_correlation=self.market_correlation / total,
            volume_pattern=self.volume_pattern / total,
            delivery_trend=self.delivery_trend / total,
            market_sentiment=self.market_sentiment / total,
        )


def combine_scores(factors: FactorScoreSet, weights: FactorWeights) -> float:
    """Weighted sum of factor scores, clamped to the probability band."""
    weights_dict = weights.as_dict()
    scores = factors.as_dict()
    raw_score = sum(scores[factor] * weights_dict[factor] for factor in scores)
    return clamp(raw_score, MIN_PROBABILITY, MAX_PROBABILITY)


def confidence_level(probability: float, history_length: int) -> Confidence:
    """
    Grade confidence from history depth and how far the call is from 50.

    Short histories and the 40-60 middle band both grade low.
    """
    if history_length < MIN_CONFIDENT_HISTORY:
        return Confidence.LOW
    if probability > 75 or probability < 25:
        return Confidence.HIGH
    if probability > 60 or probability < 40:
        return Confidence.MEDIUM
    return Confidence.LOW


def generate_reasoning(
    factors: FactorScoreSet,
    direction: Direction,
    delivery_pct: Optional[float],
) -> str:
    """One clause per factor outside its neutral band, then the direction."""
    parts: List[str] = ["Based on comprehensive analysis:"]

    if factors.stock_technicals > 70:
        parts.append("Strong technical setup with positive price momentum.")
    elif factors.stock_technicals < 30:
        parts.append("Weak technical indicators showing bearish signals.")

    if factors.market_correlation > 70:
        parts.append("Market correlation strongly supports the move.")
    elif factors.market_correlation < 30:
        parts.append("Market conditions are not favorable.")

    if factors.volume_pattern > 70:
        parts.append("Exceptional volume pattern indicates institutional interest.")

    delivery_text = f"{delivery_pct:.1f}%" if delivery_pct is not None else "n/a"
    if factors.delivery_trend > 70:
        parts.append(f"High delivery percentage ({delivery_text}) shows genuine buying.")
    elif factors.delivery_trend < 30:
        parts.append(f"Low delivery percentage ({delivery_text}) suggests speculative activity.")

    parts.append(f"Expected direction: {direction.value.upper()}.")
    return " ".join(parts)
