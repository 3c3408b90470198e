"""
Delivery-Aware Breakout Engine.

Multi-factor system for judging whether a traded instrument is about to
break out, built on daily price, volume and delivery data.

Architecture:
    1. Statistics Primitives - Trend slope, volatility, correlation, SMA
    2. Factor Analyzers - Score five independent dimensions (0-100)
    3. Composite Scorer - Weighted probability, confidence tier, rationale
    4. Direction Resolver - Bullish/bearish/neutral call plus risk/reward
    5. Snapshot Analyzer - Quick read of any single session for display

Analyzers:
    - StockTechnicalsAnalyzer: Momentum, 20-day MA, volatility, resistance
    - MarketCorrelationAnalyzer: Trend alignment with the index
    - VolumePatternAnalyzer: Relative volume, price-volume confirmation
    - DeliveryTrendAnalyzer: Delivery percentage level and trend
    - MarketSentimentAnalyzer: Index momentum, VIX, breadth

Usage:
    from breakout_algo import BreakoutPredictor, load_trading_days

    days = load_trading_days("RELIANCE.csv")
    prediction = BreakoutPredictor().predict(days, None, days[-1].date)
    print(f"{prediction.probability:.0f}% {prediction.expected_direction.value}")
"""

from breakout_algo.models import (
    NEUTRAL_SCORE,
    Direction,
    Confidence,
    RiskLevel,
    TradingDay,
    MarketIndexDay,
    FactorScoreSet,
    RiskReward,
    BreakoutPrediction,
    KeyLevels,
    Signal,
    TechnicalAnalysis,
    DayNarrative,
    delivery_percent,
    intraday_change_percent,
)
from breakout_algo.errors import (
    BreakoutError,
    InvalidTargetError,
    DataFormatError,
)
from breakout_algo.scoring import (
    FactorWeights,
    combine_scores,
    confidence_level,
    generate_reasoning,
)
from breakout_algo.direction import (
    determine_direction,
    calculate_risk_reward,
)
from breakout_algo.predictor import BreakoutPredictor
from breakout_algo.snapshot import (
    analyze_snapshot,
    analyze_day,
    snapshot_window,
)
from breakout_algo.tagging import compute_breakouts
from breakout_algo.narrative import generate_narrative
from breakout_algo.ingestion import (
    load_trading_days,
    load_market_index_days,
    generate_sample_market_data,
)

__all__ = [
    # Main engine
    "BreakoutPredictor",
    "analyze_snapshot",
    "analyze_day",
    "snapshot_window",
    "compute_breakouts",
    "generate_narrative",
    # Models
    "NEUTRAL_SCORE",
    "Direction",
    "Confidence",
    "RiskLevel",
    "TradingDay",
    "MarketIndexDay",
    "FactorScoreSet",
    "RiskReward",
    "BreakoutPrediction",
    "KeyLevels",
    "Signal",
    "TechnicalAnalysis",
    "DayNarrative",
    "delivery_percent",
    "intraday_change_percent",
    # Errors
    "BreakoutError",
    "InvalidTargetError",
    "DataFormatError",
    # Scoring
    "FactorWeights",
    "combine_scores",
    "confidence_level",
    "generate_reasoning",
    "determine_direction",
    "calculate_risk_reward",
    # Ingestion
    "load_trading_days",
    "load_market_index_days",
    "generate_sample_market_data",
]
