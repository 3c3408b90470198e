"""
Factor analyzers for the breakout predictor.

Each analyzer scores one dimension of the trailing history on 0-100,
seeded at a neutral 50 and returning exactly 50 when the window is too
short:
- Stock Technicals: Momentum, moving average, volatility, resistance
- Market Correlation: Trend alignment with the index
- Volume Pattern: Relative volume and price-volume confirmation
- Delivery Trend: Delivery percentage level and direction
- Market Sentiment: Index momentum, VIX, breadth
"""

from breakout_algo.analyzers.technicals import StockTechnicalsAnalyzer
from breakout_algo.analyzers.market_correlation import MarketCorrelationAnalyzer
from breakout_algo.analyzers.volume import VolumePatternAnalyzer
from breakout_algo.analyzers.delivery import DeliveryTrendAnalyzer
from breakout_algo.analyzers.sentiment import MarketSentimentAnalyzer

__all__ = [
    "StockTechnicalsAnalyzer",
    "MarketCorrelationAnalyzer",
    "VolumePatternAnalyzer",
    "DeliveryTrendAnalyzer",
    "MarketSentimentAnalyzer",
]
