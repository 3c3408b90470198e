"""
Direction and risk/reward resolution for a prediction.

Direction needs three things to line up: the stock trending, the index
not fighting it, and delivery confirming the move. Risk/reward is measured
against the trailing support/resistance band.
"""

from __future__ import annotations

from typing import Sequence

from breakout_algo.models import (
    Direction,
    MarketIndexDay,
    RiskReward,
    TradingDay,
    delivery_percent,
)
from breakout_algo.statistics import trend

MIN_RISK: float = 0.1  # Floor on risk when computing the ratio


def determine_direction(
    days: Sequence[TradingDay],
    market: Sequence[MarketIndexDay] = (),
    lookback: int = 10,
) -> Direction:
    """
    Expected direction from the last `lookback` sessions.

    Missing index data counts as a flat market. A zero-volume latest day
    has no delivery reading and resolves to neutral.
    """
    stock_trend = trend([d.close for d in days[-lookback:]])
    market_trend = trend([m.nifty_close for m in market[-lookback:]]) if market else 0.0

    delivery = delivery_percent(days[-1])
    if delivery is None:
        return Direction.NEUTRAL

    if stock_trend > 0 and market_trend >= 0 and delivery > 60:
        return Direction.BULLISH
    if stock_trend < 0 and market_trend <= 0 and delivery < 40:
        return Direction.BEARISH
    return Direction.NEUTRAL


def calculate_risk_reward(
    days: Sequence[TradingDay],
    direction: Direction,
    lookback: int = 20,
) -> RiskReward:
    """
    Risk and reward in percent of the latest close.

    Longs risk down to support and target resistance; anything else
    (bearish and neutral alike) is measured the other way round.
    """
    recent = days[-lookback:]
    current = days[-1]

    resistance = max(d.high for d in recent)
    support = min(d.low for d in recent)
    close = current.close

    if close <= 0:
        return RiskReward(risk=0.0, reward=0.0, ratio=0.0)

    if direction is Direction.BULLISH:
        risk = (close - support) / close * 100
        reward = (resistance - close) / close * 100
    else:
        risk = (resistance - close) / close * 100
        reward = (close - support) / close * 100

    ratio = reward / max(risk, MIN_RISK)
    return RiskReward(risk=risk, reward=reward, ratio=ratio)
