from __future__ import annotations

from typing import Optional

from breakout_algo.models import DayNarrative, TradingDay, delivery_percent

GREEN = "#22c55e"
RED = "#ef4444"
BLUE = "#3b82f6"
AMBER = "#facc15"


def generate_narrative(today: TradingDay, yesterday: Optional[TradingDay] = None) -> DayNarrative:
    """Chart marker and one-line summary for a session."""
    delivery = delivery_percent(today)
    is_bullish = today.close > today.open
    is_bearish = today.close < today.open
    previous_volume = yesterday.volume if yesterday is not None else 0

    if delivery is not None:
        if delivery > 70 and is_bullish:
            return DayNarrative("Strong delivery-backed buying", 80, "↑", GREEN)
        if delivery < 30 and is_bearish:
            return DayNarrative("Weak delivery and bearish close", 30, "↓", RED)
        if delivery > 60 and today.volume > previous_volume:
            return DayNarrative(
                "Rising volume with high delivery — possible breakout setup", 70, "↑", BLUE
            )

    return DayNarrative("Neutral day with mixed signals", 50, "⚠️", AMBER)
