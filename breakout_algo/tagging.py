"""Backward-looking breakout tagging over a loaded history."""

from __future__ import annotations

from datetime import date
from typing import List, Sequence

from breakout_algo.models import TradingDay, delivery_percent

VOLUME_SPIKE: float = 1.2    # Volume over 1.2x the previous session
PRICE_JUMP: float = 1.02     # Close over 2% above the previous close
DELIVERY_CEILING: float = 60.0


def is_breakout_day(day: TradingDay, previous: TradingDay) -> bool:
    """Volume spike plus price jump on delivery below the ceiling."""
    delivery = delivery_percent(day)
    if delivery is None:
        return False
    return (
        day.volume > previous.volume * VOLUME_SPIKE
        and day.close > previous.close * PRICE_JUMP
        and delivery < DELIVERY_CEILING
    )


def compute_breakouts(days: Sequence[TradingDay]) -> List[date]:
    """Dates of tagged breakout sessions, in input order."""
    return [
        day.date
        for previous, day in zip(days, days[1:])
        if is_breakout_day(day, previous)
    ]
