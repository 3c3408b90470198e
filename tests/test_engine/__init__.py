"""Test utilities and fixtures for breakout engine tests."""

import csv
import random
from datetime import date, timedelta
from typing import List, Optional, Sequence

from breakout_algo.models import MarketIndexDay, TradingDay

START = date(2024, 1, 1)


def make_day(
    index: int,
    close: float,
    open_price: Optional[float] = None,
    high: Optional[float] = None,
    low: Optional[float] = None,
    volume: int = 1000,
    delivery_qty: Optional[int] = None,
    start: date = START,
) -> TradingDay:
    """Build a session; high/low default to one point outside the body."""
    open_price = close if open_price is None else open_price
    high = max(open_price, close) + 1 if high is None else high
    low = min(open_price, close) - 1 if low is None else low
    delivery_qty = volume // 2 if delivery_qty is None else delivery_qty
    return TradingDay(
        date=start + timedelta(days=index),
        open=open_price,
        high=high,
        low=low,
        close=close,
        volume=volume,
        delivery_qty=delivery_qty,
    )


def build_days(
    closes: Sequence[float],
    volumes: Optional[Sequence[int]] = None,
    delivery_pcts: Optional[Sequence[float]] = None,
) -> List[TradingDay]:
    """Sessions with open == close, one per close."""
    days = []
    for i, close in enumerate(closes):
        volume = volumes[i] if volumes is not None else 1000
        pct = delivery_pcts[i] if delivery_pcts is not None else 50.0
        days.append(make_day(i, close, volume=volume, delivery_qty=int(round(volume * pct / 100))))
    return days


def make_index_day(
    index: int,
    close: float,
    vix: Optional[float] = None,
    advance_decline: Optional[float] = None,
    start: date = START,
) -> MarketIndexDay:
    return MarketIndexDay(
        date=start + timedelta(days=index),
        nifty_open=close,
        nifty_high=close + 50,
        nifty_low=close - 50,
        nifty_close=close,
        nifty_volume=1_000_000,
        vix=vix,
        advance_decline=advance_decline,
    )


def build_market(
    closes: Sequence[float],
    vix: Optional[float] = None,
    advance_decline: Optional[float] = None,
) -> List[MarketIndexDay]:
    return [make_index_day(i, c, vix, advance_decline) for i, c in enumerate(closes)]


def bullish_breakout_history() -> tuple:
    """
    25 sessions of gently rising closes, then a breakout session with 3x
    volume, 80% delivery and a 3% green candle, then the target session.

    Returns (days, market, target_date).
    """
    days = [
        make_day(i, 100 + 0.2 * i, volume=100_000, delivery_qty=50_000)
        for i in range(25)
    ]
    prev_close = days[-1].close
    days.append(make_day(
        25,
        prev_close * 1.03,
        open_price=prev_close,
        volume=300_000,
        delivery_qty=240_000,
    ))
    days.append(make_day(26, 108.0, volume=150_000, delivery_qty=75_000))
    market = build_market([18000 + 5 * i for i in range(27)], vix=12.0)
    return days, market, days[-1].date


def random_days(rng: random.Random, count: int) -> List[TradingDay]:
    """Arbitrary sessions, including zero volume and delivery above volume."""
    days = []
    price = rng.uniform(10, 500)
    for i in range(count):
        price = max(1.0, price * (1 + rng.uniform(-0.08, 0.08)))
        open_price = max(0.5, price * (1 + rng.uniform(-0.05, 0.05)))
        volume = rng.choice([0, rng.randint(0, 10), rng.randint(1000, 5_000_000)])
        delivery = rng.randint(0, int(volume * 1.2) + 1)
        days.append(make_day(
            i,
            price,
            open_price=open_price,
            high=max(price, open_price) * (1 + rng.uniform(0, 0.03)),
            low=min(price, open_price) * (1 - rng.uniform(0, 0.03)),
            volume=volume,
            delivery_qty=delivery,
        ))
    return days


def random_market(rng: random.Random, count: int) -> List[MarketIndexDay]:
    market = []
    level = rng.uniform(15000, 22000)
    for i in range(count):
        level *= 1 + rng.uniform(-0.03, 0.03)
        market.append(make_index_day(
            i,
            level,
            vix=rng.choice([None, rng.uniform(8, 40)]),
            advance_decline=rng.choice([None, rng.uniform(0.2, 3.0)]),
        ))
    return market


def write_stock_csv(path: str, days: Sequence[TradingDay]) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["date", "open", "high", "low", "close", "volume", "delivery_qty"])
        for d in days:
            writer.writerow([d.date.isoformat(), d.open, d.high, d.low, d.close, d.volume, d.delivery_qty])
