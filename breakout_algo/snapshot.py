"""
Snapshot Technical Analyzer.

Reads a single session against its trailing window for live chart display
(hover, latest bar). Unlike the predictor it looks at the day itself and
produces a quick trend call, key levels and up to four signals.

The trend call comes from an ordered rule table. Rules are checked in
priority order and the first match decides trend, probability and risk:
    1. Delivery-backed buying   (delivery > 70%, green candle)
    2. Speculative selling      (delivery < 30%, red candle)
    3. Volume breakout          (volume > 1.5x window average)
If nothing matches the read stays neutral at 50 with medium risk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from breakout_algo.models import (
    Direction,
    KeyLevels,
    RiskLevel,
    Signal,
    TechnicalAnalysis,
    TradingDay,
    delivery_percent,
    intraday_change_percent,
)

logger = logging.getLogger(__name__)

MAX_SIGNALS: int = 4
TARGET_FRACTION: float = 0.6  # Share of the distance to the level taken as target


@dataclass(frozen=True)
class SnapshotMetrics:
    """Inputs every rule and signal is evaluated against."""
    delivery_pct: Optional[float]     # None on zero-volume sessions
    price_change_pct: float           # Open to close
    volume_ratio: float               # Today vs window average
    body_ratio: float                 # Candle body / range
    prior_close_change_pct: float     # Close vs previous close
    support: float
    resistance: float


@dataclass(frozen=True)
class RuleOutcome:
    """Trend call produced by whichever rule fired."""
    rule: str
    trend: Direction
    probability: float
    risk_level: RiskLevel
    reasoning: str


@dataclass(frozen=True)
class SnapshotRule:
    name: str
    predicate: Callable[[SnapshotMetrics], bool]
    outcome: Callable[[SnapshotMetrics], RuleOutcome]


def _delivery_backed_buying(m: SnapshotMetrics) -> RuleOutcome:
    return RuleOutcome(
        rule="delivery_backed_buying",
        trend=Direction.BULLISH,
        probability=min(85.0, 60 + m.delivery_pct * 0.3),
        risk_level=RiskLevel.LOW,
        reasoning=(
            "Strong delivery-backed buying with positive price action "
            "suggests continued upward momentum."
        ),
    )


def _speculative_selling(m: SnapshotMetrics) -> RuleOutcome:
    return RuleOutcome(
        rule="speculative_selling",
        trend=Direction.BEARISH,
        probability=max(15.0, 40 - m.delivery_pct),
        risk_level=RiskLevel.HIGH,
        reasoning=(
            "Weak delivery combined with negative price action indicates "
            "potential selling pressure."
        ),
    )


def _volume_breakout(m: SnapshotMetrics) -> RuleOutcome:
    return RuleOutcome(
        rule="volume_breakout",
        trend=Direction.BULLISH if m.price_change_pct > 0 else Direction.BEARISH,
        probability=min(75.0, 50 + m.volume_ratio * 10),
        risk_level=RiskLevel.MEDIUM,
        reasoning="High volume breakout suggests significant price movement ahead.",
    )


TREND_RULES: Tuple[SnapshotRule, ...] = (
    SnapshotRule(
        name="delivery_backed_buying",
        predicate=lambda m: (
            m.delivery_pct is not None and m.delivery_pct > 70 and m.price_change_pct > 0
        ),
        outcome=_delivery_backed_buying,
    ),
    SnapshotRule(
        name="speculative_selling",
        predicate=lambda m: (
            m.delivery_pct is not None and m.delivery_pct < 30 and m.price_change_pct < 0
        ),
        outcome=_speculative_selling,
    ),
    SnapshotRule(
        name="volume_breakout",
        predicate=lambda m: m.volume_ratio > 1.5,
        outcome=_volume_breakout,
    ),
)


def _default_outcome(m: SnapshotMetrics) -> RuleOutcome:
    delivery_text = f"{m.delivery_pct:.1f}%" if m.delivery_pct is not None else "n/a"
    trend = Direction.NEUTRAL
    return RuleOutcome(
        rule="default",
        trend=trend,
        probability=50.0,
        risk_level=RiskLevel.MEDIUM,
        reasoning=(
            f"Mixed signals with {delivery_text} delivery and {m.volume_ratio:.1f}x "
            f"volume ratio. Market showing {trend.value} bias."
        ),
    )


def evaluate_rules(
    metrics: SnapshotMetrics,
    rules: Sequence[SnapshotRule] = TREND_RULES,
) -> RuleOutcome:
    """Outcome of the first matching rule, or the neutral default."""
    for rule in rules:
        if rule.predicate(metrics):
            return rule.outcome(metrics)
    return _default_outcome(metrics)


# =============================================================================
# SIGNALS
# =============================================================================

def _delivery_signal(m: SnapshotMetrics) -> Optional[Signal]:
    if m.delivery_pct is None:
        return None
    if m.delivery_pct > 70:
        return Signal(
            type="Strong Delivery",
            strength=min(95.0, m.delivery_pct + 10),
            description="High delivery percentage indicates genuine buying interest",
        )
    if m.delivery_pct < 30:
        return Signal(
            type="Weak Delivery",
            strength=max(5.0, 100 - m.delivery_pct * 2),
            description="Low delivery percentage suggests speculative trading",
        )
    return None


def _volume_signal(m: SnapshotMetrics) -> Optional[Signal]:
    if m.volume_ratio > 1.5:
        return Signal(
            type="Volume Surge",
            strength=min(90.0, m.volume_ratio * 30),
            description=(
                f"Volume is {m.volume_ratio:.1f}x above average, indicating strong interest"
            ),
        )
    if m.volume_ratio < 0.7:
        return Signal(
            type="Low Volume",
            strength=max(10.0, (1 - m.volume_ratio) * 50),
            description="Below average volume suggests lack of conviction",
        )
    return None


def _candle_signal(m: SnapshotMetrics) -> Optional[Signal]:
    if m.body_ratio > 0.7:
        return Signal(
            type="Strong Candle",
            strength=min(85.0, m.body_ratio * 100),
            description="Large body indicates strong directional movement",
        )
    return None


def _momentum_signal(m: SnapshotMetrics) -> Optional[Signal]:
    change = m.prior_close_change_pct
    if abs(change) > 2:
        return Signal(
            type="Price Momentum",
            strength=min(80.0, abs(change) * 20),
            description=f"{'Positive' if change > 0 else 'Negative'} momentum from previous session",
        )
    return None


SIGNAL_DETECTORS: Tuple[Callable[[SnapshotMetrics], Optional[Signal]], ...] = (
    _delivery_signal,
    _volume_signal,
    _candle_signal,
    _momentum_signal,
)


def collect_signals(
    metrics: SnapshotMetrics,
    max_signals: int = MAX_SIGNALS,
) -> Tuple[Signal, ...]:
    """Signals in detection order, truncated to max_signals."""
    signals: List[Signal] = []
    for detector in SIGNAL_DETECTORS:
        signal = detector(metrics)
        if signal is not None:
            signals.append(signal)
    return tuple(signals[:max_signals])


# =============================================================================
# ANALYZER
# =============================================================================

def compute_metrics(
    today: TradingDay,
    yesterday: Optional[TradingDay],
    window: Sequence[TradingDay],
) -> SnapshotMetrics:
    """Derive rule inputs for today against its trailing window."""
    if window:
        avg_volume = sum(d.volume for d in window) / len(window)
        resistance = max(d.high for d in window)
        support = min(d.low for d in window)
    else:
        avg_volume = today.volume
        resistance = today.high * 1.05
        support = today.low * 0.95

    volume_ratio = today.volume / avg_volume if avg_volume > 0 else 1.0

    candle_range = today.high - today.low
    body_ratio = abs(today.close - today.open) / candle_range if candle_range > 0 else 0.0

    if yesterday is not None and yesterday.close > 0:
        prior_change = (today.close - yesterday.close) / yesterday.close * 100
    else:
        prior_change = 0.0

    return SnapshotMetrics(
        delivery_pct=delivery_percent(today),
        price_change_pct=intraday_change_percent(today),
        volume_ratio=volume_ratio,
        body_ratio=body_ratio,
        prior_close_change_pct=prior_change,
        support=support,
        resistance=resistance,
    )


def analyze_snapshot(
    today: TradingDay,
    yesterday: Optional[TradingDay] = None,
    window: Sequence[TradingDay] = (),
) -> TechnicalAnalysis:
    """
    Snapshot read of today.

    Args:
        today: Session to read
        yesterday: Previous session, for close-to-close momentum
        window: Trailing sessions for volume average and key levels
    """
    metrics = compute_metrics(today, yesterday, window)
    outcome = evaluate_rules(metrics)
    signals = collect_signals(metrics)

    # Neutral reads share the bearish-side target
    close = today.close
    if outcome.trend is Direction.BULLISH:
        target = close + (metrics.resistance - close) * TARGET_FRACTION
    else:
        target = close - (close - metrics.support) * TARGET_FRACTION

    logger.debug("Snapshot %s: rule=%s signals=%d", today.date, outcome.rule, len(signals))

    return TechnicalAnalysis(
        trend=outcome.trend,
        probability=outcome.probability,
        reasoning=outcome.reasoning,
        key_levels=KeyLevels(
            support=metrics.support,
            resistance=metrics.resistance,
            target=target,
        ),
        risk_level=outcome.risk_level,
        signals=signals,
    )


def snapshot_window(
    days: Sequence[TradingDay],
    index: int,
    lookback: int = 20,
) -> List[TradingDay]:
    """Trailing window ending at (and including) days[index]."""
    return list(days[max(0, index - lookback): index + 1])


def analyze_day(
    days: Sequence[TradingDay],
    index: int,
    lookback: int = 20,
) -> TechnicalAnalysis:
    """Snapshot of days[index] using the chart's trailing window."""
    if index < 0:
        index += len(days)
    today = days[index]
    yesterday = days[index - 1] if index > 0 else None
    return analyze_snapshot(today, yesterday, snapshot_window(days, index, lookback))
