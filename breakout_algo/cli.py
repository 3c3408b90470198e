"""
Breakout CLI: command-line interface for the breakout engine.

Commands:
1. predict   - Multi-factor breakout prediction for a target date
2. snapshot  - Technical snapshot of a session (latest by default)
3. breakouts - Sessions that already showed breakout behaviour

Usage:
    python run.py predict --data RELIANCE.csv --date 2024-03-15 --sample-market
    python run.py snapshot --data RELIANCE.csv
    python run.py breakouts --data RELIANCE.csv
"""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from typing import List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from breakout_algo.config import EngineConfig
from breakout_algo.errors import DataFormatError, InvalidTargetError
from breakout_algo.formatters import format_currency, format_number, format_percentage
from breakout_algo.ingestion import (
    generate_sample_market_data,
    load_market_index_days,
    load_trading_days,
)
from breakout_algo.logging_setup import configure_logging
from breakout_algo.models import (
    BreakoutPrediction,
    Confidence,
    Direction,
    TechnicalAnalysis,
    TradingDay,
    delivery_percent,
)
from breakout_algo.narrative import generate_narrative
from breakout_algo.predictor import BreakoutPredictor
from breakout_algo.snapshot import analyze_day
from breakout_algo.tagging import compute_breakouts

logger = logging.getLogger(__name__)
console = Console()

DIRECTION_STYLE = {
    Direction.BULLISH: "green",
    Direction.BEARISH: "red",
    Direction.NEUTRAL: "yellow",
}

CONFIDENCE_STYLE = {
    Confidence.HIGH: "green",
    Confidence.MEDIUM: "yellow",
    Confidence.LOW: "red",
}


def parse_date(date_str: str) -> date:
    """Parse date string."""
    formats = ["%Y-%m-%d", "%Y/%m/%d", "%d-%m-%Y", "%d-%b-%Y"]
    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Could not parse date: {date_str}")


def _probability_style(probability: float) -> str:
    if probability > 70:
        return "green"
    if probability < 30:
        return "red"
    return "yellow"


def render_prediction(prediction: BreakoutPrediction) -> None:
    direction_style = DIRECTION_STYLE[prediction.expected_direction]
    confidence_style = CONFIDENCE_STYLE[prediction.confidence]

    header = (
        f"[bold]{prediction.probability:.1f}%[/bold] breakout probability  "
        f"[{confidence_style}]{prediction.confidence.value.upper()} CONFIDENCE[/{confidence_style}]  "
        f"[{direction_style}]{prediction.expected_direction.value.upper()}[/{direction_style}]"
    )
    console.print(Panel(header, title=f"Prediction for {prediction.date.isoformat()}"))

    factors = Table(title="Factor Scores")
    factors.add_column("Factor")
    factors.add_column("Score", justify="right")
    for name, score in prediction.factors.as_dict().items():
        style = _probability_style(score)
        factors.add_row(name.replace("_", " ").title(), f"[{style}]{score:.0f}[/{style}]")
    console.print(factors)

    rr = prediction.risk_reward
    console.print(
        f"Risk-Reward: [bold]{rr.ratio:.2f}:1[/bold]  "
        f"(Risk {format_percentage(rr.risk)} | Reward {format_percentage(rr.reward)})"
    )
    console.print(prediction.reasoning)


def render_snapshot(day: TradingDay, analysis: TechnicalAnalysis, previous: Optional[TradingDay]) -> None:
    narrative = generate_narrative(day, previous)
    trend_style = DIRECTION_STYLE[analysis.trend]
    delivery = delivery_percent(day)
    delivery_text = f"{delivery:.1f}%" if delivery is not None else "n/a"

    console.print(Panel(
        f"[{trend_style}]{analysis.trend.value.upper()}[/{trend_style}] "
        f"{analysis.probability:.0f}%  risk {analysis.risk_level.value}\n"
        f"{narrative.marker} {narrative.summary}\n"
        f"Close {format_currency(day.close)}  Volume {format_number(day.volume)}  "
        f"Delivery {delivery_text}",
        title=f"Snapshot {day.date.isoformat()}",
    ))

    levels = analysis.key_levels
    console.print(
        f"Support {format_currency(levels.support)}  "
        f"Resistance {format_currency(levels.resistance)}  "
        f"Target {format_currency(levels.target)}"
    )

    if analysis.signals:
        signals = Table(title="Signals")
        signals.add_column("Signal")
        signals.add_column("Strength", justify="right")
        signals.add_column("Description")
        for signal in analysis.signals:
            signals.add_row(signal.type, f"{signal.strength:.0f}", signal.description)
        console.print(signals)

    console.print(analysis.reasoning)


def _index_of(days: Sequence[TradingDay], target: date) -> int:
    """Position of target in days; unlike a prediction target the first session is allowed."""
    for i, day in enumerate(days):
        if day.date == target:
            return i
    raise InvalidTargetError(target)


def cmd_predict(args: argparse.Namespace, config: EngineConfig) -> int:
    """Run predict command."""
    days = load_trading_days(args.data)

    if args.market:
        market = load_market_index_days(args.market)
    elif args.sample_market:
        seed = args.seed if args.seed is not None else config.sample_market_seed
        market = generate_sample_market_data(days, seed=seed)
    else:
        market = None

    predictor = BreakoutPredictor(weights=config.weights)
    prediction = predictor.predict(days, market, args.date)
    render_prediction(prediction)
    return 0


def cmd_snapshot(args: argparse.Namespace, config: EngineConfig) -> int:
    """Run snapshot command."""
    days = load_trading_days(args.data)
    if not days:
        raise DataFormatError(f"{args.data}: no sessions")

    index = _index_of(days, args.date) if args.date else len(days) - 1
    lookback = args.lookback if args.lookback is not None else config.snapshot_lookback

    analysis = analyze_day(days, index, lookback=lookback)
    previous = days[index - 1] if index > 0 else None
    render_snapshot(days[index], analysis, previous)
    return 0


def cmd_breakouts(args: argparse.Namespace, config: EngineConfig) -> int:
    """Run breakouts command."""
    days = load_trading_days(args.data)
    breakout_dates = compute_breakouts(days)

    console.print(f"{len(breakout_dates)} breakout days")
    table = Table(title="Breakout Days", min_width=20)
    table.add_column("Date")
    for d in breakout_dates:
        table.add_row(d.isoformat())
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breakout-algo",
        description="Delivery-aware breakout prediction",
    )
    parser.add_argument("--log-level", help="Logging level (default from BREAKOUT_LOG_LEVEL)")
    parser.add_argument("--log-file", help="Also log to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    predict_parser = subparsers.add_parser("predict", help="Predict breakout for a target date")
    predict_parser.add_argument("--data", "-d", required=True, help="Stock history CSV")
    predict_parser.add_argument("--date", required=True, type=parse_date, help="Target date (YYYY-MM-DD)")
    market_group = predict_parser.add_mutually_exclusive_group()
    market_group.add_argument("--market", "-m", help="Index history CSV aligned with the stock file")
    market_group.add_argument("--sample-market", action="store_true", help="Use a generated demo index series")
    predict_parser.add_argument("--seed", type=int, help="Seed for --sample-market")
    predict_parser.set_defaults(func=cmd_predict)

    snapshot_parser = subparsers.add_parser("snapshot", help="Technical snapshot of a session")
    snapshot_parser.add_argument("--data", "-d", required=True, help="Stock history CSV")
    snapshot_parser.add_argument("--date", type=parse_date, help="Session date (latest by default)")
    snapshot_parser.add_argument("--lookback", type=int, help="Trailing window size")
    snapshot_parser.set_defaults(func=cmd_snapshot)

    breakouts_parser = subparsers.add_parser("breakouts", help="List historical breakout days")
    breakouts_parser.add_argument("--data", "-d", required=True, help="Stock history CSV")
    breakouts_parser.set_defaults(func=cmd_breakouts)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    config = EngineConfig.from_env()
    args = build_parser().parse_args(argv)

    configure_logging(
        level=args.log_level or config.log_level,
        log_file=args.log_file or config.log_file,
    )

    try:
        return args.func(args, config)
    except InvalidTargetError as e:
        logger.debug("Rejected target %s", e.target_date)
        console.print("[red]date not found or insufficient history[/red]")
        return 2
    except DataFormatError as e:
        logger.error("Bad input: %s", e)
        console.print(f"[red]{e}[/red]")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
