"""
CSV ingestion for stock and index histories.

Supports the NSE security-wise delivery report layout (as downloaded,
with "Close Price", "Deliverable Qty" and comma-grouped quantities) and a
plain snake_case layout. Output is always sorted ascending by date.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from breakout_algo.errors import DataFormatError
from breakout_algo.models import MarketIndexDay, TradingDay

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Header aliases -> canonical column
STOCK_COLUMNS: Dict[str, str] = {
    'date': 'date',
    'open price': 'open',
    'open': 'open',
    'high price': 'high',
    'high': 'high',
    'low price': 'low',
    'low': 'low',
    'close price': 'close',
    'close': 'close',
    'total traded quantity': 'volume',
    'volume': 'volume',
    'deliverable qty': 'delivery_qty',
    'delivery_qty': 'delivery_qty',
    'deliveryqty': 'delivery_qty',
}

INDEX_COLUMNS: Dict[str, str] = {
    'date': 'date',
    'nifty_open': 'nifty_open',
    'niftyopen': 'nifty_open',
    'nifty_high': 'nifty_high',
    'niftyhigh': 'nifty_high',
    'nifty_low': 'nifty_low',
    'niftylow': 'nifty_low',
    'nifty_close': 'nifty_close',
    'niftyclose': 'nifty_close',
    'nifty_volume': 'nifty_volume',
    'niftyvolume': 'nifty_volume',
    'vix': 'vix',
    'advance_decline': 'advance_decline',
    'advancedecline': 'advance_decline',
}

STOCK_REQUIRED = ['date', 'open', 'high', 'low', 'close', 'volume', 'delivery_qty']
INDEX_REQUIRED = ['date', 'nifty_open', 'nifty_high', 'nifty_low', 'nifty_close', 'nifty_volume']
INDEX_OPTIONAL = ['vix', 'advance_decline']


def _read_frame(path: PathLike, aliases: Dict[str, str], required: Sequence[str]) -> pd.DataFrame:
    try:
        df = pd.read_csv(path, dtype=str, skipinitialspace=True, skip_blank_lines=True)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DataFormatError(f"Could not read {path}: {e}") from e

    df = df.rename(columns=lambda c: aliases.get(str(c).strip().lower(), str(c).strip()))
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DataFormatError(f"{path}: missing columns {', '.join(missing)}")

    return df.dropna(how='all')


def _parse_dates(series: pd.Series, path: PathLike) -> pd.Series:
    values = series.str.strip()
    try:
        parsed = pd.to_datetime(values, format="ISO8601")
    except (ValueError, TypeError):
        try:
            parsed = pd.to_datetime(values, format="mixed", dayfirst=True)
        except (ValueError, TypeError) as e:
            raise DataFormatError(f"{path}: unparsable date ({e})") from e
    return parsed.dt.date


def _parse_numbers(series: pd.Series) -> pd.Series:
    cleaned = series.str.replace(",", "", regex=False).str.strip()
    return pd.to_numeric(cleaned, errors="coerce")


def _check_complete(df: pd.DataFrame, columns: Sequence[str], path: PathLike) -> None:
    bad = df[list(columns)].isna().any(axis=1)
    if bad.any():
        rows = ", ".join(str(i + 2) for i in df.index[bad][:5])  # +2: header, 1-based
        raise DataFormatError(f"{path}: missing or non-numeric values on line(s) {rows}")


def load_trading_days(path: PathLike) -> List[TradingDay]:
    """Load a stock history CSV into TradingDay records, oldest first."""
    df = _read_frame(path, STOCK_COLUMNS, STOCK_REQUIRED)

    df['date'] = _parse_dates(df['date'], path)
    for column in STOCK_REQUIRED[1:]:
        df[column] = _parse_numbers(df[column])
    _check_complete(df, STOCK_REQUIRED, path)

    df = df.sort_values('date', kind='stable')

    days = [
        TradingDay(
            date=row.date,
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=int(round(row.volume)),
            delivery_qty=int(round(row.delivery_qty)),
        )
        for row in df.itertuples(index=False)
    ]
    logger.info("Loaded %d sessions from %s", len(days), path)
    return days


def _optional(value: float) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def load_market_index_days(path: PathLike) -> List[MarketIndexDay]:
    """Load an index history CSV into MarketIndexDay records, oldest first."""
    df = _read_frame(path, INDEX_COLUMNS, INDEX_REQUIRED)

    df['date'] = _parse_dates(df['date'], path)
    for column in INDEX_REQUIRED[1:]:
        df[column] = _parse_numbers(df[column])
    for column in INDEX_OPTIONAL:
        if column in df.columns:
            df[column] = _parse_numbers(df[column])
        else:
            df[column] = np.nan
    _check_complete(df, INDEX_REQUIRED, path)

    df = df.sort_values('date', kind='stable')

    market = [
        MarketIndexDay(
            date=row.date,
            nifty_open=float(row.nifty_open),
            nifty_high=float(row.nifty_high),
            nifty_low=float(row.nifty_low),
            nifty_close=float(row.nifty_close),
            nifty_volume=float(row.nifty_volume),
            vix=_optional(row.vix),
            advance_decline=_optional(row.advance_decline),
        )
        for row in df.itertuples(index=False)
    ]
    logger.info("Loaded %d index sessions from %s", len(market), path)
    return market


def generate_sample_market_data(
    days: Sequence[TradingDay],
    seed: int = 42,
) -> List[MarketIndexDay]:
    """
    Demonstration index series aligned one-to-one with days.

    For demos only: a noisy upward drift around 18000 with VIX and breadth
    readings. Reproducible for a given seed.
    """
    rng = np.random.default_rng(seed)
    market = []

    for i, day in enumerate(days):
        close = 18000 + rng.random() * 2000 - 1000 + i * 10
        open_ = close + rng.random() * 100 - 50
        market.append(MarketIndexDay(
            date=day.date,
            nifty_open=float(open_),
            nifty_high=float(max(open_, close) + 50),
            nifty_low=float(min(open_, close) - 50),
            nifty_close=float(close),
            nifty_volume=float(1_000_000 + rng.random() * 500_000),
            vix=float(15 + rng.random() * 10),
            advance_decline=float(0.5 + rng.random() * 1.5),
        ))

    return market
