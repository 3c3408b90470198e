#!/usr/bin/env python3
"""
Breakout Engine - command-line entry point.

Usage:
    # Predict a target session with a generated demo index series
    python run.py predict --data RELIANCE.csv --date 2024-03-15 --sample-market

    # Predict with a real index history aligned to the stock file
    python run.py predict --data RELIANCE.csv --market NIFTY.csv --date 2024-03-15

    # Snapshot of the latest session
    python run.py snapshot --data RELIANCE.csv

    # Sessions that already broke out
    python run.py breakouts --data RELIANCE.csv
"""

from breakout_algo.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
