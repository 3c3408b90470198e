from __future__ import annotations

from datetime import date
from typing import Optional


class BreakoutError(Exception):
    """Base class for errors raised by breakout_algo."""


class InvalidTargetError(BreakoutError, ValueError):
    """Target date is missing from the history or has no prior session."""

    def __init__(self, target_date: Optional[date]):
        self.target_date = target_date
        super().__init__("Target date not found or insufficient data")


class DataFormatError(BreakoutError, ValueError):
    """Input file is missing columns or holds unparsable rows."""
