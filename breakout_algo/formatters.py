"""Display formatting in Indian conventions (₹, lakh, crore)."""

from __future__ import annotations

CRORE = 10_000_000
LAKH = 100_000


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value: float) -> str:
    """₹1,23,456.78"""
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    return f"{sign}₹{_group_indian(whole)}.{fraction}"


def format_number(value: float) -> str:
    """Compact quantity: 1.25Cr, 3.40L, 12.5K."""
    if value >= CRORE:
        return f"{value / CRORE:.2f}Cr"
    if value >= LAKH:
        return f"{value / LAKH:.2f}L"
    if value >= 1000:
        return f"{value / 1000:.1f}K"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_percentage(value: float) -> str:
    """Signed percentage with two decimals."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"
