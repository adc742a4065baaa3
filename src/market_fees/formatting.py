"""Display helpers."""

from __future__ import annotations


def format_usd(cents: int) -> str:
    """Render integer cents as ``"$12.34"``. Negative amounts get ``"-$"``."""
    sign = "-" if cents < 0 else ""
    dollars, rem = divmod(abs(cents), 100)
    return f"{sign}${dollars}.{rem:02d}"
