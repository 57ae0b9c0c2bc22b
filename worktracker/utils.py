"""
Utility functions for the work tracker UI.

Button captions and date parsing live here so the customtkinter windows stay
thin and the text rules can be checked without a display.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def button_label(category: str, running: bool, minutes: int, display_minutes: bool) -> str:
    """
    Caption for a category button.

    A running category offers "Stop", any other "Start".  When
    ``display_minutes`` is set the accrued total is appended,
    e.g. ``Stop Work (12 min)``.
    """
    text = f"{'Stop' if running else 'Start'} {category}"
    if display_minutes:
        text += f" ({minutes} min)"
    return text


def parse_user_date(text: str, default: Optional[date] = None) -> Optional[date]:
    """Parse an ``MM-DD-YYYY`` entry; blank or invalid input gives ``default``."""
    text = text.strip()
    if not text:
        return default
    try:
        return datetime.strptime(text, "%m-%d-%Y").date()
    except ValueError:
        return default


def format_user_date(day: Optional[date]) -> str:
    return day.strftime("%m-%d-%Y") if day else ""
