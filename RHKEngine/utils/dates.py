"""
Indonesian calendar helpers for report periods and signing dates.
"""

from __future__ import annotations

import calendar
import random
from datetime import date
from typing import Optional

MONTH_NAMES = [
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
]


def format_report_date(value: date) -> str:
    """Format a date the way it is written above a signature: `19 Oktober 2026`."""
    return f"{value.day} {MONTH_NAMES[value.month - 1]} {value.year}"


def default_period(today: date) -> str:
    """Reporting period for the semester containing `today`."""
    semester = "Januari - Juni" if today.month <= 6 else "Juli - Desember"
    return f"{semester} {today.year}"


def pick_report_date(today: date, rng: Optional[random.Random] = None) -> date:
    """
    Pick the signing date for a report.

    The month is drawn from the months of the current quarter that are not in
    the future; the day keeps today's day, clamped to the chosen month's length.
    """
    rng = rng or random.Random()
    quarter_start = 3 * ((today.month - 1) // 3) + 1
    month = rng.choice(range(quarter_start, today.month + 1))
    last_day = calendar.monthrange(today.year, month)[1]
    return date(today.year, month, min(today.day, last_day))


__all__ = ["MONTH_NAMES", "format_report_date", "default_period", "pick_report_date"]
