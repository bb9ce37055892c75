"""
Tests for the Indonesian date helpers.

Run:
    python -m pytest RHKEngine/utils/test_dates.py -v
"""

import random
from datetime import date

import pytest

from RHKEngine.utils.dates import default_period, format_report_date, pick_report_date


class TestFormatting:
    def test_format_report_date(self):
        assert format_report_date(date(2026, 10, 19)) == "19 Oktober 2026"
        assert format_report_date(date(2026, 1, 5)) == "5 Januari 2026"

    @pytest.mark.parametrize(
        "today, period",
        [
            (date(2026, 1, 1), "Januari - Juni 2026"),
            (date(2026, 6, 30), "Januari - Juni 2026"),
            (date(2026, 7, 1), "Juli - Desember 2026"),
            (date(2026, 10, 19), "Juli - Desember 2026"),
        ],
    )
    def test_default_period(self, today, period):
        assert default_period(today) == period


class TestPickReportDate:
    def test_first_month_of_quarter_is_today(self):
        today = date(2026, 10, 19)
        assert pick_report_date(today, random.Random(3)) == today

    def test_never_in_the_future(self):
        today = date(2026, 12, 31)
        rng = random.Random(11)
        picks = {pick_report_date(today, rng) for _ in range(100)}
        assert all(pick <= today for pick in picks)
        assert {pick.month for pick in picks} == {10, 11, 12}

    def test_day_clamped_to_month_length(self):
        today = date(2026, 12, 31)
        rng = random.Random(0)
        picks = {pick_report_date(today, rng) for _ in range(100)}
        assert date(2026, 11, 30) in picks

    def test_seeded_pick_is_reproducible(self):
        today = date(2026, 5, 20)
        assert pick_report_date(today, random.Random(5)) == pick_report_date(today, random.Random(5))
