"""Tests for date parser with relative dates."""

from datetime import date, timedelta

import pytest

from cashflow.domain.errors import ValidationError
from cashflow.utils.date_parser import parse_date

TODAY = date(2025, 3, 5)  # a Wednesday


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_written_date():
    assert parse_date("January 15, 2025") == date(2025, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today", TODAY) == TODAY
    assert parse_date("Today") == date.today()


def test_parse_yesterday_and_tomorrow():
    assert parse_date("yesterday", TODAY) == TODAY - timedelta(days=1)
    assert parse_date("tomorrow", TODAY) == TODAY + timedelta(days=1)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("in 10 days", date(2025, 3, 15)),
        ("in 1 day", date(2025, 3, 6)),
        ("2 weeks", date(2025, 3, 19)),
        ("3 days ago", date(2025, 3, 2)),
        ("in 1 month", date(2025, 4, 5)),
        ("2 months ago", date(2025, 1, 5)),
    ],
)
def test_parse_offsets(text, expected):
    assert parse_date(text, TODAY) == expected


def test_parse_weeks():
    """Week references resolve to Mondays."""
    assert parse_date("this week", TODAY) == date(2025, 3, 3)
    assert parse_date("last week", TODAY) == date(2025, 2, 24)
    assert parse_date("next week", TODAY) == date(2025, 3, 10)


def test_parse_months_and_years():
    assert parse_date("this month", TODAY) == date(2025, 3, 1)
    assert parse_date("last month", TODAY) == date(2025, 2, 1)
    assert parse_date("next month", TODAY) == date(2025, 4, 1)
    assert parse_date("last year", TODAY) == date(2024, 1, 1)
    assert parse_date("next year", TODAY) == date(2026, 1, 1)


def test_parse_last_month_in_january():
    assert parse_date("last month", date(2025, 1, 20)) == date(2024, 12, 1)


def test_parse_invalid_date():
    """Test parsing invalid date raises ValidationError."""
    with pytest.raises(ValidationError):
        parse_date("not a date")
