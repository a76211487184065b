"""Series builders shared by the tests."""

from datetime import date, timedelta

from dryspell.core.models import DailyRecord


def make_series(start: date, values):
    """Consecutive daily records starting at `start`."""
    return [
        DailyRecord(date=start + timedelta(days=i), precipitation_mm=v)
        for i, v in enumerate(values)
    ]


def month_series(year: int, month: int, values):
    return make_series(date(year, month, 1), values)
