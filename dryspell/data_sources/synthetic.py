"""Synthetic daily precipitation for demos and offline runs."""

from datetime import date, timedelta
from typing import Iterable, List, Optional

import numpy as np

from dryspell.core.models import DailyRecord


def generate_daily_series(
    start_year: int = 1981,
    years: int = 36,
    seed: Optional[int] = 42,
    dry_months: Iterable[int] = (5, 6, 7, 8, 9),
    wet_day_probability: float = 0.45,
    dry_season_wet_probability: float = 0.08,
) -> List[DailyRecord]:
    """
    Generate a reproducible daily precipitation series.

    Wet-day occurrence is a Bernoulli draw (lower inside dry_months), and
    wet-day amounts are exponential. Some years are scaled down to mimic
    drought years.
    """
    rng = np.random.default_rng(seed)
    dry_months = set(dry_months)

    start = date(start_year, 1, 1)
    end = date(start_year + years, 1, 1)
    drought_years = {start_year + i for i in range(years) if rng.random() < 0.15}

    records = []
    day = start
    while day < end:
        # Dry season has fewer and lighter rain days
        if day.month in dry_months:
            p_wet, mean_mm = dry_season_wet_probability, 2.0
        else:
            p_wet, mean_mm = wet_day_probability, 6.0

        # Drought year adjustment
        if day.year in drought_years:
            p_wet *= 0.4

        rain = rng.exponential(mean_mm) if rng.random() < p_wet else 0.0
        records.append(DailyRecord(date=day, precipitation_mm=round(float(rain), 1)))
        day += timedelta(days=1)

    return records
