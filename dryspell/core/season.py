"""Season filter: restrict a daily series to the analysed calendar months."""

from typing import Iterable, List

from dryspell.core.models import DailyRecord, SeasonRecord


class SeasonFilter:
    """Keep only records whose month is in the season, tagged with year/month."""

    def filter(self, series: Iterable[DailyRecord], season_months: Iterable[int]) -> List[SeasonRecord]:
        months = set(season_months)
        return [
            SeasonRecord(
                date=r.date,
                precipitation_mm=r.precipitation_mm,
                year=r.date.year,
                month=r.date.month,
            )
            for r in series
            if r.date.month in months
        ]
