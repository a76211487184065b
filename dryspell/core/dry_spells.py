"""Consecutive dry-day run lengths."""

from typing import List, Sequence

from dryspell.core.models import RunState, SeasonRecord, is_missing


class DryRunLengthCalculator:
    """Compute, for every season record, the length of the dry run ending there.

    A day is dry when its precipitation is at or below the dry-day limit.
    A missing observation counts as not dry: it ends the current run and
    the next dry day starts a new run at 1. Nothing else in the year is
    affected.

    The run is also reset on the first record of each year. The contract
    pays on annual maximum dry spells, so a spell spanning December and
    January is split between the two years it falls in.

    Adjacency is taken within the filtered sequence, not the calendar: with
    a January-March and November season, March 31 is followed directly by
    November 1 of the same year.
    """

    def is_dry(self, record: SeasonRecord, dry_day_threshold_mm: float) -> bool:
        if is_missing(record.precipitation_mm):
            return False
        return record.precipitation_mm <= dry_day_threshold_mm

    def compute(self, season_series: Sequence[SeasonRecord], dry_day_threshold_mm: float) -> List[RunState]:
        states = []
        run = 0
        prev_year = None

        for record in season_series:
            if record.year != prev_year:
                run = 0
                prev_year = record.year

            dry = self.is_dry(record, dry_day_threshold_mm)
            run = run + 1 if dry else 0

            states.append(RunState(date=record.date, year=record.year, is_dry=dry, run_length=run))

        return states
