from datetime import date

from dryspell.core.dry_spells import DryRunLengthCalculator
from dryspell.core.season import SeasonFilter
from dryspell.data_sources.synthetic import generate_daily_series
from tests.helpers import make_series, month_series


def run_lengths(series, months=(1,), dry=1.0):
    season = SeasonFilter().filter(series, set(months))
    return [s.run_length for s in DryRunLengthCalculator().compute(season, dry)]


def test_counts_consecutive_dry_days():
    series = month_series(2000, 1, [0.0, 0.5, 1.0, 2.0, 0.0, 0.0])
    assert run_lengths(series) == [1, 2, 3, 0, 1, 2]


def test_threshold_is_inclusive():
    series = month_series(2000, 1, [1.0, 1.01, 1.0])
    assert run_lengths(series, dry=1.0) == [1, 0, 1]


def test_zero_threshold_only_counts_rainless_days():
    series = month_series(2000, 1, [0.0, 0.1, 0.0, 0.0])
    assert run_lengths(series, dry=0.0) == [1, 0, 1, 2]


def test_resets_at_year_boundary():
    series = make_series(date(1999, 12, 29), [0.0] * 6)  # Dec 29 .. Jan 3
    states = DryRunLengthCalculator().compute(SeasonFilter().filter(series, {12, 1}), 1.0)

    assert [s.run_length for s in states] == [1, 2, 3, 1, 2, 3]
    assert [s.year for s in states] == [1999, 1999, 1999, 2000, 2000, 2000]


def test_adjacency_follows_filtered_sequence():
    # March and November of the same year are adjacent once filtered
    series = month_series(2000, 3, [0.0] * 31) + month_series(2000, 11, [0.0] * 3)
    lengths = run_lengths(series, months=(3, 11))
    assert lengths[-3:] == [32, 33, 34]


def test_missing_observation_breaks_run_locally():
    values = [0.0] * 4 + [None] + [0.0] * 5
    states = DryRunLengthCalculator().compute(SeasonFilter().filter(month_series(2000, 1, values), {1}), 1.0)

    assert [s.run_length for s in states] == [1, 2, 3, 4, 0, 1, 2, 3, 4, 5]
    assert states[4].is_dry is False


def test_nan_is_treated_as_missing():
    series = month_series(2000, 1, [0.0, float("nan"), 0.0])
    assert run_lengths(series) == [1, 0, 1]


def test_one_state_per_record():
    series = month_series(2000, 1, [0.0, 3.0, None])
    season = SeasonFilter().filter(series, {1})
    states = DryRunLengthCalculator().compute(season, 1.0)
    assert [s.date for s in states] == [r.date for r in season]


def test_empty_input():
    assert DryRunLengthCalculator().compute([], 1.0) == []


def test_run_length_properties_on_long_series():
    series = generate_daily_series(start_year=1990, years=10, seed=7)
    season = SeasonFilter().filter(series, {4, 5, 6, 7, 8, 9})
    states = DryRunLengthCalculator().compute(season, 1.0)

    prev = None
    for s in states:
        assert s.run_length >= 0
        if prev is None or prev.year != s.year:
            assert s.run_length == (1 if s.is_dry else 0)
        elif not prev.is_dry:
            assert s.run_length in (0, 1)
        else:
            assert s.run_length == (prev.run_length + 1 if s.is_dry else 0)
        if not s.is_dry:
            assert s.run_length == 0
        prev = s
