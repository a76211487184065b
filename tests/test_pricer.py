from datetime import date

import pytest

from dryspell.core.actuarial import loss_cost_pct
from dryspell.core.exceptions import ConfigurationError
from dryspell.core.formatter import format_output
from dryspell.core.pricer import DroughtPricer
from dryspell.data_sources.synthetic import generate_daily_series
from tests.helpers import make_series, month_series


class StubSource:
    def __init__(self, series):
        self.series = series
        self.calls = []

    def get_daily_series(self, lat, lon, start=None, end=None):
        self.calls.append((lat, lon, start, end))
        return self.series


@pytest.fixture
def pricer():
    return DroughtPricer()


def test_scenario_a_end_to_end(pricer, two_year_series, config_factory):
    result = pricer.price(two_year_series, config_factory(thresholds=(3, 4, 5, 6, 7)))

    assert result.years == [2000, 2001]
    assert result.record_count == 62
    assert [r.threshold for r in result.results] == [3, 4, 5, 6]
    assert result.skipped_thresholds == [7]

    for r in result.results[:3]:
        assert r.probability == 0.5
        assert r.return_period_years == 2.0
        assert loss_cost_pct(r) == pytest.approx(50.0)
    assert result.results[3].return_period_years is None


def test_scenario_b_no_dry_days(pricer, config_factory):
    series = month_series(2000, 1, [3.0] * 31) + month_series(2001, 1, [2.0] * 31)
    result = pricer.price(series, config_factory())

    assert result.has_data
    assert result.all_skipped
    assert result.results == []
    assert result.skipped_thresholds == [3, 4, 5]
    assert "no historical occurrence" in format_output(result)


def test_scenario_c_two_of_ten_years(pricer, config_factory):
    series = []
    for year in range(2000, 2010):
        values = [5.0] * 31
        if year in (2002, 2006):
            values[5:13] = [0.0] * 8
        else:
            values[5:8] = [0.0] * 3
        series += month_series(year, 1, values)

    result = pricer.price(series, config_factory(thresholds=(5,)))
    (r,) = result.results

    assert r.triggered_years == [2002, 2006]
    assert r.probability == pytest.approx(0.2)
    assert loss_cost_pct(r) == pytest.approx(20.0)
    assert "X = 5: 20.00%" in format_output(result)


def test_scenario_d_missing_value_inside_dry_spell(pricer, config_factory):
    values = [5.0] * 5 + [0.0] * 4 + [None] + [0.0] * 5 + [5.0] * 16
    series = month_series(2000, 1, values)
    states = pricer.calculator.compute(pricer.season_filter.filter(series, {1}), 1.0)

    assert [s.run_length for s in states[5:15]] == [1, 2, 3, 4, 0, 1, 2, 3, 4, 5]
    assert all(s.run_length == 0 for s in states[15:])

    # longest run is 5, so a 10-day spell broken by a gap does not pay X = 5
    result = pricer.price(series, config_factory(thresholds=(4, 5, 6)))
    assert [r.threshold for r in result.results] == [4, 5]
    assert result.results[0].triggered_years == [2000]
    assert result.results[1].triggered_years == []


def test_empty_season(pricer, config_factory):
    series = month_series(2000, 6, [0.0] * 30)
    result = pricer.price(series, config_factory(months=(1,)))

    assert not result.has_data
    assert not result.all_skipped
    assert result.results == []
    assert "No precipitation data available" in format_output(result)


def test_cross_year_spell_is_split(pricer, config_factory):
    # 4 dry days at the end of 1999 and 4 at the start of 2000: no year reaches 5
    values = [5.0] * 27 + [0.0] * 4
    series = month_series(1999, 12, values) + month_series(2000, 1, [0.0] * 4 + [5.0] * 27)
    result = pricer.price(series, config_factory(thresholds=(3, 5), months=(12, 1)))

    assert [r.threshold for r in result.results] == [3]
    assert result.results[0].triggered_years == [1999, 2000]
    assert result.skipped_thresholds == [5]


def test_price_is_deterministic(pricer, config_factory):
    series = generate_daily_series(start_year=1981, years=20, seed=3)
    config = config_factory(thresholds=(10, 20, 30), months=(6, 7, 8))

    first = pricer.price(series, config)
    second = DroughtPricer().price(series, config)
    assert first.results == second.results
    assert first.skipped_thresholds == second.skipped_thresholds


def test_price_location_uses_data_source(two_year_series, config_factory):
    source = StubSource(two_year_series)
    result = DroughtPricer(data_source=source).price_location(-18.3, -69.3, config_factory(), start=date(2000, 1, 1))

    assert source.calls == [(-18.3, -69.3, date(2000, 1, 1), None)]
    assert result.metadata == {"latitude": -18.3, "longitude": -69.3}
    assert len(result.results) == 3


def test_price_location_without_source(config_factory):
    with pytest.raises(RuntimeError):
        DroughtPricer().price_location(0, 0, config_factory())


def test_invalid_config_is_rejected_before_fetching(config_factory):
    source = StubSource(make_series(date(2000, 1, 1), [0.0]))
    config = config_factory()
    object.__setattr__(config, "sum_insured", -5)

    with pytest.raises(ConfigurationError):
        DroughtPricer(data_source=source).price_location(0, 0, config)
    assert source.calls == []
