from datetime import date

import pytest

from dryspell.core.exceptions import ConfigurationError
from dryspell.core.models import DailyRecord, ThresholdConfig, is_missing


def make_config(**overrides):
    params = dict(
        dry_day_threshold_mm=1.0,
        consecutive_day_thresholds=(3, 4, 5),
        sum_insured=1000.0,
        season_months=frozenset({1, 2, 3}),
    )
    params.update(overrides)
    return ThresholdConfig(**params)


def test_valid_config():
    config = make_config()
    assert config.consecutive_day_thresholds == (3, 4, 5)
    assert config.season_months == frozenset({1, 2, 3})


def test_thresholds_deduplicated_in_order():
    config = make_config(consecutive_day_thresholds=[5, 3, 5, 4, 3])
    assert config.consecutive_day_thresholds == (5, 3, 4)


def test_zero_values_are_allowed():
    config = make_config(dry_day_threshold_mm=0, sum_insured=0)
    assert config.sum_insured == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"season_months": frozenset()},
        {"season_months": frozenset({0, 1})},
        {"season_months": frozenset({13})},
        {"consecutive_day_thresholds": ()},
        {"consecutive_day_thresholds": (3, 0)},
        {"consecutive_day_thresholds": (-1,)},
        {"consecutive_day_thresholds": (2.5,)},
        {"sum_insured": -1},
        {"dry_day_threshold_mm": -0.1},
        {"sum_insured": None},
        {"dry_day_threshold_mm": None},
    ],
)
def test_invalid_config_raises(overrides):
    with pytest.raises(ConfigurationError):
        make_config(**overrides)


@pytest.mark.parametrize("field", ["sum_insured", "dry_day_threshold_mm"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_amounts_rejected(field, value):
    with pytest.raises(ConfigurationError, match="finite"):
        make_config(**{field: value})


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        make_config(season_months=frozenset())


def test_config_is_immutable():
    config = make_config()
    with pytest.raises(AttributeError):
        config.sum_insured = 5


def test_is_missing():
    assert is_missing(None)
    assert is_missing(float("nan"))
    assert not is_missing(0.0)
    assert not is_missing(3)


def test_daily_record_to_dict():
    assert DailyRecord(date(2000, 1, 2), float("nan")).to_dict() == {"date": "2000-01-02", "precipitation_mm": None}
    assert DailyRecord(date(2000, 1, 2), 1.5).to_dict() == {"date": "2000-01-02", "precipitation_mm": 1.5}
