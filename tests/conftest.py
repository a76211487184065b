"""Shared fixtures for the pricing tests."""

import os
import tempfile

# Keep log files out of the working tree; must be set before dryspell loads its settings.
os.environ.setdefault("DRYSPELL_LOG_DIR", tempfile.mkdtemp(prefix="dryspell-test-logs-"))

import pytest  # noqa: E402

from dryspell.core.models import ThresholdConfig  # noqa: E402
from tests.helpers import month_series  # noqa: E402


@pytest.fixture
def config_factory():
    def _make(thresholds=(3, 4, 5), months=(1,), dry=1.0, sum_insured=1000.0):
        return ThresholdConfig(
            dry_day_threshold_mm=dry,
            consecutive_day_thresholds=tuple(thresholds),
            sum_insured=sum_insured,
            season_months=frozenset(months),
        )
    return _make


@pytest.fixture
def two_year_series():
    """January of two years; only 2000 has a 6-day dry run."""
    wet = [5.0] * 31
    y2000 = [5.0] * 10 + [0.0] * 6 + [5.0] * 15
    return month_series(2000, 1, y2000) + month_series(2001, 1, wet)
