"""Data models for the dry spell pricing pipeline."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from dryspell.core.exceptions import ConfigurationError


def is_missing(value: Optional[float]) -> bool:
    """True for an absent observation (None or NaN)."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def _finite_non_negative(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


@dataclass(frozen=True)
class DailyRecord:
    """One day of precipitation at the analysed location."""
    date: date
    precipitation_mm: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "precipitation_mm": None if is_missing(self.precipitation_mm) else self.precipitation_mm,
        }


@dataclass(frozen=True)
class SeasonRecord:
    """A daily record retained by the season filter."""
    date: date
    precipitation_mm: Optional[float]
    year: int
    month: int


@dataclass(frozen=True)
class RunState:
    """Dry-day flag and current consecutive dry run for one season record."""
    date: date
    year: int
    is_dry: bool
    run_length: int


@dataclass(frozen=True)
class ThresholdConfig:
    """Parameters of one analysis run.

    Thresholds keep their first-seen order with duplicates removed; months
    are stored as a frozenset. Invalid values raise ConfigurationError on
    construction so no work is done with a bad configuration.
    """
    dry_day_threshold_mm: float
    consecutive_day_thresholds: tuple
    sum_insured: float
    season_months: frozenset

    def __post_init__(self):
        thresholds = tuple(dict.fromkeys(self.consecutive_day_thresholds))
        object.__setattr__(self, "consecutive_day_thresholds", thresholds)
        object.__setattr__(self, "season_months", frozenset(self.season_months))
        self.validate()

    def validate(self) -> None:
        if not self.season_months:
            raise ConfigurationError("season_months must not be empty")
        bad_months = sorted(m for m in self.season_months if not isinstance(m, int) or not 1 <= m <= 12)
        if bad_months:
            raise ConfigurationError(f"season_months out of range 1-12: {bad_months}")

        if not self.consecutive_day_thresholds:
            raise ConfigurationError("consecutive_day_thresholds must not be empty")
        for x in self.consecutive_day_thresholds:
            if isinstance(x, bool) or not isinstance(x, int) or x <= 0:
                raise ConfigurationError(f"consecutive day threshold must be a positive integer, got {x!r}")

        if not _finite_non_negative(self.sum_insured):
            raise ConfigurationError(f"sum_insured must be a finite number >= 0, got {self.sum_insured!r}")
        if not _finite_non_negative(self.dry_day_threshold_mm):
            raise ConfigurationError(
                f"dry_day_threshold_mm must be a finite number >= 0, got {self.dry_day_threshold_mm!r}"
            )

    def to_dict(self) -> dict:
        return {
            "dry_day_threshold_mm": self.dry_day_threshold_mm,
            "consecutive_day_thresholds": list(self.consecutive_day_thresholds),
            "sum_insured": self.sum_insured,
            "season_months": sorted(self.season_months),
        }


@dataclass(frozen=True)
class YearOutcome:
    """Trigger outcome of one year under one threshold."""
    year: int
    max_run_length: int
    triggered: bool
    indemnity: float

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "max_run_length": self.max_run_length,
            "triggered": self.triggered,
            "indemnity": self.indemnity,
        }


@dataclass(frozen=True)
class ThresholdResult:
    """Per-threshold statistics.

    return_period_years is None when the threshold was never exceeded;
    callers must check for it rather than expect 0 or infinity.
    """
    threshold: int
    year_outcomes: tuple
    probability: float
    return_period_years: Optional[float]
    sum_insured: float

    @property
    def year_count(self) -> int:
        return len(self.year_outcomes)

    @property
    def total_indemnity(self) -> float:
        return sum(o.indemnity for o in self.year_outcomes)

    @property
    def triggered_years(self) -> list:
        return [o.year for o in self.year_outcomes if o.triggered]

    def to_dict(self) -> dict:
        return {
            "threshold": self.threshold,
            "probability": self.probability,
            "return_period_years": self.return_period_years,
            "total_indemnity": self.total_indemnity,
            "triggered_years": self.triggered_years,
            "year_outcomes": [o.to_dict() for o in self.year_outcomes],
        }


@dataclass
class PricingResult:
    """Complete output of one pricing run."""
    config: ThresholdConfig
    record_count: int
    years: list
    results: list
    skipped_thresholds: list
    timestamp: datetime
    duration_seconds: float = 0.0
    metadata: dict = field(default_factory=dict)

    @property
    def has_data(self) -> bool:
        return self.record_count > 0

    @property
    def all_skipped(self) -> bool:
        return self.has_data and not self.results

    def to_dict(self) -> dict:
        from dryspell.core.actuarial import loss_cost_pct

        return {
            "config": self.config.to_dict(),
            "record_count": self.record_count,
            "years": self.years,
            "has_data": self.has_data,
            "all_skipped": self.all_skipped,
            "results": [
                {**r.to_dict(), "loss_cost_pct": loss_cost_pct(r)} for r in self.results
            ],
            "skipped_thresholds": self.skipped_thresholds,
            "timestamp": self.timestamp.isoformat(),
            "duration_seconds": self.duration_seconds,
            "metadata": self.metadata,
        }
