"""Dry spell pricing pipeline."""

from datetime import date, datetime, timezone
from typing import Optional, Sequence

from loguru import logger

from dryspell.core.actuarial import ThresholdActuarialEngine
from dryspell.core.dry_spells import DryRunLengthCalculator
from dryspell.core.models import DailyRecord, PricingResult, ThresholdConfig, is_missing
from dryspell.core.season import SeasonFilter


class DroughtPricer:
    """Season filter -> dry runs -> threshold statistics.

    Holds no state between calls; the data source is only used by
    price_location.
    """

    def __init__(self, data_source=None):
        self.data_source = data_source
        self.season_filter = SeasonFilter()
        self.calculator = DryRunLengthCalculator()
        self.engine = ThresholdActuarialEngine()

    def price(self, series: Sequence[DailyRecord], config: ThresholdConfig, metadata: Optional[dict] = None) -> PricingResult:
        """Price the contract for every threshold in the config."""
        start = datetime.now(timezone.utc)
        config.validate()

        logger.info(
            f"Pricing {len(series)} days: months={sorted(config.season_months)}, "
            f"dry<={config.dry_day_threshold_mm}mm, X={list(config.consecutive_day_thresholds)}"
        )

        # Stage 1: season
        season = self.season_filter.filter(series, config.season_months)
        years = list(dict.fromkeys(r.year for r in season))
        logger.info(f"Season: {len(season)} records over {len(years)} years")
        if not season:
            logger.warning("No records in the selected season months")

        # Stage 2: dry runs
        states = self.calculator.compute(season, config.dry_day_threshold_mm)
        missing = sum(1 for r in season if is_missing(r.precipitation_mm))
        if missing:
            logger.warning(f"{missing} missing observations treated as non-dry days")

        # Stage 3: thresholds
        results = self.engine.evaluate(states, config.consecutive_day_thresholds, config.sum_insured)
        kept = {r.threshold for r in results}
        skipped = [x for x in config.consecutive_day_thresholds if x not in kept]
        if skipped:
            logger.info(f"Thresholds never reached: {skipped}")

        duration = (datetime.now(timezone.utc) - start).total_seconds()
        logger.info(f"Pricing done: {len(results)} thresholds, {duration:.3f}s")

        return PricingResult(
            config=config,
            record_count=len(season),
            years=years,
            results=results,
            skipped_thresholds=skipped,
            timestamp=start,
            duration_seconds=duration,
            metadata=metadata or {},
        )

    def price_location(
        self,
        lat: float,
        lon: float,
        config: ThresholdConfig,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> PricingResult:
        """Fetch the daily series at a coordinate, then price it."""
        if self.data_source is None:
            raise RuntimeError("DroughtPricer has no data source configured")
        config.validate()
        series = self.data_source.get_daily_series(lat, lon, start=start, end=end)
        return self.price(series, config, metadata={"latitude": lat, "longitude": lon})
