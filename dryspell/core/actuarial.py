"""Threshold actuarial engine: indemnities, trigger probability, return period."""

from typing import Dict, Iterable, List, Optional, Sequence

from loguru import logger

from dryspell.core.exceptions import ConfigurationError
from dryspell.core.models import RunState, ThresholdResult, YearOutcome


def annual_max_run_lengths(run_states: Sequence[RunState]) -> Dict[int, int]:
    """Longest dry run per year, years in order of first appearance."""
    maxima: Dict[int, int] = {}
    for s in run_states:
        if s.run_length > maxima.get(s.year, -1):
            maxima[s.year] = s.run_length
    return maxima


def loss_cost_pct(result: ThresholdResult) -> Optional[float]:
    """Total indemnity as a percentage of the total sum insured over the observed years.

    Returns None when the total sum insured is zero (no years or zero cover).
    """
    total_insured = result.sum_insured * result.year_count
    if total_insured == 0:
        return None
    return 100.0 * result.total_indemnity / total_insured


class ThresholdActuarialEngine:
    """Evaluate candidate consecutive-day thresholds against annual dry spells."""

    def evaluate(
        self,
        run_states: Sequence[RunState],
        thresholds: Iterable[int],
        sum_insured: float,
    ) -> List[ThresholdResult]:
        """One ThresholdResult per threshold that survives the skip rule, in input order.

        A threshold X is dropped when the longest run in the whole dataset is
        below X: no year could ever have reached it. A threshold equal to the
        longest run is kept and reports probability 0, since the trigger
        requires a run strictly longer than X.
        """
        thresholds = list(thresholds)
        for x in thresholds:
            if isinstance(x, bool) or not isinstance(x, int) or x <= 0:
                raise ConfigurationError(f"consecutive day threshold must be a positive integer, got {x!r}")
        if sum_insured < 0:
            raise ConfigurationError(f"sum_insured must be >= 0, got {sum_insured!r}")

        maxima = annual_max_run_lengths(run_states)
        if not maxima:
            return []

        global_max = max(maxima.values())
        results = []

        for x in thresholds:
            if global_max < x:
                logger.debug(f"X={x}: skipped, longest run {global_max} days")
                continue
            results.append(self._evaluate_threshold(x, maxima, sum_insured))

        return results

    def _evaluate_threshold(self, threshold: int, maxima: Dict[int, int], sum_insured: float) -> ThresholdResult:
        outcomes = []
        for year, longest in maxima.items():
            triggered = longest > threshold
            outcomes.append(YearOutcome(
                year=year,
                max_run_length=longest,
                triggered=triggered,
                indemnity=sum_insured if triggered else 0,
            ))

        hits = sum(1 for o in outcomes if o.triggered)
        probability = hits / len(outcomes)
        return_period = 1.0 / probability if probability > 0 else None

        logger.debug(f"X={threshold}: {hits}/{len(outcomes)} years triggered")

        return ThresholdResult(
            threshold=threshold,
            year_outcomes=tuple(outcomes),
            probability=probability,
            return_period_years=return_period,
            sum_insured=sum_insured,
        )
