"""Output formatters for pricing results."""

import json
from typing import Iterable, Optional, Sequence

import pandas as pd

from dryspell.core.actuarial import loss_cost_pct
from dryspell.core.models import PricingResult, ThresholdResult
from dryspell.utils.constants import NO_OCCURRENCE, UNDEFINED


class ReportFormatter:
    """Plain-text report for display next to the charts."""

    def format(
        self,
        results: Sequence[ThresholdResult],
        year_count: Optional[int] = None,
        skipped: Iterable[int] = (),
    ) -> str:
        skipped = list(skipped)

        if year_count == 0:
            return "No precipitation data available for the selected season months.\n"

        if not results:
            lines = [f"No threshold was breached in the historical record ({NO_OCCURRENCE})."]
            if skipped:
                lines.append(f"Thresholds never reached: {', '.join(f'X = {x}' for x in skipped)}")
            return "\n".join(lines) + "\n"

        lines = []
        for r in results:
            lines.extend([
                "",
                f"Results for X = {r.threshold}:",
                f"Annual probability of occurrence: {r.probability * 100:.2f}%",
                f"Return period: {self._return_period(r)}",
            ])

        if skipped:
            lines.extend([
                "",
                f"Thresholds never reached ({NO_OCCURRENCE}): {', '.join(f'X = {x}' for x in skipped)}",
            ])

        lines.extend(["", "Insurance cost as a percentage of total sum insured:"])
        for r in results:
            cost = loss_cost_pct(r)
            lines.append(f"X = {r.threshold}: {UNDEFINED if cost is None else f'{cost:.2f}%'}")

        return "\n".join(lines) + "\n"

    def _return_period(self, result: ThresholdResult) -> str:
        if result.return_period_years is None:
            return NO_OCCURRENCE
        return f"{result.return_period_years:.2f} years"


class ResearcherFormatter:
    """JSON with full per-year details."""

    def format(self, result: PricingResult) -> dict:
        return result.to_dict()

    def to_json(self, result: PricingResult) -> str:
        return json.dumps(self.format(result), indent=2, default=str)


def results_to_frame(results: Sequence[ThresholdResult]) -> pd.DataFrame:
    """Long table (threshold, year, max_run_length, triggered, indemnity) for charts and export."""
    rows = [
        {"threshold": r.threshold, **o.to_dict()}
        for r in results
        for o in r.year_outcomes
    ]
    return pd.DataFrame(rows, columns=["threshold", "year", "max_run_length", "triggered", "indemnity"])


def format_output(result: PricingResult, style: str = "text") -> str:
    if style == "json":
        return ResearcherFormatter().to_json(result)
    return ReportFormatter().format(
        result.results,
        year_count=len(result.years),
        skipped=result.skipped_thresholds,
    )
