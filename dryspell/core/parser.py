"""Parsers for user-supplied form inputs."""

import re
from typing import Iterable, List, Union

from dryspell.core.exceptions import ConfigurationError
from dryspell.utils.constants import LATITUDE_RANGE, LONGITUDE_RANGE, VALID_MONTHS


class InputParser:
    """Turn raw form values into validated analysis parameters."""

    SEPARATORS = r"[,;\s]+"

    def parse_thresholds(self, text: Union[str, Iterable]) -> List[int]:
        """Parse "3, 4,5" (or an iterable of values) into positive integers.

        Blank items are ignored, duplicates dropped keeping the first.
        """
        if isinstance(text, str):
            items = [t for t in re.split(self.SEPARATORS, text.strip()) if t]
        else:
            items = [str(t).strip() for t in text if str(t).strip()]

        values = []
        for item in items:
            value = self._to_int(item, "threshold")
            if value <= 0:
                raise ConfigurationError(f"threshold must be positive, got {value}")
            if value not in values:
                values.append(value)

        if not values:
            raise ConfigurationError("at least one consecutive day threshold is required")
        return values

    def parse_months(self, selected: Iterable) -> List[int]:
        months = sorted({self._to_int(str(m).strip(), "month") for m in selected})
        if not months:
            raise ConfigurationError("at least one month must be selected")
        bad = [m for m in months if m not in VALID_MONTHS]
        if bad:
            raise ConfigurationError(f"months out of range 1-12: {bad}")
        return months

    def validate_coordinates(self, lat: float, lon: float) -> tuple:
        if not LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1]:
            raise ConfigurationError(f"latitude {lat} outside {LATITUDE_RANGE}")
        if not LONGITUDE_RANGE[0] <= lon <= LONGITUDE_RANGE[1]:
            raise ConfigurationError(f"longitude {lon} outside {LONGITUDE_RANGE}")
        return lat, lon

    def _to_int(self, item: str, what: str) -> int:
        try:
            return int(item)
        except ValueError:
            raise ConfigurationError(f"{what} must be an integer, got {item!r}") from None


input_parser = InputParser()
